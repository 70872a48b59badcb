"""Base manager class with common patterns."""

from arquest.config import Settings
from arquest.dice.roller import RandomSource
from arquest.models.session import EngineContext
from arquest.observability.hooks import EngineHook


class BaseManager:
    """Base class for all rules managers.

    Provides common patterns:
    - Engine context access (clock, randomness, settings, hook)
    - Current timestamp
    """

    def __init__(self, context: EngineContext | None = None) -> None:
        """Initialize manager with an engine context.

        Args:
            context: Session context. A default one (wall clock, global
                randomness, cached settings) is created if omitted.
        """
        self.context = context or EngineContext()

    @property
    def now(self) -> int:
        """Current timestamp in milliseconds."""
        return self.context.now()

    @property
    def rng(self) -> RandomSource | None:
        return self.context.rng

    @property
    def settings(self) -> Settings:
        return self.context.settings

    @property
    def hook(self) -> EngineHook:
        return self.context.hook
