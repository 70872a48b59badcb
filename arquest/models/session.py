"""Engine context and encounter state.

The context is the only place the engine finds its clock, randomness,
settings and hook. Hosts build one per session and hand it to every
manager; tests build one with a scripted clock and randomness source.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from arquest.config import Settings, get_settings
from arquest.dice.roller import RandomSource
from arquest.models.combatant import MonsterCombatant, PlayerCombatant
from arquest.models.enums import CombatPhase
from arquest.observability.hooks import EngineHook, NullHook


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Encounter:
    """One player-versus-monster fight.

    The host polls ``phase`` (or subscribes to phase change events) to know
    whose turn it is.
    """

    id: str
    player: PlayerCombatant
    monster: MonsterCombatant
    started_at: int
    phase: CombatPhase = CombatPhase.AWAITING_PLAYER_ACTION
    round: int = 1
    last_regen_at: int = 0

    @property
    def in_combat(self) -> bool:
        return not self.phase.is_terminal


@dataclass
class EngineContext:
    """Explicit session state passed to every manager.

    Attributes:
        clock: Returns the current time in milliseconds.
        rng: Randomness source for every die draw; None uses ``random``.
        settings: Rule constants.
        hook: Receives observability events.
        encounter: The active encounter, if any.
    """

    clock: Callable[[], int] = wall_clock_ms
    rng: RandomSource | None = None
    settings: Settings = field(default_factory=get_settings)
    hook: EngineHook = field(default_factory=NullHook)
    encounter: Encounter | None = None

    def now(self) -> int:
        return self.clock()

    @property
    def in_combat(self) -> bool:
        return self.encounter is not None and self.encounter.in_combat
