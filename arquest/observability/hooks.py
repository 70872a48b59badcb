"""Engine hook protocol and implementations.

The EngineHook protocol defines the interface for receiving events from the
rules engine. Implementations can render to console, write to files, or
drive a host UI.
"""

from typing import Protocol, runtime_checkable

from arquest.observability.events import (
    AttackResolvedEvent,
    SpellCastEvent,
    EffectChangedEvent,
    LevelUpEvent,
    RestEvent,
    PhaseChangeEvent,
)


@runtime_checkable
class EngineHook(Protocol):
    """Protocol for engine hooks.

    Implement this protocol to receive events from the managers.
    """

    def on_attack_resolved(self, event: AttackResolvedEvent) -> None:
        """Called when an attack resolves."""
        ...

    def on_spell_cast(self, event: SpellCastEvent) -> None:
        """Called when a spell resolves."""
        ...

    def on_effect_changed(self, event: EffectChangedEvent) -> None:
        """Called when a status effect changes."""
        ...

    def on_level_up(self, event: LevelUpEvent) -> None:
        """Called when a player levels up."""
        ...

    def on_rest(self, event: RestEvent) -> None:
        """Called after a successful rest."""
        ...

    def on_phase_change(self, event: PhaseChangeEvent) -> None:
        """Called when an encounter changes phase."""
        ...


class NullHook:
    """No-op hook for when observability is disabled.

    This is the default hook - it does nothing but satisfies the protocol.
    Using this avoids null checks throughout the code.
    """

    def on_attack_resolved(self, event: AttackResolvedEvent) -> None:
        pass

    def on_spell_cast(self, event: SpellCastEvent) -> None:
        pass

    def on_effect_changed(self, event: EffectChangedEvent) -> None:
        pass

    def on_level_up(self, event: LevelUpEvent) -> None:
        pass

    def on_rest(self, event: RestEvent) -> None:
        pass

    def on_phase_change(self, event: PhaseChangeEvent) -> None:
        pass


class CompositeHook:
    """Combines multiple hooks into one.

    Events are dispatched to all hooks in order.
    """

    def __init__(self, hooks: list[EngineHook]) -> None:
        self.hooks = hooks

    def on_attack_resolved(self, event: AttackResolvedEvent) -> None:
        for hook in self.hooks:
            hook.on_attack_resolved(event)

    def on_spell_cast(self, event: SpellCastEvent) -> None:
        for hook in self.hooks:
            hook.on_spell_cast(event)

    def on_effect_changed(self, event: EffectChangedEvent) -> None:
        for hook in self.hooks:
            hook.on_effect_changed(event)

    def on_level_up(self, event: LevelUpEvent) -> None:
        for hook in self.hooks:
            hook.on_level_up(event)

    def on_rest(self, event: RestEvent) -> None:
        for hook in self.hooks:
            hook.on_rest(event)

    def on_phase_change(self, event: PhaseChangeEvent) -> None:
        for hook in self.hooks:
            hook.on_phase_change(event)
