"""Observability module for rules engine monitoring.

Provides hooks and observers for real-time visibility into attacks, spells,
status effects, progression, rests and encounter phases.
"""

from arquest.observability.events import (
    AttackResolvedEvent,
    SpellCastEvent,
    EffectChangedEvent,
    LevelUpEvent,
    RestEvent,
    PhaseChangeEvent,
)
from arquest.observability.hooks import (
    EngineHook,
    NullHook,
    CompositeHook,
)
from arquest.observability.console_observer import RichConsoleObserver

__all__ = [
    # Events
    "AttackResolvedEvent",
    "SpellCastEvent",
    "EffectChangedEvent",
    "LevelUpEvent",
    "RestEvent",
    "PhaseChangeEvent",
    # Hooks
    "EngineHook",
    "NullHook",
    "CompositeHook",
    # Observers
    "RichConsoleObserver",
]
