"""Engine models: combatants, the status effect ledger, outcomes and context.

Submodules are imported directly (``arquest.models.combatant`` and so on);
only the enums are re-exported here since the schemas import them.
"""

from arquest.models.enums import (
    Ability,
    CharacterClass,
    CombatPhase,
    DamageAffinity,
    EffectKind,
    FailureReason,
    RestKind,
    SpellResolution,
)

__all__ = [
    "Ability",
    "CharacterClass",
    "CombatPhase",
    "DamageAffinity",
    "EffectKind",
    "FailureReason",
    "RestKind",
    "SpellResolution",
]
