"""Event dataclasses for observability hooks.

These events are emitted by the managers after each resolution so hosts
can render, record or aggregate what the engine did. Timestamps come from
the engine clock (milliseconds).
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AttackResolvedEvent:
    """Emitted when an attack (weapon, spell attack or monster) resolves."""

    attacker: str
    defender: str
    profile: str
    hit: bool
    natural: int
    total: int
    target_ac: int
    damage: int
    damage_type: str
    is_critical: bool = False
    is_fumble: bool = False
    interaction: str = "none"
    defender_hp: int = 0
    timestamp: int = 0


@dataclass
class SpellCastEvent:
    """Emitted when a spell resolves (mana already spent)."""

    caster: str
    target: str
    spell_id: str
    resolution: str
    mana_spent: int
    damage: int = 0
    healed: int = 0
    save_succeeded: bool | None = None
    timestamp: int = 0


@dataclass
class EffectChangedEvent:
    """Emitted when a status effect is applied, refreshed, removed or expires."""

    combatant: str
    effect_id: str
    change: str  # "applied", "removed" or "expired"
    stacks: int = 1
    expires_at: int = 0
    timestamp: int = 0


@dataclass
class LevelUpEvent:
    """Emitted when an XP grant raises a player's level."""

    player: str
    old_level: int
    new_level: int
    attribute_points_awarded: int
    total_xp: int
    timestamp: int = 0


@dataclass
class RestEvent:
    """Emitted after a successful rest."""

    player: str
    kind: str
    hp_recovered: int
    mana_recovered: int
    hit_dice_remaining: int
    timestamp: int = 0


@dataclass
class PhaseChangeEvent:
    """Emitted when an encounter moves to a new combat phase."""

    encounter_id: str
    old_phase: str | None
    new_phase: str
    timestamp: int = 0
    details: dict[str, Any] = field(default_factory=dict)
