"""Result types returned by the engine's public entry points.

Every entry point returns either its outcome dataclass or a ``Failure``.
Callers discriminate with ``isinstance(result, Failure)``. A missed attack
or a failed save is a successful resolution, never a failure.
"""

from dataclasses import dataclass, field

from arquest.dice.types import AdvantageType
from arquest.models.enums import Ability, CombatPhase, FailureReason, RestKind, SpellResolution
from arquest.schemas.effects import StatusEffect


@dataclass(frozen=True)
class Failure:
    """A refused engine call. Nothing was changed except where documented.

    Attributes:
        reason: Machine-readable cause.
        message: Human-readable explanation for the UI.
        remaining_ms: Time left on a cooldown, 0 otherwise.
    """

    reason: FailureReason
    message: str = ""
    remaining_ms: int = 0


# =============================================================================
# Attacks
# =============================================================================


@dataclass(frozen=True)
class AttackProfile:
    """What an attack is made with: a weapon, a spell or a monster's natural attack.

    Attributes:
        name: Display name.
        damage_dice: Base damage notation.
        damage_type: Type of the base damage.
        weapon_bonus: Flat bonus added to the attack roll.
        ability: Overrides the class attack ability (spellcasting uses this).
        bonus_dice: Extra damage rolled separately, e.g. "2d6".
        bonus_damage_type: Type of the bonus damage; None means untyped.
        is_spell: Whether this is spell damage (arcane power passive).
        damage_modifier_ability: Ability whose modifier is added to the base roll.
    """

    name: str
    damage_dice: str
    damage_type: str
    weapon_bonus: int = 0
    ability: Ability | None = None
    bonus_dice: str | None = None
    bonus_damage_type: str | None = None
    is_spell: bool = False
    damage_modifier_ability: Ability | None = None


@dataclass(frozen=True)
class AttackOutcome:
    """Resolution of one attack."""

    attacker_id: str
    defender_id: str
    profile_name: str
    hit: bool
    natural: int
    total: int
    attack_bonus: int
    target_ac: int
    is_critical: bool
    is_fumble: bool
    advantage_type: AdvantageType
    damage: int
    damage_type: str
    interaction: str
    bonus_damage: int
    defender_hp: int
    defender_defeated: bool
    discarded_rolls: tuple[int, ...] = ()


# =============================================================================
# Spells
# =============================================================================


@dataclass(frozen=True)
class SpellOutcome:
    """Resolution of one spell cast.

    ``hit`` is None for spells that make no attack roll. Save fields are set
    only for saving throw spells.
    """

    spell_id: str
    caster_id: str
    target_id: str
    resolution: SpellResolution
    mana_spent: int
    hit: bool | None = None
    damage: int = 0
    damage_type: str | None = None
    interaction: str = "none"
    healed: int = 0
    save_dc: int | None = None
    save_total: int | None = None
    save_succeeded: bool | None = None
    effect: StatusEffect | None = None
    attack: AttackOutcome | None = None
    target_hp: int = 0
    target_defeated: bool = False


# =============================================================================
# Progression
# =============================================================================


@dataclass(frozen=True)
class XpGrant:
    """Result of granting experience."""

    amount: int
    total_xp: int
    old_level: int
    new_level: int
    attribute_points_awarded: int = 0
    hit_dice_gained: int = 0

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


@dataclass(frozen=True)
class AttributeSpend:
    """Result of spending one attribute point."""

    ability: Ability
    old_score: int
    new_score: int
    points_remaining: int
    max_hp_delta: int = 0
    max_mana_delta: int = 0


# =============================================================================
# Resting
# =============================================================================


@dataclass(frozen=True)
class RestOutcome:
    """Result of a successful rest."""

    kind: RestKind
    hp_recovered: int
    mana_recovered: int
    hit_dice_remaining: int
    hit_dice_restored: int = 0
    hit_die_roll: int | None = None


# =============================================================================
# Encounters
# =============================================================================


@dataclass
class ActionOutcome:
    """Result of one encounter action (player or monster)."""

    action: str
    phase: CombatPhase
    message: str = ""
    attack: AttackOutcome | None = None
    spell: SpellOutcome | None = None
    damage: int = 0
    healed: int = 0
    regenerated: int = 0
    fled: bool | None = None
    counter_attack: AttackOutcome | None = None
    xp: XpGrant | None = None
    details: dict[str, int | str] = field(default_factory=dict)
