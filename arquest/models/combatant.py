"""Combatant models.

Combatants are plain mutable dataclasses: the resolvers mutate hit points,
mana and flags in place for the length of an encounter. Derived fields on a
player (armor class, hit points, mana, proficiency, skills) are written only
by ``arquest.services.stat_deriver``.
"""

from dataclasses import dataclass, field

from arquest.models.effects import StatusEffectLedger
from arquest.models.enums import Ability, CharacterClass, DamageAffinity, RestKind

ABILITY_FIELDS: dict[Ability, str] = {
    Ability.STRENGTH: "strength",
    Ability.DEXTERITY: "dexterity",
    Ability.CONSTITUTION: "constitution",
    Ability.INTELLIGENCE: "intelligence",
    Ability.WISDOM: "wisdom",
    Ability.CHARISMA: "charisma",
}


@dataclass
class AbilityScores:
    """The six base ability scores of a player."""

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def get(self, ability: Ability) -> int:
        return getattr(self, ABILITY_FIELDS[ability])

    def set(self, ability: Ability, value: int) -> None:
        setattr(self, ABILITY_FIELDS[ability], value)

    def as_dict(self) -> dict[Ability, int]:
        return {ability: self.get(ability) for ability in Ability}


@dataclass
class EquipmentBonus:
    """Bonus block contributed by worn equipment.

    Owned by the player and rebuilt whenever equipment changes. The combat
    resolver only reads it.
    """

    ac: int = 0
    abilities: dict[Ability, int] = field(default_factory=dict)

    def for_ability(self, ability: Ability) -> int:
        return self.abilities.get(ability, 0)


@dataclass(kw_only=True)
class Combatant:
    """State shared by every participant in an encounter."""

    id: str
    name: str
    armor_class: int = 10
    max_hp: int = 1
    current_hp: int = 1
    proficiency_bonus: int = 2
    skill_modifiers: dict[str, int] = field(default_factory=dict)
    damage_profile: dict[str, DamageAffinity] = field(default_factory=dict)

    # Transient combat flags, cleared at the start of every player action
    is_dodging: bool = False
    is_disengaging: bool = False
    marked_for_advantage: bool = False

    effects: StatusEffectLedger = field(default_factory=StatusEffectLedger, repr=False)

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def affinity_for(self, damage_type: str | None) -> DamageAffinity:
        if damage_type is None:
            return DamageAffinity.NORMAL
        return self.damage_profile.get(damage_type, DamageAffinity.NORMAL)

    def clear_action_flags(self) -> None:
        self.is_dodging = False
        self.is_disengaging = False


@dataclass(kw_only=True)
class PlayerCombatant(Combatant):
    """A player character.

    Progression (level, xp, attribute points) and rest bookkeeping persist
    across encounters; the host saves and restores them.
    """

    character_class: CharacterClass
    level: int = 1
    abilities: AbilityScores = field(default_factory=AbilityScores)
    equipment_bonus: EquipmentBonus = field(default_factory=EquipmentBonus)
    equipment: dict[str, str] = field(default_factory=dict)  # slot -> item key
    max_mana: int = 0
    current_mana: int = 0

    # Progression
    xp: int = 0
    attribute_points: int = 0

    # Resting
    hit_dice_current: int = 1
    last_rest_at: dict[RestKind, int] = field(default_factory=dict)

    # Class ability key -> timestamp of last use
    ability_cooldowns: dict[str, int] = field(default_factory=dict)

    # False until the first stat derivation has filled current HP/mana
    stats_initialized: bool = False

    @property
    def hit_dice_max(self) -> int:
        return self.level

    @property
    def hp_fraction(self) -> float:
        return self.current_hp / self.max_hp if self.max_hp else 0.0


@dataclass(kw_only=True)
class MonsterCombatant(Combatant):
    """A monster instance, discarded when its encounter ends.

    Monsters carry their combat numbers directly rather than deriving them
    from ability scores.
    """

    template_id: str
    challenge_rating: float
    attack_bonus: int
    damage_dice: str
    damage_type: str
    save_bonus: int
    xp_reward: int
    creature_type: str


def is_defeated(combatant: Combatant) -> bool:
    """True once a combatant is at or below 0 hit points."""
    return combatant.current_hp <= 0
