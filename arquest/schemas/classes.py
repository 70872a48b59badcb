"""Class definitions: hit dice, key abilities, proficiencies and abilities.

Each playable class carries one active ability (cooldown and mana gated) and
one passive that the resolvers consult during combat.
"""

from dataclasses import dataclass, field

from arquest.models.enums import Ability, CharacterClass


@dataclass(frozen=True)
class ClassAbilityDefinition:
    """An active class ability usable once per cooldown window in combat."""

    key: str
    display_name: str
    description: str
    cooldown_ms: int
    mana_cost: int = 0
    dice: str | None = None
    damage_type: str | None = None
    repeats: int = 1


@dataclass(frozen=True)
class PassiveDefinition:
    """An always-on class passive."""

    key: str
    display_name: str
    description: str


@dataclass(frozen=True)
class ClassDefinition:
    """Rule data for one playable class."""

    character_class: CharacterClass
    display_name: str
    hit_die: int
    primary_ability: Ability
    attack_ability: Ability
    spellcasting_ability: Ability
    base_weapon_dice: str
    base_weapon_damage_type: str
    saving_throws: tuple[Ability, ...]
    skill_proficiencies: frozenset[str] = field(default_factory=frozenset)
    ability: ClassAbilityDefinition | None = None
    passive: PassiveDefinition | None = None


# =============================================================================
# Class table
# =============================================================================

CLASS_DEFINITIONS: dict[CharacterClass, ClassDefinition] = {
    CharacterClass.WARRIOR: ClassDefinition(
        character_class=CharacterClass.WARRIOR,
        display_name="Warrior",
        hit_die=12,
        primary_ability=Ability.STRENGTH,
        attack_ability=Ability.STRENGTH,
        spellcasting_ability=Ability.STRENGTH,
        base_weapon_dice="1d8",
        base_weapon_damage_type="slashing",
        saving_throws=(Ability.STRENGTH, Ability.CONSTITUTION),
        skill_proficiencies=frozenset({"athletics", "intimidation", "perception"}),
        ability=ClassAbilityDefinition(
            key="taunt",
            display_name="Taunt",
            description="Forces the monster to focus on you for a few seconds",
            cooldown_ms=15_000,
        ),
        passive=PassiveDefinition(
            key="last_stand",
            display_name="Last Stand",
            description="+2 AC while below half hit points",
        ),
    ),
    CharacterClass.MAGE: ClassDefinition(
        character_class=CharacterClass.MAGE,
        display_name="Mage",
        hit_die=6,
        primary_ability=Ability.INTELLIGENCE,
        attack_ability=Ability.INTELLIGENCE,
        spellcasting_ability=Ability.INTELLIGENCE,
        base_weapon_dice="1d6",
        base_weapon_damage_type="bludgeoning",
        saving_throws=(Ability.INTELLIGENCE, Ability.WISDOM),
        skill_proficiencies=frozenset({"arcana", "history", "investigation"}),
        ability=ClassAbilityDefinition(
            key="meteor",
            display_name="Meteor",
            description="Calls down 4d6 fire damage plus INT modifier",
            cooldown_ms=30_000,
            mana_cost=20,
            dice="4d6",
            damage_type="fire",
        ),
        passive=PassiveDefinition(
            key="arcane_power",
            display_name="Arcane Power",
            description="+20% spell damage against debuffed enemies",
        ),
    ),
    CharacterClass.ARCHER: ClassDefinition(
        character_class=CharacterClass.ARCHER,
        display_name="Archer",
        hit_die=8,
        primary_ability=Ability.DEXTERITY,
        attack_ability=Ability.DEXTERITY,
        spellcasting_ability=Ability.DEXTERITY,
        base_weapon_dice="1d6",
        base_weapon_damage_type="piercing",
        saving_throws=(Ability.DEXTERITY, Ability.INTELLIGENCE),
        skill_proficiencies=frozenset({"acrobatics", "perception", "stealth", "survival"}),
        ability=ClassAbilityDefinition(
            key="arrow_rain",
            display_name="Arrow Rain",
            description="Looses three arrows for 2d6 each plus DEX modifier",
            cooldown_ms=20_000,
            mana_cost=10,
            dice="2d6",
            damage_type="piercing",
            repeats=3,
        ),
        passive=PassiveDefinition(
            key="deadly_aim",
            display_name="Deadly Aim",
            description="+50% damage on critical hits",
        ),
    ),
    CharacterClass.CLERIC: ClassDefinition(
        character_class=CharacterClass.CLERIC,
        display_name="Cleric",
        hit_die=8,
        primary_ability=Ability.WISDOM,
        attack_ability=Ability.STRENGTH,
        spellcasting_ability=Ability.WISDOM,
        base_weapon_dice="1d6",
        base_weapon_damage_type="bludgeoning",
        saving_throws=(Ability.WISDOM, Ability.CHARISMA),
        skill_proficiencies=frozenset({"insight", "medicine", "religion"}),
        ability=ClassAbilityDefinition(
            key="mass_heal",
            display_name="Mass Heal",
            description="Heals 3d6 plus WIS modifier",
            cooldown_ms=25_000,
            mana_cost=15,
            dice="3d6",
        ),
        passive=PassiveDefinition(
            key="holy_aura",
            display_name="Holy Aura",
            description="Regenerates 1 HP every 5 seconds in combat",
        ),
    ),
}


def get_class_definition(character_class: CharacterClass | str) -> ClassDefinition:
    """Look up a class definition.

    Raises:
        ValueError: If the class is unknown.
    """
    try:
        return CLASS_DEFINITIONS[CharacterClass(character_class)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown character class: '{character_class}'") from exc


def has_passive(character_class: CharacterClass, passive_key: str) -> bool:
    passive = CLASS_DEFINITIONS[character_class].passive
    return passive is not None and passive.key == passive_key
