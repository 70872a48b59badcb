"""Spell schema and spell table."""

from pydantic import BaseModel, Field, model_validator

from arquest.models.enums import Ability, CharacterClass, SpellResolution
from arquest.schemas.effects import ArmorClassBonus, StatusEffect

# Only secondary effect the resolver interprets.
ADVANTAGE_NEXT = "advantage_next"


class Spell(BaseModel):
    """A castable spell."""

    id: str = Field(min_length=1)
    name: str
    character_class: CharacterClass
    level: int = Field(default=0, ge=0, description="0 = at-will cantrip")
    resolution: SpellResolution
    dice: str | None = Field(default=None, description="Damage or healing notation")
    damage_type: str | None = None
    mana_cost: int = Field(default=0, ge=0)
    add_ability_modifier: bool = Field(
        default=False, description="Add the spellcasting modifier to the rolled amount"
    )
    save_ability: Ability | None = None
    half_on_save: bool = False
    effect: StatusEffect | None = None
    duration_ms: int | None = Field(default=None, ge=0)
    targets_self: bool = False
    secondary_effect: str | None = None
    description: str = ""

    @model_validator(mode="after")
    def _check_resolution_fields(self) -> "Spell":
        if self.resolution is SpellResolution.BUFF:
            if self.effect is None:
                raise ValueError(f"Buff spell '{self.id}' needs an effect")
        elif self.dice is None:
            raise ValueError(f"Spell '{self.id}' needs dice")
        if self.resolution is SpellResolution.SAVING_THROW and self.save_ability is None:
            raise ValueError(f"Saving throw spell '{self.id}' needs a save ability")
        return self

    @property
    def is_cantrip(self) -> bool:
        return self.level == 0


SPELLS: dict[str, Spell] = {
    s.id: s
    for s in [
        # Mage
        Spell(
            id="fire_bolt",
            name="Fire Bolt",
            character_class=CharacterClass.MAGE,
            level=0,
            resolution=SpellResolution.ATTACK_ROLL,
            dice="1d10",
            damage_type="fire",
            add_ability_modifier=True,
            description="Hurls a mote of fire at the enemy.",
        ),
        Spell(
            id="magic_missile",
            name="Magic Missile",
            character_class=CharacterClass.MAGE,
            level=1,
            resolution=SpellResolution.AUTO_HIT_DAMAGE,
            dice="3d4+3",
            damage_type="force",
            mana_cost=5,
            description="Three darts of magical force that always hit.",
        ),
        Spell(
            id="thunderwave",
            name="Thunderwave",
            character_class=CharacterClass.MAGE,
            level=1,
            resolution=SpellResolution.SAVING_THROW,
            dice="2d8",
            damage_type="thunder",
            mana_cost=10,
            save_ability=Ability.CONSTITUTION,
            half_on_save=True,
            description="A wave of thunderous force (CON save for half).",
        ),
        Spell(
            id="shield",
            name="Shield",
            character_class=CharacterClass.MAGE,
            level=1,
            resolution=SpellResolution.BUFF,
            mana_cost=5,
            effect=StatusEffect(
                id="shield",
                name="Shield",
                payload=[ArmorClassBonus(amount=5)],
            ),
            duration_ms=6000,
            targets_self=True,
            description="+5 AC until your next turn.",
        ),
        # Cleric
        Spell(
            id="sacred_flame",
            name="Sacred Flame",
            character_class=CharacterClass.CLERIC,
            level=0,
            resolution=SpellResolution.SAVING_THROW,
            dice="1d8",
            damage_type="radiant",
            save_ability=Ability.DEXTERITY,
            description="Radiant flame descends on the enemy (DEX save).",
        ),
        Spell(
            id="cure_wounds",
            name="Cure Wounds",
            character_class=CharacterClass.CLERIC,
            level=1,
            resolution=SpellResolution.HEAL,
            dice="1d8",
            mana_cost=5,
            add_ability_modifier=True,
            targets_self=True,
            description="Heals 1d8 plus your WIS modifier.",
        ),
        Spell(
            id="guiding_bolt",
            name="Guiding Bolt",
            character_class=CharacterClass.CLERIC,
            level=1,
            resolution=SpellResolution.ATTACK_ROLL,
            dice="4d6",
            damage_type="radiant",
            mana_cost=5,
            secondary_effect=ADVANTAGE_NEXT,
            description="A bolt of light; the next attack against the target has advantage.",
        ),
    ]
}


def get_spell(spell_id: str) -> Spell:
    """Look up a spell by id.

    Raises:
        ValueError: If the spell id is unknown.
    """
    spell = SPELLS.get(spell_id)
    if spell is None:
        raise ValueError(f"Unknown spell: '{spell_id}'")
    return spell


def get_spells_by_class(character_class: CharacterClass) -> list[Spell]:
    return [s for s in SPELLS.values() if s.character_class == character_class]
