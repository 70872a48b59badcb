"""Tests for the spell schema and spell table."""

import pytest
from pydantic import ValidationError

from arquest.models.enums import CharacterClass, SpellResolution
from arquest.schemas.spells import ADVANTAGE_NEXT, SPELLS, Spell, get_spell, get_spells_by_class


class TestSpellValidation:
    def test_damage_spell_needs_dice(self):
        with pytest.raises(ValidationError):
            Spell(
                id="fizzle",
                name="Fizzle",
                character_class=CharacterClass.MAGE,
                resolution=SpellResolution.AUTO_HIT_DAMAGE,
            )

    def test_buff_needs_effect(self):
        with pytest.raises(ValidationError):
            Spell(
                id="nothing",
                name="Nothing",
                character_class=CharacterClass.MAGE,
                resolution=SpellResolution.BUFF,
            )

    def test_saving_throw_needs_save_ability(self):
        with pytest.raises(ValidationError):
            Spell(
                id="blast",
                name="Blast",
                character_class=CharacterClass.CLERIC,
                resolution=SpellResolution.SAVING_THROW,
                dice="1d6",
            )


class TestSpellTable:
    def test_class_lists(self):
        assert {s.id for s in get_spells_by_class(CharacterClass.MAGE)} == {
            "fire_bolt",
            "magic_missile",
            "thunderwave",
            "shield",
        }
        assert {s.id for s in get_spells_by_class(CharacterClass.CLERIC)} == {
            "sacred_flame",
            "cure_wounds",
            "guiding_bolt",
        }
        assert get_spells_by_class(CharacterClass.WARRIOR) == []

    def test_cantrips_are_free(self):
        for spell in SPELLS.values():
            if spell.is_cantrip:
                assert spell.mana_cost == 0

    def test_shield_is_self_ac_buff(self):
        shield = get_spell("shield")
        assert shield.targets_self is True
        assert shield.duration_ms == 6000
        assert shield.effect.ac_bonus() == 5

    def test_guiding_bolt_grants_advantage(self):
        assert get_spell("guiding_bolt").secondary_effect == ADVANTAGE_NEXT

    def test_unknown_spell(self):
        with pytest.raises(ValueError, match="Unknown spell"):
            get_spell("wish")
