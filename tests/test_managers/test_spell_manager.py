"""Tests for SpellManager - spell resolution and mana."""

import pytest

from arquest.managers.combat_manager import CombatManager
from arquest.managers.spell_manager import SpellManager, heal
from arquest.models.enums import DamageAffinity, EffectKind, FailureReason, SpellResolution
from arquest.models.outcomes import Failure, SpellOutcome
from arquest.observability.events import SpellCastEvent
from arquest.schemas.effects import StatusEffect


@pytest.fixture
def spells(context) -> SpellManager:
    return SpellManager(context)


class TestAttackRollSpells:
    def test_fire_bolt_hits(self, spells, rng, mage, ogre):
        rng.queue(15, 6)

        outcome = spells.cast_spell(mage, ogre, "fire_bolt")

        assert isinstance(outcome, SpellOutcome)
        assert outcome.hit is True
        assert outcome.attack.attack_bonus == 5
        assert outcome.damage == 9
        assert ogre.current_hp == 50
        assert mage.current_mana == 35

    def test_arcane_power_boosts_spell_against_debuffed(self, spells, rng, clock, mage, ogre):
        ogre.effects.add_effect(
            StatusEffect(id="taunted", name="Taunted", kind=EffectKind.DEBUFF), 5000, clock()
        )
        rng.queue(15, 6)
        outcome = spells.cast_spell(mage, ogre, "fire_bolt")
        assert outcome.damage == 10

    def test_guiding_bolt_marks_target(self, spells, rng, cleric, goblin):
        rng.queue(14, 1, 1, 1, 1)

        outcome = spells.cast_spell(cleric, goblin, "guiding_bolt")

        assert outcome.damage == 4
        assert goblin.current_hp == 3
        assert goblin.marked_for_advantage is True
        assert cleric.current_mana == 18

    def test_guiding_bolt_miss_leaves_no_mark(self, spells, rng, cleric, goblin):
        rng.queue(2)
        outcome = spells.cast_spell(cleric, goblin, "guiding_bolt")
        assert outcome.hit is False
        assert goblin.marked_for_advantage is False
        assert cleric.current_mana == 18


class TestAutoHitSpells:
    def test_magic_missile(self, spells, rng, mage, ogre):
        rng.queue(1, 2, 3)
        outcome = spells.cast_spell(mage, ogre, "magic_missile")
        assert outcome.hit is None
        assert outcome.damage == 9
        assert outcome.mana_spent == 5
        assert mage.current_mana == 30


class TestSavingThrowSpells:
    def test_failed_save_takes_damage(self, spells, rng, cleric, goblin):
        rng.queue(10, 5)
        outcome = spells.cast_spell(cleric, goblin, "sacred_flame")
        assert outcome.save_dc == 13
        assert outcome.save_total == 12
        assert outcome.save_succeeded is False
        assert outcome.damage == 5
        assert goblin.current_hp == 2

    def test_successful_save_negates(self, spells, rng, cleric, goblin):
        rng.queue(11, 5)
        outcome = spells.cast_spell(cleric, goblin, "sacred_flame")
        assert outcome.save_succeeded is True
        assert outcome.damage == 0
        assert goblin.current_hp == 7

    def test_successful_save_halves_and_floors(self, spells, rng, mage, ogre):
        rng.queue(11, 4, 5)
        outcome = spells.cast_spell(mage, ogre, "thunderwave")
        assert outcome.save_dc == 13
        assert outcome.save_succeeded is True
        assert outcome.damage == 4
        assert ogre.current_hp == 55
        assert mage.current_mana == 25

    def test_failed_save_takes_full_damage(self, spells, rng, mage, ogre):
        rng.queue(2, 4, 5)
        outcome = spells.cast_spell(mage, ogre, "thunderwave")
        assert outcome.save_succeeded is False
        assert outcome.damage == 9

    def test_resistance_applies_after_halving(self, spells, rng, mage, make_monster):
        brute = make_monster(damage_profile={"thunder": DamageAffinity.RESISTANT})
        rng.queue(11, 4, 5)
        outcome = spells.cast_spell(mage, brute, "thunderwave")
        assert outcome.interaction == "resistant"
        assert outcome.damage == 2

    def test_half_damage_is_not_floored_before_vulnerability(self, spells, rng, mage, make_monster):
        brute = make_monster(damage_profile={"thunder": DamageAffinity.VULNERABLE})
        rng.queue(11, 3, 4)
        outcome = spells.cast_spell(mage, brute, "thunderwave")
        assert outcome.damage == 7


class TestHealAndBuffSpells:
    def test_cure_wounds_targets_caster_without_overheal(self, spells, rng, cleric, goblin):
        cleric.current_hp = 2
        rng.queue(4)
        outcome = spells.cast_spell(cleric, goblin, "cure_wounds")
        assert outcome.target_id == cleric.id
        assert outcome.healed == 6
        assert cleric.current_hp == cleric.max_hp == 8

    def test_shield_raises_ac_until_expiry(self, context, spells, clock, mage):
        combat = CombatManager(context)

        outcome = spells.cast_spell(mage, None, "shield")

        assert outcome.resolution is SpellResolution.BUFF
        assert outcome.effect.expires_at == clock() + 6000
        assert combat.effective_ac(mage) == 15
        clock.advance(6000)
        assert combat.effective_ac(mage) == 10


class TestRefusals:
    def test_insufficient_mana_spends_nothing(self, spells, rng, mage, ogre):
        mage.current_mana = 2
        result = spells.cast_spell(mage, ogre, "magic_missile")
        assert isinstance(result, Failure)
        assert result.reason is FailureReason.INSUFFICIENT_RESOURCE
        assert mage.current_mana == 2
        assert ogre.current_hp == 59
        assert rng.calls == []

    def test_defeated_target(self, spells, mage, goblin):
        goblin.current_hp = 0
        result = spells.cast_spell(mage, goblin, "magic_missile")
        assert result.reason is FailureReason.INVALID_TARGET
        assert mage.current_mana == 35

    def test_non_player_caster(self, spells, goblin, warrior):
        with pytest.raises(TypeError):
            spells.cast_spell(goblin, warrior, "fire_bolt")

    def test_unknown_spell(self, spells, mage, goblin):
        with pytest.raises(ValueError):
            spells.cast_spell(mage, goblin, "wish")

    def test_spell_from_another_class(self, spells, rng, warrior, cleric, goblin):
        with pytest.raises(ValueError, match="mage spell"):
            spells.cast_spell(warrior, goblin, "fire_bolt")
        with pytest.raises(ValueError):
            spells.cast_spell(cleric, goblin, "magic_missile")
        assert cleric.current_mana == 23
        assert goblin.current_hp == 7
        assert rng.calls == []


def test_cast_emits_event(spells, rng, hook, mage, ogre):
    rng.queue(1, 1, 1)
    spells.cast_spell(mage, ogre, "magic_missile")
    events = hook.of_type(SpellCastEvent)
    assert len(events) == 1
    assert events[0].spell_id == "magic_missile"
    assert events[0].damage == 6


class TestHeal:
    def test_no_overheal(self, warrior):
        warrior.current_hp = 10
        assert heal(warrior, 5) == 2
        assert warrior.current_hp == 12

    def test_negative_amount_ignored(self, warrior):
        warrior.current_hp = 10
        assert heal(warrior, -4) == 0
