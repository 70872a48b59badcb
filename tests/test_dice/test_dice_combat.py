"""Tests for combat dice mechanics."""

from arquest.dice.combat import roll_attack, roll_damage, roll_initiative, roll_save
from arquest.dice.types import AdvantageType
from doubles import ScriptedRandom


class TestRollAttack:
    """Tests for attack rolls."""

    def test_hit_when_total_meets_ac(self):
        """Bonus 5 vs AC 15 with a natural 14 hits."""
        result = roll_attack(5, 15, rng=ScriptedRandom([14]))
        assert result.hit is True
        assert result.natural == 14
        assert result.total == 19

    def test_exact_ac_hits(self):
        assert roll_attack(5, 15, rng=ScriptedRandom([10])).hit is True

    def test_miss_when_total_below_ac(self):
        assert roll_attack(3, 15, rng=ScriptedRandom([8])).hit is False

    def test_natural_20_always_hits(self):
        result = roll_attack(0, 30, rng=ScriptedRandom([20]))
        assert result.hit is True
        assert result.is_critical is True

    def test_natural_1_always_misses(self):
        result = roll_attack(20, 5, rng=ScriptedRandom([1]))
        assert result.hit is False
        assert result.is_fumble is True

    def test_advantage_applies_override_to_kept_die(self):
        """A natural 20 on the kept die is a critical."""
        result = roll_attack(0, 25, AdvantageType.ADVANTAGE, ScriptedRandom([20, 3]))
        assert result.is_critical is True
        assert result.roll_result.discarded_rolls == (3,)

    def test_disadvantage_can_turn_crit_into_fumble(self):
        result = roll_attack(10, 5, AdvantageType.DISADVANTAGE, ScriptedRandom([20, 1]))
        assert result.is_fumble is True
        assert result.hit is False


class TestRollDamage:
    """Tests for damage rolls."""

    def test_adds_modifier(self):
        """1d8+3 with a roll of 5 deals 8."""
        result = roll_damage("1d8+3", rng=ScriptedRandom([5]))
        assert result.total == 8

    def test_critical_doubles_dice_not_modifier(self):
        result = roll_damage("2d6+3", is_critical=True, rng=ScriptedRandom([1, 2, 3, 4]))
        assert len(result.roll_result.individual_rolls) == 4
        assert result.total == 13

    def test_floors_at_zero(self):
        result = roll_damage("1d4-5", rng=ScriptedRandom([2]))
        assert result.total == 0

    def test_keeps_damage_type(self):
        assert roll_damage("1d6", damage_type="fire", rng=ScriptedRandom([1])).damage_type == "fire"


class TestRollSave:
    """Saves have no natural 1/20 overrides."""

    def test_success_at_dc(self):
        result = roll_save(2, 13, ScriptedRandom([11]))
        assert result.success is True
        assert result.total == 13

    def test_natural_20_can_fail(self):
        assert roll_save(-10, 15, ScriptedRandom([20])).success is False

    def test_natural_1_can_succeed(self):
        assert roll_save(10, 5, ScriptedRandom([1])).success is True


def test_roll_initiative_adds_dex():
    assert roll_initiative(3, ScriptedRandom([9])).total == 12
