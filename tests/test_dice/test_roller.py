"""Tests for dice roller."""

import random

from arquest.dice.roller import resolve_rng, roll, roll_dice, roll_with_advantage
from arquest.dice.types import AdvantageType, DiceExpression
from doubles import ScriptedRandom


class TestRollDice:
    """Tests for roll_dice function."""

    def test_sums_rolls_and_modifier(self):
        result = roll_dice(DiceExpression(2, 6, 3), ScriptedRandom([4, 5]))
        assert result.individual_rolls == (4, 5)
        assert result.total == 12
        assert result.modifier == 3

    def test_values_in_range(self):
        """Rolled values stay within the die range."""
        result = roll_dice(DiceExpression(num_dice=50, die_size=6), random.Random(3))
        assert all(1 <= r <= 6 for r in result.individual_rolls)

    def test_negative_total_not_clamped(self):
        """Plain rolls keep their raw total; only damage is floored."""
        result = roll_dice(DiceExpression(1, 4, -5), ScriptedRandom([1]))
        assert result.total == -4

    def test_seeded_source_is_repeatable(self):
        first = roll("4d6+1", random.Random(42))
        second = roll("4d6+1", random.Random(42))
        assert first == second


class TestRoll:
    def test_parses_notation(self):
        result = roll("1d20+5", ScriptedRandom([11]))
        assert result.total == 16
        assert result.natural == 11

    def test_natural_only_for_single_d20(self):
        assert roll("2d20", ScriptedRandom([3, 4])).natural is None
        assert roll("1d6", ScriptedRandom([3])).natural is None


class TestRollWithAdvantage:
    """Tests for advantage and disadvantage."""

    def test_advantage_keeps_higher(self):
        result = roll_with_advantage(
            DiceExpression(1, 20), AdvantageType.ADVANTAGE, ScriptedRandom([7, 15])
        )
        assert result.individual_rolls == (15,)
        assert result.discarded_rolls == (7,)

    def test_disadvantage_keeps_lower(self):
        result = roll_with_advantage(
            DiceExpression(1, 20, 2), AdvantageType.DISADVANTAGE, ScriptedRandom([7, 15])
        )
        assert result.individual_rolls == (7,)
        assert result.discarded_rolls == (15,)
        assert result.total == 9

    def test_normal_rolls_once(self):
        rng = ScriptedRandom([12, 19])
        result = roll_with_advantage(DiceExpression(1, 20), AdvantageType.NORMAL, rng)
        assert result.individual_rolls == (12,)
        assert result.discarded_rolls == ()
        assert rng.rolls == [19]

    def test_multiple_dice_ignore_advantage(self):
        result = roll_with_advantage(
            DiceExpression(2, 6), AdvantageType.ADVANTAGE, ScriptedRandom([1, 2])
        )
        assert result.individual_rolls == (1, 2)


class TestResolveRng:
    def test_defaults_to_random_module(self):
        assert resolve_rng(None) is random

    def test_passes_through_source(self):
        source = random.Random(1)
        assert resolve_rng(source) is source
