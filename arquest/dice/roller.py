"""Core dice rolling engine.

Provides functions to roll dice expressions with support for
advantage/disadvantage mechanics.

Every function accepts an optional randomness source so that hosts and tests
can make rolls deterministic. Any object with ``randint(a, b)`` and
``random()`` works, including ``random.Random(seed)``. When omitted the
module-level ``random`` functions are used.
"""

import random
from typing import Protocol

from arquest.dice.types import DiceExpression, RollResult, AdvantageType
from arquest.dice.parser import parse_dice


class RandomSource(Protocol):
    """Uniform randomness used for every die draw."""

    def randint(self, a: int, b: int) -> int:
        ...

    def random(self) -> float:
        ...


def resolve_rng(rng: RandomSource | None) -> RandomSource:
    """Return the given source, or the global ``random`` module."""
    return rng if rng is not None else random


def roll_dice(expression: DiceExpression, rng: RandomSource | None = None) -> RollResult:
    """Roll dice according to the expression.

    Args:
        expression: The dice expression to roll.
        rng: Optional randomness source.

    Returns:
        RollResult with individual rolls and total.

    Examples:
        >>> expr = DiceExpression(num_dice=2, die_size=6, modifier=3)
        >>> result = roll_dice(expr)
        >>> len(result.individual_rolls)
        2
    """
    source = resolve_rng(rng)
    rolls = tuple(
        source.randint(1, expression.die_size) for _ in range(expression.num_dice)
    )
    total = sum(rolls) + expression.modifier

    return RollResult(
        expression=expression,
        individual_rolls=rolls,
        modifier=expression.modifier,
        total=total,
    )


def roll(notation: str, rng: RandomSource | None = None) -> RollResult:
    """Parse dice notation and roll.

    Args:
        notation: Dice notation string (e.g., "2d6+3").
        rng: Optional randomness source.

    Returns:
        RollResult with individual rolls and total.

    Raises:
        InvalidNotation: If notation is invalid.

    Examples:
        >>> result = roll("1d20")
        >>> result.expression.die_size
        20
    """
    expression = parse_dice(notation)
    return roll_dice(expression, rng)


def roll_with_advantage(
    expression: DiceExpression,
    advantage_type: AdvantageType,
    rng: RandomSource | None = None,
) -> RollResult:
    """Roll with advantage or disadvantage.

    For advantage: rolls twice, keeps higher.
    For disadvantage: rolls twice, keeps lower.
    For normal: rolls once.

    Only applies to single-die rolls (e.g., 1d20). For multiple dice,
    advantage_type is ignored and a normal roll is performed.

    Args:
        expression: The dice expression to roll.
        advantage_type: Whether to use advantage, disadvantage, or normal.
        rng: Optional randomness source.

    Returns:
        RollResult with kept roll and discarded roll (if applicable).
    """
    if expression.num_dice != 1 or advantage_type == AdvantageType.NORMAL:
        return roll_dice(expression, rng)

    source = resolve_rng(rng)
    roll1 = source.randint(1, expression.die_size)
    roll2 = source.randint(1, expression.die_size)

    if advantage_type == AdvantageType.ADVANTAGE:
        kept = max(roll1, roll2)
        discarded = min(roll1, roll2)
    else:  # DISADVANTAGE
        kept = min(roll1, roll2)
        discarded = max(roll1, roll2)

    return RollResult(
        expression=expression,
        individual_rolls=(kept,),
        modifier=expression.modifier,
        total=kept + expression.modifier,
        discarded_rolls=(discarded,),
    )
