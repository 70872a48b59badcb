"""Dice system type definitions.

Immutable dataclasses for dice expressions, roll results, and check outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum


class AdvantageType(str, Enum):
    """Type of advantage for a roll."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class DiceExpression:
    """A dice expression like 2d6+3.

    Attributes:
        num_dice: Number of dice to roll.
        die_size: Size of each die (e.g., 6 for d6, 20 for d20).
        modifier: Flat modifier to add to the total.
    """

    num_dice: int
    die_size: int
    modifier: int = 0

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.num_dice}d{self.die_size}+{self.modifier}"
        if self.modifier < 0:
            return f"{self.num_dice}d{self.die_size}{self.modifier}"
        return f"{self.num_dice}d{self.die_size}"


@dataclass(frozen=True)
class RollResult:
    """Result of rolling dice.

    Attributes:
        expression: The dice expression that was rolled.
        individual_rolls: Tuple of each die's result.
        modifier: The modifier applied.
        total: Sum of rolls plus modifier.
        discarded_rolls: Rolls discarded due to advantage/disadvantage.
    """

    expression: DiceExpression
    individual_rolls: tuple[int, ...]
    modifier: int
    total: int
    discarded_rolls: tuple[int, ...] = field(default_factory=tuple)

    @property
    def natural(self) -> int | None:
        """The kept die of a single d20 roll, None for anything else."""
        if self.expression.num_dice == 1 and self.expression.die_size == 20:
            return self.individual_rolls[0]
        return None

    @property
    def is_critical(self) -> bool:
        """Check if this was a natural 20 on a single d20."""
        return self.natural == 20

    @property
    def is_fumble(self) -> bool:
        """Check if this was a natural 1 on a single d20."""
        return self.natural == 1


@dataclass(frozen=True)
class AttackRollResult:
    """Result of an attack roll.

    Attributes:
        roll_result: The underlying d20 roll (modifier is the attack bonus).
        target_ac: Armor class that was targeted.
        hit: Whether the attack hit.
        is_critical: Natural 20 (automatic hit, doubled damage dice).
        is_fumble: Natural 1 (automatic miss).
        advantage_type: Whether the d20 was rolled with advantage/disadvantage.
    """

    roll_result: RollResult
    target_ac: int
    hit: bool
    is_critical: bool
    is_fumble: bool
    advantage_type: AdvantageType = AdvantageType.NORMAL

    @property
    def natural(self) -> int:
        return self.roll_result.individual_rolls[0]

    @property
    def total(self) -> int:
        return self.roll_result.total


@dataclass(frozen=True)
class SaveRollResult:
    """Result of a saving throw.

    Saving throws never produce criticals or fumbles.
    """

    roll_result: RollResult
    dc: int
    success: bool

    @property
    def natural(self) -> int:
        return self.roll_result.individual_rolls[0]

    @property
    def total(self) -> int:
        return self.roll_result.total


@dataclass(frozen=True)
class DamageRollResult:
    """Result of a damage roll.

    Attributes:
        roll_result: The underlying dice roll (dice already doubled on a critical).
        damage_type: Type of damage (slashing, piercing, fire, etc.).
        is_critical: Whether this was critical hit damage.
        total: Roll total floored at zero.
    """

    roll_result: RollResult
    damage_type: str
    is_critical: bool

    @property
    def total(self) -> int:
        return max(0, self.roll_result.total)
