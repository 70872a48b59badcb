"""Dice notation parser.

Parses standard dice notation like 1d20, 2d6+3, d4, 4d6-2.
"""

import re

from arquest.dice.types import DiceExpression


class InvalidNotation(ValueError):
    """Error parsing dice notation.

    A malformed notation is a caller bug, so it is raised rather than
    reported as a game outcome.
    """

    pass


# Pattern: optional count, 'd', die size, optional signed modifier
# Examples: 1d20, 2d6+3, d4, 4d6-2
DICE_PATTERN = re.compile(r"(\d+)?d(\d+)([+-]\d+)?", re.IGNORECASE)


def parse_dice(notation: str) -> DiceExpression:
    """Parse dice notation into a DiceExpression.

    Args:
        notation: Dice notation string (e.g., "2d6+3", "1d20", "d4").

    Returns:
        DiceExpression with parsed values.

    Raises:
        InvalidNotation: If the notation does not match or count/sides are not positive.

    Examples:
        >>> parse_dice("1d20")
        DiceExpression(num_dice=1, die_size=20, modifier=0)
        >>> parse_dice("2d6+3")
        DiceExpression(num_dice=2, die_size=6, modifier=3)
        >>> parse_dice("d4")
        DiceExpression(num_dice=1, die_size=4, modifier=0)
    """
    if not isinstance(notation, str) or not notation:
        raise InvalidNotation("Dice notation cannot be empty")

    match = DICE_PATTERN.fullmatch(notation)
    if not match:
        raise InvalidNotation(f"Invalid dice notation: '{notation}'")

    num_dice_str, die_size_str, modifier_str = match.groups()

    # "d20" means "1d20"
    num_dice = int(num_dice_str) if num_dice_str else 1
    die_size = int(die_size_str)
    modifier = int(modifier_str) if modifier_str else 0

    if num_dice < 1:
        raise InvalidNotation(f"Number of dice must be at least 1, got {num_dice}")
    if die_size < 1:
        raise InvalidNotation(f"Die size must be at least 1, got {die_size}")

    return DiceExpression(num_dice=num_dice, die_size=die_size, modifier=modifier)


def format_dice(num_dice: int, die_size: int, modifier: int = 0) -> str:
    """Build notation text for a dice expression."""
    return str(DiceExpression(num_dice=num_dice, die_size=die_size, modifier=modifier))
