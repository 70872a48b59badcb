"""Combat dice mechanics.

Provides attack rolls, damage rolls, saving throws and initiative rolls for
combat resolution.
"""

from arquest.dice.types import (
    DiceExpression,
    AdvantageType,
    AttackRollResult,
    DamageRollResult,
    RollResult,
    SaveRollResult,
)
from arquest.dice.roller import RandomSource, roll_dice, roll_with_advantage
from arquest.dice.parser import parse_dice


def roll_attack(
    attack_bonus: int,
    target_ac: int,
    advantage_type: AdvantageType = AdvantageType.NORMAL,
    rng: RandomSource | None = None,
) -> AttackRollResult:
    """Make an attack roll against a target's Armor Class.

    Rolls exactly 1d20 + attack_bonus and compares to target AC.
    Natural 20 is always a hit, natural 1 is always a miss. With
    advantage/disadvantage the d20 is rolled twice and the override applies
    to the kept die.

    Args:
        attack_bonus: Total attack bonus (ability + proficiency + other).
        target_ac: Target's Armor Class.
        advantage_type: Whether to roll with advantage/disadvantage.
        rng: Optional randomness source.

    Returns:
        AttackRollResult with hit/miss and critical status.

    Examples:
        >>> result = roll_attack(attack_bonus=5, target_ac=15)
        >>> result.hit  # True if roll + 5 >= 15
    """
    expression = DiceExpression(num_dice=1, die_size=20, modifier=attack_bonus)
    roll_result = roll_with_advantage(expression, advantage_type, rng)

    is_critical = roll_result.is_critical
    is_fumble = roll_result.is_fumble

    if is_critical:
        hit = True
    elif is_fumble:
        hit = False
    else:
        hit = roll_result.total >= target_ac

    return AttackRollResult(
        roll_result=roll_result,
        target_ac=target_ac,
        hit=hit,
        is_critical=is_critical,
        is_fumble=is_fumble,
        advantage_type=advantage_type,
    )


def roll_damage(
    damage_dice: str,
    is_critical: bool = False,
    damage_type: str = "untyped",
    rng: RandomSource | None = None,
) -> DamageRollResult:
    """Roll damage for an attack.

    On critical hit, the dice count is doubled (not the modifier). The total
    is floored at 0.

    Args:
        damage_dice: Damage notation (e.g., "1d8+3", "2d6").
        is_critical: If True, doubles the dice.
        damage_type: Type of damage (slashing, fire, etc.).
        rng: Optional randomness source.

    Returns:
        DamageRollResult with total damage and breakdown.

    Examples:
        >>> result = roll_damage("2d6+3", is_critical=True)
        >>> # Rolls 4d6+3 (dice doubled, modifier unchanged)
    """
    base_expr = parse_dice(damage_dice)

    num_dice = base_expr.num_dice * 2 if is_critical else base_expr.num_dice
    expression = DiceExpression(
        num_dice=num_dice,
        die_size=base_expr.die_size,
        modifier=base_expr.modifier,
    )

    return DamageRollResult(
        roll_result=roll_dice(expression, rng),
        damage_type=damage_type,
        is_critical=is_critical,
    )


def roll_save(
    save_bonus: int,
    dc: int,
    rng: RandomSource | None = None,
) -> SaveRollResult:
    """Make a saving throw against a DC.

    Succeeds iff 1d20 + save_bonus >= dc. Natural 1 and 20 have no special
    meaning on a save.

    Examples:
        >>> result = roll_save(save_bonus=2, dc=13)
        >>> result.success  # True if roll + 2 >= 13
    """
    expression = DiceExpression(num_dice=1, die_size=20, modifier=save_bonus)
    roll_result = roll_dice(expression, rng)

    return SaveRollResult(
        roll_result=roll_result,
        dc=dc,
        success=roll_result.total >= dc,
    )


def roll_initiative(dexterity_modifier: int = 0, rng: RandomSource | None = None) -> RollResult:
    """Roll initiative for combat order.

    Rolls 1d20 + dexterity modifier. Higher results go first.
    """
    expression = DiceExpression(num_dice=1, die_size=20, modifier=dexterity_modifier)
    return roll_dice(expression, rng)
