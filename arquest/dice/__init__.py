"""Dice system for the rules engine.

Provides dice rolling, attack rolls, saving throws and damage rolls.

Usage:
    >>> from arquest.dice import roll, roll_attack, roll_damage
    >>> result = roll("2d6+3")
    >>> attack = roll_attack(attack_bonus=5, target_ac=15)
    >>> damage = roll_damage("1d8+3", is_critical=attack.is_critical)
"""

# Types
from arquest.dice.types import (
    DiceExpression,
    RollResult,
    AdvantageType,
    AttackRollResult,
    SaveRollResult,
    DamageRollResult,
)

# Parser
from arquest.dice.parser import parse_dice, format_dice, InvalidNotation

# Roller
from arquest.dice.roller import RandomSource, roll_dice, roll, roll_with_advantage

# Checks
from arquest.dice.checks import (
    calculate_ability_modifier,
    calculate_hit_chance,
    flee_chance,
    proficiency_for_challenge_rating,
    spell_save_dc,
)

# Combat
from arquest.dice.combat import (
    roll_attack,
    roll_damage,
    roll_initiative,
    roll_save,
)

__all__ = [
    # Types
    "DiceExpression",
    "RollResult",
    "AdvantageType",
    "AttackRollResult",
    "SaveRollResult",
    "DamageRollResult",
    # Parser
    "parse_dice",
    "format_dice",
    "InvalidNotation",
    # Roller
    "RandomSource",
    "roll_dice",
    "roll",
    "roll_with_advantage",
    # Checks
    "calculate_ability_modifier",
    "calculate_hit_chance",
    "flee_chance",
    "proficiency_for_challenge_rating",
    "spell_save_dc",
    # Combat
    "roll_attack",
    "roll_damage",
    "roll_initiative",
    "roll_save",
]
