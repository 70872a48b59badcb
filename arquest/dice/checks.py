"""Ability modifiers, difficulty classes and probability helpers."""

import math


def calculate_ability_modifier(ability_score: int) -> int:
    """Convert an ability score to its modifier.

    Uses the standard formula: floor((score - 10) / 2)

    Examples:
        >>> calculate_ability_modifier(10)
        0
        >>> calculate_ability_modifier(14)
        2
        >>> calculate_ability_modifier(9)
        -1
    """
    return (ability_score - 10) // 2


def spell_save_dc(proficiency_bonus: int, spellcasting_modifier: int) -> int:
    """Difficulty class a target must meet to resist a spell.

    Examples:
        >>> spell_save_dc(proficiency_bonus=2, spellcasting_modifier=3)
        13
    """
    return 8 + proficiency_bonus + spellcasting_modifier


def proficiency_for_challenge_rating(challenge_rating: float) -> int:
    """Proficiency bonus a monster of the given challenge rating carries.

    Matches the monster-manual progression: +2 up to CR 4, +3 for CR 5-8,
    +4 for CR 9-12 and so on.

    Examples:
        >>> proficiency_for_challenge_rating(0.25)
        2
        >>> proficiency_for_challenge_rating(5)
        3
        >>> proficiency_for_challenge_rating(13)
        5
    """
    return max(2, math.ceil(challenge_rating / 4) + 1)


def calculate_hit_chance(attack_bonus: int, target_ac: int) -> float:
    """Probability that a d20 attack roll hits.

    A natural 20 always hits and a natural 1 always misses, so the chance is
    clamped to [0.05, 0.95].

    Examples:
        >>> calculate_hit_chance(attack_bonus=5, target_ac=15)
        0.55
    """
    required_roll = target_ac - attack_bonus
    if required_roll <= 2:
        return 0.95
    if required_roll >= 20:
        return 0.05
    return (21 - required_roll) / 20


def flee_chance(dexterity_modifier: int, base_chance: float = 0.5) -> float:
    """Chance to escape an encounter: base plus 5% per point of DEX modifier.

    Examples:
        >>> flee_chance(2)
        0.6
    """
    chance = base_chance + dexterity_modifier * 0.05
    return round(max(0.05, min(0.95, chance)), 4)
