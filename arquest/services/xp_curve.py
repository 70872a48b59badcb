"""Experience curve.

- xp_for_level(L) = L * 150 for L > 1, 0 for level 1
- total_xp_for_level(L) = sum of xp_for_level(2..L)
- A player's level is the largest L whose cumulative total they have
  reached, capped at the maximum level (20 by default)
"""

XP_PER_LEVEL = 150
MAX_LEVEL = 20


def xp_for_level(level: int, xp_per_level: int = XP_PER_LEVEL) -> int:
    """XP needed to go from level - 1 to ``level``.

    Examples:
        >>> xp_for_level(1)
        0
        >>> xp_for_level(2)
        300
    """
    if level <= 1:
        return 0
    return level * xp_per_level


def total_xp_for_level(level: int, xp_per_level: int = XP_PER_LEVEL) -> int:
    """Cumulative XP needed to reach ``level``.

    Examples:
        >>> total_xp_for_level(3)
        750
    """
    return sum(xp_for_level(lvl, xp_per_level) for lvl in range(2, level + 1))


def level_for_xp(
    total_xp: int, max_level: int = MAX_LEVEL, xp_per_level: int = XP_PER_LEVEL
) -> int:
    """Largest level whose cumulative threshold ``total_xp`` has reached."""
    level = 1
    while level < max_level and total_xp_for_level(level + 1, xp_per_level) <= total_xp:
        level += 1
    return level


def xp_progress(
    current_xp: int,
    level: int,
    max_level: int = MAX_LEVEL,
    xp_per_level: int = XP_PER_LEVEL,
) -> float:
    """Percentage (0-100) of the way from ``level`` to the next level.

    Returns 100 at the level cap.
    """
    if level >= max_level:
        return 100.0
    floor_xp = total_xp_for_level(level, xp_per_level)
    needed = xp_for_level(level + 1, xp_per_level)
    progress = (current_xp - floor_xp) / needed * 100
    return round(max(0.0, min(100.0, progress)), 2)


def xp_table(max_level: int = MAX_LEVEL, xp_per_level: int = XP_PER_LEVEL) -> list[tuple[int, int, int]]:
    """Rows of (level, xp for that level, cumulative xp)."""
    return [
        (level, xp_for_level(level, xp_per_level), total_xp_for_level(level, xp_per_level))
        for level in range(1, max_level + 1)
    ]
