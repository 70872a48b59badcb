"""Derived stat computation for player combatants.

This module handles:
- Effective ability scores (base + equipment + active stat-bonus effects)
- Ability modifiers and level-based proficiency
- Max HP from the class hit die, max mana and armor class
- Skill modifiers with class proficiencies
- Writing derived values back onto the player (full or targeted recompute)

Recomputes are idempotent. Current HP and mana are filled to max only on the
first derivation; afterwards the change in max is added to current and the
result clamped, so a living player is never dropped below 1 HP by a
recompute.
"""

import math
from dataclasses import dataclass

from arquest.dice.checks import calculate_ability_modifier
from arquest.models.combatant import AbilityScores, PlayerCombatant
from arquest.models.enums import Ability, CharacterClass
from arquest.schemas.classes import get_class_definition
from arquest.services.xp_curve import MAX_LEVEL, XP_PER_LEVEL, level_for_xp, total_xp_for_level

# Standard skills and the ability each keys off
SKILL_ABILITIES: dict[str, Ability] = {
    "athletics": Ability.STRENGTH,
    "acrobatics": Ability.DEXTERITY,
    "sleight_of_hand": Ability.DEXTERITY,
    "stealth": Ability.DEXTERITY,
    "arcana": Ability.INTELLIGENCE,
    "history": Ability.INTELLIGENCE,
    "investigation": Ability.INTELLIGENCE,
    "nature": Ability.INTELLIGENCE,
    "religion": Ability.INTELLIGENCE,
    "animal_handling": Ability.WISDOM,
    "insight": Ability.WISDOM,
    "medicine": Ability.WISDOM,
    "perception": Ability.WISDOM,
    "survival": Ability.WISDOM,
    "deception": Ability.CHARISMA,
    "intimidation": Ability.CHARISMA,
    "performance": Ability.CHARISMA,
    "persuasion": Ability.CHARISMA,
}


@dataclass(frozen=True)
class StatDelta:
    """Change in max values caused by a recompute."""

    max_hp_delta: int = 0
    max_mana_delta: int = 0


# =============================================================================
# Pure formulas
# =============================================================================


def proficiency_for_level(level: int) -> int:
    """Proficiency bonus: ceil(level / 4) + 1.

    Examples:
        >>> proficiency_for_level(1)
        2
        >>> proficiency_for_level(5)
        3
    """
    return math.ceil(level / 4) + 1


def max_hp_for(hit_die: int, constitution_modifier: int, level: int) -> int:
    """Full hit die at level 1, then the fixed average per further level.

    Examples:
        >>> max_hp_for(hit_die=12, constitution_modifier=2, level=1)
        14
        >>> max_hp_for(hit_die=12, constitution_modifier=2, level=4)
        41
    """
    hp = hit_die + constitution_modifier * level + (hit_die // 2 + 1) * (level - 1)
    return max(1, hp)


def max_mana_for(intelligence_score: int, level: int) -> int:
    return max(0, intelligence_score * 2 + level * 3)


def armor_class_for(dexterity_modifier: int, equipment_ac: int) -> int:
    return 10 + dexterity_modifier + equipment_ac


def attack_ability(character_class: CharacterClass) -> Ability:
    """Ability used for weapon attacks: int for mages, dex for archers, else str."""
    return get_class_definition(character_class).attack_ability


def spellcasting_ability(character_class: CharacterClass) -> Ability:
    return get_class_definition(character_class).spellcasting_ability


# =============================================================================
# Player queries
# =============================================================================


def effective_score(player: PlayerCombatant, ability: Ability, now: int) -> int:
    """Base score plus equipment and active effect bonuses."""
    return (
        player.abilities.get(ability)
        + player.equipment_bonus.for_ability(ability)
        + player.effects.stat_bonus(ability, now)
    )


def ability_modifier(player: PlayerCombatant, ability: Ability, now: int) -> int:
    return calculate_ability_modifier(effective_score(player, ability, now))


def attack_bonus(
    player: PlayerCombatant,
    now: int,
    weapon_bonus: int = 0,
    ability: Ability | None = None,
) -> int:
    """Ability modifier + proficiency + weapon bonus."""
    ability = ability or attack_ability(player.character_class)
    return ability_modifier(player, ability, now) + player.proficiency_bonus + weapon_bonus


def saving_throw_bonus(player: PlayerCombatant, ability: Ability, now: int) -> int:
    """Ability modifier, plus proficiency if the class is proficient in the save."""
    bonus = ability_modifier(player, ability, now)
    if ability in get_class_definition(player.character_class).saving_throws:
        bonus += player.proficiency_bonus
    return bonus


def skill_modifier(player: PlayerCombatant, skill: str, now: int) -> int:
    ability = SKILL_ABILITIES[skill]
    modifier = ability_modifier(player, ability, now)
    if skill in get_class_definition(player.character_class).skill_proficiencies:
        modifier += player.proficiency_bonus
    return modifier


# =============================================================================
# Recompute
# =============================================================================


def recompute_player_stats(player: PlayerCombatant, now: int) -> StatDelta:
    """Derive every stat and write it back onto the player.

    Args:
        player: Player to update in place.
        now: Current timestamp, used to read active effects.

    Returns:
        StatDelta with the change in max HP and max mana.
    """
    definition = get_class_definition(player.character_class)
    player.proficiency_bonus = proficiency_for_level(player.level)

    hp_delta = _apply_max_hp(player, definition.hit_die, now)
    mana_delta = _apply_max_mana(player, now)
    player.armor_class = armor_class_for(
        ability_modifier(player, Ability.DEXTERITY, now), player.equipment_bonus.ac
    )
    player.skill_modifiers = {skill: skill_modifier(player, skill, now) for skill in SKILL_ABILITIES}

    if not player.stats_initialized:
        player.hit_dice_current = player.hit_dice_max
        player.stats_initialized = True

    return StatDelta(max_hp_delta=hp_delta, max_mana_delta=mana_delta)


def recompute_for_ability(player: PlayerCombatant, ability: Ability, now: int) -> StatDelta:
    """Rerun only the derivations fed by one ability.

    Constitution feeds HP, intelligence feeds mana, dexterity feeds AC, and
    every ability feeds its own skills.
    """
    if not player.stats_initialized:
        return recompute_player_stats(player, now)

    hp_delta = 0
    mana_delta = 0
    if ability is Ability.CONSTITUTION:
        hp_delta = _apply_max_hp(player, get_class_definition(player.character_class).hit_die, now)
    elif ability is Ability.INTELLIGENCE:
        mana_delta = _apply_max_mana(player, now)
    elif ability is Ability.DEXTERITY:
        player.armor_class = armor_class_for(
            ability_modifier(player, Ability.DEXTERITY, now), player.equipment_bonus.ac
        )

    for skill, skill_ability in SKILL_ABILITIES.items():
        if skill_ability is ability:
            player.skill_modifiers[skill] = skill_modifier(player, skill, now)

    return StatDelta(max_hp_delta=hp_delta, max_mana_delta=mana_delta)


def _apply_max_hp(player: PlayerCombatant, hit_die: int, now: int) -> int:
    con_mod = ability_modifier(player, Ability.CONSTITUTION, now)
    new_max = max_hp_for(hit_die, con_mod, player.level)
    old_max = player.max_hp
    if not player.stats_initialized:
        player.max_hp = new_max
        player.current_hp = new_max
        return 0

    delta = new_max - old_max
    current = max(0, min(new_max, player.current_hp + delta))
    if player.current_hp > 0 and current < 1:
        current = 1
    player.max_hp = new_max
    player.current_hp = current
    return delta


def _apply_max_mana(player: PlayerCombatant, now: int) -> int:
    new_max = max_mana_for(effective_score(player, Ability.INTELLIGENCE, now), player.level)
    old_max = player.max_mana
    if not player.stats_initialized:
        player.max_mana = new_max
        player.current_mana = new_max
        return 0

    delta = new_max - old_max
    player.max_mana = new_max
    player.current_mana = max(0, min(new_max, player.current_mana + delta))
    return delta


# =============================================================================
# Construction
# =============================================================================


def wire_effects(player: PlayerCombatant) -> None:
    """Recompute the player's stats whenever a stat-bonus effect changes."""
    player.effects.on_stat_change = lambda now: recompute_player_stats(player, now)


def build_player(
    player_id: str,
    name: str,
    character_class: CharacterClass | str,
    abilities: AbilityScores | None = None,
    level: int = 1,
    now: int = 0,
    xp: int | None = None,
    xp_per_level: int = XP_PER_LEVEL,
    max_level: int = MAX_LEVEL,
) -> PlayerCombatant:
    """Create a fully derived player at full HP and mana.

    Without ``xp`` the player starts at the cumulative threshold of their
    level. A stored total must fall inside that level's XP band.

    Raises:
        ValueError: If the class is unknown, the level is below 1 or the XP
            total does not match the level.
    """
    if level < 1:
        raise ValueError("level must be at least 1")
    if xp is None:
        xp = total_xp_for_level(level, xp_per_level)
    elif level_for_xp(xp, max(level, max_level), xp_per_level) != level:
        raise ValueError(f"{xp} XP does not match level {level}")
    definition = get_class_definition(character_class)
    player = PlayerCombatant(
        id=player_id,
        name=name,
        character_class=definition.character_class,
        level=level,
        xp=xp,
        abilities=abilities or AbilityScores(),
    )
    wire_effects(player)
    recompute_player_stats(player, now)
    return player
