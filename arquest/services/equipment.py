"""Equipment bonus block and weapon attack profiles.

The equipment bonus block is rebuilt from the player's equipped items on
every equip or unequip, then the stat deriver rederives AC, HP, mana and
skills from it.
"""

import logging

from arquest.models.combatant import EquipmentBonus, PlayerCombatant
from arquest.models.outcomes import AttackProfile
from arquest.schemas.classes import get_class_definition
from arquest.schemas.items import EquipmentSlot, ItemDefinition, get_item
from arquest.services.stat_deriver import attack_ability, recompute_player_stats

logger = logging.getLogger(__name__)


def compute_equipment_bonus(player: PlayerCombatant) -> EquipmentBonus:
    """Sum AC and ability bonuses from every equipped item.

    Items that set an ability to a fixed value (gauntlets of ogre power)
    contribute only the amount needed to lift the base score to that value.
    """
    bonus = EquipmentBonus()
    for item_id in player.equipment.values():
        item = get_item(item_id)
        bonus.ac += item.ac_bonus
        for ability, value in item.stat_bonus.items():
            bonus.abilities[ability] = bonus.abilities.get(ability, 0) + value
        for ability, target in item.set_abilities.items():
            lift = max(0, target - player.abilities.get(ability))
            bonus.abilities[ability] = max(bonus.abilities.get(ability, 0), lift)
    return bonus


def refresh_equipment(player: PlayerCombatant, now: int) -> None:
    """Rebuild the bonus block and rederive stats."""
    player.equipment_bonus = compute_equipment_bonus(player)
    recompute_player_stats(player, now)


def equip(player: PlayerCombatant, item_id: str, now: int) -> ItemDefinition | None:
    """Equip an item into its slot.

    Args:
        player: Player to equip.
        item_id: Key of the item to equip.
        now: Current timestamp.

    Returns:
        The item previously in that slot, if any.

    Raises:
        ValueError: If the item is unknown or cannot be equipped.
    """
    item = get_item(item_id)
    if item.slot is None:
        raise ValueError(f"Item '{item_id}' cannot be equipped")

    previous_id = player.equipment.get(item.slot.value)
    player.equipment[item.slot.value] = item.key
    refresh_equipment(player, now)
    logger.debug(f"{player.name} equipped {item.display_name} ({item.slot.value})")
    return get_item(previous_id) if previous_id else None


def unequip(player: PlayerCombatant, slot: EquipmentSlot | str, now: int) -> ItemDefinition | None:
    """Empty an equipment slot. Returns the removed item, if any."""
    item_id = player.equipment.pop(EquipmentSlot(slot).value, None)
    if item_id is None:
        return None
    refresh_equipment(player, now)
    return get_item(item_id)


def equipped_weapon(player: PlayerCombatant) -> ItemDefinition | None:
    item_id = player.equipment.get(EquipmentSlot.WEAPON.value)
    return get_item(item_id) if item_id else None


def weapon_profile(player: PlayerCombatant) -> AttackProfile:
    """Attack profile for the player's weapon.

    Falls back to the class's base weapon when nothing is equipped.
    """
    ability = attack_ability(player.character_class)
    weapon = equipped_weapon(player)
    if weapon is None:
        definition = get_class_definition(player.character_class)
        return AttackProfile(
            name=f"{definition.display_name} weapon",
            damage_dice=definition.base_weapon_dice,
            damage_type=definition.base_weapon_damage_type,
            damage_modifier_ability=ability,
        )

    return AttackProfile(
        name=weapon.display_name,
        damage_dice=weapon.damage_dice or "1d4",
        damage_type=weapon.damage_type or "bludgeoning",
        weapon_bonus=weapon.attack_bonus,
        bonus_dice=weapon.bonus_dice,
        bonus_damage_type=weapon.bonus_damage_type,
        damage_modifier_ability=ability,
    )
