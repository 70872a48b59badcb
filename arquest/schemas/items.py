"""Item definitions: weapons, armor, shields, accessories and potions."""

from dataclasses import dataclass, field
from enum import Enum

from arquest.models.enums import Ability


class ItemKind(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"


class EquipmentSlot(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    OFFHAND = "offhand"
    ACCESSORY = "accessory"


@dataclass(frozen=True)
class ItemDefinition:
    """Static definition of an item.

    Weapons carry damage dice and an optional bonus roll (e.g. 2d6 fire on a
    flame tongue). Armor, shields and accessories contribute to the wearer's
    equipment bonus block. ``set_abilities`` raises a score to a fixed value
    while worn, never lowering it.
    """

    key: str
    display_name: str
    kind: ItemKind
    slot: EquipmentSlot | None = None
    rarity: str = "common"
    damage_dice: str | None = None
    damage_type: str | None = None
    attack_bonus: int = 0
    bonus_dice: str | None = None
    bonus_damage_type: str | None = None
    ac_bonus: int = 0
    stat_bonus: dict[Ability, int] = field(default_factory=dict)
    set_abilities: dict[Ability, int] = field(default_factory=dict)
    heal_dice: str | None = None
    value: int = 0

    @property
    def is_equippable(self) -> bool:
        return self.slot is not None


ITEMS: dict[str, ItemDefinition] = {
    i.key: i
    for i in [
        # Weapons
        ItemDefinition("shortsword", "Shortsword", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d6", damage_type="slashing", value=10),
        ItemDefinition("longsword", "Longsword", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d8", damage_type="slashing", value=15),
        ItemDefinition("dagger", "Dagger", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d4", damage_type="piercing", value=2),
        ItemDefinition("shortbow", "Shortbow", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d6", damage_type="piercing", value=25),
        ItemDefinition("staff", "Staff", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d6", damage_type="bludgeoning", value=5),
        ItemDefinition("mace", "Mace", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       damage_dice="1d6", damage_type="bludgeoning", value=5),
        ItemDefinition("longsword_plus1", "Longsword +1", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       rarity="uncommon", damage_dice="1d8+1", damage_type="slashing",
                       attack_bonus=1, value=500),
        ItemDefinition("flame_tongue", "Flame Tongue", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       rarity="rare", damage_dice="1d8", damage_type="slashing",
                       bonus_dice="2d6", bonus_damage_type="fire", value=5000),
        ItemDefinition("sunblade", "Sunblade", ItemKind.WEAPON, EquipmentSlot.WEAPON,
                       rarity="rare", damage_dice="1d8+2", damage_type="radiant",
                       attack_bonus=2, bonus_dice="2d6", bonus_damage_type="radiant",
                       value=8000),
        # Armor
        ItemDefinition("leather_armor", "Leather Armor", ItemKind.ARMOR, EquipmentSlot.ARMOR,
                       ac_bonus=1, value=10),
        ItemDefinition("chain_mail", "Chain Mail", ItemKind.ARMOR, EquipmentSlot.ARMOR,
                       ac_bonus=4, value=75),
        ItemDefinition("plate_armor", "Plate Armor", ItemKind.ARMOR, EquipmentSlot.ARMOR,
                       rarity="uncommon", ac_bonus=6, value=1500),
        ItemDefinition("armor_plus1", "Armor +1", ItemKind.ARMOR, EquipmentSlot.ARMOR,
                       rarity="rare", ac_bonus=5, value=4000),
        ItemDefinition("shield", "Shield", ItemKind.ARMOR, EquipmentSlot.OFFHAND,
                       ac_bonus=2, value=10),
        # Accessories
        ItemDefinition("ring_protection", "Ring of Protection", ItemKind.ACCESSORY,
                       EquipmentSlot.ACCESSORY, rarity="rare", ac_bonus=1, value=3500),
        ItemDefinition("cloak_protection", "Cloak of Protection", ItemKind.ACCESSORY,
                       EquipmentSlot.ACCESSORY, rarity="uncommon", ac_bonus=1, value=1500),
        ItemDefinition("gauntlets_ogre", "Gauntlets of Ogre Power", ItemKind.ACCESSORY,
                       EquipmentSlot.ACCESSORY, rarity="uncommon",
                       set_abilities={Ability.STRENGTH: 19}, value=2000),
        ItemDefinition("amulet_health", "Amulet of Health", ItemKind.ACCESSORY,
                       EquipmentSlot.ACCESSORY, rarity="rare",
                       stat_bonus={Ability.CONSTITUTION: 2}, value=4000),
        # Consumables
        ItemDefinition("potion_healing", "Potion of Healing", ItemKind.CONSUMABLE,
                       heal_dice="2d4+2", value=50),
        ItemDefinition("potion_healing_greater", "Potion of Greater Healing",
                       ItemKind.CONSUMABLE, rarity="uncommon", heal_dice="4d4+4", value=200),
        ItemDefinition("potion_healing_superior", "Potion of Superior Healing",
                       ItemKind.CONSUMABLE, rarity="rare", heal_dice="8d4+8", value=500),
    ]
}

def get_item(item_id: str) -> ItemDefinition:
    """Look up an item definition.

    Raises:
        ValueError: If the item id is unknown.
    """
    item = ITEMS.get(item_id)
    if item is None:
        raise ValueError(f"Unknown item: '{item_id}'")
    return item
