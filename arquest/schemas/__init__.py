"""Rule data schemas: status effects, spells, classes, items and monsters."""

from arquest.schemas.effects import (
    StatBonus,
    ArmorClassBonus,
    DamageMultiplier,
    EffectPayload,
    StatusEffect,
    CAMPAIGN_BUFFS,
    get_campaign_buff,
)
from arquest.schemas.spells import Spell, SPELLS, get_spell, get_spells_by_class
from arquest.schemas.classes import (
    ClassDefinition,
    CLASS_DEFINITIONS,
    get_class_definition,
)
from arquest.schemas.items import ItemDefinition, ITEMS, get_item

__all__ = [
    # Effects
    "StatBonus",
    "ArmorClassBonus",
    "DamageMultiplier",
    "EffectPayload",
    "StatusEffect",
    "CAMPAIGN_BUFFS",
    "get_campaign_buff",
    # Spells
    "Spell",
    "SPELLS",
    "get_spell",
    "get_spells_by_class",
    # Classes
    "ClassDefinition",
    "CLASS_DEFINITIONS",
    "get_class_definition",
    # Items
    "ItemDefinition",
    "ITEMS",
    "get_item",
]
