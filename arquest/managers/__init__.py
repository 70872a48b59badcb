"""Manager classes for rules resolution and encounter state."""

from arquest.managers.base import BaseManager
from arquest.managers.combat_manager import CombatManager, monster_profile
from arquest.managers.effect_manager import EffectManager, active_effects
from arquest.managers.encounter_manager import EncounterManager
from arquest.managers.progression_manager import (
    ProgressionManager,
    level_for_xp,
    total_xp_for_level,
    xp_for_level,
    xp_progress,
    xp_table,
)
from arquest.managers.rest_manager import RestManager
from arquest.managers.spell_manager import SpellManager, heal

__all__ = [
    "BaseManager",
    "CombatManager",
    "EffectManager",
    "EncounterManager",
    "ProgressionManager",
    "RestManager",
    "SpellManager",
    "active_effects",
    "heal",
    "level_for_xp",
    "monster_profile",
    "total_xp_for_level",
    "xp_for_level",
    "xp_progress",
    "xp_table",
]
