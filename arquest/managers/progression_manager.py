"""Progression Manager for experience, levels and attribute points.

The XP curve lives in arquest.services.xp_curve and is re-exported here.

Leveling from old to new awards floor(new/2) - floor(old/2) attribute
points, grows the hit dice pool (new dice arrive filled) and rederives
stats.
"""

import logging

from arquest.managers.base import BaseManager
from arquest.models.combatant import PlayerCombatant
from arquest.models.enums import Ability, FailureReason
from arquest.models.outcomes import AttributeSpend, Failure, XpGrant
from arquest.observability.events import LevelUpEvent
from arquest.services.stat_deriver import recompute_for_ability, recompute_player_stats
from arquest.services.xp_curve import (
    MAX_LEVEL,
    XP_PER_LEVEL,
    level_for_xp,
    total_xp_for_level,
    xp_for_level,
    xp_progress,
    xp_table,
)

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_LEVEL",
    "XP_PER_LEVEL",
    "ProgressionManager",
    "level_for_xp",
    "total_xp_for_level",
    "xp_for_level",
    "xp_progress",
    "xp_table",
]


class ProgressionManager(BaseManager):
    """Manages XP grants, level-ups and attribute point spending."""

    def grant_xp(self, player: PlayerCombatant, amount: int) -> XpGrant:
        """Add experience and apply any resulting level-ups.

        Args:
            player: Player receiving XP.
            amount: Non-negative XP amount.

        Returns:
            XpGrant describing the new total and any level change.

        Raises:
            ValueError: If amount is negative.
        """
        if amount < 0:
            raise ValueError(f"XP amount must be non-negative, got {amount}")

        settings = self.settings
        old_level = player.level
        player.xp += amount
        new_level = max(
            old_level,
            level_for_xp(player.xp, settings.max_level, settings.xp_per_level),
        )

        if new_level == old_level:
            return XpGrant(amount=amount, total_xp=player.xp, old_level=old_level, new_level=old_level)

        points = new_level // 2 - old_level // 2
        dice_gained = new_level - old_level
        player.level = new_level
        player.attribute_points += points
        player.hit_dice_current = min(player.hit_dice_max, player.hit_dice_current + dice_gained)
        recompute_player_stats(player, self.now)

        logger.info(
            f"{player.name} leveled up {old_level} -> {new_level} "
            f"(+{points} attribute points, {player.xp} XP)"
        )
        self.hook.on_level_up(
            LevelUpEvent(
                player=player.name,
                old_level=old_level,
                new_level=new_level,
                attribute_points_awarded=points,
                total_xp=player.xp,
                timestamp=self.now,
            )
        )
        return XpGrant(
            amount=amount,
            total_xp=player.xp,
            old_level=old_level,
            new_level=new_level,
            attribute_points_awarded=points,
            hit_dice_gained=dice_gained,
        )

    def spend_attribute_point(
        self, player: PlayerCombatant, ability: Ability | str
    ) -> AttributeSpend | Failure:
        """Raise one ability score by 1 using an unspent attribute point.

        Returns:
            AttributeSpend, or Failure(NO_POINTS_AVAILABLE) /
            Failure(ABILITY_CAPPED).
        """
        ability = Ability(ability)
        if player.attribute_points <= 0:
            logger.debug(f"{player.name} has no attribute points to spend")
            return Failure(FailureReason.NO_POINTS_AVAILABLE, "No attribute points available")

        old_score = player.abilities.get(ability)
        if old_score >= self.settings.ability_cap:
            return Failure(
                FailureReason.ABILITY_CAPPED,
                f"{ability.value.upper()} is already at {self.settings.ability_cap}",
            )

        player.abilities.set(ability, old_score + 1)
        player.attribute_points -= 1
        delta = recompute_for_ability(player, ability, self.now)

        logger.info(f"{player.name} raised {ability.value.upper()} to {old_score + 1}")
        return AttributeSpend(
            ability=ability,
            old_score=old_score,
            new_score=old_score + 1,
            points_remaining=player.attribute_points,
            max_hp_delta=delta.max_hp_delta,
            max_mana_delta=delta.max_mana_delta,
        )

    def progress(self, player: PlayerCombatant) -> float:
        return xp_progress(
            player.xp, player.level, self.settings.max_level, self.settings.xp_per_level
        )
