"""Rest Manager for cooldown-gated recovery outside combat."""

import logging
import math

from arquest.dice.roller import roll_dice
from arquest.dice.types import DiceExpression
from arquest.managers.base import BaseManager
from arquest.models.combatant import PlayerCombatant
from arquest.models.enums import Ability, FailureReason, RestKind
from arquest.models.outcomes import Failure, RestOutcome
from arquest.observability.events import RestEvent
from arquest.schemas.classes import get_class_definition
from arquest.services.stat_deriver import ability_modifier

logger = logging.getLogger(__name__)


class RestManager(BaseManager):
    """Short and long rests.

    Preconditions are checked in order: not in combat, not already at full
    HP and mana, cooldown elapsed, and (short rests only) a hit die left.
    The cooldown timestamp is set only when the rest succeeds.
    """

    def short_rest(self, player: PlayerCombatant) -> RestOutcome | Failure:
        return self.rest(player, RestKind.SHORT)

    def long_rest(self, player: PlayerCombatant) -> RestOutcome | Failure:
        return self.rest(player, RestKind.LONG)

    def rest(self, player: PlayerCombatant, kind: RestKind | str) -> RestOutcome | Failure:
        """Take a rest of the given kind.

        Returns:
            RestOutcome, or a Failure with IN_COMBAT, ALREADY_RESTED,
            ON_COOLDOWN (with remaining_ms) or NO_HIT_DICE_LEFT.
        """
        kind = RestKind(kind)
        now = self.now

        failure = self._check_preconditions(player, kind, now)
        if failure:
            logger.debug(f"{player.name} cannot take a {kind.value} rest: {failure.reason.value}")
            return failure

        if kind is RestKind.SHORT:
            outcome = self._short_rest(player, now)
        else:
            outcome = self._long_rest(player)
        player.last_rest_at[kind] = now

        logger.info(
            f"{player.name} finished a {kind.value} rest: +{outcome.hp_recovered} HP, "
            f"+{outcome.mana_recovered} mana"
        )
        self.hook.on_rest(
            RestEvent(
                player=player.name,
                kind=kind.value,
                hp_recovered=outcome.hp_recovered,
                mana_recovered=outcome.mana_recovered,
                hit_dice_remaining=outcome.hit_dice_remaining,
                timestamp=now,
            )
        )
        return outcome

    def cooldown_remaining(self, player: PlayerCombatant, kind: RestKind | str) -> int:
        """Milliseconds until this rest kind is available again (0 if ready)."""
        kind = RestKind(kind)
        last = player.last_rest_at.get(kind)
        if last is None:
            return 0
        return max(0, last + self._cooldown_ms(kind) - self.now)

    def _check_preconditions(
        self, player: PlayerCombatant, kind: RestKind, now: int
    ) -> Failure | None:
        if self.context.in_combat:
            return Failure(FailureReason.IN_COMBAT, "You cannot rest during combat")

        if player.current_hp >= player.max_hp and player.current_mana >= player.max_mana:
            return Failure(FailureReason.ALREADY_RESTED, "You are already fully rested")

        remaining = self.cooldown_remaining(player, kind)
        if remaining > 0:
            return Failure(
                FailureReason.ON_COOLDOWN,
                f"{kind.value.capitalize()} rest available in {math.ceil(remaining / 1000)}s",
                remaining_ms=remaining,
            )

        if kind is RestKind.SHORT and player.hit_dice_current <= 0:
            return Failure(FailureReason.NO_HIT_DICE_LEFT, "No hit dice left")
        return None

    def _short_rest(self, player: PlayerCombatant, now: int) -> RestOutcome:
        hit_die = get_class_definition(player.character_class).hit_die
        die_roll = roll_dice(DiceExpression(num_dice=1, die_size=hit_die), self.rng).total
        hp_gain = max(1, die_roll + ability_modifier(player, Ability.CONSTITUTION, now))
        mana_gain = math.floor(player.max_mana * self.settings.short_rest_mana_fraction)

        old_hp, old_mana = player.current_hp, player.current_mana
        player.current_hp = min(player.max_hp, player.current_hp + hp_gain)
        player.current_mana = min(player.max_mana, player.current_mana + mana_gain)
        player.hit_dice_current -= 1

        return RestOutcome(
            kind=RestKind.SHORT,
            hp_recovered=player.current_hp - old_hp,
            mana_recovered=player.current_mana - old_mana,
            hit_dice_remaining=player.hit_dice_current,
            hit_die_roll=die_roll,
        )

    def _long_rest(self, player: PlayerCombatant) -> RestOutcome:
        old_hp, old_mana = player.current_hp, player.current_mana
        player.current_hp = player.max_hp
        player.current_mana = player.max_mana

        old_dice = player.hit_dice_current
        restore = max(1, player.hit_dice_max // 2)
        player.hit_dice_current = min(player.hit_dice_max, player.hit_dice_current + restore)

        return RestOutcome(
            kind=RestKind.LONG,
            hp_recovered=player.current_hp - old_hp,
            mana_recovered=player.current_mana - old_mana,
            hit_dice_remaining=player.hit_dice_current,
            hit_dice_restored=player.hit_dice_current - old_dice,
        )

    def _cooldown_ms(self, kind: RestKind) -> int:
        if kind is RestKind.SHORT:
            return self.settings.short_rest_cooldown_ms
        return self.settings.long_rest_cooldown_ms
