"""Per-combatant ledger of time-bounded status effects.

Expiry is evaluated lazily: every query first prunes effects whose
``expires_at`` is at or before ``now``, so an expired effect never
contributes to an aggregate. There is no background timer.
"""

import logging
from collections.abc import Callable

from arquest.models.enums import Ability, EffectKind
from arquest.schemas.effects import StatusEffect

logger = logging.getLogger(__name__)

StatChangeCallback = Callable[[int], None]


class StatusEffectLedger:
    """Active buffs and debuffs on one combatant, keyed by effect id.

    ``on_stat_change`` is invoked with the current timestamp whenever an
    effect carrying a stat bonus is added, removed or pruned. Players wire
    it to the stat deriver so derived stats follow their effective scores.
    """

    def __init__(self, on_stat_change: StatChangeCallback | None = None) -> None:
        self._effects: dict[str, StatusEffect] = {}
        self.on_stat_change = on_stat_change

    def __len__(self) -> int:
        return len(self._effects)

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_effect(self, effect: StatusEffect, duration_ms: int, now: int) -> StatusEffect:
        """Insert an effect or refresh the active one with the same id.

        Refreshing resets the expiry to ``now + duration_ms``; a stackable
        effect also gains one stack.

        Args:
            effect: Effect template. It is copied, never stored directly.
            duration_ms: Lifetime from ``now``.
            now: Current timestamp in milliseconds.

        Returns:
            The stored record.
        """
        if duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")

        self.prune(now)
        record = self._effects.get(effect.id)
        if record is not None:
            if record.stackable:
                record.stacks += 1
            record.expires_at = now + duration_ms
            logger.info(
                f"Effect refreshed: {record.name} (stacks={record.stacks}, "
                f"expires_at={record.expires_at})"
            )
        else:
            record = effect.model_copy(deep=True)
            record.stacks = 1
            record.expires_at = now + duration_ms
            self._effects[record.id] = record
            logger.info(f"Effect applied: {record.name} (expires_at={record.expires_at})")

        if record.has_stat_bonus:
            self._notify(now)
        return record

    def remove_effect(self, effect_id: str, now: int) -> StatusEffect | None:
        """Remove an effect by id. Returns the removed record, if any."""
        record = self._effects.pop(effect_id, None)
        if record is None:
            return None
        logger.info(f"Effect removed: {record.name}")
        if record.has_stat_bonus:
            self._notify(now)
        return record

    def prune(self, now: int) -> list[StatusEffect]:
        """Drop expired effects and return them."""
        expired = [e for e in self._effects.values() if e.is_expired(now)]
        if not expired:
            return []
        for record in expired:
            del self._effects[record.id]
            logger.info(f"Effect expired: {record.name}")
        if any(e.has_stat_bonus for e in expired):
            self._notify(now)
        return expired

    def clear(self, now: int) -> None:
        had_stat_bonus = any(e.has_stat_bonus for e in self._effects.values())
        self._effects.clear()
        if had_stat_bonus:
            self._notify(now)

    # =========================================================================
    # Queries
    # =========================================================================

    def query(self, now: int) -> list[StatusEffect]:
        """Active effects at ``now``."""
        self.prune(now)
        return list(self._effects.values())

    def get(self, effect_id: str, now: int) -> StatusEffect | None:
        self.prune(now)
        return self._effects.get(effect_id)

    def has_effect(self, effect_id: str, now: int) -> bool:
        return self.get(effect_id, now) is not None

    def has_debuff(self, now: int) -> bool:
        return any(e.kind is EffectKind.DEBUFF for e in self.query(now))

    def stat_bonus(self, ability: Ability, now: int) -> int:
        return sum(e.stat_bonus(ability) for e in self.query(now))

    def ac_bonus(self, now: int) -> int:
        return sum(e.ac_bonus() for e in self.query(now))

    def damage_multiplier(
        self,
        now: int,
        damage_type: str | None = None,
        incoming: bool = False,
        creature_type: str | None = None,
    ) -> float:
        """Product of every active multiplier that applies.

        A multiplier applies when it is general or restricted to
        ``damage_type``, and when its direction matches ``incoming``.
        """
        factor = 1.0
        for effect in self.query(now):
            factor *= effect.damage_multiplier(damage_type, incoming, creature_type)
        return factor

    def _notify(self, now: int) -> None:
        if self.on_stat_change is not None:
            self.on_stat_change(now)
