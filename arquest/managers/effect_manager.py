"""Effect Manager for applying and expiring status effects on combatants.

Wraps each combatant's StatusEffectLedger with the engine clock, default
durations from settings, campaign buff templates and observability events.
"""

import logging

from arquest.managers.base import BaseManager
from arquest.models.combatant import Combatant
from arquest.observability.events import EffectChangedEvent
from arquest.schemas.effects import StatusEffect, get_campaign_buff

logger = logging.getLogger(__name__)


class EffectManager(BaseManager):
    """Applies, removes and queries status effects."""

    def apply(
        self,
        combatant: Combatant,
        effect: StatusEffect,
        duration_ms: int | None = None,
    ) -> StatusEffect:
        """Add or refresh an effect on a combatant.

        Args:
            combatant: Bearer of the effect.
            effect: Effect template.
            duration_ms: Lifetime; defaults to the configured effect duration.

        Returns:
            The stored effect record.
        """
        now = self.now
        if duration_ms is None:
            duration_ms = self.settings.default_effect_duration_ms
        self._emit_expired(combatant, combatant.effects.prune(now), now)

        record = combatant.effects.add_effect(effect, duration_ms, now)
        self.hook.on_effect_changed(
            EffectChangedEvent(
                combatant=combatant.id,
                effect_id=record.id,
                change="applied",
                stacks=record.stacks,
                expires_at=record.expires_at,
                timestamp=now,
            )
        )
        return record

    def apply_campaign_buff(
        self,
        combatant: Combatant,
        buff_id: str,
        duration_ms: int | None = None,
    ) -> StatusEffect:
        """Apply a predefined campaign reward buff.

        Raises:
            ValueError: If the buff id is unknown.
        """
        if duration_ms is None:
            duration_ms = self.settings.campaign_buff_duration_ms
        logger.debug(f"Campaign buff '{buff_id}' granted to {combatant.name}")
        return self.apply(combatant, get_campaign_buff(buff_id), duration_ms)

    def remove(self, combatant: Combatant, effect_id: str) -> StatusEffect | None:
        now = self.now
        record = combatant.effects.remove_effect(effect_id, now)
        if record is not None:
            self.hook.on_effect_changed(
                EffectChangedEvent(
                    combatant=combatant.id,
                    effect_id=record.id,
                    change="removed",
                    stacks=record.stacks,
                    expires_at=record.expires_at,
                    timestamp=now,
                )
            )
        return record

    def refresh(self, combatant: Combatant) -> list[StatusEffect]:
        """Prune expired effects, reporting each one. Returns the expired records."""
        now = self.now
        expired = combatant.effects.prune(now)
        self._emit_expired(combatant, expired, now)
        return expired

    def active_effects(self, combatant: Combatant) -> list[StatusEffect]:
        self.refresh(combatant)
        return combatant.effects.query(self.now)

    def _emit_expired(self, combatant: Combatant, expired: list[StatusEffect], now: int) -> None:
        for record in expired:
            self.hook.on_effect_changed(
                EffectChangedEvent(
                    combatant=combatant.id,
                    effect_id=record.id,
                    change="expired",
                    stacks=record.stacks,
                    expires_at=record.expires_at,
                    timestamp=now,
                )
            )


def active_effects(combatant: Combatant, now: int) -> list[StatusEffect]:
    """Read-only query of a combatant's active effects at ``now``."""
    return combatant.effects.query(now)
