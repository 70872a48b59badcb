"""Tests for EffectManager."""

import pytest

from arquest.managers.effect_manager import EffectManager, active_effects
from arquest.observability.events import EffectChangedEvent
from arquest.schemas.effects import ArmorClassBonus, StatusEffect


@pytest.fixture
def effects(context) -> EffectManager:
    return EffectManager(context)


def ward() -> StatusEffect:
    return StatusEffect(id="ward", name="Ward", payload=[ArmorClassBonus(amount=1)])


class TestApply:
    def test_default_duration_from_settings(self, effects, clock, warrior, settings):
        record = effects.apply(warrior, ward())
        assert record.expires_at == clock() + settings.default_effect_duration_ms

    def test_emits_applied_event(self, effects, hook, warrior):
        effects.apply(warrior, ward(), 1000)
        events = hook.of_type(EffectChangedEvent)
        assert [e.change for e in events] == ["applied"]
        assert events[0].effect_id == "ward"

    def test_campaign_buff_duration(self, effects, clock, warrior, settings):
        record = effects.apply_campaign_buff(warrior, "temple_blessing")
        assert record.expires_at == clock() + settings.campaign_buff_duration_ms

    def test_heroism_rederives_player_stats(self, effects, warrior):
        effects.apply_campaign_buff(warrior, "heroism")
        assert warrior.max_hp == 13

    def test_unknown_campaign_buff(self, effects, warrior):
        with pytest.raises(ValueError):
            effects.apply_campaign_buff(warrior, "nope")


class TestRemoveAndRefresh:
    def test_remove(self, effects, hook, warrior):
        effects.apply(warrior, ward(), 1000)
        assert effects.remove(warrior, "ward").id == "ward"
        assert effects.remove(warrior, "ward") is None
        assert [e.change for e in hook.of_type(EffectChangedEvent)] == ["applied", "removed"]

    def test_refresh_reports_expired(self, effects, hook, clock, warrior):
        effects.apply(warrior, ward(), 1000)
        clock.advance(1000)
        expired = effects.refresh(warrior)
        assert [e.id for e in expired] == ["ward"]
        assert hook.of_type(EffectChangedEvent)[-1].change == "expired"
        assert effects.active_effects(warrior) == []

    def test_module_query(self, effects, clock, warrior):
        effects.apply(warrior, ward(), 1000)
        assert [e.id for e in active_effects(warrior, clock())] == ["ward"]
        assert active_effects(warrior, clock() + 1000) == []
