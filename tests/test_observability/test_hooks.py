"""Tests for engine hook implementations."""

from arquest.managers.combat_manager import CombatManager
from arquest.observability import (
    AttackResolvedEvent,
    CompositeHook,
    EngineHook,
    LevelUpEvent,
    NullHook,
    PhaseChangeEvent,
)
from arquest.services.equipment import weapon_profile
from doubles import RecordingHook


def make_attack_event(**overrides) -> AttackResolvedEvent:
    values = dict(
        attacker="Hero",
        defender="Goblin",
        profile="Longsword",
        hit=True,
        natural=14,
        total=19,
        target_ac=15,
        damage=8,
        damage_type="slashing",
        defender_hp=0,
    )
    values.update(overrides)
    return AttackResolvedEvent(**values)


class TestNullHook:
    def test_satisfies_protocol(self):
        assert isinstance(NullHook(), EngineHook)

    def test_ignores_events(self):
        hook = NullHook()
        hook.on_attack_resolved(make_attack_event())
        hook.on_phase_change(PhaseChangeEvent("enc1", None, "awaiting_player_action"))


class TestCompositeHook:
    def test_satisfies_protocol(self):
        assert isinstance(CompositeHook([]), EngineHook)

    def test_dispatches_to_all_hooks_in_order(self):
        first, second = RecordingHook(), RecordingHook()
        composite = CompositeHook([first, second])
        event = make_attack_event()

        composite.on_attack_resolved(event)
        composite.on_level_up(
            LevelUpEvent(player="Hero", old_level=1, new_level=2,
                         attribute_points_awarded=1, total_xp=300)
        )

        assert first.events == second.events
        assert first.events[0] is event
        assert len(first.of_type(LevelUpEvent)) == 1

    def test_engine_events_reach_every_hook(self, context, rng, warrior, goblin):
        extra = RecordingHook()
        context.hook = CompositeHook([context.hook, extra])
        rng.queue(14, 5)

        CombatManager(context).resolve_attack(warrior, goblin, weapon_profile(warrior))

        event = extra.of_type(AttackResolvedEvent)[0]
        assert event.hit is True
        assert event.defender_hp == 0
