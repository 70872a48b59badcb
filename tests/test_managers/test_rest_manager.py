"""Tests for RestManager - short and long rests."""

import pytest

from arquest.managers.rest_manager import RestManager
from arquest.models.enums import CombatPhase, FailureReason, RestKind
from arquest.models.outcomes import Failure, RestOutcome
from arquest.models.session import Encounter
from arquest.observability.events import RestEvent


@pytest.fixture
def rests(context) -> RestManager:
    return RestManager(context)


class TestShortRest:
    def test_recovers_hit_die_plus_con(self, rests, rng, make_player):
        player = make_player("warrior", constitution=14)
        player.current_hp = 5
        player.current_mana = 0
        rng.queue(7)

        outcome = rests.short_rest(player)

        assert isinstance(outcome, RestOutcome)
        assert outcome.hit_die_roll == 7
        assert outcome.hp_recovered == 9
        assert player.current_hp == 14
        assert outcome.mana_recovered == 2
        assert player.hit_dice_current == 0
        assert rng.calls == [(1, 12)]

    def test_minimum_one_hp(self, rests, rng, make_player):
        player = make_player("mage", constitution=6)
        player.current_hp = 1
        rng.queue(1)
        outcome = rests.short_rest(player)
        assert outcome.hp_recovered == 1

    def test_cooldown_then_no_dice(self, rests, rng, clock, warrior, settings):
        warrior.current_hp = 3
        rng.queue(2)
        rests.short_rest(warrior)

        clock.advance(1000)
        result = rests.short_rest(warrior)
        assert isinstance(result, Failure)
        assert result.reason is FailureReason.ON_COOLDOWN
        assert result.remaining_ms == settings.short_rest_cooldown_ms - 1000

        clock.advance(settings.short_rest_cooldown_ms)
        assert rests.short_rest(warrior).reason is FailureReason.NO_HIT_DICE_LEFT


class TestLongRest:
    def test_restores_everything(self, rests, make_player):
        player = make_player("mage", level=4, intelligence=14)
        player.current_hp = 1
        player.current_mana = 0
        player.hit_dice_current = 0

        outcome = rests.long_rest(player)

        assert player.current_hp == player.max_hp
        assert player.current_mana == player.max_mana
        assert outcome.hit_dice_restored == 2
        assert player.hit_dice_current == 2

    def test_restores_at_least_one_die(self, rests, warrior):
        warrior.current_hp = 1
        warrior.hit_dice_current = 0
        assert rests.long_rest(warrior).hit_dice_restored == 1

    def test_independent_cooldowns(self, rests, rng, warrior):
        warrior.current_hp = 1
        rng.queue(1)
        rests.short_rest(warrior)
        warrior.current_hp = 1
        assert isinstance(rests.long_rest(warrior), RestOutcome)
        assert rests.cooldown_remaining(warrior, RestKind.LONG) > 0


class TestPreconditions:
    def test_already_rested(self, rests, warrior):
        result = rests.rest(warrior, "short")
        assert result.reason is FailureReason.ALREADY_RESTED

    def test_in_combat_checked_first(self, context, rests, warrior, goblin):
        context.encounter = Encounter(id="e", player=warrior, monster=goblin, started_at=0)
        assert rests.long_rest(warrior).reason is FailureReason.IN_COMBAT

    def test_finished_encounter_allows_rest(self, context, rests, warrior, goblin):
        context.encounter = Encounter(
            id="e", player=warrior, monster=goblin, started_at=0, phase=CombatPhase.VICTORY
        )
        warrior.current_hp = 1
        assert isinstance(rests.long_rest(warrior), RestOutcome)

    def test_failure_does_not_start_cooldown(self, rests, warrior):
        rests.short_rest(warrior)
        assert rests.cooldown_remaining(warrior, "short") == 0


def test_rest_emits_event(rests, hook, warrior):
    warrior.current_hp = 1
    rests.long_rest(warrior)
    events = hook.of_type(RestEvent)
    assert len(events) == 1
    assert events[0].kind == "long"
    assert events[0].hp_recovered == 11
