"""Tests for the rich console observer."""

import io

import pytest
from rich.console import Console

from arquest.observability import (
    AttackResolvedEvent,
    EffectChangedEvent,
    LevelUpEvent,
    PhaseChangeEvent,
    RestEvent,
    RichConsoleObserver,
    SpellCastEvent,
)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def observer(output) -> RichConsoleObserver:
    return RichConsoleObserver(console=Console(file=output, width=200))


def test_attack_hit_with_interaction(observer, output):
    observer.on_attack_resolved(
        AttackResolvedEvent(
            attacker="Hero", defender="Skeleton", profile="Mace", hit=True,
            natural=12, total=17, target_ac=13, damage=8,
            damage_type="bludgeoning", interaction="vulnerable", defender_hp=5,
        )
    )
    text = output.getvalue()
    assert "Hero -> Skeleton (Mace): d20=12 total=17 vs AC 13 hit" in text
    assert "8 bludgeoning (vulnerable)" in text
    assert "hp 5" in text


def test_fumble_omits_damage(observer, output):
    observer.on_attack_resolved(
        AttackResolvedEvent(
            attacker="Ogre", defender="Hero", profile="Ogre", hit=False,
            natural=1, total=4, target_ac=10, damage=0,
            damage_type="bludgeoning", is_fumble=True,
        )
    )
    text = output.getvalue()
    assert "FUMBLE" in text
    assert "bludgeoning" not in text


def test_spell_cast(observer, output):
    observer.on_spell_cast(
        SpellCastEvent(
            caster="Mage", target="Ogre", spell_id="fireball",
            resolution="saving_throw", mana_spent=15, damage=14, save_succeeded=False,
        )
    )
    assert "Mage casts fireball (-15 mana) failed save 14 damage" in output.getvalue()


def test_effect_stacks(observer, output):
    observer.on_effect_changed(
        EffectChangedEvent(combatant="Hero", effect_id="poisoned", change="applied", stacks=2)
    )
    assert "Hero: poisoned x2 applied" in output.getvalue()


def test_level_up_and_rest(observer, output):
    observer.on_level_up(
        LevelUpEvent(player="Hero", old_level=1, new_level=2,
                     attribute_points_awarded=1, total_xp=300)
    )
    observer.on_rest(
        RestEvent(player="Hero", kind="short", hp_recovered=6,
                  mana_recovered=2, hit_dice_remaining=0)
    )
    text = output.getvalue()
    assert "Hero reached level 2!" in text
    assert "Hero takes a short rest: +6 HP, +2 mana, 0 hit dice left" in text


class TestPhaseChanges:
    def test_terminal_phase_always_shown(self, observer, output):
        observer.on_phase_change(PhaseChangeEvent("enc1", "player_action_resolved", "victory"))
        assert "Encounter ended: VICTORY" in output.getvalue()

    def test_intermediate_phases_hidden_by_default(self, observer, output):
        observer.on_phase_change(
            PhaseChangeEvent("enc1", "player_action_resolved", "awaiting_monster_turn")
        )
        assert output.getvalue() == ""

    def test_intermediate_phases_shown_when_enabled(self, output):
        observer = RichConsoleObserver(console=Console(file=output, width=200), show_phases=True)
        observer.on_phase_change(
            PhaseChangeEvent("enc1", "player_action_resolved", "awaiting_monster_turn")
        )
        assert "phase -> awaiting_monster_turn" in output.getvalue()
