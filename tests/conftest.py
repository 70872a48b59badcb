"""Core test fixtures for rules engine tests."""

import pytest

from arquest.config import Settings
from arquest.models.combatant import AbilityScores, MonsterCombatant
from arquest.models.session import EngineContext
from arquest.schemas.monsters import spawn_monster
from arquest.services.stat_deriver import build_player
from doubles import FakeClock, RecordingHook, ScriptedRandom


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1_000_000)


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def context(clock, rng, hook, settings) -> EngineContext:
    return EngineContext(clock=clock, rng=rng, settings=settings, hook=hook)


@pytest.fixture
def make_player(clock):
    """Factory building a fully derived player at the fake clock's time."""

    def _make(character_class="warrior", level=1, name="Hero", **scores):
        return build_player(
            f"player_{character_class}",
            name,
            character_class,
            abilities=AbilityScores(**scores),
            level=level,
            now=clock(),
        )

    return _make


@pytest.fixture
def warrior(make_player):
    """Level 1 warrior with STR 16 (+3)."""
    return make_player("warrior", strength=16)


@pytest.fixture
def mage(make_player):
    """Level 1 mage with INT 16 (+3)."""
    return make_player("mage", intelligence=16)


@pytest.fixture
def archer(make_player):
    """Level 1 archer with DEX 16 (+3)."""
    return make_player("archer", dexterity=16)


@pytest.fixture
def cleric(make_player):
    """Level 1 cleric with WIS 16 (+3)."""
    return make_player("cleric", wisdom=16)


@pytest.fixture
def goblin() -> MonsterCombatant:
    """Goblin: AC 15, 7 HP, 1d6+2 slashing."""
    return spawn_monster("goblin")


@pytest.fixture
def ogre() -> MonsterCombatant:
    """Ogre: AC 11, 59 HP, 2d8+4 bludgeoning."""
    return spawn_monster("ogre")


@pytest.fixture
def make_monster():
    """Factory for a bare monster with explicit combat numbers."""

    def _make(**overrides):
        values = dict(
            id="brute_1",
            name="Brute",
            template_id="brute",
            challenge_rating=1,
            armor_class=12,
            max_hp=30,
            current_hp=30,
            attack_bonus=5,
            damage_dice="1d8+3",
            damage_type="slashing",
            save_bonus=2,
            xp_reward=100,
            creature_type="humanoid",
        )
        values.update(overrides)
        return MonsterCombatant(**values)

    return _make
