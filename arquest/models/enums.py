"""Rules engine enumerations."""

from enum import Enum


class Ability(str, Enum):
    """The six ability scores."""

    STRENGTH = "str"
    DEXTERITY = "dex"
    CONSTITUTION = "con"
    INTELLIGENCE = "int"
    WISDOM = "wis"
    CHARISMA = "cha"


class CharacterClass(str, Enum):
    """Playable classes."""

    WARRIOR = "warrior"
    MAGE = "mage"
    ARCHER = "archer"
    CLERIC = "cleric"


class DamageAffinity(str, Enum):
    """How a combatant reacts to a damage type. Exactly one applies per type."""

    NORMAL = "normal"
    RESISTANT = "resistant"
    VULNERABLE = "vulnerable"
    IMMUNE = "immune"

    @property
    def factor(self) -> float:
        return _AFFINITY_FACTORS[self]

    @property
    def label(self) -> str:
        """UI label for the interaction ('none' for normal damage)."""
        return "none" if self is DamageAffinity.NORMAL else self.value


_AFFINITY_FACTORS = {
    DamageAffinity.NORMAL: 1.0,
    DamageAffinity.RESISTANT: 0.5,
    DamageAffinity.VULNERABLE: 2.0,
    DamageAffinity.IMMUNE: 0.0,
}


class EffectKind(str, Enum):
    """Whether a status effect helps or hinders its bearer."""

    BUFF = "buff"
    DEBUFF = "debuff"


class SpellResolution(str, Enum):
    """How a spell is resolved against its target."""

    ATTACK_ROLL = "attack_roll"
    AUTO_HIT_DAMAGE = "auto_hit_damage"
    SAVING_THROW = "saving_throw"
    HEAL = "heal"
    BUFF = "buff"


class RestKind(str, Enum):
    """Rest types, each with its own cooldown."""

    SHORT = "short"
    LONG = "long"


class CombatPhase(str, Enum):
    """Where an encounter is in its player/monster turn cycle."""

    AWAITING_PLAYER_ACTION = "awaiting_player_action"
    PLAYER_ACTION_RESOLVED = "player_action_resolved"
    AWAITING_MONSTER_TURN = "awaiting_monster_turn"
    MONSTER_ACTION_RESOLVED = "monster_action_resolved"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def is_terminal(self) -> bool:
        return self in (CombatPhase.VICTORY, CombatPhase.DEFEAT, CombatPhase.FLED)


class FailureReason(str, Enum):
    """Why an engine call was refused. All are recoverable."""

    INVALID_TARGET = "invalid_target"
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    ON_COOLDOWN = "on_cooldown"
    ALREADY_RESTED = "already_rested"
    NO_HIT_DICE_LEFT = "no_hit_dice_left"
    NO_POINTS_AVAILABLE = "no_points_available"
    ABILITY_CAPPED = "ability_capped"
    IN_COMBAT = "in_combat"
    INVALID_PHASE = "invalid_phase"
