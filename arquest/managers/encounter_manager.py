"""Encounter Manager for sequencing a player-versus-monster fight.

Turn order is an explicit phase machine instead of chained timers:

    AWAITING_PLAYER_ACTION -> PLAYER_ACTION_RESOLVED -> AWAITING_MONSTER_TURN
        -> MONSTER_ACTION_RESOLVED -> AWAITING_PLAYER_ACTION ...

with terminal phases VICTORY, DEFEAT and FLED. The host performs one call
per step and uses ``advance`` to leave a *_RESOLVED phase once it has
finished presenting the result. Every call runs synchronously to completion.
"""

import logging
import uuid

from arquest.dice.checks import flee_chance
from arquest.dice.roller import resolve_rng, roll
from arquest.managers.base import BaseManager
from arquest.managers.combat_manager import CombatManager
from arquest.managers.effect_manager import EffectManager
from arquest.managers.progression_manager import ProgressionManager
from arquest.managers.spell_manager import SpellManager, check_spell_class, heal
from arquest.models.combatant import MonsterCombatant, PlayerCombatant
from arquest.models.enums import Ability, CombatPhase, EffectKind, FailureReason
from arquest.models.outcomes import ActionOutcome, Failure
from arquest.models.session import Encounter
from arquest.observability.events import PhaseChangeEvent
from arquest.schemas.classes import ClassAbilityDefinition, get_class_definition, has_passive
from arquest.schemas.effects import StatusEffect
from arquest.schemas.spells import get_spell
from arquest.services.equipment import weapon_profile
from arquest.services.stat_deriver import ability_modifier

logger = logging.getLogger(__name__)

TAUNTED = StatusEffect(id="taunted", name="Taunted", kind=EffectKind.DEBUFF)


class EncounterManager(BaseManager):
    """Runs encounters on top of the combat, spell and progression managers."""

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, player: PlayerCombatant, monster: MonsterCombatant) -> Encounter:
        """Begin an encounter and make it the context's active encounter."""
        now = self.now
        player.clear_action_flags()
        player.marked_for_advantage = False
        encounter = Encounter(
            id=uuid.uuid4().hex[:12],
            player=player,
            monster=monster,
            started_at=now,
            last_regen_at=now,
        )
        self.context.encounter = encounter
        logger.info(f"Encounter {encounter.id}: {player.name} vs {monster.name}")
        self.hook.on_phase_change(
            PhaseChangeEvent(
                encounter_id=encounter.id,
                old_phase=None,
                new_phase=encounter.phase.value,
                timestamp=now,
            )
        )
        return encounter

    def advance(self, encounter: Encounter) -> CombatPhase | Failure:
        """Move out of a resolved phase into the next awaiting phase."""
        if encounter.phase is CombatPhase.PLAYER_ACTION_RESOLVED:
            self._set_phase(encounter, CombatPhase.AWAITING_MONSTER_TURN)
        elif encounter.phase is CombatPhase.MONSTER_ACTION_RESOLVED:
            encounter.round += 1
            self._set_phase(encounter, CombatPhase.AWAITING_PLAYER_ACTION)
        else:
            return self._invalid_phase(encounter, "advance")
        return encounter.phase

    # =========================================================================
    # Player actions
    # =========================================================================

    def player_attack(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Attack the monster with the player's weapon."""
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "attack")
        regenerated = self._begin_player_action(encounter)

        attack = CombatManager(self.context).resolve_attack(
            encounter.player, encounter.monster, weapon_profile(encounter.player)
        )
        if isinstance(attack, Failure):
            return attack

        outcome = ActionOutcome(
            action="attack",
            phase=encounter.phase,
            message=_describe_attack(encounter.player.name, attack.hit, attack.is_critical, attack.damage),
            attack=attack,
            damage=attack.damage,
            regenerated=regenerated,
        )
        return self._finish_player_action(encounter, outcome)

    def player_cast(self, encounter: Encounter, spell_id: str) -> ActionOutcome | Failure:
        """Cast a spell at the monster (or at the player for self-targeted spells).

        Raises:
            ValueError: If the spell id is unknown or belongs to another class.
        """
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "cast")

        spell = get_spell(spell_id)
        check_spell_class(encounter.player, spell)
        if encounter.player.current_mana < spell.mana_cost:
            return Failure(FailureReason.INSUFFICIENT_RESOURCE, f"Not enough mana for {spell.name}")

        regenerated = self._begin_player_action(encounter)
        result = SpellManager(self.context).cast_spell(encounter.player, encounter.monster, spell)
        if isinstance(result, Failure):
            return result

        outcome = ActionOutcome(
            action="cast",
            phase=encounter.phase,
            message=f"{encounter.player.name} casts {spell.name}",
            spell=result,
            damage=result.damage,
            healed=result.healed,
            regenerated=regenerated,
        )
        return self._finish_player_action(encounter, outcome)

    def dodge(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Attacks against the player have disadvantage until their next action."""
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "dodge")
        regenerated = self._begin_player_action(encounter)
        encounter.player.is_dodging = True
        outcome = ActionOutcome(
            action="dodge",
            phase=encounter.phase,
            message=f"{encounter.player.name} takes a defensive stance",
            regenerated=regenerated,
        )
        return self._finish_player_action(encounter, outcome)

    def disengage(self, encounter: Encounter) -> ActionOutcome | Failure:
        """A flee on the next action no longer provokes a free attack."""
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "disengage")
        regenerated = self._begin_player_action(encounter)
        encounter.player.is_disengaging = True
        outcome = ActionOutcome(
            action="disengage",
            phase=encounter.phase,
            message=f"{encounter.player.name} disengages",
            regenerated=regenerated,
        )
        return self._finish_player_action(encounter, outcome)

    def flee(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Try to escape: 50% plus 5% per point of DEX modifier.

        On failure the monster gets a free attack unless the player
        disengaged on their previous action.
        """
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "flee")

        player = encounter.player
        disengaged = player.is_disengaging
        regenerated = self._begin_player_action(encounter)

        chance = flee_chance(
            ability_modifier(player, Ability.DEXTERITY, self.now),
            self.settings.flee_base_chance,
        )
        escaped = resolve_rng(self.rng).random() < chance
        outcome = ActionOutcome(
            action="flee",
            phase=encounter.phase,
            fled=escaped,
            regenerated=regenerated,
            details={"chance_pct": round(chance * 100)},
        )

        if escaped:
            outcome.message = f"{player.name} escapes!"
            self._set_phase(encounter, CombatPhase.FLED)
            outcome.phase = encounter.phase
            return outcome

        outcome.message = f"{player.name} fails to escape"
        if not disengaged:
            counter = CombatManager(self.context).resolve_attack(encounter.monster, player)
            if not isinstance(counter, Failure):
                outcome.counter_attack = counter
        return self._finish_player_action(encounter, outcome)

    def use_class_ability(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Use the player's class ability (taunt, meteor, arrow rain or mass heal).

        Returns:
            ActionOutcome, or Failure(ON_COOLDOWN) with remaining_ms /
            Failure(INSUFFICIENT_RESOURCE). Nothing is spent on failure.
        """
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "class ability")

        player = encounter.player
        ability = get_class_definition(player.character_class).ability
        if ability is None:
            return Failure(FailureReason.INVALID_TARGET, "This class has no active ability")

        now = self.now
        remaining = self.ability_cooldown_remaining(player)
        if remaining > 0:
            return Failure(
                FailureReason.ON_COOLDOWN,
                f"{ability.display_name} is on cooldown",
                remaining_ms=remaining,
            )
        if player.current_mana < ability.mana_cost:
            return Failure(
                FailureReason.INSUFFICIENT_RESOURCE,
                f"Not enough mana for {ability.display_name}",
            )

        regenerated = self._begin_player_action(encounter)
        player.current_mana -= ability.mana_cost
        player.ability_cooldowns[ability.key] = now

        outcome = self._execute_class_ability(encounter, ability)
        outcome.regenerated = regenerated
        logger.debug(f"{player.name} used {ability.display_name}: {outcome.message}")
        return self._finish_player_action(encounter, outcome)

    def use_healing_potion(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Drink a healing potion (2d4+2 by default, no overheal)."""
        if encounter.phase is not CombatPhase.AWAITING_PLAYER_ACTION:
            return self._invalid_phase(encounter, "potion")
        regenerated = self._begin_player_action(encounter)

        rolled = roll(self.settings.healing_potion_dice, self.rng).total
        healed = heal(encounter.player, rolled)
        outcome = ActionOutcome(
            action="potion",
            phase=encounter.phase,
            message=f"+{healed} HP",
            healed=healed,
            regenerated=regenerated,
        )
        return self._finish_player_action(encounter, outcome)

    # =========================================================================
    # Monster turn
    # =========================================================================

    def monster_turn(self, encounter: Encounter) -> ActionOutcome | Failure:
        """Resolve the monster's attack against the player."""
        if encounter.phase is not CombatPhase.AWAITING_MONSTER_TURN:
            return self._invalid_phase(encounter, "monster turn")

        attack = CombatManager(self.context).resolve_attack(encounter.monster, encounter.player)
        if isinstance(attack, Failure):
            return attack

        outcome = ActionOutcome(
            action="monster_attack",
            phase=encounter.phase,
            message=_describe_attack(encounter.monster.name, attack.hit, attack.is_critical, attack.damage),
            attack=attack,
            damage=attack.damage,
        )
        if not encounter.player.is_alive:
            self._end(encounter, CombatPhase.DEFEAT)
        else:
            self._set_phase(encounter, CombatPhase.MONSTER_ACTION_RESOLVED)
        outcome.phase = encounter.phase
        return outcome

    # =========================================================================
    # Queries
    # =========================================================================

    def ability_cooldown_remaining(self, player: PlayerCombatant) -> int:
        """Milliseconds until the class ability is ready (0 if ready)."""
        ability = get_class_definition(player.character_class).ability
        if ability is None:
            return 0
        last = player.ability_cooldowns.get(ability.key)
        if last is None:
            return 0
        cooldown = self.settings.class_ability_cooldowns_ms.get(ability.key, ability.cooldown_ms)
        return max(0, last + cooldown - self.now)

    # =========================================================================
    # Internals
    # =========================================================================

    def _begin_player_action(self, encounter: Encounter) -> int:
        """Clear transient flags and apply the cleric's holy aura regeneration."""
        player = encounter.player
        player.clear_action_flags()

        if not has_passive(player.character_class, "holy_aura"):
            return 0
        interval = self.settings.holy_aura_interval_ms
        ticks = (self.now - encounter.last_regen_at) // interval
        if ticks <= 0:
            return 0
        encounter.last_regen_at += ticks * interval
        return heal(player, ticks)

    def _finish_player_action(self, encounter: Encounter, outcome: ActionOutcome) -> ActionOutcome:
        if not encounter.monster.is_alive:
            self._end(encounter, CombatPhase.VICTORY)
            outcome.xp = ProgressionManager(self.context).grant_xp(
                encounter.player, encounter.monster.xp_reward
            )
        elif not encounter.player.is_alive:
            self._end(encounter, CombatPhase.DEFEAT)
        else:
            self._set_phase(encounter, CombatPhase.PLAYER_ACTION_RESOLVED)
        outcome.phase = encounter.phase
        return outcome

    def _execute_class_ability(
        self, encounter: Encounter, ability: ClassAbilityDefinition
    ) -> ActionOutcome:
        player, monster = encounter.player, encounter.monster
        now = self.now
        outcome = ActionOutcome(action=ability.key, phase=encounter.phase)

        if ability.key == "taunt":
            EffectManager(self.context).apply(monster, TAUNTED, self.settings.taunt_duration_ms)
            outcome.message = f"{monster.name} is taunted!"
            outcome.details["duration_ms"] = self.settings.taunt_duration_ms
        elif ability.key == "mass_heal":
            rolled = roll(ability.dice, self.rng).total + ability_modifier(player, Ability.WISDOM, now)
            outcome.healed = heal(player, rolled)
            outcome.message = f"Healed {outcome.healed} HP"
        else:
            modifier_ability = Ability.INTELLIGENCE if ability.key == "meteor" else Ability.DEXTERITY
            raw = sum(roll(ability.dice, self.rng).total for _ in range(ability.repeats))
            raw = max(0, raw + ability_modifier(player, modifier_ability, now))
            combat = CombatManager(self.context)
            damage, affinity = combat.scale_damage(
                player, monster, raw, ability.damage_type, is_spell=ability.key == "meteor"
            )
            combat.apply_damage(monster, damage)
            outcome.damage = damage
            outcome.message = f"{ability.display_name} deals {damage} damage"
            outcome.details["interaction"] = affinity.label
        return outcome

    def _end(self, encounter: Encounter, phase: CombatPhase) -> None:
        encounter.player.clear_action_flags()
        encounter.player.marked_for_advantage = False
        self._set_phase(encounter, phase)
        logger.info(f"Encounter {encounter.id} ended: {phase.value}")

    def _set_phase(self, encounter: Encounter, phase: CombatPhase) -> None:
        old_phase = encounter.phase
        encounter.phase = phase
        logger.debug(f"Encounter {encounter.id}: {old_phase.value} -> {phase.value}")
        self.hook.on_phase_change(
            PhaseChangeEvent(
                encounter_id=encounter.id,
                old_phase=old_phase.value,
                new_phase=phase.value,
                timestamp=self.now,
                details={"round": encounter.round},
            )
        )

    def _invalid_phase(self, encounter: Encounter, action: str) -> Failure:
        logger.debug(f"Refused {action} in phase {encounter.phase.value}")
        return Failure(
            FailureReason.INVALID_PHASE,
            f"Cannot {action} during {encounter.phase.value}",
        )


def _describe_attack(name: str, hit: bool, critical: bool, damage: int) -> str:
    if not hit:
        return f"{name} misses!"
    if critical:
        return f"{name} lands a CRITICAL hit for {damage} damage!"
    return f"{name} hits for {damage} damage"
