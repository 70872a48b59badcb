"""Spell Manager for casting spells and spending mana.

Resolution branches by the spell's resolution kind:
- attack_roll: an attack through the combat manager using the spellcasting ability
- auto_hit_damage: damage with no attack roll and no critical
- saving_throw: target saves against 8 + proficiency + spellcasting modifier
- heal: restores hit points without overheal
- buff: inserts or refreshes a status effect

Mana is deducted before resolution, so a miss or a successful save still
costs the full amount.
"""

import logging

from arquest.dice.checks import spell_save_dc
from arquest.dice.combat import roll_damage, roll_save
from arquest.dice.roller import roll
from arquest.managers.base import BaseManager
from arquest.managers.combat_manager import CombatManager
from arquest.managers.effect_manager import EffectManager
from arquest.models.combatant import Combatant, MonsterCombatant, PlayerCombatant
from arquest.models.enums import FailureReason, SpellResolution
from arquest.models.outcomes import AttackProfile, Failure, SpellOutcome
from arquest.observability.events import SpellCastEvent
from arquest.schemas.spells import ADVANTAGE_NEXT, Spell, get_spell
from arquest.services import stat_deriver

logger = logging.getLogger(__name__)


class SpellManager(BaseManager):
    """Casts spells for player combatants."""

    def cast_spell(
        self,
        caster: PlayerCombatant,
        target: Combatant | None,
        spell: Spell | str,
    ) -> SpellOutcome | Failure:
        """Cast a spell.

        Args:
            caster: Player casting the spell.
            target: Target combatant. Ignored for self-targeted spells.
            spell: Spell or spell id.

        Returns:
            SpellOutcome, or Failure(INVALID_TARGET) / Failure(INSUFFICIENT_RESOURCE).
            No mana is spent on failure.

        Raises:
            TypeError: If the caster is not a player.
            ValueError: If the spell id is unknown or the spell belongs to
                another class.
        """
        if not isinstance(caster, PlayerCombatant):
            raise TypeError("only player combatants can cast spells")
        if isinstance(spell, str):
            spell = get_spell(spell)
        check_spell_class(caster, spell)

        if spell.targets_self:
            target = caster
        if not caster.is_alive:
            return Failure(FailureReason.INVALID_TARGET, f"{caster.name} is defeated")
        if target is None or not target.is_alive:
            return Failure(FailureReason.INVALID_TARGET, f"No valid target for {spell.name}")

        if caster.current_mana < spell.mana_cost:
            logger.debug(
                f"{caster.name} cannot cast {spell.name}: "
                f"{caster.current_mana}/{spell.mana_cost} mana"
            )
            return Failure(
                FailureReason.INSUFFICIENT_RESOURCE,
                f"Not enough mana for {spell.name} ({caster.current_mana}/{spell.mana_cost})",
            )

        caster.current_mana -= spell.mana_cost

        if spell.resolution is SpellResolution.ATTACK_ROLL:
            outcome = self._resolve_attack_roll(caster, target, spell)
        elif spell.resolution is SpellResolution.AUTO_HIT_DAMAGE:
            outcome = self._resolve_auto_hit(caster, target, spell)
        elif spell.resolution is SpellResolution.SAVING_THROW:
            outcome = self._resolve_saving_throw(caster, target, spell)
        elif spell.resolution is SpellResolution.HEAL:
            outcome = self._resolve_heal(caster, target, spell)
        else:
            outcome = self._resolve_buff(caster, target, spell)

        logger.debug(
            f"{caster.name} cast {spell.name} on {target.name}: "
            f"damage={outcome.damage} healed={outcome.healed} mana_left={caster.current_mana}"
        )
        self.hook.on_spell_cast(
            SpellCastEvent(
                caster=caster.name,
                target=target.name,
                spell_id=spell.id,
                resolution=spell.resolution.value,
                mana_spent=spell.mana_cost,
                damage=outcome.damage,
                healed=outcome.healed,
                save_succeeded=outcome.save_succeeded,
                timestamp=self.now,
            )
        )
        return outcome

    # =========================================================================
    # Resolution branches
    # =========================================================================

    def _resolve_attack_roll(
        self, caster: PlayerCombatant, target: Combatant, spell: Spell
    ) -> SpellOutcome:
        ability = stat_deriver.spellcasting_ability(caster.character_class)
        profile = AttackProfile(
            name=spell.name,
            damage_dice=spell.dice,
            damage_type=spell.damage_type or "force",
            ability=ability,
            is_spell=True,
            damage_modifier_ability=ability if spell.add_ability_modifier else None,
        )
        attack = CombatManager(self.context).resolve_attack(caster, target, profile)
        if isinstance(attack, Failure):
            raise RuntimeError(f"spell attack refused after validation: {attack.message}")

        if attack.hit and spell.secondary_effect == ADVANTAGE_NEXT and target.is_alive:
            target.marked_for_advantage = True

        return SpellOutcome(
            spell_id=spell.id,
            caster_id=caster.id,
            target_id=target.id,
            resolution=spell.resolution,
            mana_spent=spell.mana_cost,
            hit=attack.hit,
            damage=attack.damage,
            damage_type=attack.damage_type,
            interaction=attack.interaction,
            attack=attack,
            target_hp=target.current_hp,
            target_defeated=not target.is_alive,
        )

    def _resolve_auto_hit(
        self, caster: PlayerCombatant, target: Combatant, spell: Spell
    ) -> SpellOutcome:
        combat = CombatManager(self.context)
        raw = roll_damage(spell.dice, False, spell.damage_type or "force", self.rng).total
        raw = max(0, raw + self._spell_modifier(caster, spell))
        damage, affinity = combat.scale_damage(
            caster, target, raw, spell.damage_type, is_spell=True
        )
        combat.apply_damage(target, damage)
        return SpellOutcome(
            spell_id=spell.id,
            caster_id=caster.id,
            target_id=target.id,
            resolution=spell.resolution,
            mana_spent=spell.mana_cost,
            damage=damage,
            damage_type=spell.damage_type,
            interaction=affinity.label,
            target_hp=target.current_hp,
            target_defeated=not target.is_alive,
        )

    def _resolve_saving_throw(
        self, caster: PlayerCombatant, target: Combatant, spell: Spell
    ) -> SpellOutcome:
        now = self.now
        ability = stat_deriver.spellcasting_ability(caster.character_class)
        dc = spell_save_dc(caster.proficiency_bonus, stat_deriver.ability_modifier(caster, ability, now))
        save = roll_save(self._save_bonus(target, spell), dc, self.rng)

        raw = roll_damage(spell.dice, False, spell.damage_type or "force", self.rng).total
        raw = max(0, raw + self._spell_modifier(caster, spell))
        if save.success:
            raw = raw / 2 if spell.half_on_save else 0

        combat = CombatManager(self.context)
        damage, affinity = combat.scale_damage(
            caster, target, raw, spell.damage_type, is_spell=True
        )
        combat.apply_damage(target, damage)
        return SpellOutcome(
            spell_id=spell.id,
            caster_id=caster.id,
            target_id=target.id,
            resolution=spell.resolution,
            mana_spent=spell.mana_cost,
            damage=damage,
            damage_type=spell.damage_type,
            interaction=affinity.label,
            save_dc=dc,
            save_total=save.total,
            save_succeeded=save.success,
            target_hp=target.current_hp,
            target_defeated=not target.is_alive,
        )

    def _resolve_heal(
        self, caster: PlayerCombatant, target: Combatant, spell: Spell
    ) -> SpellOutcome:
        rolled = max(0, roll(spell.dice, self.rng).total + self._spell_modifier(caster, spell))
        healed = heal(target, rolled)
        return SpellOutcome(
            spell_id=spell.id,
            caster_id=caster.id,
            target_id=target.id,
            resolution=spell.resolution,
            mana_spent=spell.mana_cost,
            healed=healed,
            target_hp=target.current_hp,
        )

    def _resolve_buff(
        self, caster: PlayerCombatant, target: Combatant, spell: Spell
    ) -> SpellOutcome:
        effect = EffectManager(self.context).apply(target, spell.effect, spell.duration_ms)
        return SpellOutcome(
            spell_id=spell.id,
            caster_id=caster.id,
            target_id=target.id,
            resolution=spell.resolution,
            mana_spent=spell.mana_cost,
            effect=effect,
            target_hp=target.current_hp,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _spell_modifier(self, caster: PlayerCombatant, spell: Spell) -> int:
        if not spell.add_ability_modifier:
            return 0
        ability = stat_deriver.spellcasting_ability(caster.character_class)
        return stat_deriver.ability_modifier(caster, ability, self.now)

    def _save_bonus(self, target: Combatant, spell: Spell) -> int:
        if isinstance(target, MonsterCombatant):
            return target.save_bonus
        if isinstance(target, PlayerCombatant):
            return stat_deriver.saving_throw_bonus(target, spell.save_ability, self.now)
        return 0


def heal(combatant: Combatant, amount: int) -> int:
    """Restore up to ``amount`` hit points without overheal. Returns HP restored."""
    old_hp = combatant.current_hp
    combatant.current_hp = min(combatant.max_hp, combatant.current_hp + max(0, amount))
    return combatant.current_hp - old_hp


def check_spell_class(caster: PlayerCombatant, spell: Spell) -> None:
    """Raise ValueError unless the spell belongs to the caster's class."""
    if spell.character_class is not caster.character_class:
        raise ValueError(
            f"{spell.name} is a {spell.character_class.value} spell, "
            f"not available to a {caster.character_class.value}"
        )
