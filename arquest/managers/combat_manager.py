"""Combat management for resolving attacks and damage."""

import logging
import math

from arquest.dice.combat import roll_attack, roll_damage
from arquest.dice.types import AdvantageType
from arquest.managers.base import BaseManager
from arquest.models.combatant import Combatant, MonsterCombatant, PlayerCombatant
from arquest.models.enums import DamageAffinity, FailureReason
from arquest.models.outcomes import AttackOutcome, AttackProfile, Failure
from arquest.observability.events import AttackResolvedEvent
from arquest.schemas.classes import has_passive
from arquest.services import stat_deriver

logger = logging.getLogger(__name__)

LAST_STAND_AC_BONUS = 2
DEADLY_AIM_MULTIPLIER = 1.5
ARCANE_POWER_MULTIPLIER = 1.2


def monster_profile(monster: MonsterCombatant) -> AttackProfile:
    """Attack profile for a monster's natural attack."""
    return AttackProfile(
        name=f"{monster.name} attack",
        damage_dice=monster.damage_dice,
        damage_type=monster.damage_type,
    )


class CombatManager(BaseManager):
    """Resolves a single attack from one combatant against another.

    Each call is independent: roll to hit, roll damage, scale it through
    effects, passives and the defender's damage profile, then subtract it
    from the defender's hit points. Turn order is the caller's concern.
    """

    def resolve_attack(
        self,
        attacker: Combatant | None,
        defender: Combatant | None,
        profile: AttackProfile | None = None,
    ) -> AttackOutcome | Failure:
        """Resolve an attack from attacker to defender.

        Args:
            attacker: The attacking combatant.
            defender: The defending combatant.
            profile: Weapon or spell used. Monsters default to their natural
                attack; players must pass one.

        Returns:
            AttackOutcome, or Failure(INVALID_TARGET) if either combatant is
            missing or already defeated.
        """
        failure = self._validate(attacker, defender)
        if failure:
            return failure

        if profile is None:
            if not isinstance(attacker, MonsterCombatant):
                raise TypeError("players must attack with an explicit AttackProfile")
            profile = monster_profile(attacker)

        now = self.now
        attack_bonus = self.attack_bonus_for(attacker, profile)
        target_ac = self.effective_ac(defender)
        advantage = self._advantage_against(defender)

        attack = roll_attack(attack_bonus, target_ac, advantage, self.rng)

        damage = 0
        bonus_damage = 0
        interaction = DamageAffinity.NORMAL
        if attack.hit:
            raw = roll_damage(
                profile.damage_dice, attack.is_critical, profile.damage_type, self.rng
            ).total
            raw = max(0, raw + self._damage_modifier(attacker, profile))
            damage, interaction = self.scale_damage(
                attacker,
                defender,
                raw,
                profile.damage_type,
                is_critical=attack.is_critical,
                is_spell=profile.is_spell,
            )
            if profile.bonus_dice:
                bonus_damage = self._roll_bonus_damage(defender, profile, attack.is_critical)
            self.apply_damage(defender, damage + bonus_damage)

        outcome = AttackOutcome(
            attacker_id=attacker.id,
            defender_id=defender.id,
            profile_name=profile.name,
            hit=attack.hit,
            natural=attack.natural,
            total=attack.total,
            attack_bonus=attack_bonus,
            target_ac=target_ac,
            is_critical=attack.is_critical,
            is_fumble=attack.is_fumble,
            advantage_type=advantage,
            damage=damage + bonus_damage,
            damage_type=profile.damage_type,
            interaction=interaction.label,
            bonus_damage=bonus_damage,
            defender_hp=defender.current_hp,
            defender_defeated=not defender.is_alive,
            discarded_rolls=attack.roll_result.discarded_rolls,
        )

        logger.debug(
            f"{attacker.name} -> {defender.name} with {profile.name}: "
            f"d20={attack.natural} total={attack.total} vs AC {target_ac} "
            f"hit={attack.hit} damage={outcome.damage} ({interaction.label})"
        )
        self.hook.on_attack_resolved(
            AttackResolvedEvent(
                attacker=attacker.name,
                defender=defender.name,
                profile=profile.name,
                hit=attack.hit,
                natural=attack.natural,
                total=attack.total,
                target_ac=target_ac,
                damage=outcome.damage,
                damage_type=profile.damage_type,
                is_critical=attack.is_critical,
                is_fumble=attack.is_fumble,
                interaction=interaction.label,
                defender_hp=defender.current_hp,
                timestamp=now,
            )
        )
        return outcome

    # =========================================================================
    # Derived numbers
    # =========================================================================

    def attack_bonus_for(self, attacker: Combatant, profile: AttackProfile) -> int:
        """Players: ability modifier + proficiency + weapon bonus.

        Monsters: their pre-rolled attack bonus + weapon bonus.
        """
        if isinstance(attacker, PlayerCombatant):
            return stat_deriver.attack_bonus(
                attacker, self.now, weapon_bonus=profile.weapon_bonus, ability=profile.ability
            )
        if isinstance(attacker, MonsterCombatant):
            return attacker.attack_bonus + profile.weapon_bonus
        return attacker.proficiency_bonus + profile.weapon_bonus

    def effective_ac(self, defender: Combatant) -> int:
        """Derived AC plus active AC effects and the warrior's last stand."""
        ac = defender.armor_class + defender.effects.ac_bonus(self.now)
        if (
            isinstance(defender, PlayerCombatant)
            and has_passive(defender.character_class, "last_stand")
            and defender.hp_fraction < 0.5
        ):
            ac += LAST_STAND_AC_BONUS
        return ac

    def scale_damage(
        self,
        attacker: Combatant,
        defender: Combatant,
        raw: float,
        damage_type: str | None,
        is_critical: bool = False,
        is_spell: bool = False,
    ) -> tuple[int, DamageAffinity]:
        """Run rolled damage through the damage pipeline.

        Order: attacker outgoing multipliers, class passives, defender
        affinity, defender incoming multipliers, then floor at zero.

        Returns:
            Final damage and the defender's affinity for the damage type.
        """
        now = self.now
        creature_type = defender.creature_type if isinstance(defender, MonsterCombatant) else None
        amount = raw * attacker.effects.damage_multiplier(
            now, damage_type, creature_type=creature_type
        )

        if isinstance(attacker, PlayerCombatant):
            if is_critical and has_passive(attacker.character_class, "deadly_aim"):
                amount *= DEADLY_AIM_MULTIPLIER
            elif (
                is_spell
                and has_passive(attacker.character_class, "arcane_power")
                and self._is_debuffed(defender)
            ):
                amount *= ARCANE_POWER_MULTIPLIER

        affinity = defender.affinity_for(damage_type)
        amount *= affinity.factor
        amount *= defender.effects.damage_multiplier(now, damage_type, incoming=True)
        return max(0, math.floor(amount)), affinity

    def apply_damage(self, defender: Combatant, damage: int) -> int:
        """Subtract damage from hit points, never going below 0."""
        defender.current_hp = max(0, defender.current_hp - max(0, damage))
        return defender.current_hp

    # =========================================================================
    # Internals
    # =========================================================================

    def _validate(self, attacker: Combatant | None, defender: Combatant | None) -> Failure | None:
        if attacker is None or defender is None:
            return Failure(FailureReason.INVALID_TARGET, "Missing combatant")
        if not attacker.is_alive:
            return Failure(FailureReason.INVALID_TARGET, f"{attacker.name} is defeated")
        if not defender.is_alive:
            return Failure(FailureReason.INVALID_TARGET, f"{defender.name} is already defeated")
        return None

    def _advantage_against(self, defender: Combatant) -> AdvantageType:
        """Dodging imposes disadvantage; a guiding bolt mark grants advantage.

        The mark is consumed by the attack. Both together cancel out.
        """
        marked = defender.marked_for_advantage
        defender.marked_for_advantage = False
        if defender.is_dodging and marked:
            return AdvantageType.NORMAL
        if defender.is_dodging:
            return AdvantageType.DISADVANTAGE
        if marked:
            return AdvantageType.ADVANTAGE
        return AdvantageType.NORMAL

    def _damage_modifier(self, attacker: Combatant, profile: AttackProfile) -> int:
        if profile.damage_modifier_ability is None or not isinstance(attacker, PlayerCombatant):
            return 0
        return stat_deriver.ability_modifier(attacker, profile.damage_modifier_ability, self.now)

    def _roll_bonus_damage(
        self, defender: Combatant, profile: AttackProfile, is_critical: bool
    ) -> int:
        """Roll bonus dice separately.

        Typed bonus damage is scaled by the defender's affinity and incoming
        multipliers for that type. Untyped bonus damage is added unscaled.
        """
        bonus_type = profile.bonus_damage_type
        rolled = roll_damage(
            profile.bonus_dice, is_critical, bonus_type or "untyped", self.rng
        ).total
        if bonus_type is None:
            return rolled
        amount = rolled * defender.affinity_for(bonus_type).factor
        amount *= defender.effects.damage_multiplier(self.now, bonus_type, incoming=True)
        return max(0, math.floor(amount))

    def _is_debuffed(self, defender: Combatant) -> bool:
        return defender.effects.has_debuff(self.now)
