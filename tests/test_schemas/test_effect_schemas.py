"""Tests for status effect payloads and campaign buffs."""

import pytest
from pydantic import ValidationError

from arquest.models.enums import Ability, EffectKind
from arquest.schemas.effects import (
    CAMPAIGN_BUFFS,
    ArmorClassBonus,
    DamageMultiplier,
    StatBonus,
    StatusEffect,
    get_campaign_buff,
)


class TestPayloadUnion:
    """Payload entries are discriminated by their type tag."""

    def test_validates_from_dicts(self):
        effect = StatusEffect.model_validate(
            {
                "id": "bless",
                "name": "Bless",
                "payload": [
                    {"type": "stat_bonus", "bonuses": {"str": 2}},
                    {"type": "ac_bonus", "amount": 1},
                    {"type": "damage_multiplier", "multiplier": 1.5, "damage_type": "fire"},
                ],
            }
        )
        assert isinstance(effect.payload[0], StatBonus)
        assert isinstance(effect.payload[1], ArmorClassBonus)
        assert isinstance(effect.payload[2], DamageMultiplier)
        assert effect.payload[0].bonuses == {Ability.STRENGTH: 2}

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            StatusEffect.model_validate(
                {"id": "x", "name": "X", "payload": [{"type": "teleport"}]}
            )

    def test_empty_stat_bonus_rejected(self):
        with pytest.raises(ValidationError):
            StatBonus(bonuses={})

    def test_multiplier_must_be_positive(self):
        with pytest.raises(ValidationError):
            DamageMultiplier(multiplier=0)

    def test_stacks_at_least_one(self):
        effect = StatusEffect(id="x", name="X")
        with pytest.raises(ValidationError):
            effect.stacks = 0


class TestStatusEffectAggregates:
    def test_additive_payloads_scale_with_stacks(self):
        effect = StatusEffect(
            id="rage",
            name="Rage",
            stackable=True,
            stacks=3,
            payload=[StatBonus(bonuses={Ability.STRENGTH: 2}), ArmorClassBonus(amount=1)],
        )
        assert effect.stat_bonus(Ability.STRENGTH) == 6
        assert effect.stat_bonus(Ability.DEXTERITY) == 0
        assert effect.ac_bonus() == 3

    def test_multipliers_compound_per_stack(self):
        effect = StatusEffect(
            id="focus", name="Focus", stacks=2, payload=[DamageMultiplier(multiplier=1.1)]
        )
        assert effect.damage_multiplier("slashing") == pytest.approx(1.21)

    def test_typed_multiplier_only_matches_its_type(self):
        effect = StatusEffect(
            id="flame", name="Flame", payload=[DamageMultiplier(multiplier=2, damage_type="fire")]
        )
        assert effect.damage_multiplier("fire") == 2
        assert effect.damage_multiplier("cold") == 1

    def test_direction_must_match(self):
        effect = get_campaign_buff("fire_resistance")
        assert effect.damage_multiplier("fire", incoming=True) == 0.5
        assert effect.damage_multiplier("fire", incoming=False) == 1

    def test_creature_restricted_multiplier(self):
        effect = get_campaign_buff("undead_slayer")
        assert effect.damage_multiplier("slashing", creature_type="undead") == pytest.approx(1.15)
        assert effect.damage_multiplier("slashing", creature_type="beast") == 1
        assert effect.damage_multiplier("slashing") == 1

    def test_expired_at_or_before_now(self):
        effect = StatusEffect(id="x", name="X", expires_at=5000)
        assert effect.is_expired(4999) is False
        assert effect.is_expired(5000) is True

    def test_has_stat_bonus(self):
        assert get_campaign_buff("heroism").has_stat_bonus is True
        assert get_campaign_buff("temple_blessing").has_stat_bonus is False


class TestCampaignBuffs:
    def test_all_buffs_present(self):
        assert set(CAMPAIGN_BUFFS) == {
            "temple_blessing",
            "undead_slayer",
            "fire_resistance",
            "heroism",
            "battle_focus",
        }

    def test_returns_copy(self):
        buff = get_campaign_buff("battle_focus")
        buff.stacks = 4
        assert CAMPAIGN_BUFFS["battle_focus"].stacks == 1

    def test_all_are_buffs(self):
        assert all(b.kind is EffectKind.BUFF for b in CAMPAIGN_BUFFS.values())

    def test_unknown_buff(self):
        with pytest.raises(ValueError, match="Unknown campaign buff"):
            get_campaign_buff("dragon_heart")
