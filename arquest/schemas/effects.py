"""Status effect schemas.

A status effect carries a list of payload entries. Each entry is one member
of a tagged union discriminated by ``type``, so every effect is validated
once at construction instead of being inspected ad hoc wherever it is used.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from arquest.models.enums import Ability, EffectKind


# =============================================================================
# Payload entries
# =============================================================================


class StatBonus(BaseModel):
    """Flat bonus to one or more ability scores (per stack)."""

    type: Literal["stat_bonus"] = "stat_bonus"
    bonuses: dict[Ability, int]

    @field_validator("bonuses")
    @classmethod
    def _require_bonus(cls, value: dict[Ability, int]) -> dict[Ability, int]:
        if not value:
            raise ValueError("stat_bonus payload needs at least one ability")
        return value


class ArmorClassBonus(BaseModel):
    """Flat bonus to armor class (per stack)."""

    type: Literal["ac_bonus"] = "ac_bonus"
    amount: int


class DamageMultiplier(BaseModel):
    """Multiplier on damage, optionally restricted to one damage type.

    Outgoing multipliers scale damage the bearer deals; incoming multipliers
    scale damage the bearer receives. ``creature_type`` limits an outgoing
    multiplier to opponents of that kind (e.g. undead).
    """

    type: Literal["damage_multiplier"] = "damage_multiplier"
    multiplier: float = Field(gt=0)
    damage_type: str | None = None
    creature_type: str | None = None
    incoming: bool = False

    def applies_to(
        self,
        damage_type: str | None,
        incoming: bool,
        creature_type: str | None = None,
    ) -> bool:
        if self.incoming != incoming:
            return False
        if self.creature_type is not None and self.creature_type != creature_type:
            return False
        return self.damage_type is None or self.damage_type == damage_type


EffectPayload = Annotated[
    Union[StatBonus, ArmorClassBonus, DamageMultiplier],
    Field(discriminator="type"),
]


# =============================================================================
# Status effect
# =============================================================================


class StatusEffect(BaseModel):
    """A time-bounded buff or debuff.

    ``expires_at`` is an absolute timestamp in milliseconds; the ledger sets
    it when the effect is added. Additive payloads scale linearly with the
    stack count and multipliers compound once per stack.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1)
    name: str
    kind: EffectKind = EffectKind.BUFF
    stackable: bool = False
    stacks: int = Field(default=1, ge=1)
    expires_at: int = 0
    payload: list[EffectPayload] = Field(default_factory=list)

    def is_expired(self, now: int) -> bool:
        return self.expires_at <= now

    @property
    def has_stat_bonus(self) -> bool:
        return any(isinstance(p, StatBonus) for p in self.payload)

    def stat_bonus(self, ability: Ability) -> int:
        total = sum(
            p.bonuses.get(ability, 0) for p in self.payload if isinstance(p, StatBonus)
        )
        return total * self.stacks

    def ac_bonus(self) -> int:
        total = sum(p.amount for p in self.payload if isinstance(p, ArmorClassBonus))
        return total * self.stacks

    def damage_multiplier(
        self,
        damage_type: str | None = None,
        incoming: bool = False,
        creature_type: str | None = None,
    ) -> float:
        factor = 1.0
        for p in self.payload:
            if isinstance(p, DamageMultiplier) and p.applies_to(
                damage_type, incoming, creature_type
            ):
                factor *= p.multiplier**self.stacks
        return factor


# =============================================================================
# Campaign buffs
# =============================================================================

# Reward buffs granted by campaign steps. Templates only: copy before adding.
CAMPAIGN_BUFFS: dict[str, StatusEffect] = {
    "temple_blessing": StatusEffect(
        id="temple_blessing",
        name="Temple Blessing",
        payload=[ArmorClassBonus(amount=1)],
    ),
    "undead_slayer": StatusEffect(
        id="undead_slayer",
        name="Undead Slayer",
        payload=[DamageMultiplier(multiplier=1.15, creature_type="undead")],
    ),
    "fire_resistance": StatusEffect(
        id="fire_resistance",
        name="Fire Resistance",
        payload=[DamageMultiplier(multiplier=0.5, damage_type="fire", incoming=True)],
    ),
    "heroism": StatusEffect(
        id="heroism",
        name="Heroism",
        payload=[StatBonus(bonuses={Ability.CONSTITUTION: 2})],
    ),
    "battle_focus": StatusEffect(
        id="battle_focus",
        name="Battle Focus",
        stackable=True,
        payload=[DamageMultiplier(multiplier=1.1)],
    ),
}


def get_campaign_buff(buff_id: str) -> StatusEffect:
    """Return a fresh copy of a campaign buff template.

    Raises:
        ValueError: If the buff id is unknown.
    """
    template = CAMPAIGN_BUFFS.get(buff_id)
    if template is None:
        raise ValueError(f"Unknown campaign buff: '{buff_id}'")
    return template.model_copy(deep=True)
