"""Rules engine configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tunable rule constants, loaded from ARQUEST_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ARQUEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Progression
    # ==========================================================================
    max_level: int = Field(default=20, ge=1)
    ability_cap: int = Field(default=20, ge=1)
    xp_per_level: int = Field(default=150, ge=1)  # xp_for_level(L) = L * xp_per_level

    # ==========================================================================
    # Resting (milliseconds)
    # ==========================================================================
    short_rest_cooldown_ms: int = Field(default=5 * 60 * 1000, ge=0)
    long_rest_cooldown_ms: int = Field(default=30 * 60 * 1000, ge=0)
    short_rest_mana_fraction: float = Field(default=0.10, ge=0.0, le=1.0)

    # ==========================================================================
    # Status effects (milliseconds)
    # ==========================================================================
    default_effect_duration_ms: int = Field(default=60_000, ge=0)
    campaign_buff_duration_ms: int = Field(default=5 * 60 * 1000, ge=0)

    # ==========================================================================
    # Encounter
    # ==========================================================================
    flee_base_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    healing_potion_dice: str = "2d4+2"
    holy_aura_interval_ms: int = Field(default=5000, ge=1)
    taunt_duration_ms: int = Field(default=5000, ge=0)
    # Per-ability cooldown overrides, e.g. ARQUEST_CLASS_ABILITY_COOLDOWNS_MS='{"meteor": 10000}'
    class_ability_cooldowns_ms: dict[str, int] = Field(default_factory=dict)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
