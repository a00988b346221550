"""
Centralized settings configuration using Pydantic BaseSettings.

All tunable engine policies are defined here with types, defaults, and
validation. Values can be overridden through environment variables or a
local .env file.

Usage:
    from periodization_engine.settings import get_settings

    settings = get_settings()
    print(settings.default_one_rm_formula)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from periodization_engine.domain.models.enums import OneRepMaxFormula


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Performance Metrics
    # -------------------------------------------------------------------------
    default_one_rm_formula: str = Field(
        default=OneRepMaxFormula.BRZYCKI.value,
        description="Formula used when a caller does not name one",
    )
    weight_rounding_increment: float = Field(
        default=2.5,
        gt=0,
        description="Smallest plate jump used when prescribing target weights",
    )

    # -------------------------------------------------------------------------
    # Template Generation
    # -------------------------------------------------------------------------
    max_exercises_per_group: int = Field(
        default=3,
        ge=1,
        le=6,
        description="Upper bound on distinct exercises per muscle group in one session",
    )
    warmup_minutes: int = Field(
        default=10,
        ge=0,
        description="Warm-up time added to every session duration estimate",
    )

    # -------------------------------------------------------------------------
    # Performance Analysis
    # -------------------------------------------------------------------------
    analysis_window_days: int = Field(
        default=28,
        ge=7,
        description="Length of the current analysis window in days",
    )
    trend_threshold: float = Field(
        default=0.02,
        ge=0,
        lt=1,
        description="Relative change below which a metric is reported as stable",
    )
    deload_fatigue_threshold: float = Field(
        default=7.5,
        ge=1,
        le=10,
        description="Fatigue level at or above which a deload is recommended",
    )
    readiness_deload_threshold: float = Field(
        default=4.0,
        ge=0,
        le=10,
        description="Readiness score below which a deload is recommended",
    )

    @field_validator("default_one_rm_formula")
    @classmethod
    def validate_formula(cls, v: str) -> str:
        """Ensure the default formula is one the metrics module knows."""
        valid_formulas = {f.value for f in OneRepMaxFormula}
        if v.lower() not in valid_formulas:
            raise ValueError(
                f"Invalid formula '{v}'. Must be one of: {sorted(valid_formulas)}"
            )
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Engine settings instance
    """
    return Settings()
