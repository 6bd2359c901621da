"""Configuration settings for the training load engine."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).parent.parent.parent  # project root in a src/ checkout


class Settings(BaseSettings):
    """Model constants, overridable through TRAINING_LOAD_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRAINING_LOAD_",
        env_file=str(PACKAGE_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fallback TSS estimate (no stress score on the ride)
    tss_per_hour: float = Field(default=50.0, gt=0)
    elevation_unit_m: float = Field(default=300.0, gt=0)
    tss_per_elevation_unit: float = Field(default=10.0, gt=0)

    # Fitness-fatigue model
    ctl_time_constant: int = Field(default=42, gt=0)
    atl_time_constant: int = Field(default=7, gt=0)

    # Analysis windows (days)
    metrics_window_days: int = Field(default=90, gt=0)
    pattern_window_days: int = Field(default=28, gt=0)

    monotony_caution_threshold: float = Field(default=2.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
