"""Tests for configuration settings."""

import pytest
from pydantic import ValidationError

from training_load.config import Settings, get_settings
from training_load.services.engine import TrainingLoadEngine


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("TSS_PER_HOUR", "CTL_TIME_CONSTANT", "ATL_TIME_CONSTANT"):
            monkeypatch.delenv(f"TRAINING_LOAD_{name}", raising=False)
        settings = Settings()

        assert settings.tss_per_hour == 50
        assert settings.elevation_unit_m == 300
        assert settings.tss_per_elevation_unit == 10
        assert settings.ctl_time_constant == 42
        assert settings.atl_time_constant == 7
        assert settings.metrics_window_days == 90
        assert settings.pattern_window_days == 28
        assert settings.monotony_caution_threshold == 2.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TRAINING_LOAD_TSS_PER_HOUR", "60")
        monkeypatch.setenv("TRAINING_LOAD_CTL_TIME_CONSTANT", "28")

        settings = get_settings()

        assert settings.tss_per_hour == 60
        assert settings.ctl_time_constant == 28

    def test_invalid_value_fails_fast(self, monkeypatch):
        monkeypatch.setenv("TRAINING_LOAD_ATL_TIME_CONSTANT", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_engine_defaults_to_cached_settings(self, monkeypatch, make_ride):
        monkeypatch.setenv("TRAINING_LOAD_TSS_PER_HOUR", "80")
        engine = TrainingLoadEngine()

        assert engine.settings is get_settings()
        assert engine.estimate_tss(make_ride(duration_seconds=3600)) == 80
