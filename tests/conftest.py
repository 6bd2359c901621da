"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pytest

from training_load.config import get_settings
from training_load.models.rides import RideSample


TODAY = date(2026, 3, 28)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_ride():
    """Factory for RideSample with sensible defaults."""

    def _make_ride(days_ago: int = 0, **overrides) -> RideSample:
        fields = {
            "date": TODAY - timedelta(days=days_ago),
            "duration_seconds": 3600,
            "distance_km": 30.0,
            "elevation_gain_m": 0.0,
        }
        fields.update(overrides)
        return RideSample(**fields)

    return _make_ride


@pytest.fixture
def daily_rides(make_ride):
    """One hour of riding (50 TSS) on each of the last `days` days."""

    def _daily_rides(days: int, **overrides):
        return [make_ride(days_ago=i, **overrides) for i in range(days)]

    return _daily_rides
