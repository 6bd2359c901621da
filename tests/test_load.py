"""Tests for training stress estimation."""

import pytest

from training_load.metrics.load import (
    DEFAULT_WEEKLY_TSS,
    estimate_planned_tss,
    estimate_tss,
    recommended_weekly_tss,
)


class TestEstimateTSS:
    """Tests for per-ride TSS estimation."""

    def test_stored_tss_is_authoritative(self, make_ride):
        """A stored TSS is returned unchanged regardless of duration/elevation."""
        ride = make_ride(
            duration_seconds=5 * 3600,
            elevation_gain_m=2000,
            training_stress_score=120,
        )
        assert estimate_tss(ride) == 120

    def test_fractional_stored_tss_not_rounded(self, make_ride):
        """Authoritative values pass through without rounding."""
        ride = make_ride(training_stress_score=87.4)
        assert estimate_tss(ride) == 87.4

    def test_fallback_hour_with_climbing(self, make_ride):
        """One hour and 300m of climbing gives 50 + 10 = 60."""
        ride = make_ride(duration_seconds=3600, elevation_gain_m=300)
        assert estimate_tss(ride) == 60

    def test_fallback_ignores_distance(self, make_ride):
        """Distance does not change the estimate."""
        short = make_ride(distance_km=10)
        long = make_ride(distance_km=80)
        assert estimate_tss(short) == estimate_tss(long) == 50

    def test_zero_stored_tss_falls_back(self, make_ride):
        """A stored TSS of 0 is not authoritative."""
        ride = make_ride(duration_seconds=7200, training_stress_score=0)
        assert estimate_tss(ride) == 100

    def test_all_zero_ride(self, make_ride):
        """An all-zero ride scores 0."""
        ride = make_ride(duration_seconds=0, distance_km=0, elevation_gain_m=0)
        assert estimate_tss(ride) == 0

    def test_missing_and_invalid_fields_never_negative(self, make_ride):
        """None, NaN and negative inputs are coerced, never producing negative load."""
        rides = [
            make_ride(duration_seconds=None, elevation_gain_m=None),
            make_ride(duration_seconds=float("nan"), elevation_gain_m=float("inf")),
            make_ride(duration_seconds=-3600, elevation_gain_m=-500),
            make_ride(training_stress_score=-40, duration_seconds=0),
        ]
        for ride in rides:
            assert estimate_tss(ride) == 0

    def test_rounds_half_up(self, make_ride):
        """The fallback rounds halves up, not to even."""
        # 45 min = 37.5 TSS
        ride = make_ride(duration_seconds=2700)
        assert estimate_tss(ride) == 38

    def test_custom_constants(self, make_ride):
        """Constants can be tuned per sport or profile."""
        ride = make_ride(duration_seconds=3600, elevation_gain_m=500)
        tss = estimate_tss(
            ride,
            tss_per_hour=60,
            elevation_unit_m=500,
            tss_per_elevation_unit=20,
        )
        assert tss == 80

    def test_idempotent(self, make_ride):
        """Repeated calls give identical results."""
        ride = make_ride(duration_seconds=4321, elevation_gain_m=777)
        assert estimate_tss(ride) == estimate_tss(ride)


class TestPlannedTSS:
    """Tests for planned workout TSS estimation."""

    def test_endurance_matches_ride_fallback(self):
        """Endurance workouts use a 1.0x multiplier."""
        assert estimate_planned_tss(90, elevation_gain_m=300) == 85

    def test_intensity_multipliers(self):
        """Harder workout types score higher for the same duration."""
        recovery = estimate_planned_tss(60, workout_type="recovery")
        endurance = estimate_planned_tss(60, workout_type="endurance")
        vo2max = estimate_planned_tss(60, workout_type="vo2max")
        assert recovery == 25
        assert endurance == 50
        assert vo2max == 100

    def test_unknown_type_counts_as_endurance(self):
        assert estimate_planned_tss(60, workout_type="gravel_bash") == 50

    def test_rest_day(self):
        assert estimate_planned_tss(0) == 0


class TestRecommendedWeeklyTSS:
    """Tests for weekly TSS recommendations."""

    @pytest.mark.parametrize(
        "level,hours,expected",
        [
            ("beginner", 4, 220),
            ("beginner", 10, 350),
            ("intermediate", 2, 350),
            ("intermediate", 8, 440),
            ("advanced", 12, 660),
            ("advanced", 20, 900),
        ],
    )
    def test_clamped_to_level_range(self, level, hours, expected):
        assert recommended_weekly_tss(level, hours) == expected

    def test_unknown_level(self):
        assert recommended_weekly_tss("pro", 25) == DEFAULT_WEEKLY_TSS
