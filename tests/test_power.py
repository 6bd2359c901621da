"""Tests for cycling power metrics."""

import pytest

from training_load.metrics.power import (
    calculate_intensity_factor,
    calculate_power_tss,
    classify_power_zone,
    classify_ride_zone,
)
from training_load.models.rides import RideZone


class TestIntensityFactor:
    """Tests for Intensity Factor calculation."""

    def test_at_threshold(self):
        assert calculate_intensity_factor(250, 250) == 1.0

    def test_below_threshold(self):
        assert calculate_intensity_factor(150, 200) == pytest.approx(0.75)

    def test_zero_ftp(self):
        assert calculate_intensity_factor(200, 0) == 0.0

    def test_rounded_to_two_decimals(self):
        """233 / 300 = 0.7767 reads as 0.78."""
        assert calculate_intensity_factor(233, 300) == 0.78


class TestPowerTSS:
    """Tests for power-based Training Stress Score."""

    def test_one_hour_at_ftp(self):
        """One hour at FTP is 100 TSS by definition."""
        assert calculate_power_tss(3600, 200, 200) == 100

    def test_two_hours_endurance(self):
        """2h at IF 0.75: 2 * 0.5625 * 100 = 112.5, rounded half up."""
        assert calculate_power_tss(7200, 150, 200) == 113

    def test_uses_unrounded_intensity_factor(self):
        """1h at IF 0.7767 is 60.3 TSS; the rounded 0.78 would give 61."""
        assert calculate_power_tss(3600, 233, 300) == 60

    def test_no_ftp(self):
        assert calculate_power_tss(3600, 200, 0) is None
        assert calculate_power_tss(3600, 200, None) is None

    def test_no_duration(self):
        assert calculate_power_tss(0, 200, 200) == 0


class TestPowerZones:
    """Tests for power-to-zone classification."""

    @pytest.mark.parametrize(
        "power,zone",
        [
            (100, RideZone.RECOVERY),
            (110, RideZone.RECOVERY),
            (111, RideZone.ENDURANCE),
            (150, RideZone.ENDURANCE),
            (170, RideZone.TEMPO),
            (176, RideZone.TEMPO),
            (180, RideZone.TEMPO),
            (181, RideZone.SWEET_SPOT),
            (188, RideZone.SWEET_SPOT),
            (200, RideZone.THRESHOLD),
            (210, RideZone.THRESHOLD),
            (250, RideZone.VO2MAX),
            (300, RideZone.VO2MAX),
            (320, RideZone.ANAEROBIC),
        ],
    )
    def test_zone_boundaries(self, power, zone):
        assert classify_power_zone(power, 200) == zone

    def test_missing_inputs(self):
        assert classify_power_zone(0, 200) is None
        assert classify_power_zone(200, 0) is None

    def test_ride_prefers_normalized_power(self):
        assert classify_ride_zone(250, 150, 200) == RideZone.VO2MAX

    def test_ride_falls_back_to_average_power(self):
        assert classify_ride_zone(None, 150, 200) == RideZone.ENDURANCE

    def test_ride_without_power_or_ftp(self):
        assert classify_ride_zone(None, None, 200) is None
        assert classify_ride_zone(200, 180, None) is None
