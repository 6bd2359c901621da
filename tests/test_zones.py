"""Tests for zone distribution and training balance."""

import pytest

from training_load.metrics.zones import (
    TrainingBalance,
    classify_training_balance,
    classify_zone_distribution,
)
from training_load.models.rides import RideZone


class TestTrainingBalance:
    """Tests for balance classification priority."""

    def test_base_heavy_when_not_enough_high_intensity(self):
        """82/10/8 fails the polarized high-intensity check and is base-heavy."""
        assert classify_training_balance(82, 10, 8) == TrainingBalance.BASE_HEAVY

    def test_polarized_wins_over_base_heavy(self):
        """Both rules 1 and 2 hold at 84/0/16; the first one wins."""
        assert classify_training_balance(84, 0, 16) == TrainingBalance.POLARIZED

    @pytest.mark.parametrize(
        "low,medium,high,expected",
        [
            (76, 4, 20, TrainingBalance.POLARIZED),
            (85, 0, 15, TrainingBalance.BASE_HEAVY),
            (50, 45, 5, TrainingBalance.TEMPO_FOCUSED),
            (30, 41, 29, TrainingBalance.TEMPO_FOCUSED),
            (40, 25, 35, TrainingBalance.HIGH_INTENSITY),
            (80, 5, 15, TrainingBalance.BALANCED),
            (0, 0, 0, TrainingBalance.BALANCED),
        ],
    )
    def test_rules(self, low, medium, high, expected):
        assert classify_training_balance(low, medium, high) == expected

    def test_labels(self):
        assert TrainingBalance.BASE_HEAVY.label == "Base Building"
        assert TrainingBalance.POLARIZED.description.startswith("Ideal balance")
        for balance in TrainingBalance:
            assert balance.label
            assert balance.description


class TestZoneDistribution:
    """Tests for per-zone counting."""

    def _rides(self, make_ride, zone_counts):
        rides = []
        for zone, count in zone_counts.items():
            rides.extend(make_ride(zone=zone) for _ in range(count))
        return rides

    def test_base_heavy_distribution(self, make_ride):
        rides = self._rides(
            make_ride,
            {RideZone.ENDURANCE: 41, RideZone.TEMPO: 5, RideZone.THRESHOLD: 4},
        )
        summary = classify_zone_distribution(rides)

        assert summary.total_rides == 50
        assert summary.share(RideZone.ENDURANCE).count == 41
        assert summary.low_intensity_pct == pytest.approx(82)
        assert summary.medium_intensity_pct == pytest.approx(10)
        assert summary.high_intensity_pct == pytest.approx(8)
        assert summary.training_balance == TrainingBalance.BASE_HEAVY

    def test_unclassified_rides_excluded(self, make_ride):
        """Rides without a zone do not count toward the denominator."""
        rides = self._rides(make_ride, {RideZone.RECOVERY: 1, RideZone.VO2MAX: 1})
        rides.extend(make_ride(zone=None) for _ in range(8))
        rides.append(make_ride(zone="hill_sprints"))

        summary = classify_zone_distribution(rides)

        assert summary.total_rides == 2
        assert summary.share(RideZone.RECOVERY).percentage == pytest.approx(50)
        assert summary.share(RideZone.VO2MAX).percentage == pytest.approx(50)

    def test_polarized_distribution(self, make_ride):
        """19 low, 1 medium, 4 high out of 24 rides."""
        rides = self._rides(
            make_ride,
            {
                RideZone.RECOVERY: 3,
                RideZone.ENDURANCE: 16,
                RideZone.SWEET_SPOT: 1,
                RideZone.THRESHOLD: 1,
                RideZone.VO2MAX: 2,
                RideZone.ANAEROBIC: 1,
            },
        )
        summary = classify_zone_distribution(rides)

        assert summary.low_intensity_pct == pytest.approx(19 * 100 / 24)
        assert summary.high_intensity_pct == pytest.approx(4 * 100 / 24)
        assert summary.training_balance == TrainingBalance.POLARIZED

    def test_exact_boundaries_do_not_match(self, make_ride):
        """80% low and 15% high satisfy neither polarized nor base-heavy."""
        rides = self._rides(
            make_ride,
            {
                RideZone.ENDURANCE: 16,
                RideZone.TEMPO: 1,
                RideZone.VO2MAX: 3,
            },
        )
        summary = classify_zone_distribution(rides)

        assert summary.low_intensity_pct == 80
        assert summary.high_intensity_pct == 15
        assert summary.training_balance == TrainingBalance.BALANCED

    def test_empty(self):
        summary = classify_zone_distribution([])
        assert summary.total_rides == 0
        assert summary.low_intensity_pct == 0
        assert summary.training_balance == TrainingBalance.BALANCED
        assert all(summary.share(zone).percentage == 0 for zone in RideZone)

    def test_to_dict_lists_every_zone(self, make_ride):
        summary = classify_zone_distribution([make_ride(zone="tempo")])
        result = summary.to_dict()
        assert set(result["zones"]) == {zone.value for zone in RideZone}
        assert result["zones"]["tempo"] == {"count": 1, "percentage": 100.0}
        assert result["training_balance"] == "tempo-focused"
        assert result["training_balance_label"] == "Tempo Heavy"
