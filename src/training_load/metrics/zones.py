"""Intensity distribution across ride zones."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable

from ..models.rides import IntensityBand, RideSample, RideZone
from ..utils import coerce_non_negative

# Balance thresholds (% of classified rides)
POLARIZED_MIN_LOW_PCT = 75.0
POLARIZED_MIN_HIGH_PCT = 15.0
BASE_HEAVY_MIN_LOW_PCT = 80.0
TEMPO_FOCUSED_MIN_MEDIUM_PCT = 40.0
HIGH_INTENSITY_MIN_HIGH_PCT = 30.0


class TrainingBalance(str, Enum):
    """Overall shape of the intensity distribution."""
    POLARIZED = "polarized"
    BASE_HEAVY = "base-heavy"
    TEMPO_FOCUSED = "tempo-focused"
    HIGH_INTENSITY = "high-intensity"
    BALANCED = "balanced"

    @property
    def label(self) -> str:
        return BALANCE_INFO[self][0]

    @property
    def description(self) -> str:
        return BALANCE_INFO[self][1]


BALANCE_INFO = {
    TrainingBalance.POLARIZED: (
        "Polarized",
        "Ideal balance: mostly easy, some hard, minimal medium",
    ),
    TrainingBalance.BASE_HEAVY: (
        "Base Building",
        "Heavy endurance focus - good for building aerobic base",
    ),
    TrainingBalance.TEMPO_FOCUSED: (
        "Tempo Heavy",
        "Lots of medium intensity - consider more polarization",
    ),
    TrainingBalance.HIGH_INTENSITY: (
        "High Intensity",
        "High stress load - ensure adequate recovery",
    ),
    TrainingBalance.BALANCED: (
        "Balanced",
        "Mixed training approach",
    ),
}


@dataclass(frozen=True)
class ZoneShare:
    """Ride count and share of classified rides for one zone."""

    count: int = 0
    percentage: float = 0.0

    def to_dict(self) -> dict:
        return {"count": self.count, "percentage": self.percentage}


@dataclass(frozen=True)
class ZoneSummary:
    """Zone distribution for a window of rides."""

    zones: Dict[RideZone, ZoneShare] = field(default_factory=dict)
    total_rides: int = 0  # rides with a recognized zone
    low_intensity_pct: float = 0.0
    medium_intensity_pct: float = 0.0
    high_intensity_pct: float = 0.0
    training_balance: TrainingBalance = TrainingBalance.BALANCED

    def share(self, zone: RideZone) -> ZoneShare:
        """Share for a zone (zero share if the zone never occurred)."""
        return self.zones.get(zone, ZoneShare())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "zones": {zone.value: self.share(zone).to_dict() for zone in RideZone},
            "total_rides": self.total_rides,
            "low_intensity_pct": self.low_intensity_pct,
            "medium_intensity_pct": self.medium_intensity_pct,
            "high_intensity_pct": self.high_intensity_pct,
            "training_balance": self.training_balance.value,
            "training_balance_label": self.training_balance.label,
        }


def classify_training_balance(
    low_intensity_pct: float,
    medium_intensity_pct: float,
    high_intensity_pct: float,
) -> TrainingBalance:
    """
    Classify the intensity distribution.

    Rules are checked in order and the first match wins, since several can
    hold at once:
    1. polarized: low > 75% and high > 15%
    2. base-heavy: low > 80%
    3. tempo-focused: medium > 40%
    4. high-intensity: high > 30%
    5. balanced otherwise

    Args:
        low_intensity_pct: Recovery + endurance share
        medium_intensity_pct: Tempo + sweet spot share
        high_intensity_pct: Threshold + VO2max + anaerobic share

    Returns:
        TrainingBalance
    """
    low = coerce_non_negative(low_intensity_pct)
    medium = coerce_non_negative(medium_intensity_pct)
    high = coerce_non_negative(high_intensity_pct)

    if low > POLARIZED_MIN_LOW_PCT and high > POLARIZED_MIN_HIGH_PCT:
        return TrainingBalance.POLARIZED
    if low > BASE_HEAVY_MIN_LOW_PCT:
        return TrainingBalance.BASE_HEAVY
    if medium > TEMPO_FOCUSED_MIN_MEDIUM_PCT:
        return TrainingBalance.TEMPO_FOCUSED
    if high > HIGH_INTENSITY_MIN_HIGH_PCT:
        return TrainingBalance.HIGH_INTENSITY
    return TrainingBalance.BALANCED


def classify_zone_distribution(rides: Iterable[RideSample]) -> ZoneSummary:
    """
    Count rides per zone and classify the resulting distribution.

    Rides without a recognized zone are left out of the denominator.

    Args:
        rides: Rides in the analysis window

    Returns:
        ZoneSummary (all zeros and 'balanced' when no ride has a zone)
    """
    counts = {zone: 0 for zone in RideZone}
    for ride in rides:
        if ride.zone is not None:
            counts[ride.zone] += 1

    total = sum(counts.values())
    zones = {
        zone: ZoneShare(
            count=count,
            percentage=count * 100 / total if total > 0 else 0.0,
        )
        for zone, count in counts.items()
    }

    band_pct = {band: 0.0 for band in IntensityBand}
    for zone, zone_share in zones.items():
        band_pct[zone.band] += zone_share.percentage

    low = band_pct[IntensityBand.LOW]
    medium = band_pct[IntensityBand.MEDIUM]
    high = band_pct[IntensityBand.HIGH]

    return ZoneSummary(
        zones=zones,
        total_rides=total,
        low_intensity_pct=low,
        medium_intensity_pct=medium,
        high_intensity_pct=high,
        training_balance=classify_training_balance(low, medium, high),
    )
