"""Cycling power metrics (IF, power-based TSS, power zones)."""

from typing import List, Optional, Tuple

from ..models.rides import RideZone
from ..utils import coerce_non_negative, coerce_optional, round_half_up

# Upper bound of each zone as % of FTP, checked in order. Tempo runs up to
# 90% and sweet spot covers (90, 94].
POWER_ZONE_BOUNDS: List[Tuple[RideZone, float, bool]] = [
    # (zone, upper bound %FTP, upper bound inclusive)
    (RideZone.RECOVERY, 55.0, True),
    (RideZone.ENDURANCE, 75.0, True),
    (RideZone.TEMPO, 90.0, True),
    (RideZone.SWEET_SPOT, 94.0, True),
    (RideZone.THRESHOLD, 105.0, True),
    (RideZone.VO2MAX, 150.0, True),
]


def _raw_intensity_factor(normalized_power: float, ftp: float) -> float:
    ftp = coerce_non_negative(ftp)
    if ftp <= 0:
        return 0.0
    return coerce_non_negative(normalized_power) / ftp


def calculate_intensity_factor(normalized_power: float, ftp: float) -> float:
    """
    Calculate Intensity Factor (IF).

    IF = NP / FTP, rounded half up to 2 decimals. IF = 1.0 means the ride
    was ridden at threshold.

    Args:
        normalized_power: Normalized Power in watts
        ftp: Functional Threshold Power in watts

    Returns:
        Intensity Factor, or 0.0 without a positive FTP
    """
    return round_half_up(_raw_intensity_factor(normalized_power, ftp) * 100) / 100


def calculate_power_tss(
    duration_seconds: float,
    normalized_power: float,
    ftp: float,
) -> Optional[int]:
    """
    Calculate Training Stress Score from power.

    A TSS of 100 is one hour at FTP.

    Formula: TSS = hours * IF^2 * 100, with the unrounded IF

    Args:
        duration_seconds: Ride duration in seconds
        normalized_power: Normalized Power in watts
        ftp: Functional Threshold Power in watts

    Returns:
        TSS, or None when FTP is unknown
    """
    if coerce_non_negative(ftp) <= 0:
        return None

    intensity_factor = _raw_intensity_factor(normalized_power, ftp)
    hours = coerce_non_negative(duration_seconds) / 3600
    return round_half_up(hours * intensity_factor * intensity_factor * 100)


def classify_power_zone(power: float, ftp: float) -> Optional[RideZone]:
    """
    Return the training zone for a power value.

    Args:
        power: Power in watts
        ftp: Functional Threshold Power in watts

    Returns:
        RideZone, or None if power or FTP is missing
    """
    power = coerce_non_negative(power)
    ftp = coerce_non_negative(ftp)
    if power <= 0 or ftp <= 0:
        return None

    percentage = power * 100 / ftp
    for zone, upper, inclusive in POWER_ZONE_BOUNDS:
        if percentage < upper or (inclusive and percentage == upper):
            return zone
    return RideZone.ANAEROBIC


def classify_ride_zone(
    normalized_power: Optional[float],
    average_power: Optional[float],
    ftp: Optional[float],
) -> Optional[RideZone]:
    """Classify a whole ride by NP, falling back to average power."""
    power = coerce_optional(normalized_power) or coerce_optional(average_power)
    if not power or not ftp:
        return None
    return classify_power_zone(power, ftp)
