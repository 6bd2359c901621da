"""Training stress estimation (TSS fallbacks and planning targets)."""

from typing import Dict, Tuple

from ..models.rides import RideSample
from ..utils import coerce_non_negative, round_half_up

# Fallback estimate: a moderate endurance ride costs ~50 TSS per hour,
# and every 300m of climbing adds ~10 TSS on top.
DEFAULT_TSS_PER_HOUR = 50.0
DEFAULT_ELEVATION_UNIT_M = 300.0
DEFAULT_TSS_PER_ELEVATION_UNIT = 10.0

WORKOUT_INTENSITY_MULTIPLIERS: Dict[str, float] = {
    "recovery": 0.5,
    "endurance": 1.0,
    "tempo": 1.3,
    "sweet_spot": 1.5,
    "threshold": 1.7,
    "vo2max": 2.0,
    "hill_repeats": 1.6,
    "intervals": 1.6,
    "long_ride": 1.0,
}

# Weekly TSS ranges per fitness level (min, max)
FITNESS_LEVEL_WEEKLY_TSS: Dict[str, Tuple[int, int]] = {
    "beginner": (200, 350),
    "intermediate": (350, 600),
    "advanced": (600, 900),
}
MODERATE_TSS_PER_HOUR = 55
DEFAULT_WEEKLY_TSS = 300


def _fallback_tss(
    duration_seconds: float,
    elevation_gain_m: float,
    tss_per_hour: float,
    elevation_unit_m: float,
    tss_per_elevation_unit: float,
) -> float:
    base = (coerce_non_negative(duration_seconds) / 3600) * coerce_non_negative(tss_per_hour)
    if elevation_unit_m and elevation_unit_m > 0:
        elevation_factor = (
            coerce_non_negative(elevation_gain_m) / elevation_unit_m
        ) * coerce_non_negative(tss_per_elevation_unit)
    else:
        elevation_factor = 0.0
    return base + elevation_factor


def estimate_tss(
    ride: RideSample,
    tss_per_hour: float = DEFAULT_TSS_PER_HOUR,
    elevation_unit_m: float = DEFAULT_ELEVATION_UNIT_M,
    tss_per_elevation_unit: float = DEFAULT_TSS_PER_ELEVATION_UNIT,
) -> float:
    """
    Training Stress Score for a completed ride.

    A positive stored TSS is authoritative and returned unchanged. Without
    one, falls back to an approximation: duration at an assumed moderate
    intensity plus a climbing correction.

        base = hours * tss_per_hour
        elevation_factor = (elevation_gain_m / elevation_unit_m) * tss_per_elevation_unit
        tss = round(base + elevation_factor)

    The fallback is not physiologically exact. It only gives a
    deterministic, non-negative placeholder when no real stress data
    exists. Distance is ignored.

    Args:
        ride: The ride to score
        tss_per_hour: Assumed stress per hour of riding
        elevation_unit_m: Climbing per elevation unit in meters
        tss_per_elevation_unit: Stress added per elevation unit

    Returns:
        TSS (>= 0; 0 for an all-zero ride)
    """
    if ride.has_stress_score:
        return ride.training_stress_score

    return round_half_up(
        _fallback_tss(
            ride.duration_seconds,
            ride.elevation_gain_m,
            tss_per_hour,
            elevation_unit_m,
            tss_per_elevation_unit,
        )
    )


def estimate_planned_tss(
    duration_minutes: float,
    elevation_gain_m: float = 0.0,
    workout_type: str = "endurance",
    tss_per_hour: float = DEFAULT_TSS_PER_HOUR,
    elevation_unit_m: float = DEFAULT_ELEVATION_UNIT_M,
    tss_per_elevation_unit: float = DEFAULT_TSS_PER_ELEVATION_UNIT,
) -> int:
    """
    Estimate TSS for a planned workout that has no power target.

    Same base formula as the ride fallback, scaled by an intensity
    multiplier for the workout type (recovery 0.5x up to VO2max 2.0x).
    Unknown workout types count as endurance (1.0x).

    Args:
        duration_minutes: Planned duration in minutes
        elevation_gain_m: Planned climbing in meters
        workout_type: Key of WORKOUT_INTENSITY_MULTIPLIERS

    Returns:
        Estimated TSS
    """
    multiplier = WORKOUT_INTENSITY_MULTIPLIERS.get(workout_type, 1.0)
    tss = _fallback_tss(
        coerce_non_negative(duration_minutes) * 60,
        elevation_gain_m,
        tss_per_hour,
        elevation_unit_m,
        tss_per_elevation_unit,
    )
    return round_half_up(tss * multiplier)


def recommended_weekly_tss(fitness_level: str, hours_per_week: float) -> float:
    """
    Recommended weekly TSS for the available training time.

    Assumes ~55 TSS per hour of moderate riding and clamps the result to
    the range for the fitness level.

    Args:
        fitness_level: 'beginner', 'intermediate' or 'advanced'
        hours_per_week: Hours available for training

    Returns:
        Weekly TSS target (300 for an unknown fitness level)
    """
    bounds = FITNESS_LEVEL_WEEKLY_TSS.get(fitness_level)
    if bounds is None:
        return DEFAULT_WEEKLY_TSS

    low, high = bounds
    estimated = coerce_non_negative(hours_per_week) * MODERATE_TSS_PER_HOUR
    return max(low, min(high, estimated))
