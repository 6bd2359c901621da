"""Fitness-Fatigue model calculations (CTL, ATL, TSB) and load variability."""

import math
import statistics
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..models.rides import DailyLoad, RideSample
from ..utils import coerce_finite, coerce_non_negative, round_half_up
from .load import estimate_tss

CTL_TIME_CONSTANT = 42
ATL_TIME_CONSTANT = 7
MONOTONY_CAUTION_THRESHOLD = 2.0


class TSBStatus(str, Enum):
    """Training state derived from Training Stress Balance."""
    FRESH = "fresh"
    RESTED = "rested"
    NEUTRAL = "neutral"
    FATIGUED = "fatigued"
    VERY_FATIGUED = "very_fatigued"


@dataclass(frozen=True)
class TSBInterpretation:
    """Human-readable reading of a TSB value."""

    status: TSBStatus
    color: str
    message: str
    recommendation: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "color": self.color,
            "message": self.message,
            "recommendation": self.recommendation,
        }


# Strict lower bounds, freshest first. A TSB equal to a bound falls into the
# next (more fatigued) bucket; anything at or below -30 is very fatigued.
TSB_BANDS = [
    (25.0, TSBInterpretation(
        status=TSBStatus.FRESH,
        color="#4ade80",
        message="Very fresh - ready for hard training or racing",
        recommendation="Good time for a hard workout or event",
    )),
    (5.0, TSBInterpretation(
        status=TSBStatus.RESTED,
        color="#60a5fa",
        message="Well rested - performing at peak",
        recommendation="Maintain current training load",
    )),
    (-10.0, TSBInterpretation(
        status=TSBStatus.NEUTRAL,
        color="#facc15",
        message="Balanced - normal training state",
        recommendation="Continue with planned training",
    )),
    (-30.0, TSBInterpretation(
        status=TSBStatus.FATIGUED,
        color="#f97316",
        message="Building fatigue - normal during hard training",
        recommendation="Consider a recovery day soon",
    )),
]
VERY_FATIGUED = TSBInterpretation(
    status=TSBStatus.VERY_FATIGUED,
    color="#ef4444",
    message="High fatigue - risk of overtraining",
    recommendation="Take a recovery week immediately",
)


class RampRateStatus(str, Enum):
    """How fast fitness (CTL) is changing week over week."""
    DANGER = "danger"
    WARNING = "warning"
    OPTIMAL = "optimal"
    MAINTENANCE = "maintenance"
    RECOVERY = "recovery"
    DETRAINING = "detraining"


# status -> (color, message template, recommendation)
RAMP_RATE_INFO = {
    RampRateStatus.DANGER: (
        "red",
        "Ramp rate of {rate} TSS/week is dangerously high",
        "Significantly reduce training load immediately. "
        "High risk of overtraining, injury, or illness.",
    ),
    RampRateStatus.WARNING: (
        "orange",
        "Ramp rate of {rate} TSS/week is aggressive",
        "Consider backing off slightly. Monitor fatigue levels closely.",
    ),
    RampRateStatus.OPTIMAL: (
        "green",
        "Ramp rate of {rate} TSS/week is optimal",
        "Great job! This is the ideal rate for sustainable fitness gains.",
    ),
    RampRateStatus.MAINTENANCE: (
        "blue",
        "Ramp rate of {rate} TSS/week - maintaining fitness",
        "You're maintaining fitness. Increase load slightly if looking to improve.",
    ),
    RampRateStatus.RECOVERY: (
        "teal",
        "Ramp rate of {rate} TSS/week - planned recovery",
        "This could be a recovery week or taper. Normal if intentional.",
    ),
    RampRateStatus.DETRAINING: (
        "yellow",
        "Ramp rate of {rate} TSS/week - losing fitness",
        "Significant fitness loss occurring. Resume training if unintentional.",
    ),
}

RAMP_RATE_MIN_DAYS = 14


@dataclass(frozen=True)
class RampRate:
    """Week-over-week change in CTL and its reading."""

    weekly_ramp_rate: float  # CTL now - CTL 7 days ago
    previous_week_ramp_rate: float  # CTL 7 days ago - CTL 14 days ago
    monthly_ramp_rate: float  # average weekly change over 28 days, 1 decimal
    trend: float  # weekly - previous week
    ctl_now: float
    ctl_one_week_ago: float
    status: RampRateStatus
    color: str
    message: str
    recommendation: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "weekly_ramp_rate": self.weekly_ramp_rate,
            "previous_week_ramp_rate": self.previous_week_ramp_rate,
            "monthly_ramp_rate": self.monthly_ramp_rate,
            "trend": self.trend,
            "ctl_now": self.ctl_now,
            "ctl_one_week_ago": self.ctl_one_week_ago,
            "status": self.status.value,
            "color": self.color,
            "message": self.message,
            "recommendation": self.recommendation,
        }


class LoadTrend(str, Enum):
    """Direction of recent training load."""
    BUILDING = "building"
    MAINTAINING = "maintaining"
    RECOVERING = "recovering"
    DECLINING = "declining"


class FitnessTrend(str, Enum):
    """Direction of fitness relative to current daily load."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class TrainingMetrics:
    """Current fitness, fatigue and form for a gapless daily series."""

    date: date
    ctl: float  # Chronic Training Load (fitness)
    atl: float  # Acute Training Load (fatigue)
    tsb: float  # Training Stress Balance (form) = CTL - ATL
    weekly_tss: float
    monthly_tss: float
    interpretation: TSBInterpretation
    ramp_rate: Optional[RampRate] = None  # None for series shorter than 14 days
    load_trend: LoadTrend = LoadTrend.BUILDING
    fitness_trend: FitnessTrend = FitnessTrend.STABLE

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "ctl": self.ctl,
            "atl": self.atl,
            "tsb": self.tsb,
            "weekly_tss": self.weekly_tss,
            "monthly_tss": self.monthly_tss,
            "interpretation": self.interpretation.to_dict(),
            "ramp_rate": self.ramp_rate.to_dict() if self.ramp_rate else None,
            "load_trend": self.load_trend.value,
            "fitness_trend": self.fitness_trend.value,
        }


def build_daily_series(
    rides: Iterable[RideSample],
    window_start: date,
    window_end: date,
    estimator: Callable[[RideSample], float] = estimate_tss,
) -> List[DailyLoad]:
    """
    Aggregate rides into one DailyLoad per calendar day.

    Every day in [window_start, window_end] is present, oldest first, with
    0 for days without rides. The exponential averages assume a gapless
    series, so days are never skipped. Rides outside the window are ignored.

    Args:
        rides: Rides to aggregate (any order)
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)
        estimator: Per-ride stress function

    Returns:
        List of DailyLoad, empty if window_start is after window_end
    """
    if window_start > window_end:
        return []

    totals: Dict[date, float] = defaultdict(float)
    for ride in rides:
        if window_start <= ride.date <= window_end:
            totals[ride.date] += coerce_non_negative(estimator(ride))

    day_count = (window_end - window_start).days + 1
    series = []
    for offset in range(day_count):
        day = window_start + timedelta(days=offset)
        # a day total that overflows to infinity counts as unusable
        tss = coerce_non_negative(totals.get(day, 0.0))
        series.append(DailyLoad(date=day, tss=tss))
    return series


def _weighted_load(daily_tss: Sequence[float], time_constant: int) -> int:
    """Exponentially time-weighted sum of the series, most recent day weight 1."""
    if not daily_tss or time_constant <= 0:
        return 0

    decay = 1 / time_constant
    n = len(daily_tss)
    total = 0.0
    for i, tss in enumerate(daily_tss):
        weight = math.exp(-decay * (n - 1 - i))
        total += coerce_non_negative(tss) * weight
    return round_half_up(total * decay)


def calculate_ctl(
    daily_tss: Sequence[float],
    time_constant: int = CTL_TIME_CONSTANT,
) -> int:
    """
    Chronic Training Load ("fitness").

    For a series of n days (oldest first) with decay = 1 / time_constant:

        weight(i) = exp(-decay * (n - 1 - i))
        ctl = round(sum(tss[i] * weight(i)) * decay)

    Uses the whole series. Days older than two or three time constants
    contribute very little.

    Args:
        daily_tss: Gapless daily TSS, oldest first
        time_constant: Decay time constant in days (default 42)

    Returns:
        CTL (0 for an empty series)
    """
    return _weighted_load(daily_tss, time_constant)


def calculate_atl(
    daily_tss: Sequence[float],
    time_constant: int = ATL_TIME_CONSTANT,
) -> int:
    """
    Acute Training Load ("fatigue").

    Same weighting as CTL with a 7-day time constant, applied to only the
    trailing time_constant days of the series. Passing a series that is
    already trimmed to the last 7 days gives the same result.

    Args:
        daily_tss: Gapless daily TSS, oldest first
        time_constant: Decay time constant and window in days (default 7)

    Returns:
        ATL (0 for an empty series)
    """
    if time_constant <= 0:
        return 0
    return _weighted_load(list(daily_tss)[-time_constant:], time_constant)


def calculate_tsb(ctl: float, atl: float) -> float:
    """Training Stress Balance ("form"): CTL - ATL, not rounded further."""
    return coerce_finite(ctl) - coerce_finite(atl)


def interpret_tsb(tsb: float) -> TSBInterpretation:
    """
    Map a TSB value to a training-state label.

    Bands: > 25 fresh, > 5 rested, > -10 neutral, > -30 fatigued,
    otherwise very fatigued.
    """
    tsb = coerce_finite(tsb)
    for lower_bound, interpretation in TSB_BANDS:
        if tsb > lower_bound:
            return interpretation
    return VERY_FATIGUED


def trailing_sum(daily_tss: Sequence[float], days: int) -> float:
    """Total TSS over the last `days` entries of the series."""
    if days <= 0:
        return 0.0
    total = sum(coerce_non_negative(tss) for tss in list(daily_tss)[-days:])
    return coerce_non_negative(total)


def weekly_loads(daily_tss: Sequence[float], weeks: int = 4) -> List[float]:
    """
    Split the trailing weeks of a daily series into 7-day totals.

    Args:
        daily_tss: Gapless daily TSS, oldest first
        weeks: Number of trailing weeks

    Returns:
        Weekly totals, oldest week first. Weeks before the start of the
        series total 0.
    """
    values = [coerce_non_negative(tss) for tss in daily_tss]
    n = len(values)
    totals = []
    for week in range(max(weeks, 0)):
        end = n - 7 * week
        start = max(end - 7, 0)
        total = sum(values[start:end]) if end > 0 else 0.0
        totals.append(coerce_non_negative(total))
    totals.reverse()
    return totals


def calculate_monotony(daily_tss: Sequence[float]) -> float:
    """
    Training monotony: mean daily load over its standard deviation.

    Uses the population standard deviation. When every day is identical the
    deviation is 0 and is replaced by 1, so monotony equals the mean. That
    is a deliberate fallback rather than a true ratio.

    Returns:
        Monotony, or 0.0 for an empty or all-zero series or one whose
        statistics overflow
    """
    values = [coerce_non_negative(tss) for tss in daily_tss]
    if not values:
        return 0.0

    try:
        avg = statistics.fmean(values)
        if avg <= 0:
            return 0.0
        stddev = statistics.pstdev(values)
    except OverflowError:
        return 0.0
    return coerce_finite(avg / (stddev or 1))


def is_monotonous(
    monotony: float,
    threshold: float = MONOTONY_CAUTION_THRESHOLD,
) -> bool:
    """Whether monotony is high enough to flag as a caution."""
    return coerce_non_negative(monotony) > threshold


def classify_ramp_rate(weekly_ramp_rate: float) -> RampRateStatus:
    """
    Map a weekly CTL change to a ramp-rate status.

    Bands: > 10 danger, > 7 warning, >= 3 optimal, >= 0 maintenance,
    >= -5 recovery, otherwise detraining.
    """
    rate = coerce_finite(weekly_ramp_rate)
    if rate > 10:
        return RampRateStatus.DANGER
    if rate > 7:
        return RampRateStatus.WARNING
    if rate >= 3:
        return RampRateStatus.OPTIMAL
    if rate >= 0:
        return RampRateStatus.MAINTENANCE
    if rate >= -5:
        return RampRateStatus.RECOVERY
    return RampRateStatus.DETRAINING


def calculate_ramp_rate(
    daily_tss: Sequence[float],
    current_ctl: Optional[float] = None,
    time_constant: int = CTL_TIME_CONSTANT,
) -> Optional[RampRate]:
    """
    Weekly and monthly rate of change of CTL.

    CTL on an earlier day is the CTL of the series truncated at that day;
    a day before the start of the series has CTL 0.

    Args:
        daily_tss: Gapless daily TSS, oldest first, last entry is today
        current_ctl: Today's CTL if already known (computed when missing or 0)
        time_constant: CTL time constant in days

    Returns:
        RampRate, or None when the series covers fewer than 14 days
    """
    values = list(daily_tss)
    if len(values) < RAMP_RATE_MIN_DAYS:
        return None

    def ctl_days_ago(days: int) -> int:
        end = len(values) - days
        if end <= 0:
            return 0
        return calculate_ctl(values[:end], time_constant)

    ctl_now = coerce_finite(current_ctl) or ctl_days_ago(0)
    ctl_one_week_ago = ctl_days_ago(7)
    ctl_two_weeks_ago = ctl_days_ago(14)
    ctl_four_weeks_ago = ctl_days_ago(28)

    weekly = ctl_now - ctl_one_week_ago
    previous_week = ctl_one_week_ago - ctl_two_weeks_ago
    monthly = round_half_up((ctl_now - ctl_four_weeks_ago) / 4 * 10) / 10

    status = classify_ramp_rate(weekly)
    color, message, recommendation = RAMP_RATE_INFO[status]
    if status in (RampRateStatus.RECOVERY, RampRateStatus.DETRAINING):
        rate = f"{weekly:g}"
    else:
        rate = f"{weekly:+g}"

    return RampRate(
        weekly_ramp_rate=weekly,
        previous_week_ramp_rate=previous_week,
        monthly_ramp_rate=monthly,
        trend=weekly - previous_week,
        ctl_now=ctl_now,
        ctl_one_week_ago=ctl_one_week_ago,
        status=status,
        color=color,
        message=message.format(rate=rate),
        recommendation=recommendation,
    )


def classify_load_trend(daily_tss: Sequence[float]) -> LoadTrend:
    """
    Compare the last two weeks of load with the two weeks before.

    Change above +15% is building, below -30% declining, below -15%
    recovering, otherwise maintaining. Fewer than 28 days, or no load in
    the earlier fortnight, reads as building.
    """
    values = [coerce_non_negative(tss) for tss in daily_tss]
    if len(values) < 28:
        return LoadTrend.BUILDING

    recent = sum(values[-14:]) / 2
    prior = sum(values[-28:-14]) / 2
    if prior == 0:
        return LoadTrend.BUILDING

    change = coerce_finite((recent - prior) / prior)
    if change > 0.15:
        return LoadTrend.BUILDING
    if change < -0.30:
        return LoadTrend.DECLINING
    if change < -0.15:
        return LoadTrend.RECOVERING
    return LoadTrend.MAINTAINING


def classify_fitness_trend(ctl: float, avg_daily_tss: float) -> FitnessTrend:
    """
    Whether current daily load is building or eroding fitness.

    Average daily TSS more than 10% above CTL is improving, more than 20%
    below is declining.
    """
    ctl = coerce_finite(ctl)
    avg_daily_tss = coerce_non_negative(avg_daily_tss)
    if avg_daily_tss > ctl * 1.1:
        return FitnessTrend.IMPROVING
    if avg_daily_tss < ctl * 0.8:
        return FitnessTrend.DECLINING
    return FitnessTrend.STABLE


def calculate_training_metrics(
    daily_tss: Sequence[float],
    as_of: date,
    ctl_time_constant: int = CTL_TIME_CONSTANT,
    atl_time_constant: int = ATL_TIME_CONSTANT,
) -> TrainingMetrics:
    """
    CTL, ATL, TSB, trailing totals and trends for a series ending on as_of.

    Args:
        daily_tss: Gapless daily TSS, oldest first, last entry is as_of
        as_of: The day the series ends on
        ctl_time_constant: CTL time constant in days
        atl_time_constant: ATL time constant and window in days

    Returns:
        TrainingMetrics for as_of
    """
    ctl = calculate_ctl(daily_tss, ctl_time_constant)
    atl = calculate_atl(daily_tss, atl_time_constant)
    tsb = calculate_tsb(ctl, atl)
    weekly_tss = trailing_sum(daily_tss, 7)

    return TrainingMetrics(
        date=as_of,
        ctl=ctl,
        atl=atl,
        tsb=tsb,
        weekly_tss=weekly_tss,
        monthly_tss=trailing_sum(daily_tss, 30),
        interpretation=interpret_tsb(tsb),
        ramp_rate=calculate_ramp_rate(daily_tss, time_constant=ctl_time_constant),
        load_trend=classify_load_trend(daily_tss),
        fitness_trend=classify_fitness_trend(ctl, weekly_tss / 7),
    )
