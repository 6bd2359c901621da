"""Training load metric calculations."""

from .load import (
    estimate_tss,
    estimate_planned_tss,
    recommended_weekly_tss,
)
from .fitness import (
    TSBStatus,
    TSBInterpretation,
    TrainingMetrics,
    RampRateStatus,
    RampRate,
    LoadTrend,
    FitnessTrend,
    build_daily_series,
    calculate_ctl,
    calculate_atl,
    calculate_tsb,
    interpret_tsb,
    trailing_sum,
    weekly_loads,
    calculate_monotony,
    is_monotonous,
    classify_ramp_rate,
    calculate_ramp_rate,
    classify_load_trend,
    classify_fitness_trend,
    calculate_training_metrics,
)
from .zones import (
    TrainingBalance,
    ZoneShare,
    ZoneSummary,
    classify_training_balance,
    classify_zone_distribution,
)
from .power import (
    calculate_intensity_factor,
    calculate_power_tss,
    classify_power_zone,
    classify_ride_zone,
)

__all__ = [
    # Stress estimation
    "estimate_tss",
    "estimate_planned_tss",
    "recommended_weekly_tss",
    # Fitness model
    "TSBStatus",
    "TSBInterpretation",
    "TrainingMetrics",
    "RampRateStatus",
    "RampRate",
    "LoadTrend",
    "FitnessTrend",
    "build_daily_series",
    "calculate_ctl",
    "calculate_atl",
    "calculate_tsb",
    "interpret_tsb",
    "trailing_sum",
    "weekly_loads",
    "calculate_monotony",
    "is_monotonous",
    "classify_ramp_rate",
    "calculate_ramp_rate",
    "classify_load_trend",
    "classify_fitness_trend",
    "calculate_training_metrics",
    # Zone distribution
    "TrainingBalance",
    "ZoneShare",
    "ZoneSummary",
    "classify_training_balance",
    "classify_zone_distribution",
    # Power metrics (cycling)
    "calculate_intensity_factor",
    "calculate_power_tss",
    "classify_power_zone",
    "classify_ride_zone",
]
