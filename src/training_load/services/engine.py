"""
Training load engine.

Single entry point for the fitness/fatigue/form model and the intensity
distribution diagnostics. Every method is a pure function of its arguments
and the engine's settings: nothing is cached and no state is kept between
calls, so one engine can be shared freely.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
import logging
from typing import Iterable, List, Optional, Sequence

from ..config import Settings
from ..metrics import fitness, load, power, zones
from ..metrics.fitness import (
    RampRate,
    RampRateStatus,
    TrainingMetrics,
    TSBInterpretation,
)
from ..metrics.zones import ZoneSummary
from ..models.rides import DailyLoad, RideSample
from .base import BaseService


@dataclass(frozen=True)
class TrainingPatterns:
    """Recent training patterns: intensity mix, weekly load and monotony."""

    date: date
    zone_summary: ZoneSummary
    weekly_tss: List[float] = field(default_factory=list)  # oldest week first
    avg_weekly_tss: float = 0.0
    monotony: float = 0.0
    monotony_caution: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "zone_summary": self.zone_summary.to_dict(),
            "weekly_tss": list(self.weekly_tss),
            "avg_weekly_tss": self.avg_weekly_tss,
            "monotony": self.monotony,
            "monotony_caution": self.monotony_caution,
        }


class TrainingLoadEngine(BaseService):
    """Computes training load metrics from ride samples."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def estimate_tss(self, ride: RideSample) -> float:
        """TSS for a ride: stored value if positive, otherwise the fallback estimate."""
        return load.estimate_tss(
            ride,
            tss_per_hour=self.settings.tss_per_hour,
            elevation_unit_m=self.settings.elevation_unit_m,
            tss_per_elevation_unit=self.settings.tss_per_elevation_unit,
        )

    def build_daily_series(
        self,
        rides: Iterable[RideSample],
        window_start: date,
        window_end: date,
    ) -> List[DailyLoad]:
        """Gapless per-day TSS for [window_start, window_end]."""
        series = fitness.build_daily_series(
            rides, window_start, window_end, estimator=self.estimate_tss
        )
        self.logger.debug(
            f"Built daily series {window_start} to {window_end}: {len(series)} days"
        )
        return series

    def calculate_ctl(self, daily_tss: Sequence[float]) -> int:
        return fitness.calculate_ctl(daily_tss, self.settings.ctl_time_constant)

    def calculate_atl(self, daily_tss: Sequence[float]) -> int:
        return fitness.calculate_atl(daily_tss, self.settings.atl_time_constant)

    def calculate_tsb(self, ctl: float, atl: float) -> float:
        return fitness.calculate_tsb(ctl, atl)

    def interpret_tsb(self, tsb: float) -> TSBInterpretation:
        return fitness.interpret_tsb(tsb)

    def classify_zone_distribution(self, rides: Iterable[RideSample]) -> ZoneSummary:
        summary = zones.classify_zone_distribution(rides)
        self.logger.debug(
            f"Zone distribution over {summary.total_rides} classified rides: "
            f"{summary.training_balance.value}"
        )
        return summary

    def calculate_monotony(self, daily_tss: Sequence[float]) -> float:
        return fitness.calculate_monotony(daily_tss)

    def calculate_ramp_rate(self, daily_tss: Sequence[float]) -> Optional[RampRate]:
        """Weekly CTL change, or None for fewer than 14 days of data."""
        return fitness.calculate_ramp_rate(
            daily_tss, time_constant=self.settings.ctl_time_constant
        )

    # ------------------------------------------------------------------
    # Composite views
    # ------------------------------------------------------------------

    def enrich_rides(
        self,
        rides: Iterable[RideSample],
        ftp: Optional[float],
    ) -> List[RideSample]:
        """
        Fill in TSS and zone from power data where the ride lacks them.

        Existing stress scores and zones are never replaced. Without a
        positive FTP the rides are returned unchanged.

        Args:
            rides: Rides to enrich
            ftp: Athlete's Functional Threshold Power in watts

        Returns:
            New list of rides (inputs are not modified)
        """
        enriched = []
        for ride in rides:
            updates = {}
            if not ride.has_stress_score and ride.normalized_power:
                power_tss = power.calculate_power_tss(
                    ride.duration_seconds, ride.normalized_power, ftp or 0
                )
                if power_tss:
                    updates["training_stress_score"] = float(power_tss)
            if ride.zone is None:
                zone = power.classify_ride_zone(
                    ride.normalized_power, ride.average_power, ftp
                )
                if zone is not None:
                    updates["zone"] = zone
            enriched.append(ride.model_copy(update=updates) if updates else ride)
        return enriched

    def training_metrics(
        self,
        rides: Iterable[RideSample],
        as_of: Optional[date] = None,
    ) -> TrainingMetrics:
        """
        Dashboard metrics as of a day.

        Builds the metrics window (90 days by default) ending on as_of and
        derives CTL from the whole window, ATL from its last 7 days, TSB,
        the trailing 7/30-day totals, the CTL ramp rate and the load and
        fitness trends.

        Args:
            rides: Rides covering at least the metrics window
            as_of: Last day of the window (default today)

        Returns:
            TrainingMetrics
        """
        as_of = as_of or date.today()
        window_start = as_of - timedelta(days=self.settings.metrics_window_days - 1)
        series = self.build_daily_series(rides, window_start, as_of)
        daily_tss = [day.tss for day in series]

        metrics = fitness.calculate_training_metrics(
            daily_tss,
            as_of,
            ctl_time_constant=self.settings.ctl_time_constant,
            atl_time_constant=self.settings.atl_time_constant,
        )
        self.logger.debug(
            f"Training metrics for {as_of}: CTL={metrics.ctl} ATL={metrics.atl} "
            f"TSB={metrics.tsb} ({metrics.interpretation.status.value})"
        )
        ramp = metrics.ramp_rate
        if ramp is not None and ramp.status in (
            RampRateStatus.DANGER,
            RampRateStatus.WARNING,
        ):
            self.logger.info(f"CTL ramp rate for {as_of}: {ramp.message}")
        return metrics

    def training_patterns(
        self,
        rides: Iterable[RideSample],
        as_of: Optional[date] = None,
    ) -> TrainingPatterns:
        """
        Training patterns over the pattern window (28 days by default).

        Args:
            rides: Rides covering at least the pattern window
            as_of: Last day of the window (default today)

        Returns:
            TrainingPatterns with zone summary, weekly totals and monotony
        """
        as_of = as_of or date.today()
        window_days = self.settings.pattern_window_days
        window_start = as_of - timedelta(days=window_days - 1)

        window_rides = [ride for ride in rides if window_start <= ride.date <= as_of]
        series = self.build_daily_series(window_rides, window_start, as_of)
        daily_tss = [day.tss for day in series]

        weeks = max(window_days // 7, 1)
        weekly = fitness.weekly_loads(daily_tss, weeks=weeks)
        monotony = self.calculate_monotony(daily_tss)
        caution = fitness.is_monotonous(monotony, self.settings.monotony_caution_threshold)
        if caution:
            self.logger.info(f"Training monotony {monotony:.2f} above caution threshold")

        return TrainingPatterns(
            date=as_of,
            zone_summary=self.classify_zone_distribution(window_rides),
            weekly_tss=weekly,
            avg_weekly_tss=sum(weekly) / len(weekly),
            monotony=monotony,
            monotony_caution=caution,
        )
