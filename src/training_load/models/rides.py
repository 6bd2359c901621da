"""Ride records consumed by the load model."""

import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import InvalidRideError
from ..utils import coerce_non_negative, coerce_optional

logger = logging.getLogger(__name__)


class IntensityBand(str, Enum):
    """Coarse intensity buckets used for distribution analysis."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RideZone(str, Enum):
    """Training zone a completed ride was classified into."""
    RECOVERY = "recovery"
    ENDURANCE = "endurance"
    TEMPO = "tempo"
    SWEET_SPOT = "sweet_spot"
    THRESHOLD = "threshold"
    VO2MAX = "vo2max"
    ANAEROBIC = "anaerobic"

    @property
    def band(self) -> IntensityBand:
        return ZONE_BANDS[self]


ZONE_BANDS = {
    RideZone.RECOVERY: IntensityBand.LOW,
    RideZone.ENDURANCE: IntensityBand.LOW,
    RideZone.TEMPO: IntensityBand.MEDIUM,
    RideZone.SWEET_SPOT: IntensityBand.MEDIUM,
    RideZone.THRESHOLD: IntensityBand.HIGH,
    RideZone.VO2MAX: IntensityBand.HIGH,
    RideZone.ANAEROBIC: IntensityBand.HIGH,
}


def parse_zone(value: Any) -> Optional[RideZone]:
    """
    Map a raw zone label onto RideZone.

    Matching ignores case, surrounding whitespace and the separator used in
    "sweet spot" / "sweet-spot". Unrecognized labels are logged and dropped.

    Args:
        value: Raw zone value from the Ride Store (string, RideZone or None)

    Returns:
        The matching RideZone, or None when absent or unrecognized
    """
    if value is None:
        return None
    if isinstance(value, RideZone):
        return value
    if not isinstance(value, str):
        logger.warning(f"Ignoring non-string zone value: {value!r}")
        return None

    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    if not normalized:
        return None
    try:
        return RideZone(normalized)
    except ValueError:
        logger.warning(f"Ignoring unrecognized zone label: {value!r}")
        return None


def _to_day(value: Any) -> Any:
    """Truncate datetimes and ISO timestamps to the calendar day."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str):
        return value.strip()[:10]
    return value


class RideSample(BaseModel):
    """
    One completed ride as seen by the load model.

    Numeric fields are coerced on the way in: missing, NaN or negative
    values become 0 (or None for the optional measurements), so the metric
    functions never see unusable numbers.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    duration_seconds: float = 0.0
    distance_km: float = 0.0
    elevation_gain_m: float = 0.0
    training_stress_score: Optional[float] = None
    zone: Optional[RideZone] = None
    normalized_power: Optional[float] = None
    average_power: Optional[float] = None
    average_heart_rate: Optional[float] = None

    @field_validator("date", mode="before")
    @classmethod
    def truncate_date(cls, v: Any) -> Any:
        """Use the activity's calendar day."""
        return _to_day(v)

    @field_validator("duration_seconds", "distance_km", "elevation_gain_m", mode="before")
    @classmethod
    def coerce_measurement(cls, v: Any) -> float:
        return coerce_non_negative(v)

    @field_validator(
        "training_stress_score",
        "normalized_power",
        "average_power",
        "average_heart_rate",
        mode="before",
    )
    @classmethod
    def coerce_optional_measurement(cls, v: Any) -> Optional[float]:
        return coerce_optional(v)

    @field_validator("zone", mode="before")
    @classmethod
    def validate_zone(cls, v: Any) -> Optional[RideZone]:
        return parse_zone(v)

    @property
    def has_stress_score(self) -> bool:
        """Whether the ride carries an authoritative TSS."""
        return self.training_stress_score is not None and self.training_stress_score > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "duration_seconds": self.duration_seconds,
            "distance_km": self.distance_km,
            "elevation_gain_m": self.elevation_gain_m,
            "training_stress_score": self.training_stress_score,
            "zone": self.zone.value if self.zone else None,
            "normalized_power": self.normalized_power,
            "average_power": self.average_power,
            "average_heart_rate": self.average_heart_rate,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RideSample":
        """
        Create a RideSample from a Ride Store row.

        Accepts the store's snake_case columns as well as camelCase keys.
        The activity date (recorded_at) wins over the import date
        (created_at).

        Raises:
            InvalidRideError: If the row has no usable activity date
        """
        raw_date = _first(row, "date", "recorded_at", "recordedAt", "created_at", "createdAt")
        if raw_date is None or raw_date == "":
            raise InvalidRideError("Ride row has no activity date", field="date")

        try:
            return cls(
                date=raw_date,
                duration_seconds=_first(row, "duration_seconds", "durationSeconds", "duration"),
                distance_km=_first(row, "distance_km", "distanceKm"),
                elevation_gain_m=_first(row, "elevation_gain_m", "elevationGainM", "elevation_gain"),
                training_stress_score=_first(
                    row, "training_stress_score", "trainingStressScore", "tss"
                ),
                zone=_first(row, "zone"),
                normalized_power=_first(row, "normalized_power", "normalizedPower"),
                average_power=_first(row, "average_power", "average_watts", "averagePower"),
                average_heart_rate=_first(
                    row, "average_heart_rate", "average_heartrate", "averageHeartRate"
                ),
            )
        except ValidationError as e:
            raise InvalidRideError(
                f"Ride row has an unusable activity date: {raw_date!r}",
                field="date",
                details={"value": str(raw_date)},
            ) from e


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-None value among keys."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def parse_ride_rows(
    rows: Iterable[Mapping[str, Any]],
    strict: bool = False,
) -> List[RideSample]:
    """
    Convert Ride Store rows into RideSamples ordered by activity date.

    Args:
        rows: Raw rows from the Ride Store
        strict: Raise on the first invalid row instead of skipping it

    Returns:
        RideSamples sorted by date (stable for same-day rides)

    Raises:
        InvalidRideError: Only when strict is True
    """
    rides: List[RideSample] = []
    for index, row in enumerate(rows):
        try:
            rides.append(RideSample.from_row(row))
        except InvalidRideError as e:
            if strict:
                raise
            logger.warning(f"Skipping ride row {index}: {e.message}")
    rides.sort(key=lambda ride: ride.date)
    return rides


@dataclass(frozen=True)
class DailyLoad:
    """One calendar day's aggregated training stress."""

    date: dt.date
    tss: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "tss": self.tss,
        }
