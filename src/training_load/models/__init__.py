"""Data models for ride records and daily loads."""

from .rides import (
    DailyLoad,
    IntensityBand,
    RideSample,
    RideZone,
    ZONE_BANDS,
    parse_ride_rows,
    parse_zone,
)

__all__ = [
    "DailyLoad",
    "IntensityBand",
    "RideSample",
    "RideZone",
    "ZONE_BANDS",
    "parse_ride_rows",
    "parse_zone",
]
