"""Fitness, fatigue and form model for cycling training data."""

from .config import Settings, get_settings
from .exceptions import ErrorCode, InvalidRideError, TrainingLoadError
from .models import DailyLoad, IntensityBand, RideSample, RideZone, parse_ride_rows
from .services import TrainingLoadEngine, TrainingPatterns

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "ErrorCode",
    "InvalidRideError",
    "TrainingLoadError",
    "DailyLoad",
    "IntensityBand",
    "RideSample",
    "RideZone",
    "parse_ride_rows",
    "TrainingLoadEngine",
    "TrainingPatterns",
]
