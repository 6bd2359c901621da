"""Services for the training load engine."""

from .base import BaseService
from .engine import TrainingLoadEngine, TrainingPatterns

__all__ = [
    "BaseService",
    "TrainingLoadEngine",
    "TrainingPatterns",
]
