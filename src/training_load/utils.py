"""Numeric helpers shared by the load model."""

import math
from typing import Any, Optional


def coerce_non_negative(value: Any) -> float:
    """
    Coerce a loosely-typed numeric field to a finite, non-negative float.

    None, NaN, infinities, unparseable values and negatives all become 0.0
    so that no arithmetic downstream can produce NaN or negative load.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_optional(value: Any) -> Optional[float]:
    """Like coerce_non_negative, but keeps "absent" distinct from zero."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def coerce_finite(value: Any) -> float:
    """Coerce to a finite float (sign preserved), 0.0 when unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero. Non-finite values give 0."""
    value = coerce_finite(value)
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))
