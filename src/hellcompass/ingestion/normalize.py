"""Normalization helpers.

Centralizes defensive parsing of device payload values.
"""

from __future__ import annotations

import math
from typing import Any

from hellcompass.angles import radians_from_degrees, wrap_angle


def safe_float(value: Any) -> float | None:
    """Parse *value* as a finite float, or return ``None``.

    Booleans are rejected; browsers sometimes hand over ``false`` for
    a missing reading.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def wrapped_radians(value_deg: float | None) -> float | None:
    """Degrees to radians in ``[0, 2π)``; ``None`` passes through."""
    if value_deg is None:
        return None
    return wrap_angle(radians_from_degrees(value_deg))
