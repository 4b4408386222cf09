"""Angle normalization helpers.

Every angle that crosses a component boundary is passed through
:func:`wrap_angle` so that consumers only ever see values in
``[0, 2π)``.  Latitude is the one exception and stays signed.
"""

from __future__ import annotations

import math

from hellcompass._constants import TWO_PI


def wrap_angle(value: float) -> float:
    """Wrap *value* (radians) into ``[0, 2π)``.

    Adds full turns while the value is negative, then reduces modulo
    ``2π``.  Idempotent on already-wrapped values.

    Raises :class:`ValueError` for NaN or infinite input.
    """
    angle = float(value)
    if not math.isfinite(angle):
        raise ValueError(f"angle must be finite, got {value!r}")
    if angle < 0:
        # Jump most of the way in one step, then finish one turn at a time.
        angle += TWO_PI * math.floor(-angle / TWO_PI)
        while angle < 0:
            angle += TWO_PI
    angle %= TWO_PI
    # Float rounding can land exactly on 2π (e.g. -1e-17 + 2π).
    if angle >= TWO_PI:
        return 0.0
    return angle


def radians_from_degrees(value: float) -> float:
    """Convert degrees to radians without wrapping."""
    return float(value) * (math.pi / 180)


def degrees_from_radians(value: float) -> float:
    """Convert radians to degrees without wrapping."""
    return float(value) * (180 / math.pi)


def angular_separation(a: float, b: float) -> float:
    """Shortest circular distance between two angles, in ``[0, π]``."""
    diff = abs(wrap_angle(a) - wrap_angle(b))
    return min(diff, TWO_PI - diff)
