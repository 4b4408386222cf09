"""Motion channel ingestion: acceleration vectors to tilt angles."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from hellcompass._constants import MIN_GRAVITY_NORM
from hellcompass.models.readings import MotionReading, Vector3
from hellcompass.models.sensors import MotionTilt

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def tilt_from_vector(gravity: Vector3) -> tuple[float, float] | None:
    """Return ``(pitch, roll)`` in raw ``atan2`` range for a gravity vector.

    ``None`` when the vector is too short to have a direction.
    """
    if gravity.norm < MIN_GRAVITY_NORM:
        return None
    roll = math.atan2(gravity.y, gravity.z)
    pitch = math.atan2(-gravity.x, math.hypot(gravity.y, gravity.z))
    return pitch, roll


def gravity_vector(reading: MotionReading) -> tuple[Vector3, bool] | None:
    """Pick the vector to derive tilt from.

    Returns ``(vector, degraded)``.  With both vectors available the
    gravity-only component is isolated; otherwise whichever vector
    exists is used as-is and flagged degraded.
    """
    accel = reading.acceleration
    with_gravity = reading.acceleration_including_gravity
    if with_gravity is not None and accel is not None:
        return with_gravity - accel, False
    if with_gravity is not None:
        return with_gravity, True
    if accel is not None:
        return accel, True
    return None


def parse_motion(
    payload: Mapping[str, Any] | MotionReading,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> MotionTilt | None:
    """Convert a motion event into a :class:`MotionTilt`, or ``None``."""
    if isinstance(payload, MotionReading):
        reading = payload
    else:
        try:
            reading = MotionReading.model_validate(dict(payload))
        except ValidationError:
            _logger.debug("Dropping malformed motion payload", exc_info=True)
            return None

    picked = gravity_vector(reading)
    if picked is None:
        _logger.debug("Dropping motion payload without acceleration: %s", reading.raw)
        return None
    vector, degraded = picked

    angles = tilt_from_vector(vector)
    if angles is None:
        _logger.debug("Dropping motion payload with zero-length gravity vector")
        return None
    pitch, roll = angles
    return MotionTilt(pitch=pitch, roll=roll, degraded=degraded, observed_at=clock())
