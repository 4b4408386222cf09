"""Orientation channel ingestion.

Two yaw sources exist: the vendor ``webkitCompassHeading`` field and
the standard ``alpha`` angle.  The compass field wins when present; the
first time it is used a warning is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from hellcompass.ingestion.normalize import wrapped_radians
from hellcompass.models.readings import OrientationReading
from hellcompass.models.sensors import Orientation, YawSource

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class OrientationIngestor:
    """Turns orientation events into :class:`Orientation` readings.

    Holds only the "already warned" flag for the yaw source.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._warned_compass_source = False

    def parse(self, payload: Mapping[str, Any] | OrientationReading) -> Orientation | None:
        """Return an :class:`Orientation`, or ``None`` when the event carries nothing usable.

        An event without both ``beta`` and ``gamma`` still yields its
        heading; only its tilt is left empty.
        """
        if isinstance(payload, OrientationReading):
            reading = payload
        else:
            try:
                reading = OrientationReading.model_validate(dict(payload))
            except ValidationError:
                _logger.debug("Dropping malformed orientation payload", exc_info=True)
                return None

        yaw: float | None = None
        source: YawSource | None = None
        if reading.compass_heading is not None:
            yaw = wrapped_radians(reading.compass_heading)
            source = YawSource.COMPASS
            if not self._warned_compass_source:
                _logger.warning("Using webkit-specific compass heading.")
                self._warned_compass_source = True
        elif reading.alpha is not None:
            yaw = wrapped_radians(reading.alpha)
            source = YawSource.ALPHA

        pitch: float | None = None
        roll: float | None = None
        if reading.beta is not None and reading.gamma is not None:
            pitch = wrapped_radians(reading.beta)
            roll = wrapped_radians(reading.gamma)
        elif yaw is None:
            _logger.debug("Dropping orientation payload without heading or beta/gamma: %s", reading.raw)
            return None

        return Orientation(
            yaw=yaw,
            pitch=pitch,
            roll=roll,
            yaw_source=source,
            observed_at=self._clock(),
        )
