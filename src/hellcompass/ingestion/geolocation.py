"""Geolocation channel ingestion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from hellcompass.angles import radians_from_degrees
from hellcompass.exceptions import GeolocationError
from hellcompass.ingestion.normalize import wrapped_radians
from hellcompass.models.geo import GeoFix
from hellcompass.models.readings import PositionReading

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def parse_position(
    payload: Mapping[str, Any] | PositionReading,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> GeoFix | None:
    """Convert a position update (degrees) into a :class:`GeoFix`.

    Returns ``None`` when latitude or longitude is missing or
    unparseable.  A missing or NaN heading yields a fix without one.
    """
    if isinstance(payload, PositionReading):
        reading = payload
    else:
        try:
            reading = PositionReading.model_validate(dict(payload))
        except ValidationError:
            _logger.debug("Dropping malformed position payload", exc_info=True)
            return None

    if reading.latitude is None or reading.longitude is None:
        _logger.debug("Dropping position payload without coordinates: %s", reading.raw)
        return None

    return GeoFix(
        latitude=radians_from_degrees(reading.latitude),
        longitude=radians_from_degrees(reading.longitude),
        heading=wrapped_radians(reading.heading),
        observed_at=clock(),
    )


def parse_position_error(code: int | Mapping[str, Any], message: str = "") -> GeolocationError:
    """Map a positioning API error (bare code or ``{"code", "message"}``) to an exception."""
    if isinstance(code, Mapping):
        message = str(code.get("message") or message)
        raw_code = code.get("code", 0)
    else:
        raw_code = code
    try:
        numeric = int(raw_code)
    except (TypeError, ValueError):
        numeric = 0
    return GeolocationError.from_code(numeric, message)
