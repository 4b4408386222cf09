"""Device attitude readings."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import Field

from hellcompass.models._base import CompassBaseModel, WrappedAngle


class YawSource(StrEnum):
    """Where an orientation reading's yaw came from."""

    COMPASS = "compass"
    """Vendor compass field (``webkitCompassHeading``)."""
    ALPHA = "alpha"
    """Standard ``alpha`` rotation around the vertical axis."""


class Orientation(CompassBaseModel):
    """Gyroscope-derived device orientation.

    ``yaw`` is ``None`` when the event carried neither a compass heading
    nor ``alpha``.  ``pitch`` and ``roll`` are either both set or both
    ``None``; a heading-only reading still feeds the heading but never
    the tilt.
    """

    yaw: WrappedAngle | None = None
    pitch: WrappedAngle | None = None
    roll: WrappedAngle | None = None
    yaw_source: YawSource | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_tilt(self) -> bool:
        return self.pitch is not None and self.roll is not None


class MotionTilt(CompassBaseModel):
    """Accelerometer-derived tilt.

    ``degraded`` is set when the gravity component could not be
    separated from user-induced acceleration and the raw vector was
    used instead.
    """

    pitch: WrappedAngle
    roll: WrappedAngle
    degraded: bool = False
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
