"""Geographic value types: points, fixes and named targets."""

from __future__ import annotations

import math
from datetime import UTC, datetime

from pydantic import Field, field_validator

from hellcompass._constants import TWO_PI
from hellcompass.angles import radians_from_degrees
from hellcompass.models._base import CompassBaseModel, WrappedAngle


class GeoPoint(CompassBaseModel):
    """A position on the sphere, in radians.

    Latitude is clamped to ``[-π/2, π/2]`` and longitude wrapped to
    ``[-π, π)`` when the point is built.

    Parameters
    ----------
    latitude : float
        Signed latitude in radians (north positive).
    longitude : float
        Signed longitude in radians (east positive).
    """

    latitude: float
    longitude: float

    @field_validator("latitude")
    @classmethod
    def _clamp_latitude(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("latitude must be finite")
        return max(-math.pi / 2, min(math.pi / 2, value))

    @field_validator("longitude")
    @classmethod
    def _wrap_longitude(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("longitude must be finite")
        return ((value + math.pi) % TWO_PI) - math.pi

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> GeoPoint:
        return cls(latitude=radians_from_degrees(latitude), longitude=radians_from_degrees(longitude))


class GeoFix(GeoPoint):
    """A position reported by the geolocation channel.

    ``heading`` is the direction of travel reported by the positioning
    API, or ``None`` when the device did not provide one.
    """

    heading: WrappedAngle | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def point(self) -> GeoPoint:
        """The fix without its heading or timestamp."""
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class TargetLocation(GeoPoint):
    """A named place the indicator can point at."""

    name: str
    region: str = ""
    nation: str = ""
    url: str = ""

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    @property
    def label(self) -> str:
        """``"name, region, nation"`` with empty parts omitted."""
        return ", ".join(part for part in (self.name, self.region, self.nation) if part)
