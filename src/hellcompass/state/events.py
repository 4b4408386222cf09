"""Input channels and capability names."""

from __future__ import annotations

from enum import StrEnum


class SensorChannel(StrEnum):
    GEOLOCATION = "geolocation"
    ORIENTATION = "orientation"
    MOTION = "motion"


class Capability(StrEnum):
    """Device capabilities that may be reported missing."""

    GEOLOCATION = "geolocation"
    ORIENTATION = "orientation"
    MOTION = "motion"
    WEBGL = "webgl"
    VIBRATION = "vibration"

    @property
    def channel(self) -> SensorChannel | None:
        """Input channel fed by this capability, if any."""
        try:
            return SensorChannel(self.value)
        except ValueError:
            return None
