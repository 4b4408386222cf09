"""Latest-value store for the three input channels.

Each channel owns one slice and only its entry point writes it.  Slices
are replaced whole (last value wins); a stale fix next to a fresh
orientation is a normal condition, not an error.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from hellcompass.models.geo import GeoFix
from hellcompass.models.sensors import MotionTilt, Orientation
from hellcompass.state.events import SensorChannel

_logger = logging.getLogger(__name__)


class ChannelSnapshot(BaseModel):
    """Read-only view of all three slices at one instant."""

    model_config = ConfigDict(frozen=True)

    fix: GeoFix | None = None
    orientation: Orientation | None = None
    motion: MotionTilt | None = None


class SensorState:
    """Mutable holder of the latest reading per channel.

    A channel marked disabled (capability missing for the session)
    ignores further writes and always reads as empty.
    """

    def __init__(self) -> None:
        self._fix: GeoFix | None = None
        self._orientation: Orientation | None = None
        self._motion: MotionTilt | None = None
        self._disabled: set[SensorChannel] = set()
        self._updates: dict[SensorChannel, int] = dict.fromkeys(SensorChannel, 0)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def fix(self) -> GeoFix | None:
        return self._fix

    @property
    def orientation(self) -> Orientation | None:
        return self._orientation

    @property
    def motion(self) -> MotionTilt | None:
        return self._motion

    def is_disabled(self, channel: SensorChannel) -> bool:
        return channel in self._disabled

    def update_count(self, channel: SensorChannel) -> int:
        """Number of accepted writes to *channel* since startup."""
        return self._updates[channel]

    def snapshot(self) -> ChannelSnapshot:
        return ChannelSnapshot(fix=self._fix, orientation=self._orientation, motion=self._motion)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def _accepts(self, channel: SensorChannel) -> bool:
        if channel in self._disabled:
            _logger.debug("Ignoring %s update: channel disabled", channel)
            return False
        self._updates[channel] += 1
        return True

    def apply_fix(self, fix: GeoFix) -> None:
        if self._accepts(SensorChannel.GEOLOCATION):
            self._fix = fix

    def apply_orientation(self, orientation: Orientation) -> None:
        if self._accepts(SensorChannel.ORIENTATION):
            self._orientation = orientation

    def apply_motion(self, motion: MotionTilt) -> None:
        if self._accepts(SensorChannel.MOTION):
            self._motion = motion

    def clear(self, channel: SensorChannel) -> None:
        """Empty one slice."""
        if channel == SensorChannel.GEOLOCATION:
            self._fix = None
        elif channel == SensorChannel.ORIENTATION:
            self._orientation = None
        elif channel == SensorChannel.MOTION:
            self._motion = None

    def disable(self, channel: SensorChannel) -> None:
        """Empty *channel* and refuse further writes for the session."""
        if channel not in self._disabled:
            _logger.info("Disabling %s channel for this session", channel)
        self._disabled.add(channel)
        self.clear(channel)
