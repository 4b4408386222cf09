"""Capability tier selection.

Pure functions over a :class:`~hellcompass.state.store.ChannelSnapshot`;
evaluated fresh every frame.
"""

from __future__ import annotations

from dataclasses import dataclass

from hellcompass.models.frame import CapabilityTier
from hellcompass.models.geo import GeoFix
from hellcompass.state.store import ChannelSnapshot


@dataclass(frozen=True, slots=True)
class TierResolution:
    """The tier picked for a frame and the inputs it relies on.

    ``pitch``/``roll`` are the tilt the solver should use: accelerometer
    tilt for FULL, gyroscope tilt for ORIENTATION_ONLY, ``None``
    otherwise.
    """

    tier: CapabilityTier
    fix: GeoFix | None = None
    heading: float | None = None
    pitch: float | None = None
    roll: float | None = None


def resolve_heading(snapshot: ChannelSnapshot) -> float | None:
    """Device heading, preferring orientation yaw over the fix's own heading."""
    if snapshot.orientation is not None and snapshot.orientation.yaw is not None:
        return snapshot.orientation.yaw
    if snapshot.fix is not None:
        return snapshot.fix.heading
    return None


def resolve_tier(snapshot: ChannelSnapshot) -> TierResolution:
    """Pick the most capable tier whose inputs are all present."""
    fix = snapshot.fix
    heading = resolve_heading(snapshot)
    if fix is None or heading is None:
        return TierResolution(tier=CapabilityTier.NONE, fix=fix, heading=heading)

    motion = snapshot.motion
    if motion is not None:
        return TierResolution(
            tier=CapabilityTier.FULL,
            fix=fix,
            heading=heading,
            pitch=motion.pitch,
            roll=motion.roll,
        )

    orientation = snapshot.orientation
    if orientation is not None and orientation.has_tilt:
        return TierResolution(
            tier=CapabilityTier.ORIENTATION_ONLY,
            fix=fix,
            heading=heading,
            pitch=orientation.pitch,
            roll=orientation.roll,
        )

    return TierResolution(tier=CapabilityTier.COMPASS_ONLY, fix=fix, heading=heading)
