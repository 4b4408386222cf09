"""Per-frame output of the pointing pipeline."""

from __future__ import annotations

import enum

from hellcompass.models._base import CompassBaseModel, WrappedAngle
from hellcompass.models.advisory import Advisory
from hellcompass.models.geo import TargetLocation


class CapabilityTier(enum.IntEnum):
    """Sensor combination trusted for the current frame.

    Lower values are preferred; the resolver picks the first tier whose
    inputs are all present.
    """

    FULL = 0
    """Fix, heading and accelerometer tilt."""
    ORIENTATION_ONLY = 1
    """Fix, heading and gyroscope pitch/roll."""
    COMPASS_ONLY = 2
    """Fix and heading; the indicator stays flat."""
    NONE = 3
    """No usable heading (or no fix); no rotation is produced."""


class Rotation(CompassBaseModel):
    """Indicator rotation in radians.

    Axis convention: ``yaw`` turns about the vertical axis, ``pitch``
    about the lateral axis, ``roll`` about the forward axis.
    """

    yaw: WrappedAngle = 0.0
    pitch: WrappedAngle = 0.0
    roll: WrappedAngle = 0.0


class FrameResult(CompassBaseModel):
    """Everything the renderer and UI need for one frame.

    Parameters
    ----------
    tier : CapabilityTier
        Tier used to compute ``rotation``.
    target : TargetLocation
        Target pointed at this frame.
    distance_km : float or None
        Great-circle distance to the target; ``None`` without a fix.
    bearing : float or None
        Raw initial bearing in ``(-π, π]``; ``None`` without a fix.
    vertical_angle : float or None
        Downward tilt suggesting distance; ``None`` without a fix.
    heading : float or None
        Resolved device heading in ``[0, 2π)``.
    rotation : Rotation or None
        Indicator rotation; ``None`` for :attr:`CapabilityTier.NONE`
        or when rendering is unavailable.
    aligned : bool
        Whether the heading is within the alignment window.
    vibrating : bool
        Whether the feedback controller is in its vibrating state.
    advisories : tuple of Advisory
        Advisories active at the end of the frame.
    """

    tier: CapabilityTier
    target: TargetLocation
    distance_km: float | None = None
    bearing: float | None = None
    vertical_angle: float | None = None
    heading: WrappedAngle | None = None
    rotation: Rotation | None = None
    aligned: bool = False
    vibrating: bool = False
    advisories: tuple[Advisory, ...] = ()

    @property
    def distance_label(self) -> str:
        """Distance text as shown under the indicator."""
        if self.distance_km is None:
            return "--"
        return f"{self.distance_km:.2f}km"

    @property
    def advisory_keys(self) -> frozenset[str]:
        return frozenset(advisory.key for advisory in self.advisories)
