"""Indicator rotation per capability tier.

Axis convention, identical for every tier: ``yaw`` about the vertical
axis, ``pitch`` about the lateral axis, ``roll`` about the forward axis.
"""

from __future__ import annotations

import math

from hellcompass._constants import FLIP_PITCH_LOWER_RAD, FLIP_PITCH_UPPER_RAD
from hellcompass.angles import wrap_angle
from hellcompass.models.frame import CapabilityTier, Rotation
from hellcompass.tiers import TierResolution


def is_tipped_over(pitch: float) -> bool:
    """Whether a pitch reading means the device is tipped past ~45° from vertical."""
    wrapped = wrap_angle(pitch)
    return FLIP_PITCH_LOWER_RAD < wrapped <= FLIP_PITCH_UPPER_RAD


def correct_tilt(pitch: float, roll: float, yaw: float, source: CapabilityTier) -> Rotation:
    """Combine device tilt with a target-relative yaw.

    Raw pitch cannot tell "upright" from "upside down", so a tipped-over
    reading turns the yaw by half a turn and inverts roll, keeping the
    indicator's forward face consistent.  Shared by the gyroscope
    (ORIENTATION_ONLY) and accelerometer (FULL) tiers.
    """
    if source not in (CapabilityTier.FULL, CapabilityTier.ORIENTATION_ONLY):
        raise ValueError(f"tilt correction does not apply to tier {source.name}")
    if is_tipped_over(pitch):
        yaw += math.pi
        roll = -roll
    return Rotation(yaw=wrap_angle(yaw), pitch=wrap_angle(pitch), roll=wrap_angle(roll))


def tilt_down(rotation: Rotation, angle: float) -> Rotation:
    """Pitch *rotation* down by *angle* about its local lateral axis."""
    return Rotation(yaw=rotation.yaw, pitch=wrap_angle(rotation.pitch - angle), roll=rotation.roll)


def solve_rotation(resolution: TierResolution, bearing: float, vertical_angle: float = 0.0) -> Rotation | None:
    """Rotation to apply to the indicator for *resolution*.

    *bearing* is the raw initial bearing to the target.  Returns
    ``None`` for :attr:`CapabilityTier.NONE`.
    """
    tier = resolution.tier
    if tier == CapabilityTier.NONE or resolution.heading is None:
        return None

    relative_yaw = wrap_angle(resolution.heading - bearing)
    if tier == CapabilityTier.COMPASS_ONLY:
        return Rotation(yaw=relative_yaw, pitch=0.0, roll=0.0)

    if resolution.pitch is None or resolution.roll is None:
        # Resolver guarantees tilt for these tiers; fall back to flat.
        return Rotation(yaw=relative_yaw, pitch=0.0, roll=0.0)

    corrected = correct_tilt(resolution.pitch, resolution.roll, relative_yaw, tier)
    return tilt_down(corrected, vertical_angle)
