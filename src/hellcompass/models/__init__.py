"""Data models for hellcompass."""

from hellcompass.models._base import CompassBaseModel, WrappedAngle
from hellcompass.models.advisory import Advisory, Severity
from hellcompass.models.frame import CapabilityTier, FrameResult, Rotation
from hellcompass.models.geo import GeoFix, GeoPoint, TargetLocation
from hellcompass.models.sensors import MotionTilt, Orientation, YawSource

__all__ = [
    "Advisory",
    "CapabilityTier",
    "CompassBaseModel",
    "FrameResult",
    "GeoFix",
    "GeoPoint",
    "MotionTilt",
    "Orientation",
    "Rotation",
    "Severity",
    "TargetLocation",
    "WrappedAngle",
    "YawSource",
]
