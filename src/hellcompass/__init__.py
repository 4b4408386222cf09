"""hellcompass - sensor-fusion and geodesy core for pointing at Hell, Michigan."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hellcompass")
except PackageNotFoundError:
    __version__ = "0+local"
from hellcompass.advisories import AdvisoryBoard
from hellcompass.alignment import AlignmentController, FeedbackState, Vibrator
from hellcompass.angles import wrap_angle
from hellcompass.catalog import HELL, TargetCatalog, TargetSelector
from hellcompass.compass import HellCompass
from hellcompass.config import CompassConfig, TargetMode
from hellcompass.exceptions import (
    CatalogError,
    CompassConfigError,
    CompassError,
    GeolocationError,
    GeolocationErrorCode,
    GeolocationPermissionError,
    GeolocationTimeoutError,
    GeolocationUnavailableError,
    UnknownTargetError,
)
from hellcompass.geodesy import bearing, closest, distance, vertical_angle
from hellcompass.models import (
    Advisory,
    CapabilityTier,
    FrameResult,
    GeoFix,
    GeoPoint,
    MotionTilt,
    Orientation,
    Rotation,
    Severity,
    TargetLocation,
)
from hellcompass.rotation import correct_tilt, solve_rotation
from hellcompass.state.events import Capability, SensorChannel
from hellcompass.state.store import SensorState
from hellcompass.tiers import resolve_tier

__all__ = [
    "__version__",
    "HELL",
    "Advisory",
    "AdvisoryBoard",
    "AlignmentController",
    "Capability",
    "CapabilityTier",
    "CatalogError",
    "CompassConfig",
    "CompassConfigError",
    "CompassError",
    "FeedbackState",
    "FrameResult",
    "GeoFix",
    "GeoPoint",
    "GeolocationError",
    "GeolocationErrorCode",
    "GeolocationPermissionError",
    "GeolocationTimeoutError",
    "GeolocationUnavailableError",
    "HellCompass",
    "MotionTilt",
    "Orientation",
    "Rotation",
    "SensorChannel",
    "SensorState",
    "Severity",
    "TargetCatalog",
    "TargetLocation",
    "TargetMode",
    "TargetSelector",
    "UnknownTargetError",
    "Vibrator",
    "bearing",
    "closest",
    "correct_tilt",
    "distance",
    "resolve_tier",
    "solve_rotation",
    "vertical_angle",
    "wrap_angle",
]
