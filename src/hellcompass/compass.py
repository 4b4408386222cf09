"""High-level pointing pipeline.

:class:`HellCompass` owns the sensor state and wires the channel entry
points to the per-frame pipeline: tier resolution, rotation, alignment
feedback and advisory reconciliation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from hellcompass import advisories as keys
from hellcompass.advisories import AdvisoryBoard, AdvisoryListener
from hellcompass.alignment import AlignmentController, FeedbackState, Vibrator
from hellcompass.catalog import TargetCatalog, TargetSelector
from hellcompass.config import CompassConfig
from hellcompass.exceptions import (
    GeolocationError,
    GeolocationPermissionError,
    GeolocationTimeoutError,
    GeolocationUnavailableError,
)
from hellcompass.geodesy import bearing, distance, vertical_angle
from hellcompass.ingestion.geolocation import parse_position, parse_position_error
from hellcompass.ingestion.motion import parse_motion
from hellcompass.ingestion.orientation import OrientationIngestor
from hellcompass.models.advisory import Severity
from hellcompass.models.frame import CapabilityTier, FrameResult
from hellcompass.models.geo import GeoFix, TargetLocation
from hellcompass.models.sensors import MotionTilt, Orientation
from hellcompass.rotation import solve_rotation
from hellcompass.state.events import Capability, SensorChannel
from hellcompass.state.store import SensorState
from hellcompass.tiers import TierResolution, resolve_tier

_logger = logging.getLogger(__name__)

_GEO_ERROR_ADVISORIES: dict[type[GeolocationError], tuple[str, str]] = {
    GeolocationPermissionError: (keys.GEO_NO_PERMISSION, "Please allow geolocation."),
    GeolocationUnavailableError: (keys.GEO_ERROR, "Something went wrong while determining your location."),
    GeolocationTimeoutError: (keys.GEO_TIMEOUT, "Geolocation request timed out."),
}

_UNSUPPORTED_ADVISORIES: dict[Capability, tuple[str, str]] = {
    Capability.GEOLOCATION: (keys.GEO_NO_SUPPORT, "Your device does not support geolocation."),
    Capability.WEBGL: (keys.WEBGL_NO_SUPPORT, "Please enable WebGL or use a browser which supports it."),
    Capability.ORIENTATION: (keys.ORIENTATION_NO_SUPPORT, "Your device does not report its orientation."),
    Capability.MOTION: (keys.MOTION_NO_SUPPORT, "Your device does not report motion; tilt comes from orientation."),
}

_TIER_WARNINGS: dict[CapabilityTier, tuple[str, str]] = {
    CapabilityTier.ORIENTATION_ONLY: (
        keys.ORIENTATION_ONLY_TILT,
        "Falling back to orientation-only tilt, expect roll error near vertical.",
    ),
    CapabilityTier.COMPASS_ONLY: (
        keys.COMPASS_ONLY,
        "Only latitude, longitude and heading are available; the arrow stays flat.",
    ),
    CapabilityTier.NONE: (
        keys.NO_HEADING,
        "Your device does not report a compass heading; only the distance is shown.",
    ),
}

_DEGRADED_TILT_MESSAGE = "Gravity could not be separated from movement; tilt may be inaccurate."


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HellCompass:
    """Points an indicator at a target from live device readings.

    Usage::

        compass = HellCompass(CompassConfig.from_env(), vibrator=motor)
        compass.handle_position({"latitude": 42.0, "longitude": -83.0})
        compass.handle_orientation({"alpha": 10, "beta": 80, "gamma": 0})
        result = compass.frame()

    Channel entry points never raise on bad payloads; they log and drop
    them.  :meth:`frame` is synchronous; :meth:`run` drives it on a
    fixed interval from an asyncio loop.
    """

    def __init__(
        self,
        config: CompassConfig | None = None,
        *,
        catalog: TargetCatalog | Iterable[Mapping[str, Any]] | None = None,
        vibrator: Vibrator | None = None,
        clock: Callable[[], datetime] = _utcnow,
        on_advisory: AdvisoryListener | None = None,
    ) -> None:
        self._config = config or CompassConfig()
        self._clock = clock
        if catalog is None:
            catalog = TargetCatalog.default()
        elif not isinstance(catalog, TargetCatalog):
            catalog = TargetCatalog.from_entries(catalog)
        self._selector = TargetSelector(
            catalog,
            mode=self._config.target_mode,
            name=self._config.target_name,
            radius_km=self._config.earth_radius_km,
        )
        self._state = SensorState()
        self._advisories = AdvisoryBoard(clock=clock, listener=on_advisory)
        self._orientation = OrientationIngestor(clock=clock)
        self._feedback = AlignmentController(
            vibrator if self._config.vibration_enabled else None,
            pattern_ms=self._config.vibration_pattern,
            threshold=self._config.alignment_threshold,
            clock=clock,
        )
        self._rendering_enabled = self._config.rendering_enabled
        self._last_tier: CapabilityTier | None = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> CompassConfig:
        return self._config

    @property
    def state(self) -> SensorState:
        return self._state

    @property
    def advisories(self) -> AdvisoryBoard:
        return self._advisories

    @property
    def feedback(self) -> AlignmentController:
        return self._feedback

    @property
    def selector(self) -> TargetSelector:
        return self._selector

    def select_target(self, name: str) -> TargetLocation:
        return self._selector.select(name)

    def use_closest_target(self) -> None:
        self._selector.use_closest()

    # ------------------------------------------------------------------
    # Channel entry points
    # ------------------------------------------------------------------

    def handle_position(self, payload: Mapping[str, Any]) -> GeoFix | None:
        """Store a position update (degrees) and clear transient geolocation advisories."""
        if self._state.is_disabled(SensorChannel.GEOLOCATION):
            return None
        fix = parse_position(payload, clock=self._clock)
        if fix is None:
            return None
        self._state.apply_fix(fix)
        self._advisories.clear(*keys.GEO_TRANSIENT_KEYS)
        return fix

    def handle_position_error(self, error: GeolocationError | int | Mapping[str, Any]) -> GeolocationError:
        """Surface a positioning failure as an advisory.

        A denied permission also drops the last fix; other failures keep
        it, since a stale fix is still usable.
        """
        if not isinstance(error, GeolocationError):
            error = parse_position_error(error)
        for error_type, (key, message) in _GEO_ERROR_ADVISORIES.items():
            if isinstance(error, error_type):
                self._advisories.signal(key, message)
                break
        else:
            _logger.debug("Unmapped geolocation error: %s", error)
        if isinstance(error, GeolocationPermissionError):
            self._state.clear(SensorChannel.GEOLOCATION)
        return error

    def handle_orientation(self, payload: Mapping[str, Any]) -> Orientation | None:
        if self._state.is_disabled(SensorChannel.ORIENTATION):
            return None
        orientation = self._orientation.parse(payload)
        if orientation is None:
            return None
        self._state.apply_orientation(orientation)
        return orientation

    def handle_motion(self, payload: Mapping[str, Any]) -> MotionTilt | None:
        if self._state.is_disabled(SensorChannel.MOTION):
            return None
        motion = parse_motion(payload, clock=self._clock)
        if motion is None:
            return None
        self._state.apply_motion(motion)
        return motion

    def report_unsupported(self, capability: Capability | str) -> None:
        """Record that a capability is missing for the rest of the session."""
        capability = Capability(capability)
        if capability == Capability.VIBRATION:
            _logger.info("Vibration not supported; alignment feedback disabled")
            self._feedback.detach_vibrator()
            return
        if capability == Capability.WEBGL:
            self._rendering_enabled = False
        channel = capability.channel
        if channel is not None:
            self._state.disable(channel)
        key, message = _UNSUPPORTED_ADVISORIES[capability]
        self._advisories.signal(key, message)

    # ------------------------------------------------------------------
    # Per-frame pipeline
    # ------------------------------------------------------------------

    def frame(self) -> FrameResult:
        """Compute one frame from the current sensor state."""
        snapshot = self._state.snapshot()
        resolution = resolve_tier(snapshot)
        fix = resolution.fix
        target = self._selector.resolve(fix.point if fix is not None else None)

        distance_km: float | None = None
        raw_bearing: float | None = None
        tilt: float | None = None
        if fix is not None:
            radius = self._config.earth_radius_km
            distance_km = distance(fix, target, radius_km=radius)
            raw_bearing = bearing(fix, target)
            tilt = vertical_angle(fix, target, radius_km=radius)

        rotation = None
        if self._rendering_enabled and raw_bearing is not None:
            rotation = solve_rotation(resolution, raw_bearing, tilt or 0.0)

        aligned = self._feedback.evaluate(raw_bearing, resolution.heading)
        self._reconcile_advisories(resolution, snapshot.motion)
        self._log_tier_change(resolution.tier)

        return FrameResult(
            tier=resolution.tier,
            target=target,
            distance_km=distance_km,
            bearing=raw_bearing,
            vertical_angle=tilt,
            heading=resolution.heading,
            rotation=rotation,
            aligned=aligned,
            vibrating=self._feedback.state == FeedbackState.VIBRATING,
            advisories=self._advisories.active(),
        )

    def _reconcile_advisories(self, resolution: TierResolution, motion: MotionTilt | None) -> None:
        for tier, (key, message) in _TIER_WARNINGS.items():
            # Without a fix the geolocation advisories already explain the missing output.
            active = resolution.tier == tier and resolution.fix is not None
            self._advisories.signal(key, message if active else None, severity=Severity.WARNING)

        degraded = resolution.tier == CapabilityTier.FULL and motion is not None and motion.degraded
        self._advisories.signal(
            keys.TILT_DEGRADED,
            _DEGRADED_TILT_MESSAGE if degraded else None,
            severity=Severity.WARNING,
        )

    def _log_tier_change(self, tier: CapabilityTier) -> None:
        if tier == self._last_tier:
            return
        _logger.info(
            "Capability tier changed: %s -> %s",
            self._last_tier.name if self._last_tier is not None else "-",
            tier.name,
        )
        self._last_tier = tier

    # ------------------------------------------------------------------
    # Frame driver
    # ------------------------------------------------------------------

    async def run(
        self,
        on_frame: Callable[[FrameResult], None] | None = None,
        *,
        stop_event: asyncio.Event | None = None,
        max_frames: int | None = None,
    ) -> int:
        """Compute frames every ``config.frame_interval`` seconds.

        Runs until *stop_event* is set or *max_frames* frames were
        produced.  Returns the number of frames computed.
        """
        count = 0
        while not (stop_event is not None and stop_event.is_set()):
            if max_frames is not None and count >= max_frames:
                break
            result = self.frame()
            count += 1
            if on_frame is not None:
                try:
                    on_frame(result)
                except Exception:
                    _logger.debug("on_frame callback failed", exc_info=True)
            await asyncio.sleep(self._config.frame_interval)
        return count
