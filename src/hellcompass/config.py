"""Runtime configuration for hellcompass."""

from __future__ import annotations

import dataclasses
import math
import os
from enum import StrEnum
from typing import Any

from hellcompass._constants import (
    ALIGNMENT_THRESHOLD_RAD,
    DEFAULT_FRAME_INTERVAL_S,
    EARTH_RADIUS_KM,
    VIBRATION_PATTERN_MS,
)
from hellcompass.exceptions import CompassConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise CompassConfigError(f"{env_key} must be a number, got {value!r}") from exc


class TargetMode(StrEnum):
    FIXED = "fixed"
    """Point at the configured target for the whole session."""
    CLOSEST = "closest"
    """Re-pick the nearest catalog entry every frame."""


@dataclasses.dataclass(frozen=True)
class CompassConfig:
    """Pipeline configuration.

    Parameters
    ----------
    alignment_threshold : float
        Half-width of the alignment window in radians.  Defaults to 10°.
    earth_radius_km : float
        Sphere radius used for distances and the vertical angle.
    frame_interval : float
        Seconds between frames of the async driver.
    target_mode : TargetMode
        ``fixed`` or ``closest``.
    target_name : str or None
        Catalog entry used in ``fixed`` mode; ``None`` picks the first
        entry (Hell in the default catalog).
    vibration_enabled : bool
        Drive the vibrator on alignment.  Ignored when no vibrator is
        attached.
    rendering_enabled : bool
        Emit rotations.  Set to ``False`` when the renderer is known to
        be unavailable; distances are still computed.
    vibration_pattern : tuple of int
        On/off durations in milliseconds.
    """

    alignment_threshold: float = ALIGNMENT_THRESHOLD_RAD
    earth_radius_km: float = EARTH_RADIUS_KM
    frame_interval: float = DEFAULT_FRAME_INTERVAL_S
    target_mode: TargetMode = TargetMode.FIXED
    target_name: str | None = None
    vibration_enabled: bool = True
    rendering_enabled: bool = True
    vibration_pattern: tuple[int, ...] = VIBRATION_PATTERN_MS

    def __post_init__(self) -> None:
        if not 0 < self.alignment_threshold <= math.pi:
            raise CompassConfigError(f"alignment_threshold must be in (0, π], got {self.alignment_threshold}")
        if self.earth_radius_km <= 0:
            raise CompassConfigError(f"earth_radius_km must be positive, got {self.earth_radius_km}")
        if self.frame_interval < 0:
            raise CompassConfigError(f"frame_interval must not be negative, got {self.frame_interval}")
        if any(duration < 0 for duration in self.vibration_pattern):
            raise CompassConfigError("vibration_pattern durations must not be negative")
        try:
            object.__setattr__(self, "target_mode", TargetMode(self.target_mode))
        except ValueError as exc:
            raise CompassConfigError(f"unknown target_mode {self.target_mode!r}") from exc

    @property
    def vibration_duration_ms(self) -> int:
        """Total length of the vibration pattern."""
        return sum(self.vibration_pattern)

    @classmethod
    def from_env(cls, **overrides: Any) -> CompassConfig:
        """Create configuration from ``HELLCOMPASS_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CompassConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        threshold_env = env.get("HELLCOMPASS_ALIGNMENT_THRESHOLD_DEG")
        if threshold_env is not None and "alignment_threshold" not in overrides:
            degrees = _env_float("HELLCOMPASS_ALIGNMENT_THRESHOLD_DEG", threshold_env)
            config_kwargs["alignment_threshold"] = math.radians(degrees)

        radius_env = env.get("HELLCOMPASS_EARTH_RADIUS_KM")
        if radius_env is not None and "earth_radius_km" not in overrides:
            config_kwargs["earth_radius_km"] = _env_float("HELLCOMPASS_EARTH_RADIUS_KM", radius_env)

        interval_env = env.get("HELLCOMPASS_FRAME_INTERVAL")
        if interval_env is not None and "frame_interval" not in overrides:
            config_kwargs["frame_interval"] = _env_float("HELLCOMPASS_FRAME_INTERVAL", interval_env)

        mode_env = env.get("HELLCOMPASS_TARGET_MODE")
        if mode_env is not None and "target_mode" not in overrides:
            config_kwargs["target_mode"] = mode_env.strip().lower()

        name_env = env.get("HELLCOMPASS_TARGET_NAME")
        if name_env is not None and "target_name" not in overrides:
            config_kwargs["target_name"] = name_env

        if "vibration_enabled" not in overrides:
            config_kwargs["vibration_enabled"] = _env_bool(env.get("HELLCOMPASS_VIBRATION_ENABLED"), True)

        if "rendering_enabled" not in overrides:
            config_kwargs["rendering_enabled"] = _env_bool(env.get("HELLCOMPASS_RENDERING_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
