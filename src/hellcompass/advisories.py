"""Keyed, idempotent advisory messages.

The UI shows one banner per active key.  Signalling a key that is
already active does nothing; signalling it with no message removes it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from hellcompass.models.advisory import Advisory, Severity

_logger = logging.getLogger(__name__)

GEO_NO_SUPPORT = "geo-no-support"
GEO_NO_PERMISSION = "geo-no-perm"
GEO_ERROR = "geo-error"
GEO_TIMEOUT = "geo-timeout"
WEBGL_NO_SUPPORT = "webgl-no-support"
ORIENTATION_NO_SUPPORT = "orientation-no-support"
MOTION_NO_SUPPORT = "motion-no-support"
NO_HEADING = "no-heading"
ORIENTATION_ONLY_TILT = "orientation-only-tilt"
COMPASS_ONLY = "compass-only"
TILT_DEGRADED = "tilt-degraded"

#: Geolocation failures a later successful fix clears.
GEO_TRANSIENT_KEYS: tuple[str, ...] = (GEO_NO_PERMISSION, GEO_ERROR, GEO_TIMEOUT)

AdvisoryListener = Callable[[str, Advisory | None], None]
"""Called with ``(key, advisory)`` on add and ``(key, None)`` on removal."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AdvisoryBoard:
    """Active advisories by key."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        listener: AdvisoryListener | None = None,
    ) -> None:
        self._clock = clock
        self._listener = listener
        self._active: dict[str, Advisory] = {}

    def signal(
        self,
        key: str,
        message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        timeout: float = 0,
    ) -> None:
        """Raise or clear the advisory *key*.

        Parameters
        ----------
        message
            Text to show; ``None`` (or empty) clears the key.
        severity
            Blocking error or non-blocking warning.
        timeout
            Seconds after which the advisory clears itself; ``0`` keeps
            it until cleared explicitly.
        """
        self._prune()
        if message:
            if key in self._active:
                return
            now = self._clock()
            advisory = Advisory(
                key=key,
                message=message,
                severity=severity,
                raised_at=now,
                expires_at=now + timedelta(seconds=timeout) if timeout > 0 else None,
            )
            self._active[key] = advisory
            if severity == Severity.ERROR:
                _logger.error("code: %s\n%s", key, message)
            else:
                _logger.warning("code: %s\n%s", key, message)
            self._notify(key, advisory)
        elif key in self._active:
            _logger.warning("Removing advisory %s.", key)
            del self._active[key]
            self._notify(key, None)

    def clear(self, *keys: str) -> None:
        for key in keys:
            self.signal(key)

    def is_active(self, key: str) -> bool:
        self._prune()
        return key in self._active

    def get(self, key: str) -> Advisory | None:
        self._prune()
        return self._active.get(key)

    def active(self) -> tuple[Advisory, ...]:
        """Active advisories in the order they were raised."""
        self._prune()
        return tuple(self._active.values())

    def __len__(self) -> int:
        return len(self.active())

    def _prune(self) -> None:
        now = self._clock()
        expired = [key for key, adv in self._active.items() if adv.expires_at is not None and now >= adv.expires_at]
        for key in expired:
            _logger.warning("Removing advisory %s.", key)
            del self._active[key]
            self._notify(key, None)

    def _notify(self, key: str, advisory: Advisory | None) -> None:
        if self._listener is None:
            return
        try:
            self._listener(key, advisory)
        except Exception:
            _logger.debug("Advisory listener failed", exc_info=True)
