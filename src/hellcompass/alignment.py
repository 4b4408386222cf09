"""Vibration feedback when the device faces the target.

Two states, ``IDLE`` and ``VIBRATING``.  Entering ``VIBRATING`` starts
the pattern and locks the controller for the pattern's total duration;
nothing re-triggers or stops the vibration during the lock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Protocol

from hellcompass._constants import ALIGNMENT_THRESHOLD_RAD, VIBRATION_PATTERN_MS
from hellcompass.angles import angular_separation

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Vibrator(Protocol):
    """Device vibration motor."""

    def start(self, pattern_ms: Sequence[int]) -> None: ...

    def stop(self) -> None: ...


class FeedbackState(StrEnum):
    IDLE = "idle"
    VIBRATING = "vibrating"


def is_aligned(bearing: float, heading: float, threshold: float = ALIGNMENT_THRESHOLD_RAD) -> bool:
    """Whether *heading* points within *threshold* of *bearing*."""
    return angular_separation(bearing, heading) < threshold


class AlignmentController:
    """Debounced vibration feedback.

    Parameters
    ----------
    vibrator
        Vibration backend, or ``None`` when the device cannot vibrate.
        Without one the controller never leaves ``IDLE``.
    pattern_ms
        On/off durations passed to :meth:`Vibrator.start`.
    threshold
        Alignment window half-width in radians.
    clock
        Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        vibrator: Vibrator | None = None,
        *,
        pattern_ms: Sequence[int] = VIBRATION_PATTERN_MS,
        threshold: float = ALIGNMENT_THRESHOLD_RAD,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._vibrator = vibrator
        self._pattern = tuple(pattern_ms)
        self._threshold = threshold
        self._clock = clock
        self._state = FeedbackState.IDLE
        self._locked_until: datetime | None = None

    @property
    def state(self) -> FeedbackState:
        self._expire()
        return self._state

    @property
    def has_vibrator(self) -> bool:
        return self._vibrator is not None

    @property
    def duration(self) -> timedelta:
        return timedelta(milliseconds=sum(self._pattern))

    def detach_vibrator(self) -> None:
        """Drop the vibrator (capability reported missing).

        A pattern still playing is cancelled first.
        """
        self._expire()
        if self._vibrator is not None and self._state == FeedbackState.VIBRATING:
            self._vibrator.stop()
        self._vibrator = None
        self._state = FeedbackState.IDLE
        self._locked_until = None

    def _expire(self) -> None:
        if self._state == FeedbackState.VIBRATING and self._locked_until is not None:
            if self._clock() >= self._locked_until:
                _logger.debug("Vibration pattern finished")
                self._state = FeedbackState.IDLE
                self._locked_until = None

    def evaluate(self, bearing: float | None, heading: float | None) -> bool:
        """Run one tick.  Returns whether the heading is aligned.

        Unknown bearing or heading counts as not aligned.
        """
        aligned = bearing is not None and heading is not None and is_aligned(bearing, heading, self._threshold)
        vibrator = self._vibrator
        if vibrator is None:
            return aligned

        self._expire()
        if self._state == FeedbackState.VIBRATING:
            return aligned

        if aligned:
            _logger.info("Aligned with target; starting vibration pattern")
            vibrator.start(self._pattern)
            self._state = FeedbackState.VIBRATING
            self._locked_until = self._clock() + self.duration
        else:
            vibrator.stop()
        return aligned
