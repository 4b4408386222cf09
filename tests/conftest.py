from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class RecordingVibrator:
    def __init__(self) -> None:
        self.starts: list[tuple[int, ...]] = []
        self.stops = 0

    def start(self, pattern_ms: Sequence[int]) -> None:
        self.starts.append(tuple(pattern_ms))

    def stop(self) -> None:
        self.stops += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vibrator() -> RecordingVibrator:
    return RecordingVibrator()
