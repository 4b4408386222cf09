from __future__ import annotations

import logging
import math

import pytest
from conftest import FakeClock

from hellcompass.exceptions import (
    GeolocationError,
    GeolocationErrorCode,
    GeolocationPermissionError,
    GeolocationTimeoutError,
    GeolocationUnavailableError,
)
from hellcompass.ingestion.geolocation import parse_position, parse_position_error
from hellcompass.ingestion.motion import parse_motion, tilt_from_vector
from hellcompass.ingestion.normalize import safe_float
from hellcompass.ingestion.orientation import OrientationIngestor
from hellcompass.models.readings import Vector3
from hellcompass.models.sensors import YawSource

# ------------------------------------------------------------------
# Geolocation
# ------------------------------------------------------------------


def test_position_from_browser_shape(clock: FakeClock) -> None:
    fix = parse_position({"coords": {"latitude": 42.0, "longitude": -83.0, "heading": 90}}, clock=clock)

    assert fix is not None
    assert fix.latitude == pytest.approx(math.radians(42.0))
    assert fix.longitude == pytest.approx(math.radians(-83.0))
    assert fix.heading == pytest.approx(math.pi / 2)
    assert fix.observed_at == clock.now


def test_position_heading_nan_or_missing_is_absent() -> None:
    nan_fix = parse_position({"latitude": 1, "longitude": 2, "heading": float("nan")})
    missing_fix = parse_position({"lat": "1", "lon": "2"})

    assert nan_fix is not None and nan_fix.heading is None
    assert missing_fix is not None and missing_fix.heading is None


def test_negative_heading_is_wrapped() -> None:
    fix = parse_position({"latitude": 0, "longitude": 0, "heading_deg": -90})

    assert fix is not None
    assert fix.heading == pytest.approx(3 * math.pi / 2)


@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": 42.0},
        {"latitude": "--", "longitude": -83.0},
        {"coords": {"latitude": None, "longitude": None}},
        {},
    ],
)
def test_incomplete_position_is_dropped(payload: dict[str, object]) -> None:
    assert parse_position(payload) is None


@pytest.mark.parametrize(
    ("code", "error_type"),
    [
        (1, GeolocationPermissionError),
        (2, GeolocationUnavailableError),
        (3, GeolocationTimeoutError),
        (99, GeolocationError),
    ],
)
def test_position_error_codes(code: int, error_type: type[GeolocationError]) -> None:
    error = parse_position_error(code)

    assert type(error) is error_type


def test_position_error_mapping_keeps_message() -> None:
    error = parse_position_error({"code": 3, "message": "took too long"})

    assert isinstance(error, GeolocationTimeoutError)
    assert error.code == GeolocationErrorCode.TIMEOUT
    assert str(error) == "took too long"


# ------------------------------------------------------------------
# Orientation
# ------------------------------------------------------------------


def test_orientation_uses_alpha(clock: FakeClock) -> None:
    orientation = OrientationIngestor(clock=clock).parse({"alpha": 90, "beta": -45, "gamma": 10})

    assert orientation is not None
    assert orientation.yaw == pytest.approx(math.pi / 2)
    assert orientation.yaw_source == YawSource.ALPHA
    assert orientation.pitch == pytest.approx(2 * math.pi - math.pi / 4)
    assert orientation.roll == pytest.approx(math.radians(10))


def test_compass_heading_wins_and_is_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    ingestor = OrientationIngestor()
    payload = {"alpha": 10, "beta": 0, "gamma": 0, "webkitCompassHeading": 180}

    with caplog.at_level(logging.WARNING, logger="hellcompass.ingestion.orientation"):
        first = ingestor.parse(payload)
        ingestor.parse(payload)

    assert first is not None
    assert first.yaw == pytest.approx(math.pi)
    assert first.yaw_source == YawSource.COMPASS
    assert len(caplog.records) == 1


def test_orientation_without_yaw_keeps_tilt() -> None:
    orientation = OrientationIngestor().parse({"alpha": None, "beta": 30, "gamma": 5})

    assert orientation is not None
    assert orientation.yaw is None
    assert orientation.yaw_source is None


@pytest.mark.parametrize(
    "payload",
    [
        {"alpha": 10, "beta": 30},
        {"alpha": 10, "gamma": 30},
        {"webkitCompassHeading": 120, "alpha": 30, "beta": None, "gamma": None},
    ],
)
def test_orientation_without_full_tilt_keeps_heading(payload: dict[str, object]) -> None:
    orientation = OrientationIngestor().parse(payload)

    assert orientation is not None
    assert orientation.yaw is not None
    assert orientation.pitch is None
    assert orientation.roll is None
    assert orientation.has_tilt is False


@pytest.mark.parametrize("payload", [{"beta": 30}, {"alpha": None, "gamma": 30}, {}])
def test_orientation_without_heading_or_tilt_is_dropped(payload: dict[str, object]) -> None:
    assert OrientationIngestor().parse(payload) is None


# ------------------------------------------------------------------
# Motion
# ------------------------------------------------------------------


def test_gravity_is_isolated_when_both_vectors_present(clock: FakeClock) -> None:
    tilt = parse_motion(
        {
            "acceleration": {"x": 1.0, "y": 0.0, "z": 0.0},
            "accelerationIncludingGravity": {"x": 1.0, "y": 0.0, "z": 9.81},
        },
        clock=clock,
    )

    assert tilt is not None
    assert tilt.degraded is False
    assert tilt.pitch == pytest.approx(0.0, abs=1e-12)
    assert tilt.roll == pytest.approx(0.0, abs=1e-12)
    assert tilt.observed_at == clock.now


def test_raw_vector_used_and_flagged_without_separation() -> None:
    tilt = parse_motion({"accelerationIncludingGravity": [0.0, 9.81, 0.0]})

    assert tilt is not None
    assert tilt.degraded is True
    assert tilt.roll == pytest.approx(math.pi / 2)


def test_incomplete_vector_is_treated_as_absent() -> None:
    tilt = parse_motion(
        {
            "acceleration": {"x": None, "y": None, "z": None},
            "accelerationIncludingGravity": {"x": 0.0, "y": 0.0, "z": 9.81},
        }
    )

    assert tilt is not None
    assert tilt.degraded is True


def test_motion_without_usable_vector_is_dropped() -> None:
    assert parse_motion({}) is None
    assert parse_motion({"acceleration": {"x": 0, "y": 0, "z": 0}}) is None


def test_tilt_from_vector_pitch_sign() -> None:
    angles = tilt_from_vector(Vector3(x=-9.81, y=0.0, z=0.0))

    assert angles is not None
    pitch, _roll = angles
    assert pitch == pytest.approx(math.pi / 2)


@pytest.mark.parametrize(("value", "expected"), [("1.5", 1.5), ("--", None), (None, None), (True, None), ("x", None)])
def test_safe_float(value: object, expected: float | None) -> None:
    assert safe_float(value) == expected
