from __future__ import annotations

import math

import pytest

from hellcompass.angles import angular_separation, degrees_from_radians, radians_from_degrees, wrap_angle

TWO_PI = 2 * math.pi


@pytest.mark.parametrize(
    "value",
    [0.0, 1.0, -1.0, math.pi, -math.pi, TWO_PI, -TWO_PI, 7.5, -7.5, 1e6, -1e6, -1e-17, 123.456],
)
def test_wrap_angle_range_and_idempotence(value: float) -> None:
    wrapped = wrap_angle(value)

    assert 0.0 <= wrapped < TWO_PI
    assert wrap_angle(wrapped) == wrapped


def test_wrap_angle_known_values() -> None:
    assert wrap_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
    assert wrap_angle(5 * math.pi / 2) == pytest.approx(math.pi / 2)
    assert wrap_angle(TWO_PI) == 0.0


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_wrap_angle_rejects_non_finite(value: float) -> None:
    with pytest.raises(ValueError):
        wrap_angle(value)


def test_degree_conversion() -> None:
    assert radians_from_degrees(180) == pytest.approx(math.pi)
    assert degrees_from_radians(math.pi / 2) == pytest.approx(90.0)


def test_angular_separation_wraps_around_north() -> None:
    assert angular_separation(0.01, TWO_PI - 0.01) == pytest.approx(0.02)
    assert angular_separation(0.0, math.pi) == pytest.approx(math.pi)
    assert angular_separation(-math.pi / 2, 3 * math.pi / 2) == pytest.approx(0.0, abs=1e-12)
