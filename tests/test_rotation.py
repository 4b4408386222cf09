from __future__ import annotations

import math

import pytest

from hellcompass.models.frame import CapabilityTier
from hellcompass.rotation import correct_tilt, is_tipped_over, solve_rotation, tilt_down
from hellcompass.tiers import TierResolution

TWO_PI = 2 * math.pi


def test_compass_only_is_pure_yaw() -> None:
    resolution = TierResolution(tier=CapabilityTier.COMPASS_ONLY, heading=math.pi / 2)

    rotation = solve_rotation(resolution, bearing=0.0, vertical_angle=0.1)

    assert rotation is not None
    assert rotation.yaw == pytest.approx(math.pi / 2)
    assert rotation.pitch == 0.0
    assert rotation.roll == 0.0


def test_compass_only_wraps_negative_raw_bearing() -> None:
    resolution = TierResolution(tier=CapabilityTier.COMPASS_ONLY, heading=0.0)

    rotation = solve_rotation(resolution, bearing=-math.pi / 2)

    assert rotation is not None
    assert rotation.yaw == pytest.approx(math.pi / 2)


def test_none_tier_has_no_rotation() -> None:
    assert solve_rotation(TierResolution(tier=CapabilityTier.NONE), bearing=0.0) is None


def test_orientation_only_upright_keeps_axes_and_tilts_down() -> None:
    resolution = TierResolution(
        tier=CapabilityTier.ORIENTATION_ONLY,
        heading=math.pi / 2,
        pitch=0.1,
        roll=0.2,
    )

    rotation = solve_rotation(resolution, bearing=0.0, vertical_angle=0.05)

    assert rotation is not None
    assert rotation.yaw == pytest.approx(math.pi / 2)
    assert rotation.pitch == pytest.approx(0.05)
    assert rotation.roll == pytest.approx(0.2)


def test_tipped_over_device_gets_half_turn_and_inverted_roll() -> None:
    resolution = TierResolution(
        tier=CapabilityTier.ORIENTATION_ONLY,
        heading=math.pi / 2,
        pitch=math.pi / 2,
        roll=0.3,
    )

    rotation = solve_rotation(resolution, bearing=0.0, vertical_angle=0.0)

    assert rotation is not None
    assert rotation.yaw == pytest.approx(3 * math.pi / 2)
    assert rotation.pitch == pytest.approx(math.pi / 2)
    assert rotation.roll == pytest.approx(TWO_PI - 0.3)


def test_full_and_orientation_only_share_the_correction() -> None:
    common = {"heading": 1.0, "pitch": 2.0, "roll": 0.5}
    full = solve_rotation(TierResolution(tier=CapabilityTier.FULL, **common), bearing=0.25, vertical_angle=0.01)
    gyro = solve_rotation(
        TierResolution(tier=CapabilityTier.ORIENTATION_ONLY, **common), bearing=0.25, vertical_angle=0.01
    )

    assert full == gyro


@pytest.mark.parametrize(
    ("pitch", "expected"),
    [
        (0.0, False),
        (math.pi / 4, False),
        (math.pi / 4 + 1e-9, True),
        (math.pi, True),
        (7 * math.pi / 4, True),
        (7 * math.pi / 4 + 1e-9, False),
        (-0.1, False),
        (-math.pi / 2, True),
    ],
)
def test_tipped_over_window(pitch: float, expected: bool) -> None:
    assert is_tipped_over(pitch) is expected


def test_correct_tilt_rejects_flat_tiers() -> None:
    with pytest.raises(ValueError):
        correct_tilt(0.0, 0.0, 0.0, CapabilityTier.COMPASS_ONLY)


def test_axis_convention_is_yaw_pitch_roll() -> None:
    rotation = correct_tilt(0.1, 0.2, 0.3, CapabilityTier.FULL)

    assert (rotation.yaw, rotation.pitch, rotation.roll) == pytest.approx((0.3, 0.1, 0.2))


def test_tilt_down_wraps_below_zero() -> None:
    rotation = correct_tilt(0.0, 0.0, 0.0, CapabilityTier.FULL)

    assert tilt_down(rotation, 0.1).pitch == pytest.approx(TWO_PI - 0.1)
