from __future__ import annotations

from hellcompass.models.geo import GeoFix
from hellcompass.models.sensors import MotionTilt, Orientation
from hellcompass.state.events import Capability, SensorChannel
from hellcompass.state.store import SensorState


def _fix(lat: float = 0.1) -> GeoFix:
    return GeoFix(latitude=lat, longitude=0.2)


def test_channels_overwrite_only_their_own_slice() -> None:
    state = SensorState()
    state.apply_fix(_fix())
    state.apply_orientation(Orientation(yaw=1.0, pitch=0.0, roll=0.0))
    state.apply_motion(MotionTilt(pitch=0.1, roll=0.2))

    state.apply_fix(_fix(lat=0.5))
    snapshot = state.snapshot()

    assert snapshot.fix is not None and snapshot.fix.latitude == 0.5
    assert snapshot.orientation is not None and snapshot.orientation.yaw == 1.0
    assert snapshot.motion is not None and snapshot.motion.roll == 0.2
    assert state.update_count(SensorChannel.GEOLOCATION) == 2


def test_snapshot_is_not_affected_by_later_writes() -> None:
    state = SensorState()
    state.apply_fix(_fix())
    snapshot = state.snapshot()

    state.clear(SensorChannel.GEOLOCATION)

    assert snapshot.fix is not None
    assert state.fix is None


def test_disabled_channel_stays_empty() -> None:
    state = SensorState()
    state.apply_motion(MotionTilt(pitch=0.1, roll=0.2))

    state.disable(SensorChannel.MOTION)
    state.apply_motion(MotionTilt(pitch=0.3, roll=0.4))

    assert state.motion is None
    assert state.is_disabled(SensorChannel.MOTION)
    assert state.update_count(SensorChannel.MOTION) == 1


def test_capability_channel_mapping() -> None:
    assert Capability.GEOLOCATION.channel == SensorChannel.GEOLOCATION
    assert Capability.WEBGL.channel is None
    assert Capability.VIBRATION.channel is None
