import pytest

from motiontheremin.config import MotionConfig
from motiontheremin.core.session import PerformanceSession
from motiontheremin.models import OrientationSample, PipelineState, RawSample

GRAVITY = RawSample(0.0, 9.81, 0.0)


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


class ListSink:
    def __init__(self) -> None:
        self.updates: list[tuple[float, float]] = []

    def on_control_update(self, pitch: float, volume: float) -> None:
        self.updates.append((pitch, volume))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def session(sink: ListSink, clock: FakeClock) -> PerformanceSession:
    sess = PerformanceSession(sink, MotionConfig(), clock=clock)
    for _ in range(30):
        sess.on_sample(GRAVITY)
    return sess


def _perform(session: PerformanceSession, clock: FakeClock, n: int) -> None:
    for i in range(n):
        clock.t += 1.0 / 60.0
        session.on_sample(RawSample(2.0, 9.81 + (i % 5), 0.0))


def test_recorded_performance_replays_identically(
    session: PerformanceSession, sink: ListSink, clock: FakeClock
) -> None:
    assert session.start_recording()
    _perform(session, clock, 20)
    session.stop_recording()
    live = list(sink.updates)
    assert session.has_recording
    assert len(session.recording) == 20

    sink.updates.clear()
    assert session.play_recording()
    assert session.is_playing
    timer = session.playback.timer
    for _ in range(100):
        clock.t += 0.016
        timer.fire()
    assert sink.updates == live
    assert not session.is_playing


def test_recording_and_playback_are_mutually_exclusive(
    session: PerformanceSession, clock: FakeClock
) -> None:
    session.start_recording()
    _perform(session, clock, 3)
    assert session.play_recording() is False
    session.stop_recording()

    assert session.play_recording()
    assert session.start_recording() is False
    assert not session.is_recording


def test_live_samples_are_ignored_during_playback(
    session: PerformanceSession, sink: ListSink, clock: FakeClock
) -> None:
    session.start_recording()
    _perform(session, clock, 3)
    session.stop_recording()
    session.play_recording()

    sink.updates.clear()
    assert session.on_sample(RawSample(5.0, 20.0, 0.0)) is None
    assert sink.updates == []

    session.stop_playback()
    assert session.on_sample(GRAVITY) is not None


def test_play_without_recording_is_refused(session: PerformanceSession) -> None:
    assert session.play_recording() is False
    session.start_recording()
    session.stop_recording()
    assert session.play_recording() is False


def test_clear_recording_stops_playback(session: PerformanceSession, sink: ListSink, clock: FakeClock) -> None:
    session.start_recording()
    _perform(session, clock, 10)
    session.stop_recording()
    session.play_recording()

    session.clear_recording()
    assert not session.is_playing
    assert not session.has_recording

    sink.updates.clear()
    clock.t += 5.0
    session.playback.timer.fire()
    assert sink.updates == []


def test_permission_regrant_restarts_calibration(session: PerformanceSession) -> None:
    assert session.pipeline.is_live
    session.on_permission_granted()
    assert session.pipeline.state is PipelineState.AWAITING_CALIBRATION
    assert session.snapshot().calibration_status == "pending"


def test_tilt_mode_uses_orientation_samples(sink: ListSink, clock: FakeClock) -> None:
    session = PerformanceSession(sink, MotionConfig(input_mode="tilt"), clock=clock)
    assert session.on_sample(GRAVITY) is None

    update = session.on_orientation(OrientationSample(0.0, 90.0, 45.0))
    assert update is not None
    assert update.pitch > 0.5
    assert update.volume > 0.5
    assert sink.updates == [(update.pitch, update.volume)]

    assert session.on_orientation(OrientationSample(0.0, None, 10.0)) is None
    assert session.snapshot().rotation == (0.0, None, 10.0)


def test_tilt_mode_records_updates(sink: ListSink, clock: FakeClock) -> None:
    session = PerformanceSession(sink, MotionConfig(input_mode="tilt"), clock=clock)
    session.start_recording()
    for gamma in (-45.0, 0.0, 45.0):
        clock.t += 0.1
        session.on_orientation(OrientationSample(0.0, 30.0, gamma))
    session.stop_recording()
    assert [f.offset_ms for f in session.recording] == [100, 200, 300]


def test_close_releases_timer_and_recorder(session: PerformanceSession, clock: FakeClock) -> None:
    session.start_recording()
    _perform(session, clock, 2)
    session.close()
    assert not session.is_recording
    assert not session.playback.timer.is_active
