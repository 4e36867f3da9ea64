import numpy as np
import pytest

from motiontheremin.analysis.tracker import PositionState, PositionTracker, integrate


def test_position_stays_in_unit_interval_for_wild_input() -> None:
    rng = np.random.default_rng(42)
    tracker = PositionTracker()
    for accel in rng.uniform(-500.0, 500.0, size=5000):
        position = tracker.integrate(float(accel))
        assert 0.0 <= position <= 1.0


def test_sustained_push_pins_to_rail_without_leaving_range() -> None:
    tracker = PositionTracker()
    for _ in range(300):
        tracker.integrate(200.0)
        assert 0.0 <= tracker.position <= 1.0
    assert tracker.position > 0.9


def test_returns_toward_center_without_motion() -> None:
    state = PositionState(position=0.95, velocity=0.0)
    distances = []
    for _ in range(300):
        integrate(state, 0.0, 1.0 / 60.0)
        distances.append(abs(state.position - 0.5))
    assert distances[-1] < 0.01
    assert distances[-1] < distances[0]


def test_acceleration_moves_position_in_its_direction() -> None:
    state = PositionState()
    position = integrate(state, 6.0, 1.0 / 60.0)
    assert position > 0.5
    assert state.velocity > 0.0

    state = PositionState()
    assert integrate(state, -6.0, 1.0 / 60.0) < 0.5


def test_rail_hit_bounces_inelastically() -> None:
    state = PositionState()
    position = integrate(state, 1000.0, 1.0 / 60.0)
    assert position == 1.0
    assert state.velocity < 0.0

    state = PositionState()
    position = integrate(state, -1000.0, 1.0 / 60.0)
    assert position == 0.0
    assert state.velocity > 0.0


def test_reset_returns_to_rest() -> None:
    tracker = PositionTracker(centering_force=0.05)
    tracker.integrate(50.0)
    tracker.reset()
    assert tracker.position == 0.5
    assert tracker.velocity == 0.0
    assert tracker.state.centering_force == 0.05


def test_tracker_rejects_non_positive_dt() -> None:
    with pytest.raises(ValueError):
        PositionTracker(dt=0.0)
