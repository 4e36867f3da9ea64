import pytest

from motiontheremin.analysis.rate import RateController


def test_rate_controller_estimates_rate_for_regular_samples() -> None:
    rc = RateController(window_size=100)
    t = 0.0
    for _ in range(100):
        rc.add_sample_time(t)
        t += 1.0 / 60.0  # 60 Hz
    est = rc.estimated_hz
    assert 55.0 < est < 65.0


def test_rate_controller_falls_back_to_default_with_too_few_samples() -> None:
    rc = RateController(window_size=10, default_hz=60.0)
    assert rc.estimated_hz == 60.0
    rc.add_sample_time(1.0)
    assert rc.estimated_hz == 60.0
    assert rc.last_time == 1.0


def test_rate_controller_window_follows_rate_changes() -> None:
    rc = RateController(window_size=10)
    rc.feed_times(i * 0.1 for i in range(50))  # 10 Hz
    rc.feed_times(5.0 + i * 0.01 for i in range(1, 51))  # then 100 Hz
    assert rc.buffer_size == 10
    assert rc.estimated_hz == pytest.approx(100.0)

    rc.reset()
    assert rc.buffer_size == 0
    assert rc.last_time is None


def test_rate_controller_rejects_tiny_window() -> None:
    with pytest.raises(ValueError):
        RateController(window_size=1)
