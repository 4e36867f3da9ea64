import pytest

from motiontheremin.analysis.filters import SmoothingFilter, SmoothingState, apply_smoothing


def test_apply_smoothing_blends_with_previous_output() -> None:
    state = SmoothingState(alpha=0.25, previous_output=0.0)
    assert apply_smoothing(state, 4.0) == pytest.approx(1.0)
    assert state.previous_output == pytest.approx(1.0)
    assert apply_smoothing(state, 4.0) == pytest.approx(1.75)


def test_constant_input_converges_to_that_input() -> None:
    filt = SmoothingFilter(alpha=0.2)
    for _ in range(200):
        filt.apply(3.5)
    assert filt.value == pytest.approx(3.5, abs=1e-9)


def test_alpha_one_passes_input_through() -> None:
    filt = SmoothingFilter(alpha=1.0, initial=7.0)
    assert filt.apply(-2.0) == -2.0


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_alpha_must_be_in_unit_interval(alpha: float) -> None:
    with pytest.raises(ValueError):
        SmoothingState(alpha=alpha)


def test_reset_restores_initial_output() -> None:
    filt = SmoothingFilter(alpha=0.5, initial=0.5)
    filt.apply(10.0)
    filt.reset()
    assert filt.value == 0.5
