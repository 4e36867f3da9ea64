import math

import pytest

from motiontheremin.analysis.mapping import (
    TiltMapper,
    normalize_beta,
    normalize_gamma,
    pitch_to_frequency,
)
from motiontheremin.models import OrientationSample


def test_pitch_to_frequency_is_logarithmic() -> None:
    assert pitch_to_frequency(0.0) == pytest.approx(200.0)
    assert pitch_to_frequency(1.0) == pytest.approx(2000.0)
    assert pitch_to_frequency(0.5) == pytest.approx(math.sqrt(200.0 * 2000.0))
    assert pitch_to_frequency(1.5) == pytest.approx(2000.0)
    assert pitch_to_frequency(0.5, 100.0, 400.0) == pytest.approx(200.0)


def test_pitch_to_frequency_rejects_bad_range() -> None:
    with pytest.raises(ValueError):
        pitch_to_frequency(0.5, 0.0, 100.0)
    with pytest.raises(ValueError):
        pitch_to_frequency(0.5, 500.0, 100.0)


@pytest.mark.parametrize(
    "gamma, expected",
    [(-90.0, 0.0), (-45.0, 0.0), (0.0, 0.5), (22.5, 0.75), (45.0, 1.0), (80.0, 1.0)],
)
def test_normalize_gamma(gamma: float, expected: float) -> None:
    assert normalize_gamma(gamma) == pytest.approx(expected)


@pytest.mark.parametrize(
    "beta, expected",
    [(-20.0, 0.0), (0.0, 0.0), (30.0, 1.0 / 3.0), (90.0, 1.0), (170.0, 1.0)],
)
def test_normalize_beta_accounts_for_holding_angle(beta: float, expected: float) -> None:
    assert normalize_beta(beta) == pytest.approx(expected)


def test_tilt_mapper_smooths_from_center() -> None:
    mapper = TiltMapper(alpha=0.2)
    update = mapper.update(OrientationSample(0.0, 90.0, 45.0))
    assert update is not None
    assert update.pitch == pytest.approx(0.6)
    assert update.volume == pytest.approx(0.6)

    for _ in range(200):
        update = mapper.update(OrientationSample(0.0, 90.0, 45.0))
    assert update.pitch == pytest.approx(1.0)

    mapper.reset()
    update = mapper.update(OrientationSample(None, 30.0, 0.0))
    assert update.pitch == pytest.approx(0.5)


def test_tilt_mapper_drops_samples_without_tilt() -> None:
    mapper = TiltMapper()
    assert mapper.update(OrientationSample(1.0, None, 3.0)) is None
    assert mapper.update(OrientationSample(1.0, 2.0, float("nan"))) is None
