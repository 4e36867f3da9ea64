"""Mappings between normalized control values and physical quantities."""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..models import ControlUpdate, OrientationSample
from .filters import SmoothingFilter

logger = logging.getLogger(__name__)

MIN_FREQUENCY_HZ = 200.0
MAX_FREQUENCY_HZ = 2000.0

GAMMA_RANGE_DEG = 45.0
BETA_HOLDING_ANGLE_DEG = 30.0
BETA_MIN_DEG = -30.0
BETA_MAX_DEG = 60.0


def pitch_to_frequency(
    pitch: float,
    min_hz: float = MIN_FREQUENCY_HZ,
    max_hz: float = MAX_FREQUENCY_HZ,
) -> float:
    """
    Map normalized pitch in [0, 1] to a frequency in Hz on a logarithmic scale.

    Equal steps in ``pitch`` give equal musical intervals.
    """
    if min_hz <= 0 or max_hz < min_hz:
        raise ValueError(f"invalid frequency range [{min_hz}, {max_hz}]")
    p = max(0.0, min(1.0, float(pitch)))
    log_min = math.log(min_hz)
    log_max = math.log(max_hz)
    return math.exp(log_min + p * (log_max - log_min))


def normalize_gamma(gamma: float) -> float:
    """Left/right tilt: -45..45 degrees maps to 0..1."""
    clamped = max(-GAMMA_RANGE_DEG, min(GAMMA_RANGE_DEG, float(gamma)))
    return (clamped + GAMMA_RANGE_DEG) / (2.0 * GAMMA_RANGE_DEG)


def normalize_beta(beta: float) -> float:
    """
    Forward/back tilt relative to the natural holding angle.

    A phone is usually held ~30 degrees back, so ``beta - 30`` in -30..60
    maps to 0..1.
    """
    adjusted = float(beta) - BETA_HOLDING_ANGLE_DEG
    clamped = max(BETA_MIN_DEG, min(BETA_MAX_DEG, adjusted))
    return (clamped - BETA_MIN_DEG) / (BETA_MAX_DEG - BETA_MIN_DEG)


class TiltMapper:
    """
    Orientation-driven alternative to the motion pipeline.

    Gamma (left/right tilt) drives pitch and beta (forward/back tilt) drives
    volume; both are smoothed starting from the center value.
    """

    def __init__(self, alpha: float = 0.2) -> None:
        self._pitch = SmoothingFilter(alpha, initial=0.5)
        self._volume = SmoothingFilter(alpha, initial=0.5)

    def update(self, sample: OrientationSample) -> Optional[ControlUpdate]:
        if not sample.has_tilt():
            logger.debug("Dropping orientation sample without tilt: %r", sample)
            return None
        pitch = self._pitch.apply(normalize_gamma(sample.gamma))  # type: ignore[arg-type]
        volume = self._volume.apply(normalize_beta(sample.beta))  # type: ignore[arg-type]
        return ControlUpdate(pitch=pitch, volume=volume)

    def reset(self) -> None:
        self._pitch.reset()
        self._volume.reset()
