"""Gravity baseline calibration for raw acceleration samples."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

import numpy as np

from .models import RawSample
from .errors import InvalidSample

logger = logging.getLogger(__name__)

DEFAULT_CALIBRATION_SAMPLES = 30

CalibrationPhase = Literal["pending", "calibrating", "complete"]


@dataclass(frozen=True)
class CalibrationBaseline:
    """Resting gravity vector subtracted from every live sample."""

    x: float
    y: float
    z: float

    def apply(self, sample: np.ndarray) -> np.ndarray:
        """Return ``sample`` with the baseline removed component-wise."""
        return sample - np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class CalibrationStatus:
    phase: CalibrationPhase
    progress: float
    baseline: Optional[CalibrationBaseline] = None

    @property
    def complete(self) -> bool:
        return self.phase == "complete"


def collect_baseline_samples(samples: List[np.ndarray]) -> np.ndarray:
    """
    Stack a list of samples and compute mean per axis.

    ``samples``: list of arrays shaped ``(n_axes,)``.
    """
    if not samples:
        raise ValueError("collect_baseline_samples() requires at least one sample")

    stacked = np.stack(samples, axis=0)  # shape: (N, n_axes)
    return stacked.mean(axis=0)


class Calibrator:
    """
    Averages the first ``target_samples`` accepted samples into a baseline.

    Once complete the baseline never changes until :meth:`reset` is called.
    Samples with a missing or non-finite component raise :class:`InvalidSample`
    and do not count toward calibration.
    """

    def __init__(self, target_samples: int = DEFAULT_CALIBRATION_SAMPLES) -> None:
        if target_samples <= 0:
            raise ValueError("target_samples must be positive")
        self._target = int(target_samples)
        self._samples: list[np.ndarray] = []
        self._baseline: Optional[CalibrationBaseline] = None

    @property
    def target_samples(self) -> int:
        return self._target

    @property
    def baseline(self) -> Optional[CalibrationBaseline]:
        return self._baseline

    @property
    def is_complete(self) -> bool:
        return self._baseline is not None

    def status(self) -> CalibrationStatus:
        if self._baseline is not None:
            return CalibrationStatus("complete", 100.0, self._baseline)
        count = len(self._samples)
        if count == 0:
            return CalibrationStatus("pending", 0.0)
        return CalibrationStatus("calibrating", min(100.0, 100.0 * count / self._target))

    def submit(self, sample: RawSample) -> CalibrationStatus:
        if not sample.is_valid():
            raise InvalidSample(f"sample has missing or non-finite components: {sample!r}")
        if self._baseline is not None:
            return self.status()

        self._samples.append(sample.as_array())
        if len(self._samples) >= self._target:
            mean = collect_baseline_samples(self._samples)
            self._baseline = CalibrationBaseline(float(mean[0]), float(mean[1]), float(mean[2]))
            self._samples.clear()
            logger.info(
                "Calibration complete after %d samples: baseline=(%.3f, %.3f, %.3f)",
                self._target,
                self._baseline.x,
                self._baseline.y,
                self._baseline.z,
            )
        return self.status()

    def reset(self) -> None:
        """Discard accumulated samples and any computed baseline."""
        self._samples.clear()
        self._baseline = None
