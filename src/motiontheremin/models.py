"""Shared dataclasses and state enums for motion samples and control output."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class PipelineState(Enum):
    AWAITING_CALIBRATION = "awaiting_calibration"
    LIVE = "live"


class RecorderState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class PlaybackState(Enum):
    IDLE = "idle"
    PLAYING = "playing"


def _is_finite(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


@dataclass(frozen=True)
class RawSample:
    """Acceleration including gravity, in m/s². Components may be missing."""

    x: Optional[float]
    y: Optional[float]
    z: Optional[float]

    def is_valid(self) -> bool:
        return _is_finite(self.x) and _is_finite(self.y) and _is_finite(self.z)

    def as_array(self) -> np.ndarray:
        """Return ``(x, y, z)`` as a float array; only meaningful when valid."""
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class OrientationSample:
    """Device rotation in degrees (alpha: z-axis, beta: x-axis, gamma: y-axis)."""

    alpha: Optional[float]
    beta: Optional[float]
    gamma: Optional[float]

    def has_tilt(self) -> bool:
        return _is_finite(self.beta) and _is_finite(self.gamma)


@dataclass(frozen=True)
class ControlUpdate:
    pitch: float
    volume: float
