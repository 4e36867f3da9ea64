"""Motion sample pipeline: calibration, smoothing, tracking and fan-out."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol, Sequence

import numpy as np

from ..analysis.filters import SmoothingFilter
from ..analysis.mapping import pitch_to_frequency
from ..analysis.rate import RateController
from ..analysis.tracker import PositionTracker
from ..baseline import CalibrationPhase, Calibrator
from ..errors import InvalidSample
from ..models import ControlUpdate, OrientationSample, PipelineState, RawSample

if TYPE_CHECKING:
    from .recorder import FrameRecorder

__all__ = [
    "ControlSink",
    "SinkLike",
    "NullSink",
    "FanOutSink",
    "FrequencySink",
    "DebugSnapshot",
    "MotionPipeline",
    "call_sink",
]

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ControlSink(Protocol):
    """Receives normalized control pairs (audio parameter setter, visualizer...)."""

    def on_control_update(self, pitch: float, volume: float) -> None:  # pragma: no cover - protocol
        ...


class AudioParameterTarget(Protocol):
    """Audio engine surface used by :class:`FrequencySink`."""

    def set_pitch(self, frequency_hz: float) -> None:  # pragma: no cover - protocol
        ...

    def set_volume(self, volume: float) -> None:  # pragma: no cover - protocol
        ...


SinkLike = ControlSink | Callable[[float, float], None]


def call_sink(sink: SinkLike, pitch: float, volume: float) -> None:
    if hasattr(sink, "on_control_update"):
        sink.on_control_update(pitch, volume)  # type: ignore[union-attr]
    else:
        sink(pitch, volume)  # type: ignore[operator]


@dataclass(slots=True)
class NullSink:
    """No-op sink used when nothing is listening."""

    def on_control_update(self, pitch: float, volume: float) -> None:  # pragma: no cover - trivial
        return


@dataclass(slots=True)
class FanOutSink:
    """Forward every update to each sink in order."""

    sinks: Sequence[SinkLike] = field(default_factory=tuple)

    def on_control_update(self, pitch: float, volume: float) -> None:
        for sink in self.sinks:
            call_sink(sink, pitch, volume)


@dataclass(slots=True)
class FrequencySink:
    """Convert normalized pitch to Hz before handing it to an audio engine."""

    target: AudioParameterTarget
    min_frequency_hz: float = 200.0
    max_frequency_hz: float = 2000.0

    def on_control_update(self, pitch: float, volume: float) -> None:
        self.target.set_pitch(pitch_to_frequency(pitch, self.min_frequency_hz, self.max_frequency_hz))
        self.target.set_volume(volume)


@dataclass(slots=True)
class DebugSnapshot:
    """Point-in-time view of the pipeline internals for a debug panel."""

    calibration_status: CalibrationPhase
    calibration_progress: float
    pitch_position: float
    volume_position: float
    pitch_velocity: float
    volume_velocity: float
    raw_accel: Optional[tuple[float, float, float]]
    baseline: Optional[tuple[float, float, float]]
    motion_accel: Optional[tuple[float, float, float]]
    smoothed_x: float
    smoothed_y: float
    rotation: Optional[tuple[Optional[float], Optional[float], Optional[float]]]
    update_rate_hz: float
    last_update_time: Optional[float]

    def as_dict(self) -> Dict[str, Any]:
        """Flatten the snapshot into scalar fields (``None`` where unknown)."""

        def _xyz(prefix: str, values: Optional[Sequence[Optional[float]]]) -> Dict[str, Any]:
            vals = tuple(values) if values is not None else (None, None, None)
            return {f"{prefix}_x": vals[0], f"{prefix}_y": vals[1], f"{prefix}_z": vals[2]}

        out: Dict[str, Any] = {
            "calibration_status": self.calibration_status,
            "calibration_progress": self.calibration_progress,
            "pitch_position": self.pitch_position,
            "volume_position": self.volume_position,
            "pitch_velocity": self.pitch_velocity,
            "volume_velocity": self.volume_velocity,
            "smoothed_x": self.smoothed_x,
            "smoothed_y": self.smoothed_y,
            "update_rate_hz": self.update_rate_hz,
            "last_update_time": self.last_update_time,
        }
        out.update(_xyz("raw_accel", self.raw_accel))
        out.update(_xyz("baseline", self.baseline))
        out.update(_xyz("motion_accel", self.motion_accel))
        rotation = self.rotation or (None, None, None)
        out.update(
            {
                "rotation_alpha": rotation[0],
                "rotation_beta": rotation[1],
                "rotation_gamma": rotation[2],
            }
        )
        return out


def _as_tuple(values: np.ndarray) -> tuple[float, float, float]:
    return float(values[0]), float(values[1]), float(values[2])


class MotionPipeline:
    """
    Turn raw acceleration samples into ``(pitch, volume)`` control pairs.

    Samples are gated on calibration: until the calibrator has its baseline
    nothing is emitted. Afterwards each valid sample is baseline-corrected,
    the lateral (x) and vertical (y) channels are smoothed independently and
    fed through their own position trackers. Pitch comes from the vertical
    channel, volume from the lateral one.
    """

    def __init__(
        self,
        sink: SinkLike | None = None,
        *,
        calibrator: Calibrator | None = None,
        pitch_filter: SmoothingFilter | None = None,
        volume_filter: SmoothingFilter | None = None,
        pitch_tracker: PositionTracker | None = None,
        volume_tracker: PositionTracker | None = None,
        recorder: "FrameRecorder | None" = None,
        rate: RateController | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.sink: SinkLike = sink if sink is not None else NullSink()
        self.calibrator = calibrator or Calibrator()
        self.pitch_filter = pitch_filter or SmoothingFilter(0.2)
        self.volume_filter = volume_filter or SmoothingFilter(0.3)
        self.pitch_tracker = pitch_tracker or PositionTracker()
        self.volume_tracker = volume_tracker or PositionTracker()
        self.recorder = recorder
        self.rate = rate or RateController()
        self._clock = clock
        self._state = PipelineState.AWAITING_CALIBRATION

        self._raw: Optional[np.ndarray] = None
        self._motion: Optional[np.ndarray] = None
        self._rotation: Optional[tuple[Optional[float], Optional[float], Optional[float]]] = None
        self._last_update: Optional[float] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_live(self) -> bool:
        return self._state is PipelineState.LIVE

    def on_sample(self, sample: RawSample) -> Optional[ControlUpdate]:
        """
        Process one sensor sample.

        Returns the emitted :class:`ControlUpdate`, or ``None`` when the sample
        was dropped or consumed by calibration.
        """
        if self._state is PipelineState.AWAITING_CALIBRATION:
            try:
                status = self.calibrator.submit(sample)
            except InvalidSample as exc:
                logger.debug("Dropping sample during calibration: %s", exc)
                return None
            self._raw = sample.as_array()
            if status.complete:
                self._state = PipelineState.LIVE
                logger.info("Motion pipeline is live")
            return None

        if not sample.is_valid():
            logger.debug("Dropping invalid sample: %r", sample)
            return None

        baseline = self.calibrator.baseline
        if baseline is None:
            raise RuntimeError("calibrator lost its baseline while the pipeline is live; call reset()")
        raw = sample.as_array()
        motion = baseline.apply(raw)

        smoothed_x = self.volume_filter.apply(motion[0])
        smoothed_y = self.pitch_filter.apply(motion[1])
        volume = self.volume_tracker.integrate(smoothed_x)
        pitch = self.pitch_tracker.integrate(smoothed_y)

        now = self._clock()
        self.rate.add_sample_time(now)
        self._raw = raw
        self._motion = motion
        self._last_update = now

        call_sink(self.sink, pitch, volume)
        if self.recorder is not None and self.recorder.is_armed:
            self.recorder.capture(pitch, volume)
        return ControlUpdate(pitch=pitch, volume=volume)

    def on_orientation(self, sample: OrientationSample) -> None:
        """Remember the latest device rotation for :meth:`snapshot`."""
        self._rotation = (sample.alpha, sample.beta, sample.gamma)

    def reset(self) -> None:
        """Restart calibration and return every channel to rest."""
        self.calibrator.reset()
        self.pitch_filter.reset()
        self.volume_filter.reset()
        self.pitch_tracker.reset()
        self.volume_tracker.reset()
        self.rate.reset()
        self._state = PipelineState.AWAITING_CALIBRATION
        self._raw = None
        self._motion = None
        self._last_update = None
        logger.info("Motion pipeline reset; awaiting calibration")

    def snapshot(self) -> DebugSnapshot:
        status = self.calibrator.status()
        baseline = status.baseline
        return DebugSnapshot(
            calibration_status=status.phase,
            calibration_progress=status.progress,
            pitch_position=self.pitch_tracker.position,
            volume_position=self.volume_tracker.position,
            pitch_velocity=self.pitch_tracker.velocity,
            volume_velocity=self.volume_tracker.velocity,
            raw_accel=_as_tuple(self._raw) if self._raw is not None else None,
            baseline=(baseline.x, baseline.y, baseline.z) if baseline is not None else None,
            motion_accel=_as_tuple(self._motion) if self._motion is not None else None,
            smoothed_x=self.volume_filter.value,
            smoothed_y=self.pitch_filter.value,
            rotation=self._rotation,
            update_rate_hz=self.rate.estimated_hz,
            last_update_time=self._last_update,
        )
