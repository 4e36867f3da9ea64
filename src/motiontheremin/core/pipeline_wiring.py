"""Factory helpers that wire the motion components from configuration."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..analysis.filters import SmoothingFilter
from ..analysis.rate import RateController
from ..analysis.tracker import PositionTracker
from ..baseline import Calibrator
from ..config import MotionConfig
from .pipeline import MotionPipeline, NullSink, SinkLike
from .playback import PlaybackScheduler, TickTimer
from .recorder import FrameRecorder


@dataclass(slots=True)
class PipelineHandles:
    """Return value from :func:`build_pipeline` containing ready-to-use pieces."""

    pipeline: MotionPipeline
    recorder: FrameRecorder
    playback: PlaybackScheduler


def _tracker(cfg: MotionConfig) -> PositionTracker:
    return PositionTracker(
        sensitivity=cfg.sensitivity,
        damping=cfg.damping,
        centering_force=cfg.centering_force,
        restitution=cfg.restitution,
        dt=cfg.dt,
    )


def build_pipeline(
    cfg: MotionConfig,
    sink: Optional[SinkLike] = None,
    *,
    timer: TickTimer | None = None,
    clock: Callable[[], float] = time.monotonic,
    playback_clock: Callable[[], float] | None = None,
    on_playback_finished: Callable[[], None] | None = None,
) -> PipelineHandles:
    """
    Build a :class:`MotionPipeline` plus recorder and playback scheduler.

    Parameters
    ----------
    cfg:
        Runtime configuration (usually loaded from YAML).
    sink:
        Receiver of control updates, shared by live input and playback.
        Defaults to a :class:`NullSink`.
    timer:
        Periodic timer that drives playback ticks. When omitted a
        :class:`~motiontheremin.core.playback.ManualTickTimer` is used and the
        host is expected to fire it.
    clock:
        Monotonic clock in seconds shared by recorder, scheduler and the
        pipeline's rate estimate.
    playback_clock:
        Separate clock for the scheduler. Needed when ``clock`` follows the
        sample stream (file input) but replay must run in real time.
    """
    normalized = cfg.sanitized()
    target: SinkLike = sink if sink is not None else NullSink()

    playback = PlaybackScheduler(
        target,
        timer,
        clock=playback_clock if playback_clock is not None else clock,
        interval_ms=normalized.playback_interval_ms,
        on_finished=on_playback_finished,
    )
    recorder = FrameRecorder(clock=clock, playback=playback)
    pipeline = MotionPipeline(
        target,
        calibrator=Calibrator(normalized.calibration_samples),
        pitch_filter=SmoothingFilter(normalized.pitch_alpha),
        volume_filter=SmoothingFilter(normalized.volume_alpha),
        pitch_tracker=_tracker(normalized),
        volume_tracker=_tracker(normalized),
        recorder=recorder,
        rate=RateController(window_size=normalized.rate_window),
        clock=clock,
    )
    return PipelineHandles(pipeline=pipeline, recorder=recorder, playback=playback)


__all__ = ["PipelineHandles", "build_pipeline"]
