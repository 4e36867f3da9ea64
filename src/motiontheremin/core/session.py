"""App-level coordinator for live play, recording and playback."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ..analysis.mapping import TiltMapper
from ..config import MotionConfig
from ..models import ControlUpdate, OrientationSample, RawSample
from .pipeline import DebugSnapshot, SinkLike, call_sink
from .pipeline_wiring import build_pipeline
from .playback import TickTimer
from .recorder import Recording

logger = logging.getLogger(__name__)


class PerformanceSession:
    """
    Own one pipeline/recorder/scheduler trio bound to a single sink.

    Recording and playback share the sink, so the session refuses to arm the
    recorder while a replay runs and vice versa. Live samples are ignored
    while playback owns the sink.
    """

    def __init__(
        self,
        sink: SinkLike,
        config: MotionConfig | None = None,
        *,
        timer: TickTimer | None = None,
        clock: Callable[[], float] = time.monotonic,
        playback_clock: Callable[[], float] | None = None,
        on_playback_finished: Callable[[], None] | None = None,
    ) -> None:
        self.config = (config or MotionConfig()).sanitized()
        self.sink = sink
        handles = build_pipeline(
            self.config,
            sink,
            timer=timer,
            clock=clock,
            playback_clock=playback_clock,
            on_playback_finished=on_playback_finished,
        )
        self.pipeline = handles.pipeline
        self.recorder = handles.recorder
        self.playback = handles.playback
        self.tilt = TiltMapper(alpha=self.config.pitch_alpha)

    # --------------------------------------------------------------- state
    @property
    def is_recording(self) -> bool:
        return self.recorder.is_armed

    @property
    def is_playing(self) -> bool:
        return self.playback.is_playing

    @property
    def has_recording(self) -> bool:
        return self.recorder.has_recording

    @property
    def recording(self) -> Recording:
        return self.recorder.recording

    def snapshot(self) -> DebugSnapshot:
        return self.pipeline.snapshot()

    # --------------------------------------------------------------- input
    def on_sample(self, sample: RawSample) -> Optional[ControlUpdate]:
        if self.is_playing:
            return None
        if self.config.input_mode != "motion":
            return None
        return self.pipeline.on_sample(sample)

    def on_orientation(self, sample: OrientationSample) -> Optional[ControlUpdate]:
        self.pipeline.on_orientation(sample)
        if self.is_playing or self.config.input_mode != "tilt":
            return None
        update = self.tilt.update(sample)
        if update is None:
            return None
        call_sink(self.sink, update.pitch, update.volume)
        if self.recorder.is_armed:
            self.recorder.capture(update.pitch, update.volume)
        return update

    def restart(self) -> None:
        """Start over: recalibrate and return both controls to center."""
        self.pipeline.reset()
        self.tilt.reset()

    def on_permission_granted(self) -> None:
        logger.info("Motion permission granted; recalibrating")
        self.restart()

    # --------------------------------------------------------------- recording
    def start_recording(self) -> bool:
        if self.is_playing:
            logger.warning("Refusing to record while playback is running")
            return False
        self.recorder.arm()
        return True

    def stop_recording(self) -> None:
        self.recorder.disarm()

    def clear_recording(self) -> None:
        self.recorder.clear()

    # --------------------------------------------------------------- playback
    def play_recording(self) -> bool:
        if self.is_recording:
            logger.warning("Refusing to play back while recording")
            return False
        if not self.has_recording:
            logger.debug("No recording to play back")
            return False
        return self.playback.play(self.recorder.recording)

    def stop_playback(self) -> None:
        self.playback.stop()

    def close(self) -> None:
        """Stop everything that holds the sink or a timer."""
        self.playback.stop()
        self.recorder.disarm()
