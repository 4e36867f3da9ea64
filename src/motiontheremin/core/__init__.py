"""Core motion processing: pipeline, recorder, playback and session.

This package sits between the sensor source and the audio/visual sinks. The
pipeline turns samples into control pairs, the recorder captures those pairs,
the playback scheduler replays them on a host timer, and the session enforces
that recording and playback never fight over the same sink.
"""

from .pipeline import (
    ControlSink,
    DebugSnapshot,
    FanOutSink,
    FrequencySink,
    MotionPipeline,
    NullSink,
)
from .pipeline_wiring import PipelineHandles, build_pipeline
from .playback import ManualTickTimer, PlaybackScheduler, TickTimer
from .recorder import FrameRecorder, RecordedFrame, Recording
from .session import PerformanceSession

__all__ = [
    "ControlSink",
    "DebugSnapshot",
    "FanOutSink",
    "FrequencySink",
    "MotionPipeline",
    "NullSink",
    "PipelineHandles",
    "build_pipeline",
    "ManualTickTimer",
    "PlaybackScheduler",
    "TickTimer",
    "FrameRecorder",
    "RecordedFrame",
    "Recording",
    "PerformanceSession",
]
