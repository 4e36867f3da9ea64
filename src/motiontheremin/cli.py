"""Headless command-line driver for the motion theremin.

Reads JSON sensor lines (see :mod:`motiontheremin.sensors.motion`) from a file
or stdin, prints the resulting control updates as JSON lines and can record
the performance and replay it on a Qt event loop.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from contextlib import nullcontext
from pathlib import Path
from typing import IO, Iterable, Optional, Sequence

from .analysis.mapping import pitch_to_frequency
from .config import MotionConfig, load_config
from .core.live_stream import stream_lines
from .core.session import PerformanceSession
from .models import OrientationSample, RawSample
from .sensors.motion import SensorSample, parse_line
from .tools.debug import debug_enabled, time_block

logger = logging.getLogger(__name__)


class SampleClock:
    """
    Clock derived from the sample count: ``count * dt`` seconds.

    Files and pipes are read much faster than the sensor produced them, so
    recordings made from them are timestamped at the nominal sample rate.
    """

    def __init__(self, dt: float) -> None:
        self.dt = float(dt)
        self.count = 0

    def tick(self) -> None:
        self.count += 1

    def __call__(self) -> float:
        return self.count * self.dt


class JsonLinesSink:
    """Writes each control update to ``stream`` as one JSON object."""

    def __init__(self, stream: IO[str], config: MotionConfig) -> None:
        self._stream = stream
        self._config = config
        self.source = "live"
        self.count = 0

    def on_control_update(self, pitch: float, volume: float) -> None:
        payload = {
            "source": self.source,
            "pitch": round(pitch, 6),
            "volume": round(volume, 6),
            "frequencyHz": round(
                pitch_to_frequency(pitch, self._config.min_frequency_hz, self._config.max_frequency_hz), 3
            ),
        }
        self._stream.write(json.dumps(payload) + "\n")
        self.count += 1


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Motion theremin control pipeline")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with JSON sensor lines (default: stdin)",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument(
        "--mode",
        choices=("motion", "tilt"),
        default=None,
        help="Input mode override (default: from config)",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Record the control updates produced from the input",
    )
    parser.add_argument(
        "--replay",
        action="store_true",
        help="Replay the recording in real time after the input ends (implies --record)",
    )
    parser.add_argument(
        "--dump-recording",
        action="store_true",
        help="Print the recording as a JSON array after the input ends",
    )
    parser.add_argument(
        "--wall-clock",
        action="store_true",
        help="Timestamp samples on arrival instead of at the nominal sample rate (live device streams)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if (verbose or debug_enabled()) else logging.INFO
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def feed_session(
    session: PerformanceSession,
    lines: Iterable[str],
    clock: Optional[SampleClock] = None,
) -> int:
    """
    Push every parsed line into ``session``; return the number of samples.

    When ``clock`` is given it advances by one step before each sample.
    """

    def _dispatch(sample: SensorSample) -> None:
        if clock is not None:
            clock.tick()
        if isinstance(sample, RawSample):
            session.on_sample(sample)
        elif isinstance(sample, OrientationSample):
            session.on_orientation(sample)

    return stream_lines(lines, parse_line, _dispatch)


def _replay(session: PerformanceSession, sink: JsonLinesSink) -> int:
    from PySide6.QtCore import QCoreApplication

    from .gui.qt_timer import QtTickTimer

    app = QCoreApplication.instance() or QCoreApplication([sys.argv[0]])
    timer = QtTickTimer()
    session.playback.timer = timer
    session.playback.on_finished = app.quit
    sink.source = "playback"
    if not session.play_recording():
        return 0
    return int(app.exec())


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    _configure_logging(args.verbose)

    cfg = load_config(args.config)
    if args.mode is not None:
        cfg.input_mode = args.mode
    cfg = cfg.sanitized()

    sink = JsonLinesSink(sys.stdout, cfg)
    sample_clock = None if args.wall_clock else SampleClock(cfg.dt)
    session = PerformanceSession(
        sink,
        cfg,
        clock=sample_clock if sample_clock is not None else time.monotonic,
        playback_clock=time.monotonic,
    )
    record = bool(args.record or args.replay or args.dump_recording)

    if record:
        session.start_recording()

    source = nullcontext(sys.stdin) if args.input == "-" else open(args.input, "r", encoding="utf-8")
    with source as fh, time_block("feed input"):
        samples = feed_session(session, fh, sample_clock)

    if record:
        session.stop_recording()

    snap = session.snapshot()
    logger.info(
        "Processed %d samples (%d updates, calibration %s, %.1f Hz)",
        samples,
        sink.count,
        snap.calibration_status,
        snap.update_rate_hz,
    )

    if args.dump_recording:
        json.dump(session.recording.to_records(), sys.stdout)
        sys.stdout.write("\n")

    status = 0
    if args.replay:
        if session.has_recording:
            status = _replay(session, sink)
        else:
            logger.warning("Nothing was recorded; skipping replay")
    session.close()
    return status


if __name__ == "__main__":
    raise SystemExit(main())
