"""Wall-clock replay of a recorded performance.

The scheduler is driven by any periodic timer implementing :class:`TickTimer`.
Each tick releases every frame whose offset has elapsed (possibly several at
once), so a late or irregular timer never skips or reorders frames and the
replay keeps the original rhythm regardless of the capture density.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from ..models import PlaybackState
from .pipeline import NullSink, SinkLike, call_sink
from .recorder import Recording

__all__ = ["TickTimer", "ManualTickTimer", "PlaybackScheduler", "DEFAULT_TICK_INTERVAL_MS"]

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 16

Clock = Callable[[], float]


class TickTimer(Protocol):
    """Periodic-invocation primitive supplied by the host event loop."""

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:  # pragma: no cover - protocol
        ...

    def stop(self) -> None:  # pragma: no cover - protocol
        ...

    @property
    def is_active(self) -> bool:  # pragma: no cover - protocol
        ...


class ManualTickTimer:
    """
    Timer for hosts that drive ticks themselves (game loops, tests).

    :meth:`fire` invokes the callback only while the timer is running, so a
    tick issued after :meth:`stop` is ignored.
    """

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self.interval_ms: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_ms = int(interval_ms)
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self) -> bool:
        """Run one tick; return ``False`` when the timer was not running."""
        callback = self._callback
        if callback is None:
            return False
        callback()
        return True


class PlaybackScheduler:
    """Replays a :class:`Recording` into a sink against wall-clock time."""

    def __init__(
        self,
        sink: SinkLike | None = None,
        timer: TickTimer | None = None,
        *,
        clock: Clock = time.monotonic,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        self.sink: SinkLike = sink if sink is not None else NullSink()
        self.timer: TickTimer = timer if timer is not None else ManualTickTimer()
        self.interval_ms = int(interval_ms)
        self.on_finished = on_finished
        self._clock = clock
        self._state = PlaybackState.IDLE
        self._recording: Optional[Recording] = None
        self._cursor = 0
        self._start = 0.0
        # Bumped whenever the active playback is replaced or ends.
        self._generation = 0

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def cursor(self) -> int:
        return self._cursor

    def play(self, recording: Recording) -> bool:
        """
        Start replaying ``recording`` from its first frame.

        An empty recording is ignored and ``False`` is returned. Calling this
        while already playing restarts with the new recording.
        """
        if len(recording) == 0:
            logger.debug("Ignoring play() on an empty recording")
            return False
        if self._state is PlaybackState.PLAYING:
            self.timer.stop()

        self._generation += 1
        self._recording = recording
        self._cursor = 0
        self._start = self._clock()
        self._state = PlaybackState.PLAYING
        self.timer.start(self.interval_ms, self.on_tick)
        logger.info(
            "Playback started: %d frames over %d ms", len(recording), recording.duration_ms
        )
        return True

    def on_tick(self) -> int:
        """Dispatch every frame that is due; return how many were dispatched."""
        if self._state is not PlaybackState.PLAYING or self._recording is None:
            return 0

        recording = self._recording
        generation = self._generation
        elapsed_ms = (self._clock() - self._start) * 1000.0
        dispatched = 0
        while (
            self._generation == generation
            and self._cursor < len(recording)
            and recording[self._cursor].offset_ms <= elapsed_ms
        ):
            frame = recording[self._cursor]
            self._cursor += 1
            dispatched += 1
            call_sink(self.sink, frame.pitch, frame.volume)

        if self._generation == generation and self._cursor >= len(recording):
            self._finish()
        return dispatched

    def stop(self) -> None:
        """Cancel the tick and abandon undispatched frames (idempotent)."""
        self.timer.stop()
        self._generation += 1
        if self._state is PlaybackState.PLAYING:
            logger.info(
                "Playback stopped at frame %d/%d",
                self._cursor,
                len(self._recording) if self._recording is not None else 0,
            )
        self._state = PlaybackState.IDLE
        self._recording = None

    def _finish(self) -> None:
        self.timer.stop()
        self._generation += 1
        self._state = PlaybackState.IDLE
        self._recording = None
        logger.info("Playback finished after %d frames", self._cursor)
        if self.on_finished is not None:
            self.on_finished()
