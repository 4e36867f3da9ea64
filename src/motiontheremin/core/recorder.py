"""Capture of timestamped control frames for later replay."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, List, Mapping, Optional

from ..models import RecorderState

if TYPE_CHECKING:
    from .playback import PlaybackScheduler

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class RecordedFrame:
    offset_ms: int
    pitch: float
    volume: float

    def to_record(self) -> dict[str, Any]:
        return {"offsetMs": self.offset_ms, "pitch": self.pitch, "volume": self.volume}


class Recording:
    """Ordered, append-only sequence of :class:`RecordedFrame`."""

    def __init__(self, frames: Iterable[RecordedFrame] = ()) -> None:
        self._frames: List[RecordedFrame] = list(frames)

    def append(self, frame: RecordedFrame) -> None:
        if self._frames and frame.offset_ms < self._frames[-1].offset_ms:
            raise ValueError(
                f"frame offset {frame.offset_ms} ms precedes previous {self._frames[-1].offset_ms} ms"
            )
        self._frames.append(frame)

    def __len__(self) -> int:
        return len(self._frames)

    def __getitem__(self, index: int) -> RecordedFrame:
        return self._frames[index]

    def __iter__(self) -> Iterator[RecordedFrame]:
        return iter(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    @property
    def duration_ms(self) -> int:
        return self._frames[-1].offset_ms if self._frames else 0

    def to_records(self) -> list[dict[str, Any]]:
        """Return the frames as ``{"offsetMs", "pitch", "volume"}`` mappings."""
        return [frame.to_record() for frame in self._frames]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Recording":
        """
        Build a recording from ``{"offsetMs", "pitch", "volume"}`` mappings.

        Offsets must be non-negative integers in non-decreasing order and both
        values must lie within [0, 1].
        """
        recording = cls()
        for idx, record in enumerate(records):
            try:
                offset = record["offsetMs"]
                pitch = float(record["pitch"])
                volume = float(record["volume"])
            except KeyError as exc:
                raise ValueError(f"record {idx} is missing field {exc.args[0]!r}") from None
            except (TypeError, ValueError) as exc:
                raise ValueError(f"record {idx} has a non-numeric value ({exc})") from None
            if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
                raise ValueError(f"record {idx}: offsetMs must be a non-negative integer, got {offset!r}")
            if not (0.0 <= pitch <= 1.0 and 0.0 <= volume <= 1.0):
                raise ValueError(f"record {idx}: pitch/volume must lie within [0, 1]")
            recording.append(RecordedFrame(offset_ms=offset, pitch=pitch, volume=volume))
        return recording


class FrameRecorder:
    """
    Records the pipeline output while armed.

    ``clock`` returns seconds from a monotonic source; frame offsets are whole
    milliseconds since :meth:`arm`. When a playback scheduler is attached,
    :meth:`clear` also stops any replay in progress.
    """

    def __init__(
        self,
        clock: Clock = time.monotonic,
        playback: "PlaybackScheduler | None" = None,
    ) -> None:
        self._clock = clock
        self.playback = playback
        self._state = RecorderState.IDLE
        self._recording = Recording()
        self._start: float = 0.0
        self._has_recording = False

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_armed(self) -> bool:
        return self._state is RecorderState.ARMED

    @property
    def has_recording(self) -> bool:
        return self._has_recording

    @property
    def recording(self) -> Recording:
        return self._recording

    def arm(self) -> None:
        self._recording = Recording()
        self._start = self._clock()
        self._has_recording = False
        self._state = RecorderState.ARMED
        logger.info("Recording armed")

    def capture(self, pitch: float, volume: float) -> Optional[RecordedFrame]:
        if self._state is not RecorderState.ARMED:
            return None
        offset_ms = max(0, int(round((self._clock() - self._start) * 1000.0)))
        if self._recording:
            # Guard against a clock that steps backwards.
            offset_ms = max(offset_ms, self._recording[-1].offset_ms)
        frame = RecordedFrame(offset_ms=offset_ms, pitch=float(pitch), volume=float(volume))
        self._recording.append(frame)
        return frame

    def disarm(self) -> None:
        if self._state is not RecorderState.ARMED:
            return
        self._state = RecorderState.IDLE
        self._has_recording = len(self._recording) > 0
        logger.info(
            "Recording stopped: %d frames over %d ms",
            len(self._recording),
            self._recording.duration_ms,
        )

    def clear(self) -> None:
        self._recording = Recording()
        self._has_recording = False
        if self.playback is not None:
            self.playback.stop()
        logger.info("Recording cleared")
