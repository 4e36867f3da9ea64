from __future__ import annotations

from collections import deque
from typing import Deque, Iterable


class RateController:
    """
    Estimate the live sample rate from arrival timestamps.

    Notes
    -----
    - Timestamps are in seconds from a monotonic clock.
    - Only the most recent ``window_size`` timestamps are considered, so the
      estimate follows rate changes (e.g. a browser throttling a background tab).
    """

    def __init__(self, window_size: int = 120, default_hz: float = 0.0) -> None:
        if window_size <= 1:
            raise ValueError("window_size must be > 1")
        self._times: Deque[float] = deque(maxlen=window_size)
        self.default_hz = float(default_hz)

    def add_sample_time(self, t: float) -> None:
        """
        Append a new sample timestamp.

        Parameters
        ----------
        t:
            Arrival time in seconds (monotonic increasing).
        """
        self._times.append(float(t))

    @property
    def estimated_hz(self) -> float:
        """Estimate Hz from the current timestamp window."""
        if len(self._times) < 2:
            return self.default_hz
        span = self._times[-1] - self._times[0]
        if span <= 0:
            return self.default_hz
        return (len(self._times) - 1) / span

    @property
    def last_time(self) -> float | None:
        return self._times[-1] if self._times else None

    @property
    def buffer_size(self) -> int:
        """Number of timestamps currently in the window."""
        return len(self._times)

    def reset(self) -> None:
        self._times.clear()

    def feed_times(self, times: Iterable[float]) -> None:
        """Convenience method to bulk-add timestamps."""
        for t in times:
            self.add_sample_time(t)
