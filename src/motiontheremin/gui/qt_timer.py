"""``QTimer``-backed implementation of the playback ``TickTimer`` protocol."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer


class QtTickTimer(QObject):
    """
    Periodic timer running on the Qt event loop of the owning thread.

    ``stop()`` is synchronous: once it returns no further callback is invoked,
    even if a timeout was already due.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Optional[Callable[[], None]] = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None and self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return int(self._timer.interval())

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.start()

    def stop(self) -> None:
        self._callback = None
        self._timer.stop()

    def _on_timeout(self) -> None:
        callback = self._callback
        if callback is not None:
            callback()
