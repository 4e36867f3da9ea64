"""Qt signal adapter for control updates."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..analysis.mapping import pitch_to_frequency


class ControlBridge(QObject):
    """
    Sink that re-emits ``(pitch, volume)`` as Qt signals.

    ``frequency_changed`` carries the pitch already mapped to Hz so an audio
    widget does not need to know the mapping.
    """

    control_updated = Signal(float, float)
    frequency_changed = Signal(float)

    def __init__(
        self,
        min_frequency_hz: float = 200.0,
        max_frequency_hz: float = 2000.0,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._min_hz = float(min_frequency_hz)
        self._max_hz = float(max_frequency_hz)
        self.pitch = 0.5
        self.volume = 0.5

    def on_control_update(self, pitch: float, volume: float) -> None:
        self.pitch = float(pitch)
        self.volume = float(volume)
        self.control_updated.emit(self.pitch, self.volume)
        self.frequency_changed.emit(pitch_to_frequency(self.pitch, self._min_hz, self._max_hz))
