"""Runtime configuration for the motion pipeline and playback scheduler."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

INPUT_MODES = ("motion", "tilt")


def _clamp_alpha(value: float) -> float:
    return max(1e-6, min(1.0, float(value)))


@dataclass(slots=True)
class MotionConfig:
    """
    Tuning knobs for calibration, smoothing, position tracking and playback.

    The tracker constants are empirically tuned "feel" parameters and assume a
    ~60 Hz sensor; they are defaults, not physical law.
    """

    calibration_samples: int = 30

    pitch_alpha: float = 0.2
    volume_alpha: float = 0.3

    sensitivity: float = 0.08
    damping: float = 0.85
    centering_force: float = 0.02
    restitution: float = 0.5
    sample_rate_hz: float = 60.0

    playback_interval_ms: int = 16

    min_frequency_hz: float = 200.0
    max_frequency_hz: float = 2000.0

    input_mode: str = "motion"
    rate_window: int = 120

    @property
    def dt(self) -> float:
        """Nominal inter-sample interval in seconds."""
        return 1.0 / self.sample_rate_hz

    def sanitized(self) -> MotionConfig:
        """Return a copy with derived limits applied."""
        min_hz = max(1.0, float(self.min_frequency_hz))
        max_hz = max(min_hz, float(self.max_frequency_hz))
        mode = str(self.input_mode).strip().lower()
        if mode not in INPUT_MODES:
            raise ValueError(f"input_mode must be one of {INPUT_MODES}, got {self.input_mode!r}")
        return MotionConfig(
            calibration_samples=max(1, int(self.calibration_samples)),
            pitch_alpha=_clamp_alpha(self.pitch_alpha),
            volume_alpha=_clamp_alpha(self.volume_alpha),
            sensitivity=float(self.sensitivity),
            damping=max(0.0, min(1.0, float(self.damping))),
            centering_force=max(0.0, float(self.centering_force)),
            restitution=max(0.0, min(1.0, float(self.restitution))),
            sample_rate_hz=max(1.0, float(self.sample_rate_hz)),
            playback_interval_ms=max(1, int(self.playback_interval_ms)),
            min_frequency_hz=min_hz,
            max_frequency_hz=max_hz,
            input_mode=mode,
            rate_window=max(2, int(self.rate_window)),
        )


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`MotionConfig`."""
    return {f.name for f in fields(MotionConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``motion`` block into the surrounding mapping."""
    if "motion" in data and isinstance(data["motion"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "motion":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> MotionConfig:
    """Build :class:`MotionConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return MotionConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return MotionConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> MotionConfig:
    """
    Load configuration from a YAML file at ``path``.

    Missing files fall back to default :class:`MotionConfig`.
    """
    if path is None:
        return MotionConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return MotionConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["INPUT_MODES", "MotionConfig", "config_from_mapping", "load_config"]
