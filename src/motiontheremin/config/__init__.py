"""Configuration objects and helpers for the motion theremin.

A single YAML file (optionally nested under a ``motion:`` key) tunes the
calibration window, smoothing factors, tracker physics and playback tick.
The typed dataclass in :mod:`runtime` is passed to every component factory so
they share one source of truth.
"""

from .runtime import MotionConfig, config_from_mapping, load_config

__all__ = ["MotionConfig", "config_from_mapping", "load_config"]
