"""
Device bridges stream one JSON object per line. Two shapes are understood:

  - acceleration : {"x": float|null, "y": float|null, "z": float|null}
                   acceleration including gravity in m/s²
  - orientation  : {"alpha": float|null, "beta": float|null, "gamma": float|null}
                   device rotation in degrees

An optional ``"type"`` field ("motion" / "orientation") selects the shape
explicitly; otherwise it is inferred from the keys present. ``null`` or
missing components are kept as ``None`` and rejected later by the pipeline.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Mapping, Optional, Union

from ..models import OrientationSample, RawSample
from ..tools.debug import debug_enabled

logger = logging.getLogger(__name__)

SensorSample = Union[RawSample, OrientationSample]

_MOTION_KEYS = ("x", "y", "z")
_ORIENTATION_KEYS = ("alpha", "beta", "gamma")


def _get_component(obj: Mapping[str, Any], name: str) -> Optional[float]:
    val = obj.get(name)
    if val is None:
        return None
    if isinstance(val, bool):
        raise TypeError(f"{name} must be a number, got {val!r}")
    return float(val)


def sample_from_mapping(obj: Mapping[str, Any]) -> SensorSample | None:
    """Build a sample from an already-decoded mapping (``None`` if unrecognized)."""
    kind = str(obj.get("type", "")).strip().lower()
    if not kind:
        if any(key in obj for key in _MOTION_KEYS):
            kind = "motion"
        elif any(key in obj for key in _ORIENTATION_KEYS):
            kind = "orientation"

    try:
        if kind == "motion":
            return RawSample(*(_get_component(obj, key) for key in _MOTION_KEYS))
        if kind == "orientation":
            return OrientationSample(*(_get_component(obj, key) for key in _ORIENTATION_KEYS))
    except (TypeError, ValueError) as exc:
        logger.warning("Bad field value in sensor line %r (%s)", obj, exc)
        return None

    logger.warning("Unrecognized sensor line: %r", obj)
    return None


_parse_time_acc = 0.0
_parse_count = 0


def parse_line(line: str) -> SensorSample | None:
    """
    Parse a single JSON text line into a sample.

    Invalid lines return ``None`` so callers can skip them without raising.
    """
    global _parse_time_acc, _parse_count

    text = line.strip()
    if not text:
        return None

    debug_on = debug_enabled()
    start = time.perf_counter() if debug_on else 0.0

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Bad JSON from sensor stream: %r (%s)", text, exc)
        return None
    if not isinstance(obj, Mapping):
        logger.warning("Expected a JSON object from sensor stream, got %r", text)
        return None

    sample = sample_from_mapping(obj)

    if debug_on:
        _parse_time_acc += time.perf_counter() - start
        _parse_count += 1
        if _parse_count % 1000 == 0:
            avg_us = (_parse_time_acc / max(1, _parse_count)) * 1e6
            logger.debug("motion.parse_line avg %.1f µs over %d samples", avg_us, _parse_count)

    return sample
