"""Exception types raised by the motion theremin core."""

from __future__ import annotations


class MotionThereminError(Exception):
    """Base class for package-specific errors."""


class InvalidSample(MotionThereminError, ValueError):
    """A sensor sample has a missing or non-finite component."""
