"""Exponential low-pass smoothing for scalar sensor channels."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SmoothingState:
    """One-pole low-pass state: fixed ``alpha`` plus the last output."""

    alpha: float
    previous_output: float = 0.0

    def __post_init__(self) -> None:
        if not (0.0 < self.alpha <= 1.0):
            raise ValueError(f"alpha must be within (0, 1], got {self.alpha}")


def apply_smoothing(state: SmoothingState, value: float) -> float:
    """
    Feed ``value`` through the filter and return the smoothed output.

    ``output = alpha * value + (1 - alpha) * previous_output``; the output
    becomes the new ``previous_output``. Lower ``alpha`` smooths harder at the
    cost of latency.
    """
    output = state.alpha * float(value) + (1.0 - state.alpha) * state.previous_output
    state.previous_output = output
    return output


class SmoothingFilter:
    """Owns a :class:`SmoothingState` for one channel."""

    def __init__(self, alpha: float, initial: float = 0.0) -> None:
        self._initial = float(initial)
        self.state = SmoothingState(alpha=float(alpha), previous_output=self._initial)

    @property
    def value(self) -> float:
        return self.state.previous_output

    def apply(self, value: float) -> float:
        return apply_smoothing(self.state, value)

    def reset(self) -> None:
        self.state.previous_output = self._initial
