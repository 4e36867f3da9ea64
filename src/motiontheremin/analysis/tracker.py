"""Spring-damper position tracking for one control axis.

Smoothed acceleration pushes a virtual mass along a [0, 1] track. Friction
(damping) bleeds off velocity, a linear spring pulls the mass back toward the
midpoint, and the rails bounce the mass back inelastically instead of
stopping it dead. The result is a control value that follows deliberate
motion but settles back to neutral when the device is still.
"""

from __future__ import annotations

from dataclasses import dataclass

CENTER = 0.5


@dataclass
class PositionState:
    position: float = CENTER
    velocity: float = 0.0
    centering_force: float = 0.02


def integrate(
    state: PositionState,
    acceleration: float,
    dt: float,
    *,
    sensitivity: float = 0.08,
    damping: float = 0.85,
    restitution: float = 0.5,
) -> float:
    """
    Advance ``state`` by one nominal step and return the clamped position.

    ``dt`` is the nominal sample interval; real arrival jitter is ignored.
    """
    velocity = state.velocity + acceleration * sensitivity * dt
    velocity *= damping
    velocity += (CENTER - state.position) * state.centering_force
    position = state.position + velocity

    if position > 1.0:
        position = 1.0
        velocity *= -restitution
    elif position < 0.0:
        position = 0.0
        velocity *= -restitution

    state.position = position
    state.velocity = velocity
    return position


class PositionTracker:
    """Owns a :class:`PositionState` and the physics constants for one axis."""

    def __init__(
        self,
        *,
        sensitivity: float = 0.08,
        damping: float = 0.85,
        centering_force: float = 0.02,
        restitution: float = 0.5,
        dt: float = 1.0 / 60.0,
    ) -> None:
        if dt <= 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        self.sensitivity = float(sensitivity)
        self.damping = float(damping)
        self.restitution = float(restitution)
        self.dt = float(dt)
        self._centering_force = float(centering_force)
        self.state = PositionState(centering_force=self._centering_force)

    @property
    def position(self) -> float:
        return self.state.position

    @property
    def velocity(self) -> float:
        return self.state.velocity

    def integrate(self, acceleration: float, dt: float | None = None) -> float:
        return integrate(
            self.state,
            float(acceleration),
            self.dt if dt is None else float(dt),
            sensitivity=self.sensitivity,
            damping=self.damping,
            restitution=self.restitution,
        )

    def reset(self) -> None:
        self.state = PositionState(centering_force=self._centering_force)
