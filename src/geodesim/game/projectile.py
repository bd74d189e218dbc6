"""
Projectile: the ball the player aims and launches.

Life cycle:  IDLE → AIMING → FLYING → FINISHED

While aiming, every change of angle/power recomputes a preview
trajectory. Launching does not integrate anything new: the flight
replays the preview point by point, so what the player saw is exactly
what happens.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from geodesim.core.integrator import GeodesicIntegrator, Vec2
from geodesim.core.simulator import (
    Outcome,
    TrajectoryPoint,
    TrajectoryResult,
    compute_trajectory,
)
from geodesim.errors import InvalidConfiguration
from geodesim.game.oracle import launch_velocity

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField
    from geodesim.game.level import Level

# Preview budget shared with the solvability search
PREVIEW_MAX_STEPS = 2000
PREVIEW_DT = 0.01


class ProjectileState(str, Enum):
    IDLE = "idle"
    AIMING = "aiming"
    FLYING = "flying"
    FINISHED = "finished"


@dataclass(frozen=True)
class FlightUpdate:
    """What one playback tick produced."""

    finished: bool
    position: TrajectoryPoint | None = None
    outcome: Outcome | None = None  # Set once finished

    @property
    def reached_goal(self) -> bool:
        return self.outcome is Outcome.SUCCESS


class Projectile:
    """
    Aim, preview and replay a launch.

    The projectile never owns the mass field; callers pass it in with the
    level so the same projectile can be reused across levels.
    """

    def __init__(self, integrator: GeodesicIntegrator | None = None):
        self.integrator = integrator if integrator is not None else GeodesicIntegrator()
        self.reset()

    def reset(self) -> None:
        """Back to IDLE with no aim, preview or flight."""
        self.position: Vec2 = (0.0, 0.0)
        self.start_position: Vec2 = (0.0, 0.0)
        self.velocity: Vec2 = (0.0, 0.0)
        self.angle_deg: float = 0.0
        self.power: float = 0.0
        self.state = ProjectileState.IDLE
        self.preview: TrajectoryResult | None = None
        self.flight: TrajectoryResult | None = None
        self._cursor: float = 0.0

    def set_start_position(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))
        self.start_position = self.position

    def set_aim(self, angle_deg: float, power: float) -> None:
        """
        Set the launch direction (degrees, counter-clockwise from +x) and
        speed, and enter AIMING.
        """
        if self.state is ProjectileState.FLYING:
            raise InvalidConfiguration("Cannot re-aim while flying")
        if power < 0:
            raise InvalidConfiguration(f"power must be non-negative, got {power}")
        self.angle_deg = float(angle_deg)
        self.power = float(power)
        self.velocity = launch_velocity(self.angle_deg, self.power)
        self.state = ProjectileState.AIMING

    def compute_preview(self, field: "MassField", level: "Level") -> TrajectoryResult | None:
        """Recompute the predicted path. Does nothing unless AIMING."""
        if self.state is not ProjectileState.AIMING:
            return None
        self.preview = compute_trajectory(
            field,
            self.position,
            self.velocity,
            level.trajectory_options(max_steps=PREVIEW_MAX_STEPS, dt=PREVIEW_DT),
            integrator=self.integrator,
        )
        return self.preview

    def launch(self) -> bool:
        """Start replaying the preview. Returns False if there is nothing to fly."""
        if self.state is not ProjectileState.AIMING or self.preview is None or not self.preview.points:
            return False
        self.flight = self.preview
        self.state = ProjectileState.FLYING
        self._cursor = 0.0
        return True

    def update(self, speed: float = 1.0) -> FlightUpdate | None:
        """
        Advance the replay by `speed` points (fractional speeds accumulate).

        Returns:
            None unless FLYING; otherwise the new position, or the final
            outcome once the path is used up
        """
        if self.state is not ProjectileState.FLYING or self.flight is None:
            return None

        self._cursor += speed
        points = self.flight.points
        if self._cursor >= len(points):
            self.state = ProjectileState.FINISHED
            last = points[-1]
            self.position = (last.x, last.y)
            return FlightUpdate(finished=True, outcome=self.flight.outcome)

        point = points[int(self._cursor)]
        self.position = (point.x, point.y)
        return FlightUpdate(finished=False, position=point)

    def current_trajectory(self) -> tuple[TrajectoryPoint, ...]:
        """Preview while aiming, the untravelled remainder while flying, else nothing."""
        if self.state is ProjectileState.AIMING and self.preview is not None:
            return self.preview.points
        if self.state is ProjectileState.FLYING and self.flight is not None:
            return self.flight.points[int(self._cursor):]
        return ()

    def position_3d(self, field: "MassField") -> TrajectoryPoint:
        """Current position lifted onto the surface."""
        x, y = self.position
        return TrajectoryPoint(x, y, field.height(x, y))
