"""
TrajectorySimulator: run the integrator until something happens.

Per iteration, in this order:
1. Record (x, y, h(x, y))
2. Inside the goal radius          → SUCCESS
3. Outside the bounds              → OUT_OF_BOUNDS
4. Take one RK4 step
5. New position too close to a mass → CAPTURED
After max_steps iterations          → EXHAUSTED

Every run builds a fresh trajectory; nothing survives between calls
except the (read-only) mass field, so independent runs can be evaluated
in any order or in parallel.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, NamedTuple

import numpy as np

from geodesim.core.integrator import GeodesicIntegrator, Vec2
from geodesim.errors import InvalidConfiguration, NumericDegeneracy, SimulationCancelled
from geodesim.logging import logger

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField


class Outcome(str, Enum):
    """How a trajectory ended."""

    SUCCESS = "success"
    OUT_OF_BOUNDS = "out_of_bounds"
    CAPTURED = "captured"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned playing area (inclusive)."""

    min_x: float = -5.0
    max_x: float = 5.0
    min_y: float = -5.0
    max_y: float = 5.0

    def __post_init__(self):
        values = (self.min_x, self.max_x, self.min_y, self.max_y)
        if not all(math.isfinite(v) for v in values):
            raise InvalidConfiguration(f"Bounds must be finite, got {values}")
        if self.min_x >= self.max_x or self.min_y >= self.max_y:
            raise InvalidConfiguration(f"Bounds are empty or inverted: {values}")

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class TrajectoryOptions:
    """Budget and termination settings for one trajectory."""

    max_steps: int = 15000
    dt: float = 0.01
    bounds: Bounds = field(default_factory=Bounds)
    goal_pos: Vec2 | None = None
    goal_radius: float = 0.3
    capture_radius: float = 0.3  # Distance to a mass that counts as captured

    def __post_init__(self):
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, (int, np.integer)):
            raise InvalidConfiguration(f"max_steps must be an integer, got {self.max_steps!r}")
        if self.max_steps <= 0:
            raise InvalidConfiguration(f"max_steps must be positive, got {self.max_steps}")
        if not (math.isfinite(self.dt) and self.dt > 0):
            raise InvalidConfiguration(f"dt must be a positive finite number, got {self.dt!r}")
        if not isinstance(self.bounds, Bounds):
            raise InvalidConfiguration("bounds must be a Bounds instance")
        if not self.goal_radius >= 0:
            raise InvalidConfiguration(f"goal_radius must be non-negative, got {self.goal_radius!r}")
        if not self.capture_radius >= 0:
            raise InvalidConfiguration(
                f"capture_radius must be non-negative, got {self.capture_radius!r}"
            )
        if self.goal_pos is not None and not all(math.isfinite(c) for c in self.goal_pos):
            raise InvalidConfiguration(f"goal_pos must be finite, got {self.goal_pos!r}")


class TrajectoryPoint(NamedTuple):
    """A sampled point on the surface."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class TrajectoryResult:
    """Sampled path and terminal classification of one run."""

    points: tuple[TrajectoryPoint, ...]
    outcome: Outcome
    final_position: Vec2
    final_velocity: Vec2
    steps: int  # RK4 steps actually taken

    @property
    def reached_goal(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def out_of_bounds(self) -> bool:
        return self.outcome is Outcome.OUT_OF_BOUNDS

    @property
    def captured(self) -> bool:
        return self.outcome is Outcome.CAPTURED

    @property
    def exhausted(self) -> bool:
        return self.outcome is Outcome.EXHAUSTED

    def as_array(self) -> np.ndarray:
        """Points as an [n, 3] array of (x, y, z)."""
        if not self.points:
            return np.empty((0, 3))
        return np.array(self.points, dtype=np.float64)


def compute_trajectory(
    field: "MassField",
    start_pos: Vec2,
    start_vel: Vec2,
    options: TrajectoryOptions | None = None,
    integrator: GeodesicIntegrator | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> TrajectoryResult:
    """
    Integrate a launch until it reaches the goal, leaves the bounds, falls
    into a mass or runs out of steps.

    Args:
        field: Mass configuration (read only)
        start_pos: Launch position (x, y)
        start_vel: Launch velocity (vx, vy)
        options: Step budget, step size, bounds, goal
        integrator: Physics model (default settings if None)
        should_stop: Optional cancellation check, polled once per step

    Returns:
        TrajectoryResult with at most options.max_steps points

    Raises:
        InvalidConfiguration: if the start state is not finite
        NumericDegeneracy: if the state stops being finite mid-run
        SimulationCancelled: if should_stop() returns True
    """
    if options is None:
        options = TrajectoryOptions()
    if integrator is None:
        integrator = GeodesicIntegrator()

    x, y = float(start_pos[0]), float(start_pos[1])
    vx, vy = float(start_vel[0]), float(start_vel[1])
    if not all(math.isfinite(v) for v in (x, y, vx, vy)):
        raise InvalidConfiguration(f"Start state must be finite: pos={start_pos}, vel={start_vel}")

    bounds = options.bounds
    goal = options.goal_pos
    points: list[TrajectoryPoint] = []
    outcome = Outcome.EXHAUSTED
    steps = 0

    for _ in range(options.max_steps):
        if should_stop is not None and should_stop():
            raise SimulationCancelled(f"Trajectory cancelled after {steps} steps")

        points.append(TrajectoryPoint(x, y, field.height(x, y)))

        if goal is not None and math.hypot(x - goal[0], y - goal[1]) < options.goal_radius:
            outcome = Outcome.SUCCESS
            break

        if not bounds.contains(x, y):
            outcome = Outcome.OUT_OF_BOUNDS
            break

        state = integrator.step(field, (x, y), (vx, vy), options.dt)
        steps += 1
        if not state.is_finite():
            raise NumericDegeneracy(
                f"State became non-finite after {steps} steps at ({x:.4g}, {y:.4g})"
            )
        (x, y), (vx, vy) = state

        if field.is_near_mass(x, y, options.capture_radius):
            outcome = Outcome.CAPTURED
            break

    logger.debug(f"Trajectory ended: {outcome.value} after {steps} steps at ({x:.3f}, {y:.3f})")

    return TrajectoryResult(
        points=tuple(points),
        outcome=outcome,
        final_position=(x, y),
        final_velocity=(vx, vy),
        steps=steps,
    )
