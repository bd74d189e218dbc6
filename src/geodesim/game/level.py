"""
Level: one puzzle configuration.

A level is plain data (start, goal, masses, bounds) so it can be pickled
into worker processes for solvability checks. Presets and flavour text
live with the game content, not here.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from geodesim.core.integrator import Vec2
from geodesim.core.mass_field import Mass, MassField
from geodesim.core.simulator import Bounds, TrajectoryOptions
from geodesim.errors import InvalidConfiguration


@dataclass(frozen=True)
class Level:
    """Start, goal and wells for one puzzle."""

    level_id: int = 1
    start_pos: Vec2 = (-3.0, -3.0)
    goal_pos: Vec2 = (3.0, 3.0)
    goal_radius: float = 0.4
    masses: tuple[Mass, ...] = ()
    bounds: Bounds = field(default_factory=Bounds)
    difficulty: int = 1
    par_shots: int = 1  # Shots expected from a good player

    def __post_init__(self):
        # Accept any iterable of masses but store a tuple
        object.__setattr__(self, "masses", tuple(self.masses))
        if not self.goal_radius >= 0:
            raise InvalidConfiguration(f"goal_radius must be non-negative, got {self.goal_radius!r}")
        for name in ("start_pos", "goal_pos"):
            pos = getattr(self, name)
            if len(pos) != 2 or not all(math.isfinite(c) for c in pos):
                raise InvalidConfiguration(f"{name} must be a finite (x, y) pair, got {pos!r}")

    def mass_field(self) -> MassField:
        """The mass configuration to load for this level."""
        return MassField(self.masses)

    def trajectory_options(self, max_steps: int = 2000, dt: float = 0.01) -> TrajectoryOptions:
        """Options for previewing or validating a launch in this level."""
        return TrajectoryOptions(
            max_steps=max_steps,
            dt=dt,
            bounds=self.bounds,
            goal_pos=self.goal_pos,
            goal_radius=self.goal_radius,
        )

    def start_to_goal_distance(self) -> float:
        return math.hypot(self.goal_pos[0] - self.start_pos[0], self.goal_pos[1] - self.start_pos[1])
