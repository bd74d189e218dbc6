"""
Procedural level generation.

Difficulty grows with the level id: more and stronger masses, a smaller
goal and a longer start-to-goal distance, each capped. Masses are strewn
along the start→goal corridor so they actually bend the direct shot.

A candidate is only accepted once the oracle finds a launch that reaches
the goal; after too many rejected candidates a fixed single-well level
is returned instead. Generation is reproducible from the seed.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

import numpy as np

from geodesim.core.integrator import Vec2
from geodesim.core.mass_field import Mass
from geodesim.core.simulator import Bounds
from geodesim.errors import InvalidConfiguration
from geodesim.game.level import Level
from geodesim.game.oracle import LevelOracle
from geodesim.logging import logger


@dataclass(frozen=True)
class GenerationParams:
    """Difficulty progression and layout constraints."""

    base_mass_count: float = 1.0
    mass_count_growth: float = 0.3  # Extra masses per level
    max_masses: int = 6

    base_strength: float = 1.0
    strength_growth: float = 0.1  # Extra strength per level
    max_strength: float = 3.5
    strength_jitter: tuple[float, float] = (0.7, 1.3)  # Multiplier range per mass

    base_goal_radius: float = 0.5
    goal_radius_shrink: float = 0.02  # Radius lost per level
    min_goal_radius: float = 0.25

    base_distance: float = 6.0
    distance_growth: float = 0.2
    max_distance: float = 8.0

    bounds: Bounds = field(default_factory=Bounds)
    margin: float = 0.8  # Keep start/goal this far inside the bounds

    center_jitter: float = 1.0  # Corridor midpoint offset range
    corridor_span: tuple[float, float] = (0.2, 0.8)  # Fraction of the corridor holding masses
    corridor_half_width: float = 2.0
    min_endpoint_clearance: float = 1.0  # Mass distance to start/goal
    min_mass_separation: float = 1.5
    placement_attempts: int = 50
    max_attempts: int = 20  # Candidates tried before the fallback level

    def __post_init__(self):
        if self.max_attempts < 1 or self.placement_attempts < 1:
            raise InvalidConfiguration("Attempt budgets must be at least 1")
        if 2 * self.margin >= min(self.bounds.width, self.bounds.height):
            raise InvalidConfiguration("margin leaves no room inside the bounds")

    def mass_count(self, level_id: int) -> int:
        return min(int(math.floor(self.base_mass_count + self.mass_count_growth * level_id)), self.max_masses)

    def average_strength(self, level_id: int) -> float:
        return min(self.base_strength + self.strength_growth * level_id, self.max_strength)

    def goal_radius(self, level_id: int) -> float:
        return max(self.base_goal_radius - self.goal_radius_shrink * level_id, self.min_goal_radius)

    def distance(self, level_id: int) -> float:
        return min(self.base_distance + self.distance_growth * level_id, self.max_distance)


def default_seed(level_id: int) -> int:
    """Seed used when none is given, so level N is always the same level."""
    return level_id * 12345


def generate_start_and_goal(
    rng: np.random.Generator, level_id: int, params: GenerationParams
) -> tuple[Vec2, Vec2]:
    """Place start and goal symmetrically about a jittered center, clamped to the margin."""
    half = params.distance(level_id) / 2
    angle = rng.uniform(0.0, 2 * math.pi)
    cx = rng.uniform(-params.center_jitter, params.center_jitter)
    cy = rng.uniform(-params.center_jitter, params.center_jitter)

    b = params.bounds

    def clamp(x: float, y: float) -> Vec2:
        return (
            float(np.clip(x, b.min_x + params.margin, b.max_x - params.margin)),
            float(np.clip(y, b.min_y + params.margin, b.max_y - params.margin)),
        )

    start = clamp(cx - math.cos(angle) * half, cy - math.sin(angle) * half)
    goal = clamp(cx + math.cos(angle) * half, cy + math.sin(angle) * half)
    return start, goal


def generate_masses(
    rng: np.random.Generator,
    level_id: int,
    start: Vec2,
    goal: Vec2,
    params: GenerationParams,
) -> list[Mass]:
    """
    Scatter masses along the start→goal corridor.

    Each mass gets a bounded number of placement attempts; a mass that
    cannot be placed is skipped, so a level may end up with fewer masses
    than its difficulty asks for.
    """
    dx, dy = goal[0] - start[0], goal[1] - start[1]
    dist = math.hypot(dx, dy)
    if dist == 0:
        return []
    dir_x, dir_y = dx / dist, dy / dist
    avg_strength = params.average_strength(level_id)

    masses: list[Mass] = []
    for _ in range(params.mass_count(level_id)):
        for _attempt in range(params.placement_attempts):
            t = rng.uniform(*params.corridor_span)
            offset = rng.uniform(-params.corridor_half_width, params.corridor_half_width)
            x = start[0] + dir_x * dist * t - dir_y * offset
            y = start[1] + dir_y * dist * t + dir_x * offset

            if math.hypot(x - start[0], y - start[1]) <= params.min_endpoint_clearance:
                continue
            if math.hypot(x - goal[0], y - goal[1]) <= params.min_endpoint_clearance:
                continue
            if any(m.distance_to(x, y) < params.min_mass_separation for m in masses):
                continue

            strength = avg_strength * rng.uniform(*params.strength_jitter)
            masses.append(Mass(float(x), float(y), float(strength)))
            break

    return masses


def fallback_level(level_id: int, params: GenerationParams) -> Level:
    """A single well between two fixed points, used when generation gives up."""
    return Level(
        level_id=level_id,
        start_pos=(-3.0, 0.0),
        goal_pos=(3.0, 0.0),
        goal_radius=params.goal_radius(level_id),
        masses=(Mass(0.0, 0.0, 1.5),),
        bounds=params.bounds,
        difficulty=level_id,
    )


def generate_level(
    level_id: int,
    seed: int | None = None,
    params: GenerationParams | None = None,
    oracle: LevelOracle | None = None,
) -> Level:
    """
    Generate a solvable level.

    Args:
        level_id: Difficulty index (1, 2, ...)
        seed: RNG seed (default: derived from level_id)
        params: Difficulty progression
        oracle: Solvability check (default grid if None)

    Returns:
        The first candidate the oracle can solve, or the fallback level
        (which is not re-validated)
    """
    if params is None:
        params = GenerationParams()
    if oracle is None:
        oracle = LevelOracle()

    base_seed = default_seed(level_id) if seed is None else seed
    rng = np.random.default_rng(base_seed)
    goal_radius = params.goal_radius(level_id)

    for attempt in range(params.max_attempts):
        start, goal = generate_start_and_goal(rng, level_id, params)
        masses = generate_masses(rng, level_id, start, goal, params)
        candidate = Level(
            level_id=level_id,
            start_pos=start,
            goal_pos=goal,
            goal_radius=goal_radius,
            masses=tuple(masses),
            bounds=params.bounds,
            difficulty=level_id,
        )

        if oracle.is_solvable(candidate):
            logger.info(f"Level {level_id}: accepted candidate {attempt + 1} ({len(masses)} masses)")
            return candidate

        logger.debug(f"Level {level_id}: candidate {attempt + 1} unsolvable, reseeding")
        rng = np.random.default_rng(base_seed + (attempt + 1) * 1000)

    logger.info(f"Level {level_id}: no solvable candidate in {params.max_attempts} attempts, using fallback")
    return fallback_level(level_id, params)


def generate_level_batch(
    start_id: int,
    count: int,
    params: GenerationParams | None = None,
    oracle: LevelOracle | None = None,
) -> list[Level]:
    """Generate levels start_id .. start_id + count - 1 with their default seeds."""
    return [generate_level(start_id + i, params=params, oracle=oracle) for i in range(count)]
