"""
Game layer: levels, solvability search, generation, the projectile.

Everything here treats the simulator as a black box: it picks launch
parameters, runs compute_trajectory(), and reads the outcome.
"""

from geodesim.game.level import Level
from geodesim.game.oracle import (
    LaunchTrial,
    LevelOracle,
    OracleConfig,
    TrialResult,
    launch_velocity,
)
from geodesim.game.generator import (
    GenerationParams,
    generate_level,
    generate_level_batch,
)
from geodesim.game.projectile import FlightUpdate, Projectile, ProjectileState

__all__ = [
    "Level",
    "LaunchTrial",
    "LevelOracle",
    "OracleConfig",
    "TrialResult",
    "launch_velocity",
    "GenerationParams",
    "generate_level",
    "generate_level_batch",
    "FlightUpdate",
    "Projectile",
    "ProjectileState",
]
