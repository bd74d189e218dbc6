"""
LevelOracle: decide whether a level can be solved.

Brute-force search over launch parameters: every angle in 0°..345°
(15° steps) times every power in 1.0..5.0 (0.5 steps), each one a full
trajectory from the level start. The level is solvable if any launch
ends in SUCCESS within the step budget.

Trajectories are pure functions of (level, launch), so trials can be
fanned out to a process pool with no coordination beyond collecting
results.
"""

from __future__ import annotations
import math
import multiprocessing as mp
from dataclasses import dataclass, field
from typing import Iterator, Protocol

from geodesim.core.integrator import GeodesicIntegrator, IntegratorConfig, Vec2
from geodesim.core.simulator import Outcome, TrajectoryResult, compute_trajectory
from geodesim.errors import InvalidConfiguration, SimulationCancelled
from geodesim.game.level import Level
from geodesim.logging import logger


def _default_angles() -> tuple[float, ...]:
    return tuple(float(a) for a in range(0, 360, 15))


def _default_powers() -> tuple[float, ...]:
    return tuple(1.0 + 0.5 * i for i in range(9))


class CancelSignal(Protocol):
    """Anything with is_set(), e.g. threading.Event or multiprocessing.Event."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class OracleConfig:
    """Launch grid and per-trial budget."""

    angles_deg: tuple[float, ...] = field(default_factory=_default_angles)
    powers: tuple[float, ...] = field(default_factory=_default_powers)
    max_steps: int = 2000
    dt: float = 0.01
    processes: int | None = None  # None or 1: evaluate trials in-process
    integrator: IntegratorConfig = field(default_factory=IntegratorConfig)

    def __post_init__(self):
        if not self.angles_deg or not self.powers:
            raise InvalidConfiguration("Launch grid needs at least one angle and one power")
        if self.processes is not None and self.processes < 1:
            raise InvalidConfiguration(f"processes must be >= 1, got {self.processes}")

    @property
    def n_trials(self) -> int:
        return len(self.angles_deg) * len(self.powers)


@dataclass(frozen=True)
class LaunchTrial:
    """One point of the launch grid."""

    angle_deg: float
    power: float

    @property
    def velocity(self) -> Vec2:
        return launch_velocity(self.angle_deg, self.power)


@dataclass(frozen=True)
class TrialResult:
    """A launch and the trajectory it produced."""

    trial: LaunchTrial
    result: TrajectoryResult

    @property
    def success(self) -> bool:
        return self.result.outcome is Outcome.SUCCESS


def launch_velocity(angle_deg: float, power: float) -> Vec2:
    """Velocity for a launch at angle_deg (counter-clockwise from +x) with speed power."""
    rad = math.radians(angle_deg)
    return math.cos(rad) * power, math.sin(rad) * power


def _run_trial(args: tuple[Level, LaunchTrial, OracleConfig]) -> TrialResult:
    """Worker entry point; module level so it pickles."""
    level, trial, config = args
    result = compute_trajectory(
        level.mass_field(),
        level.start_pos,
        trial.velocity,
        level.trajectory_options(max_steps=config.max_steps, dt=config.dt),
        integrator=GeodesicIntegrator(config.integrator),
    )
    return TrialResult(trial, result)


class LevelOracle:
    """
    Grid search over launch angle and power.

    Example:
        oracle = LevelOracle()
        if oracle.is_solvable(level):
            ...
    """

    def __init__(self, config: OracleConfig | None = None):
        self.config = config if config is not None else OracleConfig()

    def trials(self) -> Iterator[LaunchTrial]:
        """Launch grid in search order: angle outer, power inner."""
        for angle in self.config.angles_deg:
            for power in self.config.powers:
                yield LaunchTrial(angle, power)

    def evaluate(self, level: Level) -> Iterator[TrialResult]:
        """Yield every trial result in grid order."""
        return self._evaluate(level, cancel_event=None)

    def find_solution(self, level: Level, cancel_event: CancelSignal | None = None) -> TrialResult | None:
        """
        First successful launch in grid order, or None.

        Raises:
            SimulationCancelled: if cancel_event is set before the search ends
        """
        for trial_result in self._evaluate(level, cancel_event):
            if trial_result.success:
                logger.info(
                    f"Level {level.level_id} solvable: angle={trial_result.trial.angle_deg:g}°, "
                    f"power={trial_result.trial.power:g}, steps={trial_result.result.steps}"
                )
                return trial_result
        logger.info(f"Level {level.level_id}: no solution in {self.config.n_trials} launches")
        return None

    def find_solutions(self, level: Level, cancel_event: CancelSignal | None = None) -> list[TrialResult]:
        """Every successful launch, in grid order."""
        return [tr for tr in self._evaluate(level, cancel_event) if tr.success]

    def is_solvable(self, level: Level, cancel_event: CancelSignal | None = None) -> bool:
        """True if any launch in the grid reaches the goal."""
        return self.find_solution(level, cancel_event) is not None

    def _evaluate(self, level: Level, cancel_event: CancelSignal | None) -> Iterator[TrialResult]:
        jobs = [(level, trial, self.config) for trial in self.trials()]
        processes = self.config.processes

        if processes is None or processes == 1:
            for job in jobs:
                _check_cancel(cancel_event)
                yield _run_trial(job)
            return

        # imap keeps grid order; leaving the with-block terminates any
        # trials still running after an early return
        with mp.Pool(processes=processes) as pool:
            for trial_result in pool.imap(_run_trial, jobs):
                _check_cancel(cancel_event)
                yield trial_result


def _check_cancel(cancel_event: CancelSignal | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SimulationCancelled("Launch search cancelled")
