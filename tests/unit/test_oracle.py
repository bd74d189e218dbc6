"""Unit tests for the solvability oracle."""

import math
import threading

import pytest

from geodesim.core.simulator import Outcome
from geodesim.errors import InvalidConfiguration, SimulationCancelled
from geodesim.game.level import Level
from geodesim.game.oracle import LaunchTrial, LevelOracle, OracleConfig, launch_velocity


class TestLaunchVelocity:
    """Tests for angle/power to velocity."""

    def test_axes(self):
        assert launch_velocity(0.0, 2.0) == pytest.approx((2.0, 0.0))
        assert launch_velocity(90.0, 2.0) == pytest.approx((0.0, 2.0), abs=1e-12)
        assert launch_velocity(180.0, 1.0) == pytest.approx((-1.0, 0.0), abs=1e-12)

    def test_power_is_speed(self):
        vx, vy = launch_velocity(37.0, 3.5)
        assert math.hypot(vx, vy) == pytest.approx(3.5)

    def test_trial_velocity(self):
        assert LaunchTrial(30.0, 1.5).velocity == launch_velocity(30.0, 1.5)


class TestOracleConfig:
    """Tests for the launch grid."""

    def test_default_grid(self):
        cfg = OracleConfig()
        assert cfg.angles_deg[0] == 0.0
        assert cfg.angles_deg[-1] == 345.0
        assert len(cfg.angles_deg) == 24
        assert cfg.powers == (1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0)
        assert cfg.n_trials == 216
        assert cfg.max_steps == 2000
        assert cfg.dt == 0.01

    def test_search_order(self):
        trials = list(LevelOracle().trials())
        assert len(trials) == 216
        assert trials[0] == LaunchTrial(0.0, 1.0)
        assert trials[1] == LaunchTrial(0.0, 1.5)
        assert trials[9] == LaunchTrial(15.0, 1.0)
        assert trials[-1] == LaunchTrial(345.0, 5.0)

    def test_empty_grid_rejected(self):
        with pytest.raises(InvalidConfiguration):
            OracleConfig(angles_deg=())
        with pytest.raises(InvalidConfiguration):
            OracleConfig(powers=())

    def test_bad_processes(self):
        with pytest.raises(InvalidConfiguration):
            OracleConfig(processes=0)


class TestFindSolution:
    """Tests for the grid search."""

    def test_valley_first_solution(self, valley_level):
        solution = LevelOracle().find_solution(valley_level)

        assert solution is not None
        assert solution.trial == LaunchTrial(15.0, 5.0)
        assert solution.result.outcome is Outcome.SUCCESS

    def test_valley_all_solutions(self, valley_level):
        solutions = LevelOracle().find_solutions(valley_level)
        assert [s.trial for s in solutions] == [
            LaunchTrial(15.0, 5.0),
            LaunchTrial(30.0, 1.5),
            LaunchTrial(345.0, 5.0),
        ]

    def test_small_grid(self, valley_level):
        oracle = LevelOracle(OracleConfig(angles_deg=(0.0, 30.0), powers=(1.5,)))
        solution = oracle.find_solution(valley_level)
        assert solution.trial.angle_deg == 30.0
        assert oracle.is_solvable(valley_level)

    def test_evaluate_yields_every_trial(self, valley_level):
        oracle = LevelOracle(OracleConfig(angles_deg=(0.0, 30.0), powers=(1.5,)))
        results = list(oracle.evaluate(valley_level))
        assert [r.result.outcome for r in results] == [Outcome.CAPTURED, Outcome.SUCCESS]
        assert [r.success for r in results] == [False, True]

    def test_unsolvable(self):
        level = Level(start_pos=(-3.5, 0.0), goal_pos=(4.9, 4.9), goal_radius=0.01)
        oracle = LevelOracle(
            OracleConfig(angles_deg=(0.0, 90.0, 180.0, 270.0), powers=(1.0,), max_steps=200)
        )
        assert oracle.find_solution(level) is None
        assert not oracle.is_solvable(level)
        assert oracle.find_solutions(level) == []

    def test_trials_use_level_budget(self, valley_level):
        oracle = LevelOracle(OracleConfig(angles_deg=(90.0,), powers=(1.0,), max_steps=25))
        (trial_result,) = oracle.evaluate(valley_level)
        assert len(trial_result.result.points) <= 25


class TestCancellation:
    """Tests for cooperative cancellation."""

    def test_set_event_cancels(self, valley_level):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(SimulationCancelled):
            LevelOracle().find_solution(valley_level, cancel_event=cancel)

    def test_unset_event_is_ignored(self, valley_level):
        oracle = LevelOracle(OracleConfig(angles_deg=(30.0,), powers=(1.5,)))
        assert oracle.is_solvable(valley_level, cancel_event=threading.Event())


class TestParallel:
    """Tests for the process pool path."""

    def test_matches_serial(self, valley_level):
        grid = dict(angles_deg=(0.0, 15.0, 30.0), powers=(1.5, 5.0))
        serial = list(LevelOracle(OracleConfig(**grid)).evaluate(valley_level))
        parallel = list(LevelOracle(OracleConfig(processes=2, **grid)).evaluate(valley_level))

        assert [r.trial for r in parallel] == [r.trial for r in serial]
        assert [r.result for r in parallel] == [r.result for r in serial]

    def test_parallel_first_solution(self, valley_level):
        grid = dict(angles_deg=(0.0, 15.0, 30.0), powers=(1.5, 5.0))
        solution = LevelOracle(OracleConfig(processes=2, **grid)).find_solution(valley_level)
        assert solution.trial == LaunchTrial(15.0, 5.0)
