"""Unit tests for procedural level generation."""

import math

import numpy as np
import pytest

from geodesim.core.mass_field import Mass
from geodesim.errors import InvalidConfiguration
from geodesim.game.generator import (
    GenerationParams,
    default_seed,
    fallback_level,
    generate_level,
    generate_level_batch,
    generate_masses,
    generate_start_and_goal,
)


class StubOracle:
    """Answers from a fixed script instead of simulating."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.seen = []

    def is_solvable(self, level):
        self.seen.append(level)
        if len(self.answers) > 1:
            return self.answers.pop(0)
        return self.answers[0]


class TestProgression:
    """Tests for difficulty scaling."""

    def test_mass_count(self):
        params = GenerationParams()
        assert params.mass_count(1) == 1
        assert params.mass_count(4) == 2
        assert params.mass_count(100) == 6

    def test_strength(self):
        params = GenerationParams()
        assert params.average_strength(1) == pytest.approx(1.1)
        assert params.average_strength(100) == 3.5

    def test_goal_radius_shrinks_to_floor(self):
        params = GenerationParams()
        assert params.goal_radius(1) == pytest.approx(0.48)
        assert params.goal_radius(5) < params.goal_radius(1)
        assert params.goal_radius(100) == 0.25

    def test_distance_grows_to_cap(self):
        params = GenerationParams()
        assert params.distance(1) == pytest.approx(6.2)
        assert params.distance(100) == 8.0

    def test_default_seed(self):
        assert default_seed(1) == 12345
        assert default_seed(3) == 3 * 12345

    def test_invalid_params(self):
        with pytest.raises(InvalidConfiguration):
            GenerationParams(max_attempts=0)
        with pytest.raises(InvalidConfiguration):
            GenerationParams(margin=5.0)


class TestLayout:
    """Tests for start, goal and mass placement."""

    @pytest.mark.parametrize("level_id", [1, 5, 20])
    def test_endpoints_inside_margin(self, rng, level_id):
        params = GenerationParams()
        lo, hi = -5.0 + params.margin, 5.0 - params.margin
        for _ in range(50):
            start, goal = generate_start_and_goal(rng, level_id, params)
            for x, y in (start, goal):
                assert lo <= x <= hi
                assert lo <= y <= hi

    def test_unclamped_distance(self, rng):
        """Centered endpoints are never clamped, so they sit the full distance apart."""
        params = GenerationParams(center_jitter=0.0)
        start, goal = generate_start_and_goal(rng, 1, params)
        assert math.hypot(goal[0] - start[0], goal[1] - start[1]) == pytest.approx(6.2)

    @pytest.mark.parametrize("level_id", [1, 4, 10, 20])
    def test_mass_constraints(self, rng, level_id):
        params = GenerationParams()
        for _ in range(10):
            start, goal = generate_start_and_goal(rng, level_id, params)
            masses = generate_masses(rng, level_id, start, goal, params)

            assert len(masses) <= params.mass_count(level_id)
            avg = params.average_strength(level_id)
            for i, m in enumerate(masses):
                assert isinstance(m, Mass)
                assert m.distance_to(*start) > params.min_endpoint_clearance
                assert m.distance_to(*goal) > params.min_endpoint_clearance
                assert 0.7 * avg <= m.strength <= 1.3 * avg
                for other in masses[i + 1:]:
                    assert m.distance_to(other.x, other.y) >= params.min_mass_separation

    def test_coincident_endpoints_get_no_masses(self, rng):
        assert generate_masses(rng, 3, (1.0, 1.0), (1.0, 1.0), GenerationParams()) == []


class TestGenerateLevel:
    """Tests for the accept/reseed/fallback loop."""

    def test_accepted_level(self):
        params = GenerationParams()
        level = generate_level(4, params=params, oracle=StubOracle([True]))

        assert level.level_id == 4
        assert level.difficulty == 4
        assert level.goal_radius == pytest.approx(params.goal_radius(4))
        assert 1 <= len(level.masses) <= 2

    def test_reproducible(self):
        a = generate_level(3, oracle=StubOracle([True]))
        b = generate_level(3, oracle=StubOracle([True]))
        assert a == b

    def test_seed_changes_level(self):
        a = generate_level(3, seed=1, oracle=StubOracle([True]))
        b = generate_level(3, seed=2, oracle=StubOracle([True]))
        assert a != b

    def test_default_seed_used(self):
        assert generate_level(2, oracle=StubOracle([True])) == generate_level(
            2, seed=default_seed(2), oracle=StubOracle([True])
        )

    def test_reseed_after_rejection(self):
        params = GenerationParams()
        oracle = StubOracle([False, True])
        level = generate_level(5, seed=77, params=params, oracle=oracle)

        assert len(oracle.seen) == 2
        rng = np.random.default_rng(77 + 1000)
        start, goal = generate_start_and_goal(rng, 5, params)
        assert level.start_pos == start
        assert level.goal_pos == goal

    def test_fallback_after_budget(self):
        params = GenerationParams(max_attempts=2)
        oracle = StubOracle([False])
        level = generate_level(7, params=params, oracle=oracle)

        assert len(oracle.seen) == 2
        assert level == fallback_level(7, params)
        assert level.start_pos == (-3.0, 0.0)
        assert level.goal_pos == (3.0, 0.0)
        assert level.masses == (Mass(0.0, 0.0, 1.5),)
        assert level.goal_radius == pytest.approx(params.goal_radius(7))

    def test_batch(self):
        levels = generate_level_batch(3, 3, oracle=StubOracle([True]))
        assert [lv.level_id for lv in levels] == [3, 4, 5]
        assert levels[0] == generate_level(3, oracle=StubOracle([True]))
