"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import numpy as np


@pytest.fixture
def single_well():
    """One mass of strength 1.5 at the origin."""
    from geodesim.core import Mass, MassField
    return MassField([Mass(0.0, 0.0, 1.5)])


@pytest.fixture
def two_wells():
    """Two diagonal masses forming a corridor."""
    from geodesim.core import Mass, MassField
    return MassField([Mass(-1.0, 1.0, 1.2), Mass(1.0, -1.0, 1.2)])


@pytest.fixture
def empty_field():
    """No masses: a flat plane."""
    from geodesim.core import MassField
    return MassField()


@pytest.fixture
def valley_level():
    """Single well between start (-3.5, 0) and goal (3.5, 0)."""
    from geodesim.core import Mass
    from geodesim.game import Level
    return Level(
        level_id=1,
        start_pos=(-3.5, 0.0),
        goal_pos=(3.5, 0.0),
        goal_radius=0.5,
        masses=(Mass(0.0, 0.0, 1.5),),
    )


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
