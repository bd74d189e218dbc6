"""Unit tests for Mass and MassField."""

import math

import numpy as np
import pytest

from geodesim.core.mass_field import Mass, MassField
from geodesim.errors import InvalidConfiguration


class TestMass:
    """Tests for Mass."""

    def test_creation(self):
        m = Mass(1.0, -2.0, 0.5)
        assert (m.x, m.y, m.strength) == (1.0, -2.0, 0.5)

    def test_is_immutable(self):
        m = Mass(0.0, 0.0, 1.0)
        with pytest.raises(AttributeError):
            m.x = 3.0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(InvalidConfiguration):
            Mass(bad, 0.0, 1.0)
        with pytest.raises(InvalidConfiguration):
            Mass(0.0, 0.0, bad)

    def test_distance_to(self):
        assert Mass(1.0, 1.0, 1.0).distance_to(4.0, 5.0) == pytest.approx(5.0)


class TestHeight:
    """Tests for the height potential."""

    def test_empty_field_is_flat(self, empty_field):
        assert empty_field.height(0.0, 0.0) == 0.0
        assert empty_field.height(3.2, -1.7) == 0.0

    def test_finite_at_mass_center(self, single_well):
        # -strength / (0 + 0.5)
        assert single_well.height(0.0, 0.0) == pytest.approx(-3.0)
        assert math.isfinite(single_well.height(0.0, 0.0))

    def test_single_well_value(self, single_well):
        assert single_well.height(3.0, 4.0) == pytest.approx(-1.5 / 5.5)

    def test_monotone_toward_mass(self, single_well):
        """Height strictly decreases as the distance to the mass shrinks."""
        radii = np.linspace(5.0, 0.0, 60)
        heights = [single_well.height(r * 0.6, r * 0.8) for r in radii]
        assert all(a > b for a, b in zip(heights, heights[1:]))

    def test_monotone_toward_each_mass_of_many(self, two_wells):
        for mass in two_wells:
            heights = [two_wells.height(mass.x + d, mass.y) for d in (0.4, 0.3, 0.2, 0.1, 0.0)]
            assert all(a > b for a, b in zip(heights, heights[1:]))

    def test_superposition(self):
        a, b = Mass(-1.0, 0.0, 1.0), Mass(2.0, 1.0, 0.7)
        combined = MassField([a, b])
        separate = MassField([a]).height(0.3, 0.4) + MassField([b]).height(0.3, 0.4)
        assert combined.height(0.3, 0.4) == pytest.approx(separate)

    def test_order_irrelevant(self):
        masses = [Mass(-1.0, 0.0, 1.0), Mass(2.0, 1.0, 0.7), Mass(0.5, -2.0, 2.0)]
        forward = MassField(masses)
        backward = MassField(reversed(masses))
        assert forward.height(0.1, 0.2) == pytest.approx(backward.height(0.1, 0.2), rel=1e-14)

    def test_continuity(self, single_well):
        h0 = single_well.height(1.0, 1.0)
        h1 = single_well.height(1.0 + 1e-9, 1.0 - 1e-9)
        assert abs(h1 - h0) < 1e-8

    def test_height_grid_matches_pointwise(self, two_wells):
        xs = np.linspace(-2.0, 2.0, 7)
        ys = np.linspace(-1.0, 3.0, 5)
        grid = two_wells.height_grid(xs, ys)

        assert grid.shape == (5, 7)
        assert grid[2, 3] == pytest.approx(two_wells.height(xs[3], ys[2]))
        assert grid[4, 0] == pytest.approx(two_wells.height(xs[0], ys[4]))


class TestMassConfiguration:
    """Tests for replacing and querying masses."""

    def test_set_masses_replaces_everything(self, two_wells):
        two_wells.set_masses([Mass(3.0, 3.0, 0.2)])
        assert len(two_wells) == 1
        assert two_wells[0] == Mass(3.0, 3.0, 0.2)

    def test_set_masses_rejects_non_mass(self):
        field = MassField()
        with pytest.raises(InvalidConfiguration):
            field.set_masses([(0.0, 0.0, 1.0)])

    def test_rejected_update_keeps_previous(self, single_well):
        with pytest.raises(InvalidConfiguration):
            single_well.set_masses([Mass(1.0, 1.0, 1.0), "not a mass"])
        assert single_well.masses == (Mass(0.0, 0.0, 1.5),)

    def test_from_tuples(self):
        field = MassField.from_tuples([(0, 0, 1.5), (1, 2, 0.5)])
        assert field.masses == (Mass(0.0, 0.0, 1.5), Mass(1.0, 2.0, 0.5))

    def test_nearest_distance(self, two_wells):
        assert two_wells.nearest_distance(-1.0, 1.5) == pytest.approx(0.5)
        assert MassField().nearest_distance(0.0, 0.0) == math.inf

    def test_is_near_mass(self, single_well):
        assert single_well.is_near_mass(0.1, 0.1, 0.3)
        assert not single_well.is_near_mass(0.3, 0.0, 0.3)  # Strict inequality

    def test_total_strength(self, two_wells):
        assert two_wells.total_strength() == pytest.approx(2.4)
