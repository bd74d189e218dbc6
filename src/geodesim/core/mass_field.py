"""
MassField: the point masses that warp the playing surface.

Each mass digs a well into the height field

    h(x, y) = Σ -strength / (|p - p_mass| + 0.5)

The 0.5 offset keeps the well finite at the mass center while still
making it deep. Everything downstream (metric, connection, curvature,
trajectories) is derived from h by finite differences.

A MassField is the only state the simulation reads. The level layer owns
it and swaps the whole collection at once with set_masses(); geometry and
simulation calls receive it explicitly.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np

from geodesim.errors import InvalidConfiguration

# Softening added to the distance so the well is finite at its center
HEIGHT_SOFTENING = 0.5


@dataclass(frozen=True)
class Mass:
    """A point mass (gravitational well) on the plane."""

    x: float
    y: float
    strength: float  # Well depth scale; deeper for larger values

    def __post_init__(self):
        for name in ("x", "y", "strength"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfiguration(f"Mass.{name} must be finite, got {value!r}")

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance from (x, y) to this mass."""
        return math.hypot(x - self.x, y - self.y)


class MassField:
    """
    An immutable-during-simulation collection of point masses.

    Summation over masses is commutative, so insertion order only matters
    for indexing.
    """

    def __init__(self, masses: Iterable[Mass] = ()):
        self._masses: tuple[Mass, ...] = ()
        self.set_masses(masses)

    def set_masses(self, masses: Iterable[Mass]) -> None:
        """Replace the whole mass collection (no incremental edits)."""
        masses = tuple(masses)
        for mass in masses:
            if not isinstance(mass, Mass):
                raise InvalidConfiguration(f"Expected Mass, got {type(mass).__name__}")
        self._masses = masses

    @classmethod
    def from_tuples(cls, triples: Iterable[tuple[float, float, float]]) -> MassField:
        """Build a field from (x, y, strength) triples."""
        return cls(Mass(float(x), float(y), float(s)) for x, y, s in triples)

    @property
    def masses(self) -> tuple[Mass, ...]:
        """The current masses, in insertion order."""
        return self._masses

    def __len__(self) -> int:
        return len(self._masses)

    def __iter__(self) -> Iterator[Mass]:
        return iter(self._masses)

    def __getitem__(self, index: int) -> Mass:
        return self._masses[index]

    def __repr__(self) -> str:
        return f"MassField({list(self._masses)!r})"

    def height(self, x: float, y: float) -> float:
        """Height of the surface at (x, y). Finite at the mass centers."""
        h = 0.0
        for mass in self._masses:
            dist = math.hypot(x - mass.x, y - mass.y)
            h -= mass.strength / (dist + HEIGHT_SOFTENING)
        return h

    def height_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Vectorised height over a grid.

        Args:
            xs: 1D array of x coordinates (columns)
            ys: 1D array of y coordinates (rows)

        Returns:
            Array of shape [len(ys), len(xs)]
        """
        xx, yy = np.meshgrid(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))
        heights = np.zeros_like(xx)
        for mass in self._masses:
            dist = np.sqrt((xx - mass.x) ** 2 + (yy - mass.y) ** 2)
            heights -= mass.strength / (dist + HEIGHT_SOFTENING)
        return heights

    def nearest_distance(self, x: float, y: float) -> float:
        """Distance to the closest mass (inf for an empty field)."""
        return min((mass.distance_to(x, y) for mass in self._masses), default=math.inf)

    def is_near_mass(self, x: float, y: float, radius: float) -> bool:
        """True if (x, y) is strictly within `radius` of any mass."""
        return any(mass.distance_to(x, y) < radius for mass in self._masses)

    def total_strength(self) -> float:
        """Sum of all mass strengths."""
        return float(sum(mass.strength for mass in self._masses))
