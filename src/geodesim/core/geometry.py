"""
Differential geometry of the height-field surface z = h(x, y).

Everything here is a pure function of a MassField and a coordinate:
- gradient (∂z/∂x, ∂z/∂y)      one-sided forward difference
- metric g_ij = δ_ij + ∂_i z ∂_j z   induced on the graph surface
- Christoffel symbols Γ^i_jk      centered differences of g, full contraction
- Gaussian curvature K            second differences of h (Monge patch)

Only MassField.height is sampled; nothing here knows that h is a sum of
softened 1/r wells. Each quantity has its own step size in GeometryConfig.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from geodesim.errors import InvalidConfiguration, NumericDegeneracy

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField


@dataclass(frozen=True)
class GeometryConfig:
    """Finite-difference steps for each geometric quantity."""

    gradient_eps: float = 0.01  # Forward-difference step for ∇h (and the metric)
    christoffel_eps: float = 0.02  # Stencil half-width for ∂g
    curvature_eps: float = 0.05  # Stencil half-width for second derivatives of h

    # det g = 1 + |∇h|² ≥ 1 analytically; anything smaller means the
    # finite differences have blown up
    min_determinant: float = 1e-12

    def __post_init__(self):
        for name in ("gradient_eps", "christoffel_eps", "curvature_eps"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidConfiguration(f"{name} must be a positive finite number, got {value!r}")
        if not self.min_determinant >= 0:
            raise InvalidConfiguration("min_determinant must be non-negative")


@dataclass(frozen=True)
class Gradient:
    """Partial derivatives of the height field."""

    dzdx: float
    dzdy: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dzdx, self.dzdy)


@dataclass(frozen=True)
class MetricTensor:
    """
    Symmetric 2x2 metric. Only g12 is stored, so g21 == g12 by construction.
    """

    g11: float
    g12: float
    g22: float

    @property
    def g21(self) -> float:
        return self.g12

    @property
    def determinant(self) -> float:
        return self.g11 * self.g22 - self.g12 * self.g21

    def inverse(self, min_determinant: float = 0.0) -> MetricTensor:
        """
        Closed-form inverse g^ij.

        Raises:
            NumericDegeneracy: if det g is non-finite or below min_determinant
        """
        det = self.determinant
        if not math.isfinite(det) or abs(det) <= min_determinant:
            raise NumericDegeneracy(f"Metric determinant {det!r} is degenerate")
        return MetricTensor(
            g11=self.g22 / det,
            g12=-self.g12 / det,
            g22=self.g11 / det,
        )

    def component(self, i: int, j: int) -> float:
        """g_ij with zero-based indices."""
        if i == j:
            return self.g11 if i == 0 else self.g22
        return self.g12

    def as_array(self) -> np.ndarray:
        """Return [[g11, g12], [g21, g22]]."""
        return np.array([[self.g11, self.g12], [self.g21, self.g22]], dtype=np.float64)


@dataclass(frozen=True)
class ChristoffelSymbols:
    """
    Connection coefficients Γ^i_jk of a 2D surface.

    Symmetric in the lower indices, so six numbers cover all eight
    components: Γ^1_21 is G112 and Γ^2_21 is G212.
    """

    G111: float
    G112: float
    G122: float
    G211: float
    G212: float
    G222: float

    @property
    def G121(self) -> float:
        return self.G112

    @property
    def G221(self) -> float:
        return self.G212

    def contract(self, vx: float, vy: float) -> tuple[float, float]:
        """Γ^i_jk v^j v^k for both i."""
        return (
            self.G111 * vx * vx + 2.0 * self.G112 * vx * vy + self.G122 * vy * vy,
            self.G211 * vx * vx + 2.0 * self.G212 * vx * vy + self.G222 * vy * vy,
        )

    def as_array(self) -> np.ndarray:
        """Full array Γ[i, j, k] (zero-based indices)."""
        return np.array(
            [
                [[self.G111, self.G112], [self.G121, self.G122]],
                [[self.G211, self.G212], [self.G221, self.G222]],
            ],
            dtype=np.float64,
        )


DEFAULT_GEOMETRY = GeometryConfig()

# Coordinate axes (x, y) as zero-based tensor indices
_AXES = (0, 1)


class SurfaceGeometry:
    """
    Geometry engine for the surface induced by a MassField.

    Holds only its configuration; the mass field is passed to every call.
    """

    def __init__(self, config: GeometryConfig | None = None):
        self.config = config if config is not None else DEFAULT_GEOMETRY

    def gradient(
        self, field: "MassField", x: float, y: float, eps: float | None = None
    ) -> Gradient:
        """Forward-difference gradient of the height field."""
        if eps is None:
            eps = self.config.gradient_eps
        z0 = field.height(x, y)
        zx = field.height(x + eps, y)
        zy = field.height(x, y + eps)
        return Gradient(dzdx=(zx - z0) / eps, dzdy=(zy - z0) / eps)

    def metric(self, field: "MassField", x: float, y: float) -> MetricTensor:
        """Metric induced on z = h(x, y) by the ambient Euclidean 3-space."""
        grad = self.gradient(field, x, y)
        return MetricTensor(
            g11=1.0 + grad.dzdx * grad.dzdx,
            g12=grad.dzdx * grad.dzdy,
            g22=1.0 + grad.dzdy * grad.dzdy,
        )

    def inverse_metric(self, field: "MassField", x: float, y: float) -> MetricTensor:
        """g^ij at (x, y)."""
        return self.metric(field, x, y).inverse(self.config.min_determinant)

    def christoffel(
        self, field: "MassField", x: float, y: float, eps: float | None = None
    ) -> ChristoffelSymbols:
        """
        Christoffel symbols of the second kind,

            Γ^i_jk = ½ g^il (∂_k g_lj + ∂_j g_lk − ∂_l g_jk)

        summed over both values of l. The metric is sampled on a 5-point
        stencil and differentiated with centered differences of step 2·eps.

        Raises:
            NumericDegeneracy: if the metric at (x, y) cannot be inverted
        """
        if eps is None:
            eps = self.config.christoffel_eps

        g = self.metric(field, x, y)
        g_xp = self.metric(field, x + eps, y)
        g_xm = self.metric(field, x - eps, y)
        g_yp = self.metric(field, x, y + eps)
        g_ym = self.metric(field, x, y - eps)

        # dg[l][j][k] = ∂_k g_lj
        dg = [
            [
                [
                    (g_xp.component(l, j) - g_xm.component(l, j)) / (2 * eps),
                    (g_yp.component(l, j) - g_ym.component(l, j)) / (2 * eps),
                ]
                for j in _AXES
            ]
            for l in _AXES
        ]

        g_inv = g.inverse(self.config.min_determinant)

        def gamma(i: int, j: int, k: int) -> float:
            return 0.5 * sum(
                g_inv.component(i, l) * (dg[l][j][k] + dg[l][k][j] - dg[j][k][l])
                for l in _AXES
            )

        return ChristoffelSymbols(
            G111=gamma(0, 0, 0),
            G112=gamma(0, 0, 1),
            G122=gamma(0, 1, 1),
            G211=gamma(1, 0, 0),
            G212=gamma(1, 0, 1),
            G222=gamma(1, 1, 1),
        )

    def gaussian_curvature(
        self, field: "MassField", x: float, y: float, eps: float | None = None
    ) -> float:
        """
        Intrinsic curvature of the graph z = h(x, y):

            K = (h_xx h_yy − h_xy²) / (1 + h_x² + h_y²)²

        Second derivatives use a 9-point stencil (center, axes, diagonals).
        Only visualization consumes this; the integrator never does.
        """
        if eps is None:
            eps = self.config.curvature_eps
        h = field.height

        z0 = h(x, y)
        zxx = h(x + eps, y) - 2 * z0 + h(x - eps, y)
        zyy = h(x, y + eps) - 2 * z0 + h(x, y - eps)
        zxy = (
            h(x + eps, y + eps)
            - h(x + eps, y - eps)
            - h(x - eps, y + eps)
            + h(x - eps, y - eps)
        ) / 4

        eps2 = eps * eps
        fxx = zxx / eps2
        fyy = zyy / eps2
        fxy = zxy / eps2

        grad = self.gradient(field, x, y, eps)
        denom = 1.0 + grad.dzdx * grad.dzdx + grad.dzdy * grad.dzdy
        return (fxx * fyy - fxy * fxy) / (denom * denom)


def compute_metric(field: "MassField", x: float, y: float) -> MetricTensor:
    """Convenience function: metric with default step sizes."""
    return SurfaceGeometry().metric(field, x, y)


def compute_christoffel(field: "MassField", x: float, y: float) -> ChristoffelSymbols:
    """Convenience function: Christoffel symbols with default step sizes."""
    return SurfaceGeometry().christoffel(field, x, y)


def compute_gaussian_curvature(field: "MassField", x: float, y: float) -> float:
    """Convenience function: Gaussian curvature with default step sizes."""
    return SurfaceGeometry().gaussian_curvature(field, x, y)
