"""
Grid sampling of the surface for plots and diagnostics.

IMPORTANT: nothing here feeds back into the simulation. These are
vectorised re-evaluations of the same finite-difference formulas the
core uses point by point, for drawing the height field and its
curvature.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from geodesim.core.geometry import GeometryConfig
from geodesim.core.simulator import Bounds

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField


def grid_axes(bounds: Bounds, resolution: int) -> tuple[np.ndarray, np.ndarray]:
    """Evenly spaced x and y coordinates covering the bounds (inclusive)."""
    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")
    xs = np.linspace(bounds.min_x, bounds.max_x, resolution)
    ys = np.linspace(bounds.min_y, bounds.max_y, resolution)
    return xs, ys


def sample_height(
    field: "MassField",
    bounds: Bounds | None = None,
    resolution: int = 101,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Height field on a regular grid.

    Returns:
        (xs, ys, heights) with heights of shape [len(ys), len(xs)]
    """
    if bounds is None:
        bounds = Bounds()
    xs, ys = grid_axes(bounds, resolution)
    return xs, ys, field.height_grid(xs, ys)


def sample_curvature(
    field: "MassField",
    bounds: Bounds | None = None,
    resolution: int = 101,
    config: GeometryConfig | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Gaussian curvature on a regular grid.

    Same stencil and step as SurfaceGeometry.gaussian_curvature, evaluated
    on shifted copies of the grid instead of point by point.

    Returns:
        (xs, ys, K) with K of shape [len(ys), len(xs)]
    """
    if bounds is None:
        bounds = Bounds()
    if config is None:
        config = GeometryConfig()
    eps = config.curvature_eps
    xs, ys = grid_axes(bounds, resolution)

    def h(dx: float, dy: float) -> np.ndarray:
        return field.height_grid(xs + dx, ys + dy)

    z0 = h(0, 0)
    fxx = (h(eps, 0) - 2 * z0 + h(-eps, 0)) / eps**2
    fyy = (h(0, eps) - 2 * z0 + h(0, -eps)) / eps**2
    fxy = (h(eps, eps) - h(eps, -eps) - h(-eps, eps) + h(-eps, -eps)) / (4 * eps**2)

    # Forward differences, matching the point-wise gradient
    zx = (h(eps, 0) - z0) / eps
    zy = (h(0, eps) - z0) / eps
    denom = 1.0 + zx**2 + zy**2

    return xs, ys, (fxx * fyy - fxy**2) / denom**2


def compute_radial_profile(
    field: "MassField",
    center: tuple[float, float],
    max_radius: float,
    n_radii: int = 50,
    n_angles: int = 36,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Average height on circles around a center point.

    Args:
        field: Mass configuration
        center: (cx, cy) center point, typically a mass position
        max_radius: Largest radius sampled
        n_radii: Number of radii from 0 to max_radius
        n_angles: Samples per circle

    Returns:
        (radii, values) - 1D arrays of radius and mean height
    """
    cx, cy = center
    radii = np.linspace(0.0, max_radius, n_radii)
    angles = np.linspace(0.0, 2 * np.pi, n_angles, endpoint=False)

    values = np.zeros(len(radii))
    for i, r in enumerate(radii):
        samples = [field.height(cx + r * np.cos(a), cy + r * np.sin(a)) for a in angles]
        values[i] = np.mean(samples)

    return radii, values
