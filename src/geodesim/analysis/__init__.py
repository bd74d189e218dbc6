"""
Analysis layer: grid-sampled views of the surface.

IMPORTANT: This is NOT seen by the simulator. One-way derivation only.

- sample_height: h(x, y) on a regular grid
- sample_curvature: Gaussian curvature K(x, y) on a regular grid
- compute_radial_profile: mean height on circles around a point
"""

from geodesim.analysis.surface import (
    grid_axes,
    sample_height,
    sample_curvature,
    compute_radial_profile,
)

__all__ = [
    "grid_axes",
    "sample_height",
    "sample_curvature",
    "compute_radial_profile",
]
