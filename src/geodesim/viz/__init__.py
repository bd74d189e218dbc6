"""
Visualization utilities.

- Height and curvature heatmaps
- Trajectory plots (single path, launch fans)
- Radial and along-path profiles
"""

from geodesim.viz.fields import (
    plot_field,
    plot_height_field,
    plot_curvature_field,
    plot_radial_profile,
    save_figure,
)

from geodesim.viz.trajectories import (
    plot_trajectory,
    plot_trajectories,
    plot_height_along_path,
)

__all__ = [
    "plot_field",
    "plot_height_field",
    "plot_curvature_field",
    "plot_radial_profile",
    "save_figure",
    "plot_trajectory",
    "plot_trajectories",
    "plot_height_along_path",
]
