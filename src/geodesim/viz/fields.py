"""
2D diagnostic plots of the surface.

Heatmaps for:
- h(x, y): the height field (wells are dark)
- K(x, y): Gaussian curvature (diverging around zero)
- radial height profiles around a mass

All plots use matplotlib with coordinates in world units (imshow extent
set from the bounds), so trajectories can be drawn on top directly.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from geodesim.analysis.surface import sample_curvature, sample_height
from geodesim.core.simulator import Bounds

if TYPE_CHECKING:
    from geodesim.core.geometry import GeometryConfig
    from geodesim.core.mass_field import MassField


def _create_well_cmap():
    """Colormap for wells: near black (deep) → red → orange → warm white (flat)."""
    from matplotlib.colors import LinearSegmentedColormap

    colors = [
        (0.05, 0.02, 0.02),     # Near black (deep well)
        (0.329, 0.075, 0.098),  # Dark red
        (0.600, 0.157, 0.110),  # Red
        (0.855, 0.345, 0.114),  # Orange-red
        (0.969, 0.588, 0.275),  # Orange
        (0.988, 0.812, 0.498),  # Light orange
        (0.993, 0.978, 0.925),  # Warm white / blanc-cassé
    ]
    return LinearSegmentedColormap.from_list("well", colors)


CMAP_HEIGHT = _create_well_cmap()
CMAP_CURVATURE = "RdBu_r"  # Positive K red, negative K blue


def _extent(bounds: Bounds) -> tuple[float, float, float, float]:
    return bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y


def plot_field(
    values: np.ndarray,
    bounds: Bounds,
    title: str = "",
    cmap=None,
    norm: mcolors.Normalize | None = None,
    ax: Axes | None = None,
    colorbar: bool = True,
    colorbar_label: str = "",
    figsize: tuple[float, float] = (8, 6),
) -> tuple[Figure, Axes]:
    """
    Plot a sampled 2D field as a heatmap over the playing area.

    Args:
        values: 2D array, shape [ny, nx], row 0 at bounds.min_y
        bounds: World extent of the array
        title: Plot title
        cmap: Colormap
        norm: Optional color normalization
        ax: Existing axes to plot on (creates new figure if None)
        colorbar: Whether to add a colorbar

    Returns:
        (fig, ax) tuple
    """
    if cmap is None:
        cmap = CMAP_HEIGHT

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(
        values,
        origin="lower",
        extent=_extent(bounds),
        cmap=cmap,
        norm=norm,
        aspect="equal",
    )

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label=colorbar_label)

    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_height_field(
    field: "MassField",
    bounds: Bounds | None = None,
    resolution: int = 201,
    title: str = "Height h(x, y)",
    ax: Axes | None = None,
    show_masses: bool = True,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot the height field, optionally marking each mass."""
    if bounds is None:
        bounds = Bounds()
    _, _, heights = sample_height(field, bounds, resolution)
    fig, ax = plot_field(heights, bounds, title=title, cmap=CMAP_HEIGHT, ax=ax, colorbar_label="h", **kwargs)

    if show_masses and len(field) > 0:
        ax.scatter(
            [m.x for m in field], [m.y for m in field],
            color="yellow", s=120, marker="*", zorder=4,
            edgecolors="black", linewidths=1.0, label="Mass",
        )

    return fig, ax


def plot_curvature_field(
    field: "MassField",
    bounds: Bounds | None = None,
    resolution: int = 201,
    config: "GeometryConfig | None" = None,
    title: str = "Gaussian curvature K(x, y)",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """
    Plot Gaussian curvature with a diverging colormap centered on zero.

    The wells' cores dominate the range, so the scale is symmetric-log.
    """
    if bounds is None:
        bounds = Bounds()
    _, _, curvature = sample_curvature(field, bounds, resolution, config)

    vmax = float(np.nanmax(np.abs(curvature))) if curvature.size else 0.0
    if vmax == 0.0:
        vmax = 1.0
    norm = mcolors.SymLogNorm(linthresh=vmax * 1e-3, vmin=-vmax, vmax=vmax)

    return plot_field(
        curvature, bounds, title=title, cmap=CMAP_CURVATURE, norm=norm,
        ax=ax, colorbar_label="K", **kwargs,
    )


def plot_radial_profile(
    radii: np.ndarray,
    values: np.ndarray,
    label: str = "",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
    **plot_kwargs,
) -> tuple[Figure, Axes]:
    """Plot a 1D radial height profile."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.plot(radii, values, label=label, **plot_kwargs)
    ax.set_xlabel("Distance from center")
    ax.set_ylabel("Mean height")
    ax.grid(True, alpha=0.3)
    if label:
        ax.legend()

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating the parent directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
