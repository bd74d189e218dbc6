"""
Trajectory visualization.

Draws simulated paths over the height field, marking the start, the end
(styled by outcome) and the goal.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.patches import Circle

from geodesim.core.simulator import Outcome
from geodesim.viz.fields import plot_height_field

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField
    from geodesim.core.simulator import Bounds, TrajectoryResult

# End marker per outcome
OUTCOME_MARKERS = {
    Outcome.SUCCESS: ("lime", "o"),
    Outcome.OUT_OF_BOUNDS: ("white", "s"),
    Outcome.CAPTURED: ("red", "x"),
    Outcome.EXHAUSTED: ("gray", "D"),
}


def _draw_goal(ax: Axes, goal_pos: tuple[float, float], goal_radius: float) -> None:
    ax.add_patch(
        Circle(goal_pos, goal_radius, fill=False, edgecolor="lime", linewidth=2, zorder=3, label="Goal")
    )


def plot_trajectory(
    result: "TrajectoryResult",
    field: "MassField | None" = None,
    bounds: "Bounds | None" = None,
    goal_pos: tuple[float, float] | None = None,
    goal_radius: float = 0.3,
    title: str = "Trajectory",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    line_color: str = "white",
    line_width: float = 2.0,
) -> tuple[Figure, Axes]:
    """
    Plot a single trajectory.

    Args:
        result: Output of compute_trajectory()
        field: If given, draw the height field underneath
        bounds: Extent of the background field
        goal_pos, goal_radius: Optional goal circle
        title: Plot title
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    if field is not None:
        fig, ax = plot_height_field(field, bounds, title=title, ax=ax, figsize=figsize)
    elif ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    traj = result.as_array()
    if len(traj) > 0:
        ax.plot(traj[:, 0], traj[:, 1], color=line_color, linewidth=line_width, zorder=2)
        ax.scatter(
            [traj[0, 0]], [traj[0, 1]],
            color="green", s=100, marker="o", zorder=3,
            label="Start", edgecolors="white", linewidths=1.5,
        )

    color, marker = OUTCOME_MARKERS[result.outcome]
    end_x, end_y = result.final_position
    ax.scatter([end_x], [end_y], color=color, s=100, marker=marker, zorder=3, label=result.outcome.value)

    if goal_pos is not None:
        _draw_goal(ax, goal_pos, goal_radius)

    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(loc="upper right")

    return fig, ax


def plot_trajectories(
    results: Sequence["TrajectoryResult"],
    field: "MassField | None" = None,
    bounds: "Bounds | None" = None,
    labels: Sequence[str] | None = None,
    goal_pos: tuple[float, float] | None = None,
    goal_radius: float = 0.3,
    title: str = "Trajectories",
    figsize: tuple[float, float] = (10, 10),
) -> Figure:
    """
    Plot several trajectories on the same background, e.g. a launch fan.

    Returns:
        Figure
    """
    if field is not None:
        fig, ax = plot_height_field(field, bounds, title=title, figsize=figsize)
    else:
        fig, ax = plt.subplots(figsize=figsize)
        ax.set_title(title)

    cmap_lines = plt.get_cmap("tab10")
    for i, result in enumerate(results):
        traj = result.as_array()
        if len(traj) == 0:
            continue
        label = labels[i] if labels is not None and i < len(labels) else None
        color = cmap_lines(i % 10)
        ax.plot(traj[:, 0], traj[:, 1], color=color, linewidth=1.5, zorder=2, label=label)

        end_color, marker = OUTCOME_MARKERS[result.outcome]
        ax.scatter([traj[-1, 0]], [traj[-1, 1]], color=end_color, s=40, marker=marker, zorder=3)

    if goal_pos is not None:
        _draw_goal(ax, goal_pos, goal_radius)

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if labels is not None:
        ax.legend(loc="upper right", fontsize=8)

    fig.tight_layout()
    return fig


def plot_height_along_path(
    results: Sequence["TrajectoryResult"],
    labels: Sequence[str] | None = None,
    dt: float = 0.01,
    title: str = "Height along path",
    figsize: tuple[float, float] = (10, 4),
) -> Figure:
    """Height z(t) of each trajectory against simulated time."""
    fig, ax = plt.subplots(figsize=figsize)

    for i, result in enumerate(results):
        traj = result.as_array()
        if len(traj) == 0:
            continue
        times = np.arange(len(traj)) * dt
        label = labels[i] if labels is not None and i < len(labels) else None
        ax.plot(times, traj[:, 2], linewidth=2, label=label)

    ax.set_xlabel("Time")
    ax.set_ylabel("h")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    if labels is not None:
        ax.legend()

    fig.tight_layout()
    return fig
