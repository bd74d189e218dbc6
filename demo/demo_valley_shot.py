#!/usr/bin/env python3
"""
Demo: Shooting Past a Gravity Well

A single mass sits between start and goal. The straight shot is pulled
into the well; curving around it reaches the goal.

1. Fire the straight shot and a fan of angled shots
2. Classify every launch (success / out of bounds / captured / exhausted)
3. Ask the oracle for the first winning launch on the full grid

Output: output/demo_valley/launch_fan.png, output/demo_valley/height_along_path.png
"""

from pathlib import Path

import matplotlib.pyplot as plt

from geodesim.core import Mass, compute_trajectory
from geodesim.game import Level, LevelOracle, launch_velocity
from geodesim.viz import plot_height_along_path, plot_trajectories, save_figure


def main():
    print("=" * 60)
    print("  SHOOTING PAST A GRAVITY WELL")
    print("=" * 60)

    level = Level(
        level_id=1,
        start_pos=(-3.5, 0.0),
        goal_pos=(3.5, 0.0),
        goal_radius=0.5,
        masses=(Mass(0.0, 0.0, 1.5),),
    )
    field = level.mass_field()
    options = level.trajectory_options(max_steps=15000)

    print(f"\n1. Level:")
    print(f"   Start {level.start_pos} → goal {level.goal_pos} (radius {level.goal_radius})")
    print(f"   Mass at (0, 0), strength 1.5")

    print("\n2. Launch fan (power 1.5)...")
    angles = [0, 15, 30, 45, -30]
    results = []
    for angle in angles:
        result = compute_trajectory(field, level.start_pos, launch_velocity(angle, 1.5), options)
        results.append(result)
        print(f"   {angle:>4}°: {result.outcome.value:<14} after {result.steps:>5} steps")

    print("\n3. Oracle search (24 angles × 9 powers)...")
    solution = LevelOracle().find_solution(level)
    if solution is not None:
        print(f"   First solution: angle={solution.trial.angle_deg:g}°, power={solution.trial.power:g}")
    else:
        print("   No solution found")

    print("\n4. Plotting...")
    output_dir = Path("output/demo_valley")
    labels = [f"{a}°" for a in angles]

    fig = plot_trajectories(
        results, field=field, bounds=level.bounds, labels=labels,
        goal_pos=level.goal_pos, goal_radius=level.goal_radius,
        title="Launch fan around a single well",
    )
    save_figure(fig, output_dir / "launch_fan.png")
    plt.close(fig)
    print(f"   Saved: {output_dir / 'launch_fan.png'}")

    fig = plot_height_along_path(results, labels=labels, dt=options.dt)
    save_figure(fig, output_dir / "height_along_path.png")
    plt.close(fig)
    print(f"   Saved: {output_dir / 'height_along_path.png'}")

    print("\n" + "=" * 60)
    print("  SUMMARY")
    print("=" * 60)
    print("  • The straight shot rolls down into the well")
    print("  • Angled shots bend around it; the right angle lands in the goal")
    print("=" * 60)


if __name__ == "__main__":
    main()
