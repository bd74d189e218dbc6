#!/usr/bin/env python3
"""
Demo: Procedural Levels with a Solvability Check

Generates the first few levels. Each candidate is accepted only once the
oracle finds a winning launch, so every level shown is playable. The
winning shot is drawn over each level.

Pass --parallel to fan oracle trials out to a process pool.

Output: output/demo_levels/levels.png, output/demo_levels/generation.log
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt

from geodesim.core import compute_trajectory
from geodesim.game import LevelOracle, OracleConfig, generate_level
from geodesim.logging import setup_logfile
from geodesim.viz import plot_trajectory, save_figure


def main():
    parallel = "--parallel" in sys.argv
    output_dir = Path("output/demo_levels")
    output_dir.mkdir(parents=True, exist_ok=True)
    setup_logfile(str(output_dir / "generation.log"), level="DEBUG")

    print("=" * 60)
    print("  PROCEDURAL LEVEL GENERATION")
    print("=" * 60)

    oracle = LevelOracle(OracleConfig(processes=4 if parallel else None))
    n_levels = 4

    print(f"\n1. Generating levels 1..{n_levels} ({'parallel' if parallel else 'serial'} oracle)...")
    fig, axes = plt.subplots(1, n_levels, figsize=(5 * n_levels, 5))

    for ax, level_id in zip(axes, range(1, n_levels + 1)):
        level = generate_level(level_id, oracle=oracle)
        solution = oracle.find_solution(level)
        print(f"   Level {level_id}: {len(level.masses)} masses, goal radius {level.goal_radius:.2f}")

        if solution is None:
            # Fallback levels are not re-validated
            print("      (fallback level, no solution on the grid)")
            ax.set_title(f"Level {level_id} (fallback)")
            continue

        print(f"      solution: angle={solution.trial.angle_deg:g}°, power={solution.trial.power:g}")
        result = compute_trajectory(
            level.mass_field(), level.start_pos, solution.trial.velocity, level.trajectory_options()
        )
        plot_trajectory(
            result, field=level.mass_field(), bounds=level.bounds,
            goal_pos=level.goal_pos, goal_radius=level.goal_radius,
            title=f"Level {level_id}", ax=ax,
        )

    fig.tight_layout()
    save_figure(fig, output_dir / "levels.png")
    plt.close(fig)
    print(f"\n2. Saved: {output_dir / 'levels.png'}")
    print(f"   Log:   {output_dir / 'generation.log'}")


if __name__ == "__main__":
    main()
