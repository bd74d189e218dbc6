#!/usr/bin/env python3
"""
Demo: Height and Curvature of a Two-Well Surface

Two masses on the diagonal carve a saddle between them:

1. Height h(x, y) = Σ -s / (d + 0.5)
2. Gaussian curvature K(x, y) from the 9-point stencil
3. Radial height profile around each mass

Output: output/demo_curvature/surface.png
"""

from pathlib import Path

import matplotlib.pyplot as plt

from geodesim.analysis import compute_radial_profile
from geodesim.core import Mass, MassField, compute_gaussian_curvature
from geodesim.viz import plot_curvature_field, plot_height_field, plot_radial_profile, save_figure


def main():
    print("=" * 60)
    print("  SURFACE GEOMETRY OF TWO WELLS")
    print("=" * 60)

    field = MassField([Mass(-1.5, 1.5, 1.2), Mass(1.5, -1.5, 2.0)])

    print(f"\n1. Masses:")
    for m in field:
        print(f"   ({m.x:+.1f}, {m.y:+.1f}) strength={m.strength}")

    print("\n2. Point samples:")
    print(f"   {'Point':>14} | {'h':>8} | {'K':>10}")
    print(f"   {'-'*14}-+-{'-'*8}-+-{'-'*10}")
    for x, y in [(0.0, 0.0), (-1.5, 1.5), (3.0, 3.0), (4.5, -4.5)]:
        label = f"({x:+.1f}, {y:+.1f})"
        k = compute_gaussian_curvature(field, x, y)
        print(f"   {label:>14} | {field.height(x, y):>8.3f} | {k:>10.4f}")

    print("\n3. Plotting...")
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    plot_height_field(field, resolution=151, ax=axes[0])
    plot_curvature_field(field, resolution=151, ax=axes[1])

    for m in field:
        radii, values = compute_radial_profile(field, (m.x, m.y), max_radius=3.0)
        plot_radial_profile(radii, values, label=f"s={m.strength}", ax=axes[2])
    axes[2].set_title("Mean height around each mass")

    fig.tight_layout()
    output_path = Path("output/demo_curvature") / "surface.png"
    save_figure(fig, output_path)
    plt.close(fig)
    print(f"   Saved: {output_path}")

    print("\n" + "=" * 60)
    print("  SUMMARY")
    print("=" * 60)
    print("  • Each well is a funnel: K < 0 on its flanks")
    print("  • Curvature decays quickly away from the masses")
    print("=" * 60)


if __name__ == "__main__":
    main()
