"""
geodesim: geodesic trajectories on a mass-warped height field

A small physics engine for a trajectory-prediction puzzle:
- Point masses dig wells into a height field z = h(x, y)
- The surface induces a metric, Christoffel symbols and curvature
- A particle follows geodesics (plus an effective gravity pull)
- Trajectories end at the goal, off the board, or captured by a mass

The core is pure and deterministic; the game layer searches launch
parameters to decide whether a level can be solved.
"""

__version__ = "0.1.0"
