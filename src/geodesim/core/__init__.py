"""
Core engine: height field, surface geometry, integrator, simulator.

This layer knows nothing about levels, aiming or plotting. It only knows:
- Point masses and the height field they induce
- Metric, Christoffel symbols and curvature of that surface
- One RK4 step of geodesic motion plus effective gravity
- Running steps until goal / out of bounds / captured / exhausted
"""

from geodesim.core.mass_field import Mass, MassField
from geodesim.core.geometry import (
    GeometryConfig,
    Gradient,
    MetricTensor,
    ChristoffelSymbols,
    SurfaceGeometry,
    compute_metric,
    compute_christoffel,
    compute_gaussian_curvature,
)
from geodesim.core.integrator import GeodesicIntegrator, IntegratorConfig, State, rk4_step
from geodesim.core.simulator import (
    Bounds,
    Outcome,
    TrajectoryOptions,
    TrajectoryPoint,
    TrajectoryResult,
    compute_trajectory,
)

__all__ = [
    "Mass",
    "MassField",
    "GeometryConfig",
    "Gradient",
    "MetricTensor",
    "ChristoffelSymbols",
    "SurfaceGeometry",
    "compute_metric",
    "compute_christoffel",
    "compute_gaussian_curvature",
    "GeodesicIntegrator",
    "IntegratorConfig",
    "State",
    "rk4_step",
    "Bounds",
    "Outcome",
    "TrajectoryOptions",
    "TrajectoryPoint",
    "TrajectoryResult",
    "compute_trajectory",
]
