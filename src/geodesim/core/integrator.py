"""
GeodesicIntegrator: advance a particle one RK4 step on the curved surface.

The particle obeys

    dpos/dt = vel
    dvel/dt = -Γ(vel, vel) - k ∇h

The first term is the geodesic equation in coordinate time. The second
is an artificial "effective gravity" (k = 2 by default): pure geodesic
motion never starts a particle released at rest, but in the game a ball
dropped on a slope should roll into the well.

The integrator is stateless: every call is a function of the mass field
and the supplied state.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from geodesim.core.geometry import GeometryConfig, SurfaceGeometry
from geodesim.errors import InvalidConfiguration

if TYPE_CHECKING:
    from geodesim.core.mass_field import MassField

Vec2 = tuple[float, float]


@dataclass(frozen=True)
class IntegratorConfig:
    """Physics parameters for the acceleration model."""

    # Below this speed the geodesic term is taken as zero
    stationary_speed: float = 1e-3
    # Scale of the effective gravity pull down the slope
    gravity_strength: float = 2.0
    geometry: GeometryConfig = field(default_factory=GeometryConfig)

    def __post_init__(self):
        if not self.stationary_speed >= 0:
            raise InvalidConfiguration("stationary_speed must be non-negative")
        if not math.isfinite(self.gravity_strength):
            raise InvalidConfiguration("gravity_strength must be finite")


class State(NamedTuple):
    """Phase-space point (position, velocity)."""

    position: Vec2
    velocity: Vec2

    @property
    def speed(self) -> float:
        return math.hypot(*self.velocity)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (*self.position, *self.velocity))


class GeodesicIntegrator:
    """
    Fixed-step fourth-order Runge-Kutta integrator for geodesic motion
    plus effective gravity.
    """

    def __init__(self, config: IntegratorConfig | None = None):
        self.config = config if config is not None else IntegratorConfig()
        self.geometry = SurfaceGeometry(self.config.geometry)

    def geodesic_acceleration(self, field: "MassField", pos: Vec2, vel: Vec2) -> Vec2:
        """
        Geodesic term a^i = -Γ^i_jk v^j v^k.

        Defined as zero for a near-stationary particle.
        """
        vx, vy = vel
        if math.hypot(vx, vy) < self.config.stationary_speed:
            return 0.0, 0.0

        gamma = self.geometry.christoffel(field, pos[0], pos[1])
        cx, cy = gamma.contract(vx, vy)
        return -cx, -cy

    def effective_gravity(self, field: "MassField", pos: Vec2) -> Vec2:
        """Pull down the slope: -k ∇h. The gradient points uphill."""
        grad = self.geometry.gradient(field, pos[0], pos[1])
        k = self.config.gravity_strength
        return -grad.dzdx * k, -grad.dzdy * k

    def total_acceleration(self, field: "MassField", pos: Vec2, vel: Vec2) -> Vec2:
        """Geodesic deviation plus effective gravity."""
        gx, gy = self.geodesic_acceleration(field, pos, vel)
        fx, fy = self.effective_gravity(field, pos)
        return gx + fx, gy + fy

    def step(self, field: "MassField", pos: Vec2, vel: Vec2, dt: float) -> State:
        """
        One classical RK4 step of size dt.

        dt is not validated here: a negative dt integrates backwards.

        Returns:
            State at t + dt
        """
        x, y = pos
        vx, vy = vel

        # k1
        a1x, a1y = self.total_acceleration(field, (x, y), (vx, vy))

        # k2 at the midpoint reached with k1
        v2x, v2y = vx + 0.5 * dt * a1x, vy + 0.5 * dt * a1y
        p2 = (x + 0.5 * dt * vx, y + 0.5 * dt * vy)
        a2x, a2y = self.total_acceleration(field, p2, (v2x, v2y))

        # k3 at the midpoint reached with k2
        v3x, v3y = vx + 0.5 * dt * a2x, vy + 0.5 * dt * a2y
        p3 = (x + 0.5 * dt * v2x, y + 0.5 * dt * v2y)
        a3x, a3y = self.total_acceleration(field, p3, (v3x, v3y))

        # k4 at the endpoint reached with k3
        v4x, v4y = vx + dt * a3x, vy + dt * a3y
        p4 = (x + dt * v3x, y + dt * v3y)
        a4x, a4y = self.total_acceleration(field, p4, (v4x, v4y))

        new_pos = (
            x + dt * (vx + 2 * v2x + 2 * v3x + v4x) / 6,
            y + dt * (vy + 2 * v2y + 2 * v3y + v4y) / 6,
        )
        new_vel = (
            vx + dt * (a1x + 2 * a2x + 2 * a3x + a4x) / 6,
            vy + dt * (a1y + 2 * a2y + 2 * a3y + a4y) / 6,
        )
        return State(new_pos, new_vel)


def rk4_step(
    field: "MassField",
    pos: Vec2,
    vel: Vec2,
    dt: float,
    config: IntegratorConfig | None = None,
) -> State:
    """Convenience function: one RK4 step with the given (or default) physics."""
    return GeodesicIntegrator(config).step(field, pos, vel, dt)
