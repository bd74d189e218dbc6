"""
Error taxonomy.

Normal trajectory endings (goal, out of bounds, captured, exhausted) are
results, not errors. Exceptions are reserved for bad input and for
numerics that would otherwise leak NaN/inf into a trajectory.
"""

__all__ = [
    "GeodesimError",
    "InvalidConfiguration",
    "NumericDegeneracy",
    "SimulationCancelled",
]


class GeodesimError(Exception):
    """Base class for all geodesim errors."""


class InvalidConfiguration(GeodesimError, ValueError):
    """Malformed masses, bounds or integration options. Raised before simulating."""


class NumericDegeneracy(GeodesimError, ArithmeticError):
    """The metric became singular or the state stopped being finite."""


class SimulationCancelled(GeodesimError):
    """A cooperative stop signal interrupted a trajectory or a search."""
