"""Gravity models for lunar descent simulation.

Gravity is expressed as a scalar acceleration along the local vertical,
positive toward the surface. Every model is a pure function of its inputs so
that alternative fields can be swapped in without touching the simulator.
Core functions are numba-compiled for performance.

Models available:
- Constant: Flat-Moon approximation, g independent of altitude
- Effective: Constant g reduced by centrifugal relief from horizontal speed
- Zero: No gravity (kinematics checks)

Example:
    >>> from lander.environment import Gravity, GravityModel
    >>>
    >>> grav = Gravity(model=GravityModel.CONSTANT)
    >>> g = grav.acceleration(altitude=30000.0)  # 1.622 m/s^2
    >>>
    >>> grav_eff = Gravity(model=GravityModel.EFFECTIVE)
    >>> g_eff = grav_eff.acceleration(altitude=30000.0, horizontal_speed=850.0)
"""

from enum import Enum, auto

from beartype import beartype
from numba import njit

from lander.checks import NUMERIC_TOWER

# =============================================================================
# Constants
# =============================================================================

# Lunar surface gravity
G_MOON: float = 1.622  # [m/s^2]

# Horizontal speed at which centrifugal relief cancels gravity
EQ_SPEED: float = 1700.0  # [m/s]


# =============================================================================
# Gravity Model Enum
# =============================================================================


class GravityModel(Enum):
    """Available gravity models."""

    CONSTANT = auto()   # Constant g (flat Moon)
    EFFECTIVE = auto()  # Constant g with centrifugal relief
    ZERO = auto()       # No gravity


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _constant_gravity(altitude: float, g0: float = G_MOON) -> float:
    """Constant gravity, independent of altitude."""
    return g0


@njit(cache=True, fastmath=True)
def _effective_gravity(
    horizontal_speed: float,
    g0: float = G_MOON,
    eq_speed: float = EQ_SPEED,
) -> float:
    """Gravity reduced by centrifugal relief.

    g_eff = (1 - |v_h| / v_eq) * g0
    """
    n = abs(horizontal_speed) / eq_speed
    return (1.0 - n) * g0


# =============================================================================
# Gravity Class
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
class Gravity:
    """Gravity model for descent simulation.

    Example:
        >>> grav = Gravity()
        >>> grav.acceleration(altitude=1000.0)
        1.622
    """

    def __init__(
        self,
        model: GravityModel = GravityModel.CONSTANT,
        g0: float = G_MOON,
    ) -> None:
        """Initialize gravity model.

        Args:
            model: Gravity model type
            g0: Reference surface gravity [m/s^2]
        """
        self.model = model
        self.g0 = g0

    @beartype(conf=NUMERIC_TOWER)
    def acceleration(
        self,
        altitude: float,
        horizontal_speed: float = 0.0,
    ) -> float:
        """Compute gravitational acceleration toward the surface.

        Args:
            altitude: Altitude above the surface [m]
            horizontal_speed: Horizontal speed [m/s] (EFFECTIVE model only)

        Returns:
            Acceleration [m/s^2], positive downward
        """
        if self.model == GravityModel.CONSTANT:
            return float(_constant_gravity(altitude, self.g0))
        elif self.model == GravityModel.EFFECTIVE:
            return float(_effective_gravity(horizontal_speed, self.g0, EQ_SPEED))
        elif self.model == GravityModel.ZERO:
            return 0.0
        else:
            raise ValueError(f"Unknown gravity model: {self.model}")

    def __repr__(self) -> str:
        return f"Gravity(model={self.model.name}, g0={self.g0})"


# =============================================================================
# Convenience Functions
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
def free_fall_time(altitude: float, g: float = G_MOON) -> float:
    """Time to fall from rest through an altitude under constant gravity.

    Args:
        altitude: Drop height [m]
        g: Gravitational acceleration [m/s^2]

    Returns:
        Fall time [s]
    """
    if g <= 0:
        raise ValueError(f"Gravity must be positive, got {g}")
    if altitude < 0:
        raise ValueError(f"Altitude must be non-negative, got {altitude}")
    return (2.0 * altitude / g) ** 0.5


@beartype(conf=NUMERIC_TOWER)
def impact_speed(altitude: float, g: float = G_MOON) -> float:
    """Impact speed after falling from rest through an altitude.

    Args:
        altitude: Drop height [m]
        g: Gravitational acceleration [m/s^2]

    Returns:
        Impact speed [m/s]
    """
    if g <= 0:
        raise ValueError(f"Gravity must be positive, got {g}")
    if altitude < 0:
        raise ValueError(f"Altitude must be non-negative, got {altitude}")
    return (2.0 * g * altitude) ** 0.5
