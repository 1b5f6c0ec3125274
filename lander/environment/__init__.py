"""Environment models for lunar descent simulation.

Provides the gravitational field acting on the spacecraft.

Example:
    >>> from lander.environment import Gravity
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(altitude=10000.0)  # m/s^2
"""

from lander.environment.gravity import (
    EQ_SPEED,
    G_MOON,
    Gravity,
    GravityModel,
    free_fall_time,
    impact_speed,
)

__all__ = [
    "EQ_SPEED",
    "G_MOON",
    "Gravity",
    "GravityModel",
    "free_fall_time",
    "impact_speed",
]
