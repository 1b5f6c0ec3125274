"""Dynamics module for planar lander simulation.

This module provides the spacecraft state, its vehicle parameters and the
update rules that advance it under applied accelerations.

Example:
    >>> from lander.dynamics import SpacecraftState, InitialConditions
    >>>
    >>> state = SpacecraftState.from_initial_conditions(InitialConditions())
    >>> state.consume_fuel(0.015)
    >>> state.integrate(vertical_accel=1.622, horizontal_accel=0.0, dt=0.1)
"""

from lander.dynamics.state import (
    MAX_ORIENTATION_ANGLE,
    InitialConditions,
    SpacecraftParameters,
    SpacecraftState,
    StateSnapshot,
)

__all__ = [
    "MAX_ORIENTATION_ANGLE",
    "InitialConditions",
    "SpacecraftParameters",
    "SpacecraftState",
    "StateSnapshot",
]
