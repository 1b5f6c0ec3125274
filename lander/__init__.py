"""Lander - PID-controlled lunar descent simulation.

This package simulates the closed-loop descent of a fuel-limited lander
under constant lunar gravity. Three independent PID loops regulate vertical
speed, horizontal speed and orientation; a fixed-step simulator couples them
to the spacecraft dynamics.

Example:
    >>> from lander import LandingSimulator, run_mission, format_mission_summary
    >>>
    >>> sim = LandingSimulator.create()
    >>> snapshot, status = sim.tick()
    >>>
    >>> sim.reset()
    >>> result = run_mission(sim)
    >>> print(format_mission_summary(result))
"""

__version__ = "0.1.0"

# Mission configuration
from lander.config import MissionConfig

# Dynamics
from lander.dynamics import (
    InitialConditions,
    SpacecraftParameters,
    SpacecraftState,
    StateSnapshot,
)

# Environment
from lander.environment import (
    G_MOON,
    Gravity,
    GravityModel,
)

# GNC
from lander.gnc import (
    ControlCommand,
    ControllerSettings,
    DescentController,
    PIDController,
    PIDGains,
)

# Simulation
from lander.simulation import (
    AttitudeMode,
    LandingSimulator,
    MissionStatus,
    SimConfig,
    SimulationResult,
    TickResult,
    format_mission_summary,
    is_soft_landing,
    run_mission,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "MissionConfig",
    # Dynamics
    "InitialConditions",
    "SpacecraftParameters",
    "SpacecraftState",
    "StateSnapshot",
    # Environment
    "G_MOON",
    "Gravity",
    "GravityModel",
    # GNC
    "ControlCommand",
    "ControllerSettings",
    "DescentController",
    "PIDController",
    "PIDGains",
    # Simulation
    "AttitudeMode",
    "LandingSimulator",
    "MissionStatus",
    "SimConfig",
    "SimulationResult",
    "TickResult",
    "format_mission_summary",
    "is_soft_landing",
    "run_mission",
]
