"""Simulation module for lunar descent.

Provides the step-driven simulator, where an external scheduler triggers
ticks, and a batch driver that collects the resulting trajectory.

Example:
    >>> from lander.simulation import LandingSimulator, run_mission
    >>>
    >>> sim = LandingSimulator.create()
    >>> snapshot, status = sim.tick(speed_multiplier=1.0)
    >>>
    >>> sim.reset()
    >>> result = run_mission(sim)
    >>> print(result.status.name)
"""

from lander.simulation.mission import (
    SimulationResult,
    format_mission_summary,
    run_mission,
)
from lander.simulation.simulator import (
    SOFT_LANDING_SPEED,
    AttitudeMode,
    LandingSimulator,
    MissionStatus,
    SimConfig,
    TickResult,
    is_soft_landing,
)

__all__ = [
    "SOFT_LANDING_SPEED",
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
