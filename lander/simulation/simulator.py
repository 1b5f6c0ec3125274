"""Step-driven descent simulation for the lunar lander.

The simulator owns the spacecraft state and the descent controller. One call
to tick() advances the closed loop by one fixed step:

    control law -> attitude -> fuel -> forces -> integration -> termination

There is no clock or event loop inside. Any external scheduler (UI timer,
test harness, batch driver) triggers ticks, and pausing simply means not
calling tick(). A speed multiplier scales the integration step, not the
trigger cadence.

Architecture:
    Caller owns the loop and calls:
    - sim.tick(speed_multiplier) -> (snapshot, status)
    - sim.reset() -> snapshot
    - sim.snapshot() -> current read-only state

Example:
    >>> from lander.simulation import LandingSimulator, MissionStatus
    >>>
    >>> sim = LandingSimulator.create()
    >>> result = sim.tick()
    >>> while result.status is MissionStatus.RUNNING:
    ...     result = sim.tick(speed_multiplier=2.0)
    >>> print(result.status.name, result.snapshot.vertical_speed)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple

import numpy as np
from beartype import beartype

from lander.checks import NUMERIC_TOWER
from lander.dynamics.state import (
    InitialConditions,
    SpacecraftParameters,
    SpacecraftState,
    StateSnapshot,
)
from lander.environment.gravity import G_MOON, Gravity, GravityModel
from lander.gnc.guidance.descent import (
    ControlCommand,
    ControllerSettings,
    DescentController,
)

logger = logging.getLogger(__name__)

# Touchdown speed limit for a soft landing [m/s]
SOFT_LANDING_SPEED: float = 2.5

# =============================================================================
# Configuration
# =============================================================================


class AttitudeMode(Enum):
    """How the orientation loop output moves the spacecraft."""

    DIRECT = auto()  # Angle set directly from the orientation loop
    TORQUE = auto()  # Loop output drives side-engine torque through inertia


@beartype(conf=NUMERIC_TOWER)
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        base_dt: Fixed integration step before speed scaling [s]
        time_limit: Mission time after which the run times out [s]
        gravity_model: Gravity model fidelity
        g0: Surface gravity [m/s^2]
        attitude_mode: Orientation actuation model
        soft_landing_speed: Touchdown speed limit on both axes [m/s]
    """
    base_dt: float = 0.1
    time_limit: float = 1000.0
    gravity_model: GravityModel = GravityModel.CONSTANT
    g0: float = G_MOON
    attitude_mode: AttitudeMode = AttitudeMode.DIRECT
    soft_landing_speed: float = SOFT_LANDING_SPEED

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.base_dt <= 0:
            raise ValueError(f"Base time step must be positive, got {self.base_dt}")
        if self.time_limit <= 0:
            raise ValueError(f"Time limit must be positive, got {self.time_limit}")
        if self.soft_landing_speed <= 0:
            raise ValueError(
                f"Soft landing speed must be positive, got {self.soft_landing_speed}"
            )


# =============================================================================
# Status and Results
# =============================================================================


class MissionStatus(Enum):
    """Mission state machine.

    RUNNING -> LANDED | TIMED_OUT | FUEL_EXHAUSTED. All but RUNNING are
    terminal.
    """

    RUNNING = auto()
    LANDED = auto()
    TIMED_OUT = auto()
    FUEL_EXHAUSTED = auto()

    @property
    def is_terminal(self) -> bool:
        """Whether no further ticks are processed."""
        return self is not MissionStatus.RUNNING


class TickResult(NamedTuple):
    """Outcome of one simulation tick."""
    snapshot: StateSnapshot
    status: MissionStatus


@beartype(conf=NUMERIC_TOWER)
def is_soft_landing(
    snapshot: StateSnapshot,
    threshold: float = SOFT_LANDING_SPEED,
) -> bool:
    """Check touchdown speeds against the soft landing limit.

    Args:
        snapshot: State at touchdown
        threshold: Speed limit on each axis [m/s]

    Returns:
        True if both vertical and horizontal speed are below the limit
    """
    return (
        abs(snapshot.vertical_speed) < threshold
        and abs(snapshot.horizontal_speed) < threshold
    )


# =============================================================================
# Simulator
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class LandingSimulator:
    """Step-driven closed-loop landing simulator.

    Owns exactly one spacecraft state and one descent controller. Terminal
    states are reported through the returned status, never raised.

    Example:
        >>> sim = LandingSimulator.create(config=SimConfig(base_dt=0.05))
        >>> for _ in range(100):
        ...     snapshot, status = sim.tick()
        ...     if status.is_terminal:
        ...         break
    """
    state: SpacecraftState
    controller: DescentController
    config: SimConfig = field(default_factory=SimConfig)
    initial: InitialConditions = field(default_factory=InitialConditions)

    # Internal
    _gravity: Gravity = field(init=False, repr=False)
    _status: MissionStatus = field(default=MissionStatus.RUNNING, init=False, repr=False)
    _last_command: ControlCommand | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize environment model."""
        self._gravity = Gravity(model=self.config.gravity_model, g0=self.config.g0)

    @classmethod
    def create(
        cls,
        config: SimConfig | None = None,
        params: SpacecraftParameters | None = None,
        initial: InitialConditions | None = None,
        controllers: ControllerSettings | None = None,
    ) -> "LandingSimulator":
        """Create a simulator at mission start.

        Args:
            config: Simulation configuration
            params: Vehicle parameters
            initial: Start conditions
            controllers: Descent controller tuning

        Returns:
            Simulator in RUNNING state with a full fuel load
        """
        initial = initial or InitialConditions()
        state = SpacecraftState.from_initial_conditions(initial, params)
        return cls(
            state=state,
            controller=DescentController.from_settings(controllers),
            config=config or SimConfig(),
            initial=initial,
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def status(self) -> MissionStatus:
        """Current mission status."""
        return self._status

    @property
    def is_terminal(self) -> bool:
        """Whether the mission has ended."""
        return self._status.is_terminal

    @property
    def last_command(self) -> ControlCommand | None:
        """Control command applied by the latest tick."""
        return self._last_command

    @property
    def gravity(self) -> Gravity:
        """Gravity model in use."""
        return self._gravity

    @property
    def time(self) -> float:
        """Current simulation time [s]."""
        return self.state.elapsed_time

    @property
    def altitude(self) -> float:
        """Current altitude [m]."""
        return self.state.altitude

    def snapshot(self) -> StateSnapshot:
        """Get read-only snapshot of the current state."""
        return self.state.snapshot()

    def get_state(self) -> SpacecraftState:
        """Get current truth state.

        Returns a copy to prevent external modification.
        """
        return self.state.copy()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def reset(self) -> StateSnapshot:
        """Reinitialize to mission start and reset all controllers.

        Returns:
            Snapshot of the fresh state
        """
        self.state.reset(self.initial)
        self.controller.reset()
        self._status = MissionStatus.RUNNING
        self._last_command = None
        logger.info("Simulation reset to altitude %.1f m", self.initial.altitude)
        return self.state.snapshot()

    def tick(self, speed_multiplier: float = 1.0) -> TickResult:
        """Advance the closed loop by one step of base_dt * speed_multiplier.

        Once the mission is terminal the state is no longer advanced and the
        final snapshot is returned with the terminal status.

        Args:
            speed_multiplier: Scale applied to the base time step

        Returns:
            TickResult with the new snapshot and mission status

        Raises:
            ValueError: If speed_multiplier is not positive
        """
        if speed_multiplier <= 0:
            raise ValueError(
                f"Speed multiplier must be positive, got {speed_multiplier}"
            )

        if self._status.is_terminal:
            return TickResult(self.state.snapshot(), self._status)

        dt = self.config.base_dt * speed_multiplier
        state = self.state
        params = state.params

        # Control law: throttle and orientation
        command = self.controller.compute(state, dt)
        self._last_command = command
        self._apply_attitude(command, dt)

        # Fuel: demand beyond the remaining supply scales the thrust down
        demand = params.main_engine_burn_rate * command.throttle * dt
        consumed = state.consume_fuel(demand)
        fuel_limited = consumed < demand
        throttle = command.throttle * (consumed / demand) if fuel_limited else command.throttle

        # Force resolution in the vertical/horizontal frame
        main_thrust = throttle * params.main_engine_thrust
        angle_rad = np.radians(state.orientation_angle)
        thrust_vertical = main_thrust * np.cos(angle_rad)
        thrust_horizontal = main_thrust * np.sin(angle_rad)

        g = self._gravity.acceleration(state.altitude, state.horizontal_speed)
        vertical_accel = g - thrust_vertical / state.total_mass
        horizontal_accel = -thrust_horizontal / state.total_mass

        state.integrate(float(vertical_accel), float(horizontal_accel), dt)

        self._status = self._evaluate_status(fuel_limited)
        if self._status.is_terminal:
            self._log_termination()

        return TickResult(state.snapshot(), self._status)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _apply_attitude(self, command: ControlCommand, dt: float) -> None:
        """Move the spacecraft orientation according to the attitude mode."""
        if self.config.attitude_mode is AttitudeMode.DIRECT:
            self.state.orientation_angle = command.orientation_angle
        elif self.config.attitude_mode is AttitudeMode.TORQUE:
            self.state.update_attitude(self._side_engine_torque(command), dt)
        else:
            raise ValueError(f"Unknown attitude mode: {self.config.attitude_mode}")

    def _side_engine_torque(self, command: ControlCommand) -> float:
        """Map the orientation loop output to side-engine torque [N*m].

        Full loop output fires one side engine at full thrust.
        """
        output_max = self.controller.orientation.output_max
        fraction = float(np.clip(command.angle_correction / output_max, -1.0, 1.0))
        return fraction * self.state.params.max_side_torque

    def _evaluate_status(self, fuel_limited: bool) -> MissionStatus:
        """Terminal check. Precedence: LANDED, FUEL_EXHAUSTED, TIMED_OUT."""
        if self.state.altitude <= 0:
            return MissionStatus.LANDED
        if fuel_limited and self.state.fuel_mass == 0:
            return MissionStatus.FUEL_EXHAUSTED
        if self.state.elapsed_time >= self.config.time_limit:
            return MissionStatus.TIMED_OUT
        return MissionStatus.RUNNING

    def _log_termination(self) -> None:
        s = self.state
        if self._status is MissionStatus.FUEL_EXHAUSTED:
            logger.warning(
                "Fuel exhausted at t=%.1f s, altitude %.2f m", s.elapsed_time, s.altitude
            )
            return

        logger.info(
            "Mission %s at t=%.1f s: altitude %.2f m, vertical speed %.2f m/s, "
            "horizontal speed %.2f m/s, fuel remaining %.2f kg",
            self._status.name,
            s.elapsed_time,
            s.altitude,
            s.vertical_speed,
            s.horizontal_speed,
            s.fuel_mass,
        )
