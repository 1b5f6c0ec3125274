"""Spacecraft state representation for planar descent simulation.

The state contains:
- Fuel mass (1): remaining propellant [kg]
- Velocity (2): vertical (positive DOWN) and horizontal speed [m/s]
- Position (2): altitude above surface and downrange distance [m]
- Attitude (2): orientation angle from vertical [deg] and its rate [deg/s]
- Time (1): elapsed mission time [s]

Frame convention:
- Vertical axis points down (toward the surface), so a descending craft has
  positive vertical speed and gravity is a positive acceleration.
- Orientation angle is 0 when the main engine points straight down.

The state is mutated in place by the simulator through three entry points:
consume_fuel, integrate and update_attitude. Everything else is read-only.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype

from lander.checks import NUMERIC_TOWER

# Orientation limits of the airframe [deg]
MAX_ORIENTATION_ANGLE: float = 30.0

# Degrees per radian, as used by the rotational model
DEG_PER_RAD: float = 57.2958


# =============================================================================
# Vehicle Parameters
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass(frozen=True)
class SpacecraftParameters:
    """Fixed physical parameters of the lander.

    Attributes:
        dry_mass: Mass without propellant [kg]
        initial_fuel_mass: Propellant loaded at mission start [kg]
        main_engine_thrust: Main engine thrust at full throttle [N]
        main_engine_burn_rate: Fuel flow at full throttle [kg/s]
        side_engine_thrust: Thrust per attitude side engine [N]
        side_engine_arm: Side engine moment arm about the CG [m]
        rotational_inertia: Pitch moment of inertia [kg*m^2]
    """
    dry_mass: float = 165.0
    initial_fuel_mass: float = 420.0
    main_engine_thrust: float = 430.0
    main_engine_burn_rate: float = 0.15
    side_engine_thrust: float = 25.0
    side_engine_arm: float = 1.0
    rotational_inertia: float = 100.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.dry_mass <= 0:
            raise ValueError(f"Dry mass must be positive, got {self.dry_mass}")
        if self.initial_fuel_mass < 0:
            raise ValueError(
                f"Initial fuel mass must be non-negative, got {self.initial_fuel_mass}"
            )
        if self.main_engine_thrust < 0:
            raise ValueError(
                f"Main engine thrust must be non-negative, got {self.main_engine_thrust}"
            )
        if self.main_engine_burn_rate < 0:
            raise ValueError(
                f"Burn rate must be non-negative, got {self.main_engine_burn_rate}"
            )
        if self.rotational_inertia <= 0:
            raise ValueError(
                f"Rotational inertia must be positive, got {self.rotational_inertia}"
            )

    @property
    def wet_mass(self) -> float:
        """Total mass with a full fuel load [kg]."""
        return self.dry_mass + self.initial_fuel_mass

    @property
    def burn_time(self) -> float:
        """Burn time of a full load at full throttle [s]."""
        if self.main_engine_burn_rate == 0:
            return float("inf")
        return self.initial_fuel_mass / self.main_engine_burn_rate

    @property
    def max_side_torque(self) -> float:
        """Torque from one side engine at full thrust [N*m]."""
        return self.side_engine_thrust * self.side_engine_arm

    def thrust_to_weight(self, g: float) -> float:
        """Thrust-to-weight ratio at full load under gravity g."""
        return self.main_engine_thrust / (self.wet_mass * g)


@beartype(conf=NUMERIC_TOWER)
@dataclass(frozen=True)
class InitialConditions:
    """Mission start conditions.

    Defaults reproduce the reference lunar landing: 30 km altitude,
    1700 m/s horizontal speed, no vertical speed, engine pointing down.

    Attributes:
        altitude: Altitude above the surface [m]
        horizontal_distance: Downrange distance [m]
        vertical_speed: Vertical speed, positive down [m/s]
        horizontal_speed: Horizontal speed [m/s]
        orientation_angle: Angle from vertical [deg]
    """
    altitude: float = 30000.0
    horizontal_distance: float = 0.0
    vertical_speed: float = 0.0
    horizontal_speed: float = 1700.0
    orientation_angle: float = 0.0

    def __post_init__(self) -> None:
        """Validate conditions."""
        if self.altitude < 0:
            raise ValueError(f"Altitude must be non-negative, got {self.altitude}")
        if abs(self.orientation_angle) > MAX_ORIENTATION_ANGLE:
            raise ValueError(
                f"Orientation angle must be within +/-{MAX_ORIENTATION_ANGLE} deg, "
                f"got {self.orientation_angle}"
            )


# =============================================================================
# Snapshot
# =============================================================================


class StateSnapshot(NamedTuple):
    """Read-only view of the state handed to renderers and loggers."""
    time: float                  # Elapsed time [s]
    altitude: float              # Altitude above surface [m]
    vertical_speed: float        # Vertical speed, positive down [m/s]
    horizontal_speed: float      # Horizontal speed [m/s]
    horizontal_distance: float   # Downrange distance [m]
    orientation_angle: float     # Angle from vertical [deg]
    fuel_remaining: float        # Remaining fuel [kg]


# =============================================================================
# Spacecraft State
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class SpacecraftState:
    """Mutable physical state of the lander.

    Invariants maintained by every entry point:
    - total_mass == params.dry_mass + fuel_mass
    - 0 <= fuel_mass <= params.initial_fuel_mass
    - altitude >= 0

    Attributes:
        params: Fixed vehicle parameters
        fuel_mass: Remaining fuel [kg]
        vertical_speed: Vertical speed, positive down [m/s]
        horizontal_speed: Horizontal speed [m/s]
        altitude: Altitude above surface [m]
        horizontal_distance: Downrange distance [m]
        orientation_angle: Angle from vertical [deg]
        rotational_speed: Pitch rate [deg/s] (torque-driven model only)
        elapsed_time: Mission time [s]
    """
    params: SpacecraftParameters = field(default_factory=SpacecraftParameters)
    fuel_mass: float = 0.0
    vertical_speed: float = 0.0
    horizontal_speed: float = 0.0
    altitude: float = 0.0
    horizontal_distance: float = 0.0
    orientation_angle: float = 0.0
    rotational_speed: float = 0.0
    elapsed_time: float = 0.0

    def __post_init__(self) -> None:
        """Validate state against vehicle parameters."""
        if not 0.0 <= self.fuel_mass <= self.params.initial_fuel_mass:
            raise ValueError(
                f"Fuel mass must be in [0, {self.params.initial_fuel_mass}], "
                f"got {self.fuel_mass}"
            )
        if self.altitude < 0:
            raise ValueError(f"Altitude must be non-negative, got {self.altitude}")

    @classmethod
    def from_initial_conditions(
        cls,
        initial: InitialConditions | None = None,
        params: SpacecraftParameters | None = None,
    ) -> "SpacecraftState":
        """Create a fully fuelled state at the given start conditions.

        Args:
            initial: Start conditions (defaults to the reference mission)
            params: Vehicle parameters (defaults to the reference lander)
        """
        state = cls(params=params or SpacecraftParameters())
        state.reset(initial or InitialConditions())
        return state

    @property
    def total_mass(self) -> float:
        """Current mass = dry mass + fuel [kg]."""
        return self.params.dry_mass + self.fuel_mass

    @property
    def dry_mass(self) -> float:
        """Dry mass [kg]."""
        return self.params.dry_mass

    @property
    def fuel_fraction(self) -> float:
        """Remaining fraction of the initial fuel load."""
        if self.params.initial_fuel_mass == 0:
            return 0.0
        return self.fuel_mass / self.params.initial_fuel_mass

    @property
    def speed(self) -> float:
        """Total speed magnitude [m/s]."""
        return float(np.hypot(self.vertical_speed, self.horizontal_speed))

    @beartype(conf=NUMERIC_TOWER)
    def consume_fuel(self, amount: float) -> float:
        """Burn fuel, never more than what remains.

        Args:
            amount: Requested fuel burn [kg]

        Returns:
            Fuel actually consumed [kg]
        """
        consumed = min(max(amount, 0.0), self.fuel_mass)
        self.fuel_mass = max(self.fuel_mass - consumed, 0.0)
        return consumed

    @beartype(conf=NUMERIC_TOWER)
    def integrate(
        self,
        vertical_accel: float,
        horizontal_accel: float,
        dt: float,
    ) -> None:
        """Advance velocities and positions by one Euler step.

        Velocities are updated first and the new velocities move the
        position. Altitude is clamped at the surface.

        Args:
            vertical_accel: Vertical acceleration, positive down [m/s^2]
            horizontal_accel: Horizontal acceleration [m/s^2]
            dt: Time step [s]
        """
        self.vertical_speed += vertical_accel * dt
        self.horizontal_speed += horizontal_accel * dt

        self.altitude -= self.vertical_speed * dt
        self.horizontal_distance += self.horizontal_speed * dt
        if self.altitude < 0:
            self.altitude = 0.0

        self.elapsed_time += dt

    @beartype(conf=NUMERIC_TOWER)
    def update_attitude(self, torque: float, dt: float) -> None:
        """Advance orientation with the torque-driven rotational model.

        angular_accel [deg/s^2] = torque / inertia * (180 / pi)

        Args:
            torque: Applied pitch torque [N*m]
            dt: Time step [s]
        """
        angular_accel = torque / self.params.rotational_inertia * DEG_PER_RAD
        self.rotational_speed += angular_accel * dt
        self.orientation_angle += self.rotational_speed * dt

        if abs(self.orientation_angle) >= MAX_ORIENTATION_ANGLE:
            # Airframe stop: the angle saturates and the rotation is arrested.
            self.orientation_angle = float(
                np.clip(self.orientation_angle, -MAX_ORIENTATION_ANGLE, MAX_ORIENTATION_ANGLE)
            )
            self.rotational_speed = 0.0

    @beartype(conf=NUMERIC_TOWER)
    def reset(self, initial: InitialConditions) -> None:
        """Restore start conditions and a full fuel load."""
        self.fuel_mass = self.params.initial_fuel_mass
        self.altitude = initial.altitude
        self.horizontal_distance = initial.horizontal_distance
        self.vertical_speed = initial.vertical_speed
        self.horizontal_speed = initial.horizontal_speed
        self.orientation_angle = initial.orientation_angle
        self.rotational_speed = 0.0
        self.elapsed_time = 0.0

    def snapshot(self) -> StateSnapshot:
        """Get a read-only snapshot of the current state."""
        return StateSnapshot(
            time=self.elapsed_time,
            altitude=self.altitude,
            vertical_speed=self.vertical_speed,
            horizontal_speed=self.horizontal_speed,
            horizontal_distance=self.horizontal_distance,
            orientation_angle=self.orientation_angle,
            fuel_remaining=self.fuel_mass,
        )

    def copy(self) -> "SpacecraftState":
        """Create a copy of this state."""
        return SpacecraftState(
            params=self.params,
            fuel_mass=self.fuel_mass,
            vertical_speed=self.vertical_speed,
            horizontal_speed=self.horizontal_speed,
            altitude=self.altitude,
            horizontal_distance=self.horizontal_distance,
            orientation_angle=self.orientation_angle,
            rotational_speed=self.rotational_speed,
            elapsed_time=self.elapsed_time,
        )
