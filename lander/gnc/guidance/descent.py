"""Descent control law for the lunar lander.

Couples three independent PID loops into one command per tick:
1. Vertical speed - PID output biases the main engine throttle around 50%
2. Horizontal speed - PID output becomes the desired orientation angle
3. Orientation - PID tracks the desired angle set by loop 2

Near the surface the vertical loop is overridden and the engine runs at full
throttle for braking. The switch at the override altitude is abrupt (no
blending between the PID throttle and full throttle).

The controller only reads the state. Applying the command (thrust, fuel,
attitude) is the simulator's job.

Example:
    >>> from lander.gnc.guidance import DescentController
    >>> from lander.dynamics import SpacecraftState
    >>>
    >>> controller = DescentController.from_settings()
    >>> state = SpacecraftState.from_initial_conditions()
    >>> cmd = controller.compute(state, dt=0.1)
    >>> cmd.throttle, cmd.orientation_angle
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype

from lander.checks import NUMERIC_TOWER
from lander.dynamics.state import MAX_ORIENTATION_ANGLE, SpacecraftState
from lander.gnc.control.pid import PIDController, PIDGains

# =============================================================================
# Controller Settings
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class AxisSettings:
    """Tuning of a single control axis.

    Attributes:
        gains: PID gains
        setpoint: Initial setpoint
        output_limits: (min, max) controller output
    """
    gains: PIDGains = field(default_factory=PIDGains)
    setpoint: float = 0.0
    output_limits: tuple[float, float] = (-1.0, 1.0)

    def build(self) -> PIDController:
        """Create a fresh controller for this axis."""
        return PIDController.from_gains(
            self.gains,
            setpoint=self.setpoint,
            output_limits=self.output_limits,
        )


def _default_vertical() -> AxisSettings:
    # Hold a 2 m/s descent rate
    return AxisSettings(
        gains=PIDGains(kp=0.02, ki=0.0005, kd=0.005),
        setpoint=2.0,
        output_limits=(-1.0, 1.0),
    )


def _default_horizontal() -> AxisSettings:
    # Null horizontal speed
    return AxisSettings(
        gains=PIDGains(kp=0.02, ki=0.0005, kd=0.005),
        setpoint=0.0,
        output_limits=(-1.0, 1.0),
    )


def _default_orientation() -> AxisSettings:
    # Setpoint is overwritten every tick by the horizontal loop
    return AxisSettings(
        gains=PIDGains(kp=1.0, ki=0.001, kd=0.2),
        setpoint=0.0,
        output_limits=(-30.0, 30.0),
    )


@beartype(conf=NUMERIC_TOWER)
@dataclass
class ControllerSettings:
    """Tuning of the complete descent control law.

    Attributes:
        vertical: Vertical speed loop [m/s -> throttle bias]
        horizontal: Horizontal speed loop [m/s -> desired angle]
        orientation: Orientation loop [deg -> angle correction]
        hover_throttle: Throttle with zero vertical correction
        near_surface_altitude: Below this altitude throttle is forced to 1 [m]
        max_desired_angle: Limit on the angle requested by the horizontal loop [deg]
    """
    vertical: AxisSettings = field(default_factory=_default_vertical)
    horizontal: AxisSettings = field(default_factory=_default_horizontal)
    orientation: AxisSettings = field(default_factory=_default_orientation)
    hover_throttle: float = 0.5
    near_surface_altitude: float = 2000.0
    max_desired_angle: float = 20.0


# =============================================================================
# Control Command
# =============================================================================


class ControlCommand(NamedTuple):
    """Output from the descent control law."""
    throttle: float            # Main engine throttle [0-1]
    desired_angle: float       # Angle requested by the horizontal loop [deg]
    orientation_angle: float   # Commanded orientation after correction [deg]
    angle_correction: float    # Orientation loop output [deg]
    near_surface: bool = False  # Throttle override active


# =============================================================================
# Descent Controller
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class DescentController:
    """Three-loop PID descent controller.

    Attributes:
        vertical: Vertical speed PID
        horizontal: Horizontal speed PID
        orientation: Orientation PID
        hover_throttle: Throttle bias added to the vertical correction
        near_surface_altitude: Full-throttle override altitude [m]
        max_desired_angle: Limit on desired orientation [deg]
        max_orientation_angle: Airframe orientation limit [deg]
    """
    vertical: PIDController
    horizontal: PIDController
    orientation: PIDController
    hover_throttle: float = 0.5
    near_surface_altitude: float = 2000.0
    max_desired_angle: float = 20.0
    max_orientation_angle: float = MAX_ORIENTATION_ANGLE

    # Setpoint restored on reset (orientation setpoint is driven each tick)
    _orientation_setpoint: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._orientation_setpoint = self.orientation.setpoint

    @classmethod
    def from_settings(cls, settings: ControllerSettings | None = None) -> "DescentController":
        """Build the controller from tuning settings.

        Args:
            settings: Controller tuning (defaults to the reference gains)
        """
        settings = settings or ControllerSettings()
        return cls(
            vertical=settings.vertical.build(),
            horizontal=settings.horizontal.build(),
            orientation=settings.orientation.build(),
            hover_throttle=settings.hover_throttle,
            near_surface_altitude=settings.near_surface_altitude,
            max_desired_angle=settings.max_desired_angle,
        )

    def reset(self) -> None:
        """Reset all three loops."""
        self.vertical.reset()
        self.horizontal.reset()
        self.orientation.reset()
        self.orientation.set_setpoint(self._orientation_setpoint)

    def compute(self, state: SpacecraftState, dt: float) -> ControlCommand:
        """Compute the control command for the current state.

        Args:
            state: Current spacecraft state (not modified)
            dt: Effective time step [s]

        Returns:
            ControlCommand with throttle and orientation
        """
        # Vertical loop -> throttle
        vertical_correction = self.vertical.update(state.vertical_speed, dt)
        throttle = float(np.clip(self.hover_throttle + vertical_correction, 0.0, 1.0))

        near_surface = state.altitude < self.near_surface_altitude
        if near_surface:
            throttle = 1.0

        # Horizontal loop -> desired angle
        horizontal_correction = self.horizontal.update(state.horizontal_speed, dt)
        desired_angle = float(
            np.clip(horizontal_correction, -self.max_desired_angle, self.max_desired_angle)
        )

        # Orientation loop tracks the desired angle
        self.orientation.set_setpoint(desired_angle)
        angle_correction = self.orientation.update(state.orientation_angle, dt)
        orientation_angle = float(
            np.clip(
                state.orientation_angle + angle_correction,
                -self.max_orientation_angle,
                self.max_orientation_angle,
            )
        )

        return ControlCommand(
            throttle=throttle,
            desired_angle=desired_angle,
            orientation_angle=orientation_angle,
            angle_correction=angle_correction,
            near_surface=near_surface,
        )
