"""PID controller implementation.

Provides a general-purpose setpoint-tracking PID controller with:
- Anti-windup for integral term
- Output saturation
- Runtime setpoint changes (for cascaded loops)

The controller holds only its own gains, setpoint and accumulators. It knows
nothing about the plant it regulates.

Example:
    >>> from lander.gnc.control import PIDController
    >>>
    >>> # Vertical speed controller: hold 2 m/s descent rate
    >>> ctrl = PIDController(kp=0.02, ki=0.0005, kd=0.005, setpoint=2.0,
    ...                      output_limits=(-1.0, 1.0))
    >>>
    >>> # Compute control output
    >>> command = ctrl.update(measured_vertical_speed, dt=0.1)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

from lander.checks import NUMERIC_TOWER

# =============================================================================
# PID Gains
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class PIDGains:
    """PID controller gains.

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
    """
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0

    def scale(self, factor: float) -> "PIDGains":
        """Scale all gains by a factor."""
        return PIDGains(
            kp=self.kp * factor,
            ki=self.ki * factor,
            kd=self.kd * factor,
        )


# =============================================================================
# PID Controller
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class PIDController:
    """General-purpose PID controller.

    Implements the parallel PID form on setpoint error:
        e = setpoint - measurement
        u = kp * e + ki * integral(e) + kd * de/dt

    Features:
    - Anti-windup: integral clamped to +/- output_max / ki, so the integral
      term alone never exceeds the output bound
    - Output saturation to output_limits

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
        setpoint: Target value for the measurement
        output_limits: (min, max) output limits
    """
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    setpoint: float = 0.0
    output_limits: tuple[float, float] = (-1.0, 1.0)

    # Internal state
    _integral: float = field(default=0.0, init=False, repr=False)
    _prev_error: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate output limits."""
        if self.output_limits[0] > self.output_limits[1]:
            raise ValueError(
                f"Output limits must be (min, max), got {self.output_limits}"
            )

    @classmethod
    def from_gains(
        cls,
        gains: PIDGains,
        setpoint: float = 0.0,
        output_limits: tuple[float, float] = (-1.0, 1.0),
    ) -> "PIDController":
        """Create controller from PIDGains object."""
        return cls(
            kp=gains.kp,
            ki=gains.ki,
            kd=gains.kd,
            setpoint=setpoint,
            output_limits=output_limits,
        )

    @property
    def output_min(self) -> float:
        """Lower output bound."""
        return self.output_limits[0]

    @property
    def output_max(self) -> float:
        """Upper output bound."""
        return self.output_limits[1]

    @property
    def integral(self) -> float:
        """Accumulated error x time."""
        return self._integral

    @property
    def previous_error(self) -> float:
        """Error seen by the last update."""
        return self._prev_error

    @property
    def integral_limit(self) -> float:
        """Anti-windup bound on the integral accumulator.

        A zero ki is treated as a divisor of 1.
        """
        divisor = self.ki if self.ki != 0 else 1.0
        return abs(self.output_max / divisor)

    @beartype(conf=NUMERIC_TOWER)
    def set_setpoint(self, value: float) -> None:
        """Replace the setpoint. Takes effect on the next update."""
        self.setpoint = value

    @beartype(conf=NUMERIC_TOWER)
    def reset(self) -> None:
        """Reset controller state (integral and error history).

        Gains and setpoint are left unchanged.
        """
        self._integral = 0.0
        self._prev_error = 0.0

    @beartype(conf=NUMERIC_TOWER)
    def update(self, measurement: float, dt: float) -> float:
        """Compute PID control output.

        Args:
            measurement: Current measured value
            dt: Time step [s], must be positive

        Returns:
            Control output, clamped to output_limits

        Raises:
            ValueError: If dt is not positive (derivative is undefined)
        """
        if dt <= 0:
            raise ValueError(f"Invalid time step: dt must be positive, got {dt}")

        error = self.setpoint - measurement

        # Integral term with anti-windup
        limit = self.integral_limit
        self._integral = float(np.clip(self._integral + error * dt, -limit, limit))

        derivative = (error - self._prev_error) / dt

        output = self.kp * error + self.ki * self._integral + self.kd * derivative

        # Output saturation
        output = np.clip(output, self.output_limits[0], self.output_limits[1])

        self._prev_error = error

        return float(output)

    @property
    def gains(self) -> PIDGains:
        """Get current gains as PIDGains object."""
        return PIDGains(kp=self.kp, ki=self.ki, kd=self.kd)

    @gains.setter
    def gains(self, value: PIDGains) -> None:
        """Set gains from PIDGains object."""
        self.kp = value.kp
        self.ki = value.ki
        self.kd = value.kd
