"""Unit tests for the PID controller.

Tests the control law, anti-windup and saturation behavior.
"""

import pytest
from numpy.testing import assert_allclose

from lander.gnc.control import PIDController, PIDGains

# =============================================================================
# Control Law Tests
# =============================================================================


class TestPIDControlLaw:
    """Test the individual PID terms."""

    def test_proportional_only(self):
        """P-only controller output is kp times setpoint error."""
        ctrl = PIDController(kp=2.0, setpoint=10.0, output_limits=(-100.0, 100.0))
        assert_allclose(ctrl.update(4.0, dt=0.1), 12.0)

    def test_error_sign(self):
        """Measurement above setpoint gives negative output."""
        ctrl = PIDController(kp=1.0, setpoint=0.0, output_limits=(-100.0, 100.0))
        assert ctrl.update(5.0, dt=0.1) < 0

    def test_integral_accumulates(self):
        """Integral term grows with error * dt."""
        ctrl = PIDController(kp=0.0, ki=1.0, setpoint=1.0, output_limits=(-10.0, 10.0))

        assert_allclose(ctrl.update(0.0, dt=0.1), 0.1)
        assert_allclose(ctrl.update(0.0, dt=0.1), 0.2)
        assert_allclose(ctrl.integral, 0.2)

    def test_derivative_from_zero_previous_error(self):
        """First derivative is computed against a zero previous error."""
        ctrl = PIDController(kp=0.0, kd=1.0, setpoint=2.0, output_limits=(-100.0, 100.0))
        assert_allclose(ctrl.update(0.0, dt=0.5), 4.0)

    def test_derivative_of_constant_error_is_zero(self):
        """Constant error contributes no derivative after the first step."""
        ctrl = PIDController(kp=0.0, kd=1.0, setpoint=2.0, output_limits=(-100.0, 100.0))
        ctrl.update(0.0, dt=0.5)
        assert_allclose(ctrl.update(0.0, dt=0.5), 0.0)

    def test_previous_error_stored(self):
        """Previous error is the error of the last update."""
        ctrl = PIDController(setpoint=3.0)
        ctrl.update(1.0, dt=0.1)
        assert ctrl.previous_error == 2.0

    def test_combined_terms(self):
        """Output is the sum of P, I and D contributions."""
        ctrl = PIDController(
            kp=0.02, ki=0.0005, kd=0.005, setpoint=2.0, output_limits=(-1.0, 1.0)
        )
        # error 2, integral 0.2, derivative 20
        expected = 0.02 * 2.0 + 0.0005 * 0.2 + 0.005 * 20.0
        assert_allclose(ctrl.update(0.0, dt=0.1), expected)


# =============================================================================
# Saturation and Anti-Windup Tests
# =============================================================================


class TestPIDLimits:
    """Test output clamping and integral anti-windup."""

    def test_output_clamped_high(self):
        """Output is limited to output_max."""
        ctrl = PIDController(kp=100.0, setpoint=10.0, output_limits=(-1.0, 1.0))
        assert ctrl.update(0.0, dt=0.1) == 1.0

    def test_output_clamped_low(self):
        """Output is limited to output_min."""
        ctrl = PIDController(kp=100.0, setpoint=-10.0, output_limits=(-0.5, 1.0))
        assert ctrl.update(0.0, dt=0.1) == -0.5

    def test_anti_windup_bounds_integral_term(self):
        """Integral contribution never exceeds output_max under sustained error."""
        ctrl = PIDController(kp=0.0, ki=0.5, setpoint=100.0, output_limits=(-1.0, 1.0))

        for _ in range(5000):
            ctrl.update(0.0, dt=0.1)
            assert abs(ctrl.ki * ctrl.integral) <= ctrl.output_max + 1e-12

        assert_allclose(ctrl.integral, 2.0)

    def test_anti_windup_negative_error(self):
        """Integral is clamped symmetrically for negative error."""
        ctrl = PIDController(kp=0.0, ki=0.01, setpoint=-1000.0, output_limits=(-30.0, 30.0))

        for _ in range(2000):
            ctrl.update(0.0, dt=0.1)

        assert_allclose(ctrl.integral, -3000.0)
        assert_allclose(ctrl.ki * ctrl.integral, -30.0)

    def test_zero_ki_uses_unit_divisor(self):
        """With ki = 0 the integral is clamped to output_max."""
        ctrl = PIDController(kp=0.0, ki=0.0, setpoint=10.0, output_limits=(-1.0, 1.0))

        for _ in range(100):
            ctrl.update(0.0, dt=1.0)

        assert ctrl.integral_limit == 1.0
        assert ctrl.integral == 1.0

    def test_windup_recovers_quickly(self):
        """After saturation, reversing the error unwinds within the clamp."""
        ctrl = PIDController(kp=0.0, ki=1.0, setpoint=1.0, output_limits=(-1.0, 1.0))
        for _ in range(1000):
            ctrl.update(0.0, dt=0.1)
        assert_allclose(ctrl.integral, 1.0)

        ctrl.set_setpoint(-1.0)
        for _ in range(10):
            ctrl.update(0.0, dt=0.1)
        assert_allclose(ctrl.integral, 0.0, atol=1e-12)

    def test_invalid_limits(self):
        """Inverted output limits are rejected."""
        with pytest.raises(ValueError, match="Output limits"):
            PIDController(output_limits=(1.0, -1.0))


# =============================================================================
# State Management Tests
# =============================================================================


class TestPIDState:
    """Test setpoint changes, reset and time step validation."""

    @pytest.mark.parametrize("dt", [0.0, -0.1])
    def test_non_positive_dt_raises(self, dt):
        """Zero or negative dt is an invalid time step."""
        ctrl = PIDController(kp=1.0)
        with pytest.raises(ValueError, match="Invalid time step"):
            ctrl.update(1.0, dt=dt)

    def test_failed_update_leaves_state(self):
        """Rejected update does not touch the accumulators."""
        ctrl = PIDController(ki=1.0, setpoint=1.0)
        ctrl.update(0.0, dt=0.1)
        with pytest.raises(ValueError):
            ctrl.update(0.0, dt=0.0)
        assert_allclose(ctrl.integral, 0.1)

    def test_integer_inputs_accepted(self):
        """Integer measurement, dt and setpoint behave like floats."""
        ctrl = PIDController(kp=1, setpoint=5, output_limits=(-10, 10))

        assert_allclose(ctrl.update(3, 0.1), 2.0)
        ctrl.set_setpoint(0)
        assert_allclose(ctrl.update(-2, 1), 2.0)

    def test_set_setpoint(self):
        """New setpoint takes effect on the next update."""
        ctrl = PIDController(kp=1.0, setpoint=0.0, output_limits=(-100.0, 100.0))
        ctrl.set_setpoint(5.0)
        assert ctrl.setpoint == 5.0
        assert_allclose(ctrl.update(0.0, dt=0.1), 5.0)

    def test_reset_clears_accumulators(self):
        """Reset zeroes integral and previous error."""
        ctrl = PIDController(kp=1.0, ki=1.0, kd=1.0, setpoint=3.0)
        for _ in range(10):
            ctrl.update(0.0, dt=0.1)

        ctrl.reset()

        assert ctrl.integral == 0.0
        assert ctrl.previous_error == 0.0

    def test_reset_keeps_gains_and_setpoint(self):
        """Reset does not change tuning."""
        ctrl = PIDController(kp=1.5, ki=0.2, kd=0.3, setpoint=3.0)
        ctrl.update(0.0, dt=0.1)
        ctrl.reset()

        assert ctrl.gains == PIDGains(kp=1.5, ki=0.2, kd=0.3)
        assert ctrl.setpoint == 3.0

    def test_reset_reproduces_output(self):
        """Same inputs after reset give the same outputs."""
        ctrl = PIDController(kp=0.5, ki=0.1, kd=0.05, setpoint=1.0, output_limits=(-5.0, 5.0))
        first = [ctrl.update(m, dt=0.1) for m in (0.0, 0.2, 0.5)]
        ctrl.reset()
        second = [ctrl.update(m, dt=0.1) for m in (0.0, 0.2, 0.5)]
        assert first == second


# =============================================================================
# Gains Tests
# =============================================================================


class TestPIDGains:
    """Test the gains value object."""

    def test_from_gains(self):
        """Controller built from gains carries them over."""
        gains = PIDGains(kp=1.0, ki=0.001, kd=0.2)
        ctrl = PIDController.from_gains(gains, setpoint=4.0, output_limits=(-30.0, 30.0))

        assert ctrl.kp == 1.0
        assert ctrl.ki == 0.001
        assert ctrl.kd == 0.2
        assert ctrl.setpoint == 4.0
        assert ctrl.output_limits == (-30.0, 30.0)

    def test_scale(self):
        """Scaling multiplies every gain."""
        scaled = PIDGains(kp=1.0, ki=0.5, kd=0.25).scale(2.0)
        assert scaled == PIDGains(kp=2.0, ki=1.0, kd=0.5)

    def test_gains_setter(self):
        """Assigning gains updates the controller."""
        ctrl = PIDController()
        ctrl.gains = PIDGains(kp=3.0, ki=2.0, kd=1.0)
        assert (ctrl.kp, ctrl.ki, ctrl.kd) == (3.0, 2.0, 1.0)
