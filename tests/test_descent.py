"""Unit tests for the three-loop descent controller."""

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from numpy.testing import assert_allclose

from lander.dynamics import InitialConditions, SpacecraftState
from lander.gnc import (
    ControllerSettings,
    DescentController,
    PIDGains,
)
from lander.gnc.guidance import AxisSettings

# =============================================================================
# Settings Tests
# =============================================================================


class TestControllerSettings:
    """Test default tuning and controller construction."""

    def test_reference_gains(self):
        """Defaults carry the reference tuning."""
        ctrl = DescentController.from_settings()

        assert ctrl.vertical.gains == PIDGains(kp=0.02, ki=0.0005, kd=0.005)
        assert ctrl.vertical.setpoint == 2.0
        assert ctrl.vertical.output_limits == (-1.0, 1.0)

        assert ctrl.horizontal.gains == PIDGains(kp=0.02, ki=0.0005, kd=0.005)
        assert ctrl.horizontal.setpoint == 0.0

        assert ctrl.orientation.gains == PIDGains(kp=1.0, ki=0.001, kd=0.2)
        assert ctrl.orientation.output_limits == (-30.0, 30.0)

        assert ctrl.hover_throttle == 0.5
        assert ctrl.near_surface_altitude == 2000.0
        assert ctrl.max_desired_angle == 20.0

    def test_custom_axis(self):
        """Custom axis settings are used."""
        settings = ControllerSettings(
            vertical=AxisSettings(gains=PIDGains(kp=0.1), setpoint=5.0),
        )
        ctrl = DescentController.from_settings(settings)
        assert ctrl.vertical.kp == 0.1
        assert ctrl.vertical.setpoint == 5.0

    def test_fresh_controllers_per_build(self):
        """Each build gets independent PID instances."""
        settings = ControllerSettings()
        a = DescentController.from_settings(settings)
        b = DescentController.from_settings(settings)
        assert a.vertical is not b.vertical


# =============================================================================
# Control Law Tests
# =============================================================================


class TestDescentControlLaw:
    """Test the command produced from a state."""

    def test_first_command_from_reference_start(self):
        """First command at 30 km, 1700 m/s downrange."""
        ctrl = DescentController.from_settings()
        state = SpacecraftState.from_initial_conditions()

        cmd = ctrl.compute(state, dt=0.1)

        # Vertical: error 2, integral 0.2, derivative 20
        assert_allclose(cmd.throttle, 0.5 + 0.04 + 0.0001 + 0.1)
        # Horizontal loop saturates at -1 deg
        assert_allclose(cmd.desired_angle, -1.0)
        # Orientation: error -1, integral -0.1, derivative -10
        assert_allclose(cmd.angle_correction, -1.0 - 0.0001 - 2.0)
        assert_allclose(cmd.orientation_angle, -3.0001)
        assert not cmd.near_surface

    def test_state_not_modified(self):
        """Computing a command leaves the state alone."""
        ctrl = DescentController.from_settings()
        state = SpacecraftState.from_initial_conditions()
        before = state.snapshot()

        ctrl.compute(state, dt=0.1)

        assert state.snapshot() == before

    def test_throttle_ceiling(self):
        """Saturated positive correction gives full throttle."""
        ctrl = DescentController.from_settings()
        ic = InitialConditions(vertical_speed=-500.0, horizontal_speed=0.0)
        state = SpacecraftState.from_initial_conditions(ic)

        assert ctrl.compute(state, dt=0.1).throttle == 1.0

    def test_throttle_floor(self):
        """Saturated negative correction cuts the throttle to zero."""
        ctrl = DescentController.from_settings()
        ic = InitialConditions(vertical_speed=500.0, horizontal_speed=0.0)
        state = SpacecraftState.from_initial_conditions(ic)

        assert ctrl.compute(state, dt=0.1).throttle == 0.0

    def test_desired_angle_limited(self):
        """Horizontal loop request is limited to max_desired_angle."""
        settings = ControllerSettings(
            horizontal=AxisSettings(
                gains=PIDGains(kp=1.0), output_limits=(-90.0, 90.0)
            ),
        )
        ctrl = DescentController.from_settings(settings)
        state = SpacecraftState.from_initial_conditions()

        cmd = ctrl.compute(state, dt=0.1)

        assert cmd.desired_angle == -20.0
        assert ctrl.orientation.setpoint == -20.0

    def test_orientation_limited(self):
        """Commanded orientation stays within the airframe limit."""
        settings = ControllerSettings(
            horizontal=AxisSettings(
                gains=PIDGains(kp=1.0), output_limits=(-90.0, 90.0)
            ),
        )
        ctrl = DescentController.from_settings(settings)
        ic = InitialConditions(orientation_angle=-25.0)
        state = SpacecraftState.from_initial_conditions(ic)

        cmd = ctrl.compute(state, dt=0.1)

        assert cmd.orientation_angle >= -30.0
        assert cmd.orientation_angle <= 30.0

    def test_near_surface_full_throttle(self):
        """Below 2 km the throttle is forced to 1."""
        ctrl = DescentController.from_settings()
        ic = InitialConditions(altitude=1500.0, vertical_speed=1.0)
        state = SpacecraftState.from_initial_conditions(ic)

        cmd = ctrl.compute(state, dt=0.1)

        assert cmd.throttle == 1.0
        assert cmd.near_surface

    def test_override_threshold_is_strict(self):
        """Exactly at the override altitude the PID throttle is used."""
        ctrl = DescentController.from_settings()
        ic = InitialConditions(altitude=2000.0, vertical_speed=2.0, horizontal_speed=0.0)
        state = SpacecraftState.from_initial_conditions(ic)

        cmd = ctrl.compute(state, dt=0.1)

        assert not cmd.near_surface
        assert_allclose(cmd.throttle, 0.5)

    def test_vertical_loop_still_runs_near_surface(self):
        """Override does not freeze the vertical PID state."""
        ctrl = DescentController.from_settings()
        ic = InitialConditions(altitude=100.0, vertical_speed=10.0)
        state = SpacecraftState.from_initial_conditions(ic)

        ctrl.compute(state, dt=0.1)

        assert ctrl.vertical.previous_error == -8.0

    def test_integer_step(self):
        """Integer dt gives the same command as the float value."""
        state = SpacecraftState.from_initial_conditions()

        cmd_int = DescentController.from_settings().compute(state, 1)
        cmd_float = DescentController.from_settings().compute(state, 1.0)

        assert cmd_int == cmd_float

    def test_loops_type_checked(self):
        """Each loop must be a PID controller."""
        gains = PIDGains()
        with pytest.raises(BeartypeCallHintParamViolation):
            DescentController(vertical=gains, horizontal=gains, orientation=gains)


# =============================================================================
# Reset Tests
# =============================================================================


class TestDescentReset:
    """Test controller reset."""

    def test_reset_reproduces_command(self):
        """Reset returns the controller to its initial behavior."""
        ctrl = DescentController.from_settings()
        state = SpacecraftState.from_initial_conditions()

        first = ctrl.compute(state, dt=0.1)
        for _ in range(5):
            ctrl.compute(state, dt=0.1)

        ctrl.reset()

        assert ctrl.compute(state, dt=0.1) == first

    def test_reset_restores_orientation_setpoint(self):
        """Orientation setpoint driven by the horizontal loop is restored."""
        ctrl = DescentController.from_settings()
        state = SpacecraftState.from_initial_conditions()
        ctrl.compute(state, dt=0.1)
        assert ctrl.orientation.setpoint == -1.0

        ctrl.reset()

        assert ctrl.orientation.setpoint == 0.0
        assert ctrl.vertical.integral == 0.0
        assert ctrl.horizontal.previous_error == 0.0
