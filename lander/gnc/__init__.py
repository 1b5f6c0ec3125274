"""GNC (Guidance, Navigation, Control) module for the lander.

Provides the PID controllers and the descent control law that couples them.

Example:
    >>> from lander.gnc.control import PIDController
    >>> from lander.gnc.guidance import DescentController
    >>>
    >>> # Create a single-axis controller
    >>> speed_ctrl = PIDController(kp=0.02, ki=0.0005, kd=0.005, setpoint=2.0)
    >>>
    >>> # Create the full three-loop descent controller
    >>> controller = DescentController.from_settings()
"""

from lander.gnc.control import (
    PIDController,
    PIDGains,
)
from lander.gnc.guidance import (
    ControlCommand,
    ControllerSettings,
    DescentController,
)

__all__ = [
    # Control
    "PIDController",
    "PIDGains",
    # Guidance
    "ControlCommand",
    "ControllerSettings",
    "DescentController",
]
