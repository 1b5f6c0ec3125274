"""Guidance laws for the lander.

Provides the descent control law that turns state measurements into
throttle and orientation commands.
"""

from lander.gnc.guidance.descent import (
    AxisSettings,
    ControlCommand,
    ControllerSettings,
    DescentController,
)

__all__ = [
    "AxisSettings",
    "ControlCommand",
    "ControllerSettings",
    "DescentController",
]
