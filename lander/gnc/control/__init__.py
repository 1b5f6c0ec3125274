"""Control algorithms for the lander.

Provides the PID controllers used for vertical speed, horizontal speed
and orientation control.
"""

from lander.gnc.control.pid import (
    PIDController,
    PIDGains,
)

__all__ = [
    "PIDController",
    "PIDGains",
]
