"""Batch mission driver and results.

The simulator keeps no history. A driver that wants a trajectory collects
the snapshots returned by tick(); run_mission() is that driver for batch
runs and tests.

Example:
    >>> from lander.simulation import LandingSimulator, run_mission
    >>>
    >>> result = run_mission(LandingSimulator.create())
    >>> print(format_mission_summary(result))
    >>> df = result.to_dataframe()
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.checks import NUMERIC_TOWER
from lander.dynamics.state import StateSnapshot
from lander.simulation.simulator import (
    SOFT_LANDING_SPEED,
    LandingSimulator,
    MissionStatus,
    is_soft_landing,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class SimulationResult:
    """Results from a completed run.

    Provides convenient access to trajectory data and analysis.

    Attributes:
        snapshots: Snapshots from the initial state through the final tick
        status: Final mission status
        soft_landing_speed: Touchdown speed limit used for success [m/s]
    """
    snapshots: list[StateSnapshot]
    status: MissionStatus
    soft_landing_speed: float = SOFT_LANDING_SPEED

    def __post_init__(self) -> None:
        if not self.snapshots:
            raise ValueError("SimulationResult needs at least one snapshot")

    def _column(self, name: str) -> NDArray[np.float64]:
        return np.array([getattr(s, name) for s in self.snapshots], dtype=np.float64)

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return self._column("time")

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return self._column("altitude")

    @property
    def vertical_speed(self) -> NDArray[np.float64]:
        """Vertical speed history, positive down [m/s]."""
        return self._column("vertical_speed")

    @property
    def horizontal_speed(self) -> NDArray[np.float64]:
        """Horizontal speed history [m/s]."""
        return self._column("horizontal_speed")

    @property
    def horizontal_distance(self) -> NDArray[np.float64]:
        """Downrange distance history [m]."""
        return self._column("horizontal_distance")

    @property
    def orientation_angle(self) -> NDArray[np.float64]:
        """Orientation history [deg]."""
        return self._column("orientation_angle")

    @property
    def fuel_remaining(self) -> NDArray[np.float64]:
        """Fuel history [kg]."""
        return self._column("fuel_remaining")

    @property
    def initial(self) -> StateSnapshot:
        """Snapshot at mission start."""
        return self.snapshots[0]

    @property
    def final(self) -> StateSnapshot:
        """Snapshot at the end of the run."""
        return self.snapshots[-1]

    @property
    def landed(self) -> bool:
        """Whether the run ended on the surface."""
        return self.status is MissionStatus.LANDED

    @property
    def soft_landing(self) -> bool:
        """Whether the run ended in a landing below the speed limit."""
        return self.landed and is_soft_landing(self.final, self.soft_landing_speed)

    @property
    def fuel_used(self) -> float:
        """Fuel burned over the run [kg]."""
        return self.initial.fuel_remaining - self.final.fuel_remaining

    @property
    def n_ticks(self) -> int:
        """Number of ticks in the run."""
        return len(self.snapshots) - 1

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "time": self.time,
            "altitude": self.altitude,
            "vertical_speed": self.vertical_speed,
            "horizontal_speed": self.horizontal_speed,
            "horizontal_distance": self.horizontal_distance,
            "orientation_angle": self.orientation_angle,
            "fuel_remaining": self.fuel_remaining,
        })

    def save_csv(self, path: str | Path) -> Path:
        """Write the trajectory to CSV.

        Args:
            path: Output file path

        Returns:
            Path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().write_csv(path)
        return path


# =============================================================================
# Batch Driver
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
def run_mission(
    simulator: LandingSimulator,
    speed_multiplier: float = 1.0,
    max_ticks: int | None = None,
) -> SimulationResult:
    """Tick a simulator until the mission ends.

    Args:
        simulator: Simulator to drive (advanced in place)
        speed_multiplier: Step scale passed to every tick
        max_ticks: Optional cap on ticks; the run stops RUNNING if reached

    Returns:
        SimulationResult with every snapshot including the starting one
    """
    snapshots = [simulator.snapshot()]
    status = simulator.status
    ticks = 0

    while not status.is_terminal:
        if max_ticks is not None and ticks >= max_ticks:
            logger.info("Stopped after %d ticks with mission still running", ticks)
            break
        snapshot, status = simulator.tick(speed_multiplier)
        snapshots.append(snapshot)
        ticks += 1

    return SimulationResult(
        snapshots=snapshots,
        status=status,
        soft_landing_speed=simulator.config.soft_landing_speed,
    )


# =============================================================================
# Summary
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
def format_mission_summary(result: SimulationResult) -> str:
    """Format a human-readable mission report.

    Args:
        result: Completed run

    Returns:
        Multi-line summary string
    """
    s = result.final
    lines = []

    if result.status is MissionStatus.FUEL_EXHAUSTED:
        lines.append("Fuel exhausted! Simulation aborted.")
    elif result.status is MissionStatus.TIMED_OUT:
        lines.append("Time limit reached before touchdown.")
    elif result.status is MissionStatus.LANDED:
        lines.append("Landing complete. Final conditions:")
    else:
        lines.append("Mission still running.")

    lines.append(
        f"Time: {s.time:.1f} s, Altitude: {s.altitude:.2f} m, "
        f"Vertical Speed: {s.vertical_speed:.2f} m/s, "
        f"Horizontal Speed: {s.horizontal_speed:.2f} m/s, "
        f"Fuel remaining: {s.fuel_remaining:.2f} kg"
    )

    if result.landed:
        verdict = "SOFT LANDING" if result.soft_landing else "HARD LANDING"
        lines.append(
            f"{verdict} (limit {result.soft_landing_speed:.1f} m/s on both axes)"
        )

    lines.append(f"Fuel used: {result.fuel_used:.2f} kg over {result.n_ticks} ticks")
    return "\n".join(lines)
