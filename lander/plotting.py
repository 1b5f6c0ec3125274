"""Visualization module for lander runs.

Provides plotting functions for:
- Descent trajectory (altitude vs downrange)
- Telemetry dashboard (speeds, altitude, orientation, fuel vs time)

All plots use matplotlib with a consistent, professional style and consume
only a SimulationResult, never the live simulator.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from lander.checks import NUMERIC_TOWER
from lander.simulation.mission import SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

# Professional color palette
COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "surface": "#6E6E6E",  # Lunar surface
    "limit": "#C73E1D",  # Limits and thresholds
    "text": "#333333",  # Text color
}

# Default figure size
DEFAULT_FIGSIZE = (12.0, 6.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "legend.fontsize": 10,
            "figure.titlesize": 16,
            "grid.alpha": 0.5,
        }
    )


# =============================================================================
# Trajectory Plot
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
def plot_trajectory(
    result: SimulationResult,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str | None = None,
) -> Figure:
    """Plot the descent trajectory in the vertical plane.

    Args:
        result: Completed run
        figsize: Figure size (width, height) in inches
        title: Optional custom title

    Returns:
        matplotlib Figure object
    """
    _setup_style()

    fig, ax = plt.subplots(figsize=figsize)

    downrange_km = result.horizontal_distance / 1000.0
    altitude_km = result.altitude / 1000.0

    ax.plot(downrange_km, altitude_km, color=COLORS["primary"], linewidth=2, label="Trajectory")
    ax.axhline(y=0, color=COLORS["surface"], linewidth=3, label="Surface")

    ax.plot(downrange_km[0], altitude_km[0], "o", color=COLORS["accent"], markersize=8, label="Start")
    ax.plot(
        downrange_km[-1], altitude_km[-1], "X",
        color=COLORS["secondary"], markersize=10,
        label=f"End ({result.status.name})",
    )

    ax.set_xlabel("Downrange (km)")
    ax.set_ylabel("Altitude (km)")
    ax.grid(True, alpha=0.3, linestyle="-", linewidth=0.5)
    ax.legend(loc="upper right")
    ax.set_title(title or "Descent Trajectory")

    fig.tight_layout()
    return fig


# =============================================================================
# Telemetry Dashboard
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
def plot_telemetry(
    result: SimulationResult,
    figsize: tuple[float, float] = (14.0, 9.0),
    title: str | None = None,
) -> Figure:
    """Plot time histories of the main state variables.

    Four panels: altitude, speeds (with soft landing limit), orientation,
    and remaining fuel.

    Args:
        result: Completed run
        figsize: Figure size (width, height) in inches
        title: Optional custom title

    Returns:
        matplotlib Figure object
    """
    _setup_style()

    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    ax_alt, ax_speed, ax_angle, ax_fuel = axes.flat
    t = result.time

    ax_alt.plot(t, result.altitude / 1000.0, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (km)")
    ax_alt.set_title("Altitude")

    ax_speed.plot(t, result.vertical_speed, color=COLORS["primary"], linewidth=2, label="Vertical (down +)")
    ax_speed.plot(t, result.horizontal_speed, color=COLORS["secondary"], linewidth=2, label="Horizontal")
    limit = result.soft_landing_speed
    ax_speed.axhspan(-limit, limit, color=COLORS["limit"], alpha=0.15, label="Soft landing band")
    ax_speed.set_yscale("symlog", linthresh=10.0)
    ax_speed.set_ylabel("Speed (m/s)")
    ax_speed.set_title("Speeds")
    ax_speed.legend(loc="upper right")

    ax_angle.plot(t, result.orientation_angle, color=COLORS["accent"], linewidth=2)
    ax_angle.set_ylabel("Orientation (deg)")
    ax_angle.set_xlabel("Time (s)")
    ax_angle.set_title("Orientation")

    ax_fuel.plot(t, result.fuel_remaining, color=COLORS["primary"], linewidth=2)
    ax_fuel.set_ylim(bottom=0.0, top=max(float(np.max(result.fuel_remaining)) * 1.05, 1.0))
    ax_fuel.set_ylabel("Fuel (kg)")
    ax_fuel.set_xlabel("Time (s)")
    ax_fuel.set_title("Fuel Remaining")

    for ax in axes.flat:
        ax.grid(True, alpha=0.3, linestyle="-", linewidth=0.5)

    fig.suptitle(title or f"Mission Telemetry ({result.status.name})")
    fig.tight_layout()
    return fig
