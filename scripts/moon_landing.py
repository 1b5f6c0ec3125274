#!/usr/bin/env python
"""Lunar landing from 30 km with three-loop PID control.

Simulates the reference mission:
- Start at 30 km altitude with 1700 m/s horizontal speed
- Vertical, horizontal and orientation PID loops command the main engine
- Full throttle below 2 km for terminal braking
- Success: touchdown with vertical and horizontal speed below 2.5 m/s

An optional mission config (JSON) replaces the defaults.

Usage:
    uv run python scripts/moon_landing.py [mission.json]
"""

import logging
import sys
from pathlib import Path

from lander.config import MissionConfig
from lander.environment import free_fall_time, impact_speed
from lander.plotting import plot_telemetry, plot_trajectory
from lander.simulation import format_mission_summary, run_mission


def main() -> None:
    """Run the landing mission and save outputs."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        config = MissionConfig.load(sys.argv[1])
    else:
        config = MissionConfig(name="moon_landing")

    print("=" * 70)
    print("LUNAR LANDING SIMULATION")
    print("=" * 70)

    # =========================================================================
    # Mission Parameters
    # =========================================================================
    sc = config.spacecraft
    ic = config.initial
    sim = config.build_simulator()
    g = sim.gravity.acceleration(ic.altitude, ic.horizontal_speed)

    print("\n" + "-" * 70)
    print("MISSION PARAMETERS")
    print("-" * 70)
    print(f"  Mission:            {config.name}")
    print(f"  Initial altitude:   {ic.altitude/1000:.1f} km")
    print(f"  Horizontal speed:   {ic.horizontal_speed:.0f} m/s")
    print(f"  Dry mass:           {sc.dry_mass:.0f} kg")
    print(f"  Fuel:               {sc.initial_fuel_mass:.0f} kg")
    print(f"  Main engine:        {sc.main_engine_thrust:.0f} N, {sc.main_engine_burn_rate:.2f} kg/s")
    print(f"  Thrust/weight:      {sc.thrust_to_weight(config.sim.g0):.2f}")
    print(f"  Gravity:            {sim.gravity!r}, {g:.3f} m/s^2 at start")
    if g > 0:
        # Unpowered reference from rest
        print(f"  Free-fall time:     {free_fall_time(ic.altitude, g):.1f} s")
        print(f"  Free-fall impact:   {impact_speed(ic.altitude, g):.1f} m/s")
    print(f"  Time step:          {config.sim.base_dt:.2f} s")

    # =========================================================================
    # Run
    # =========================================================================
    print("\n" + "-" * 70)
    print("RUNNING")
    print("-" * 70)

    result = run_mission(sim)

    print(format_mission_summary(result))

    # =========================================================================
    # Save outputs
    # =========================================================================
    output_dir = Path("outputs") / config.name
    output_dir.mkdir(parents=True, exist_ok=True)

    plot_trajectory(result).savefig(output_dir / "trajectory.png", dpi=150)
    plot_telemetry(result).savefig(output_dir / "telemetry.png", dpi=150)
    result.save_csv(output_dir / "telemetry.csv")
    config.save(output_dir / "mission.json")

    print(f"\n  Outputs saved to {output_dir}/")
    print("\n" + "=" * 70)


if __name__ == "__main__":
    main()
