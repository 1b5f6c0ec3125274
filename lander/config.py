"""Mission configuration files.

Bundles everything needed to recreate a run (simulation settings, vehicle
parameters, start conditions and controller tuning) into one serializable
object. Files are plain JSON so they can be edited by hand.

Example:
    >>> from lander.config import MissionConfig
    >>>
    >>> config = MissionConfig(name="baseline")
    >>> config.save("missions/baseline.json")
    >>>
    >>> config = MissionConfig.load("missions/baseline.json")
    >>> sim = config.build_simulator()
"""

import json
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

from beartype import beartype

from lander.checks import NUMERIC_TOWER
from lander.dynamics.state import InitialConditions, SpacecraftParameters
from lander.gnc.control.pid import PIDGains
from lander.gnc.guidance.descent import AxisSettings, ControllerSettings
from lander.simulation.simulator import LandingSimulator, SimConfig

# =============================================================================
# Serialization Helpers
# =============================================================================


def _check_keys(section: str, data: dict[str, Any], allowed: set[str]) -> None:
    """Reject keys that do not map to a known parameter."""
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")


def _coerce_flat(cls: type, section: str, data: dict[str, Any]) -> dict[str, Any]:
    """Convert JSON values of a flat dataclass section to field types.

    JSON does not distinguish 30000 from 30000.0, so float fields are
    converted explicitly and enum fields are looked up by name.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Section '{section}' must be an object, got {type(data).__name__}")

    types = {f.name: f.type for f in fields(cls)}
    _check_keys(section, data, set(types))

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        ftype = types[key]
        if ftype is float:
            kwargs[key] = float(value)
        elif isinstance(ftype, type) and issubclass(ftype, Enum):
            try:
                kwargs[key] = ftype[value]
            except KeyError:
                raise ValueError(
                    f"Invalid value for '{section}.{key}': {value!r}"
                ) from None
        else:
            kwargs[key] = value
    return kwargs


def _axis_to_dict(axis: AxisSettings) -> dict[str, Any]:
    return {
        "kp": axis.gains.kp,
        "ki": axis.gains.ki,
        "kd": axis.gains.kd,
        "setpoint": axis.setpoint,
        "output_limits": list(axis.output_limits),
    }


def _axis_from_dict(
    section: str, data: dict[str, Any], defaults: AxisSettings
) -> AxisSettings:
    _check_keys(section, data, {"kp", "ki", "kd", "setpoint", "output_limits"})
    limits = data.get("output_limits", defaults.output_limits)
    if len(limits) != 2:
        raise ValueError(f"'{section}.output_limits' must have two entries, got {limits}")
    return AxisSettings(
        gains=PIDGains(
            kp=float(data.get("kp", defaults.gains.kp)),
            ki=float(data.get("ki", defaults.gains.ki)),
            kd=float(data.get("kd", defaults.gains.kd)),
        ),
        setpoint=float(data.get("setpoint", defaults.setpoint)),
        output_limits=(float(limits[0]), float(limits[1])),
    )


def _controllers_to_dict(settings: ControllerSettings) -> dict[str, Any]:
    return {
        "vertical": _axis_to_dict(settings.vertical),
        "horizontal": _axis_to_dict(settings.horizontal),
        "orientation": _axis_to_dict(settings.orientation),
        "hover_throttle": settings.hover_throttle,
        "near_surface_altitude": settings.near_surface_altitude,
        "max_desired_angle": settings.max_desired_angle,
    }


def _controllers_from_dict(data: dict[str, Any]) -> ControllerSettings:
    axes = ("vertical", "horizontal", "orientation")
    scalars = ("hover_throttle", "near_surface_altitude", "max_desired_angle")
    _check_keys("controllers", data, set(axes) | set(scalars))

    base = ControllerSettings()
    kwargs: dict[str, Any] = {}
    for axis in axes:
        if axis in data:
            # Omitted gains keep the tuning of that axis
            kwargs[axis] = _axis_from_dict(
                f"controllers.{axis}", data[axis], getattr(base, axis)
            )
    for key in scalars:
        if key in data:
            kwargs[key] = float(data[key])
    return ControllerSettings(**kwargs)


# =============================================================================
# Mission Config
# =============================================================================


@beartype(conf=NUMERIC_TOWER)
@dataclass
class MissionConfig:
    """Complete, serializable description of a landing run.

    Attributes:
        name: Mission name
        description: Free-form description
        sim: Simulation settings
        spacecraft: Vehicle parameters
        initial: Start conditions
        controllers: Descent controller tuning
    """
    name: str = "moon_landing"
    description: str = ""
    sim: SimConfig = field(default_factory=SimConfig)
    spacecraft: SpacecraftParameters = field(default_factory=SpacecraftParameters)
    initial: InitialConditions = field(default_factory=InitialConditions)
    controllers: ControllerSettings = field(default_factory=ControllerSettings)

    def build_simulator(self) -> LandingSimulator:
        """Create a simulator at mission start from this configuration."""
        return LandingSimulator.create(
            config=self.sim,
            params=self.spacecraft,
            initial=self.initial,
            controllers=self.controllers,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict."""
        sim = asdict(self.sim)
        sim["gravity_model"] = self.sim.gravity_model.name
        sim["attitude_mode"] = self.sim.attitude_mode.name
        return {
            "name": self.name,
            "description": self.description,
            "sim": sim,
            "spacecraft": asdict(self.spacecraft),
            "initial": asdict(self.initial),
            "controllers": _controllers_to_dict(self.controllers),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MissionConfig":
        """Create from a dict. Missing sections fall back to defaults.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        _check_keys(
            "mission", data,
            {"name", "description", "sim", "spacecraft", "initial", "controllers"},
        )
        return cls(
            name=str(data.get("name", "moon_landing")),
            description=str(data.get("description", "")),
            sim=SimConfig(**_coerce_flat(SimConfig, "sim", data.get("sim", {}))),
            spacecraft=SpacecraftParameters(
                **_coerce_flat(SpacecraftParameters, "spacecraft", data.get("spacecraft", {}))
            ),
            initial=InitialConditions(
                **_coerce_flat(InitialConditions, "initial", data.get("initial", {}))
            ),
            controllers=_controllers_from_dict(data.get("controllers", {})),
        )

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "MissionConfig":
        """Deserialize from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid mission config JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Mission config must be a JSON object")
        return cls.from_dict(data)

    def save(self, path: str | Path) -> Path:
        """Write the configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(self.to_json())
        return path

    @classmethod
    def load(cls, path: str | Path) -> "MissionConfig":
        """Read a configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Mission config not found: {path}")
        with open(path) as f:
            return cls.from_json(f.read())
