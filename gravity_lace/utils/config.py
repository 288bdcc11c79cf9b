"""Configuration management."""

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from gravity_lace.constants import (
    DEFAULT_FIXED_DELTA_TIME,
    DEFAULT_SUBSTEPS,
    DISTANCE_SCALE,
    G_SI,
    MASS_EPSILON,
    TIME_SCALE,
)
from gravity_lace.logging_config import resolve_level
from gravity_lace.physics.integrators.symplectic_euler import KERNELS, SymplecticEulerIntegrator
from gravity_lace.physics.space import Space

_FLOAT_FIELDS = (
    "gravitational_constant", "mass_epsilon", "distance_scale", "time_scale", "fixed_delta_time", "dt",
)
_INT_FIELDS = ("substeps", "ticks", "debug_every")


def _coerce(label: str, value: Any, kind: type):
    """Convert a config value to float or int, raising ValueError for anything else."""
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number, got {value!r}")
    try:
        converted = kind(value)
        exact = kind is float or converted == float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be a number, got {value!r}") from exc
    if not exact:
        raise ValueError(f"{label} must be an integer, got {value!r}")
    return converted



@dataclass
class Config:
    """Simulation configuration."""
    # Integration parameters
    gravitational_constant: float = G_SI
    substeps: int = DEFAULT_SUBSTEPS
    mass_epsilon: float = MASS_EPSILON
    kernel: str = "loop"

    # Scale conversion
    distance_scale: float = DISTANCE_SCALE
    time_scale: float = TIME_SCALE
    fixed_delta_time: float = DEFAULT_FIXED_DELTA_TIME

    # Run parameters (simulation seconds per tick, number of ticks)
    dt: float = 3600.0
    ticks: int = 1000

    # Preset parameters
    preset: str = "two_body"
    preset_params: Dict[str, Any] = None

    # Reproducibility
    seed: Optional[int] = None

    # Output
    log_level: str = "INFO"
    debug_every: int = 100

    def __post_init__(self):
        if self.preset_params is None:
            self.preset_params = {}
        # YAML 1.1 reads exponents without a dot (1e-10) as strings
        for label in _FLOAT_FIELDS:
            setattr(self, label, _coerce(label, getattr(self, label), float))
        for label in _INT_FIELDS:
            setattr(self, label, _coerce(label, getattr(self, label), int))
        if self.seed is not None:
            self.seed = _coerce("seed", self.seed, int)
        resolve_level(self.log_level)

        for label in ("gravitational_constant", "distance_scale", "time_scale", "fixed_delta_time"):
            value = getattr(self, label)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{label} must be finite and > 0, got {value}")
        if not math.isfinite(self.dt) or self.dt < 0.0:
            raise ValueError(f"dt must be finite and >= 0, got {self.dt}")
        if self.substeps < 1:
            raise ValueError(f"substeps must be >= 1, got {self.substeps}")
        if self.mass_epsilon < 0.0:
            raise ValueError(f"mass_epsilon must be >= 0, got {self.mass_epsilon}")
        if self.kernel not in KERNELS:
            raise ValueError(f"Unknown kernel '{self.kernel}'. Available: {list(KERNELS)}")
        if self.ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {self.ticks}")
        if self.debug_every < 1:
            raise ValueError(f"debug_every must be >= 1, got {self.debug_every}")

    def make_integrator(self) -> SymplecticEulerIntegrator:
        return SymplecticEulerIntegrator(
            gravitational_constant=self.gravitational_constant,
            substeps=self.substeps,
            mass_epsilon=self.mass_epsilon,
            kernel=self.kernel,
        )

    def make_space(self) -> Space:
        return Space(distance_scale=self.distance_scale, time_scale=self.time_scale)


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object

    Raises:
        ValueError: If the file holds keys Config does not know
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    data = data or {}
    known = {field.name for field in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {unknown}")

    return Config(**data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
