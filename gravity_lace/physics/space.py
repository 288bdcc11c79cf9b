"""Conversion between host render space and simulation space.

Simulation space is SI (metres, seconds, kilograms) so the integrator's
default G of 6.674e-11 applies unchanged. Render space is what the host
engine draws: single-precision coordinates where one unit is
``distance_scale`` metres, and host time where one second advances the
simulation by ``time_scale`` seconds.
"""

import math

import numpy as np

from gravity_lace.constants import DISTANCE_SCALE, TIME_SCALE
from gravity_lace.numerics.vector3d import Vector3d


class Space:
    """Scale policy between render space and simulation space."""

    def __init__(self, distance_scale: float = DISTANCE_SCALE, time_scale: float = TIME_SCALE):
        """Initialize scale policy.

        Args:
            distance_scale: Metres per render unit (default 1 AU = 10 units)
            time_scale: Simulated seconds per host second (default 1 year per 10 s)
        """
        for label, value in (("distance_scale", distance_scale), ("time_scale", time_scale)):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{label} must be finite and > 0, got {value}")
        self.distance_scale = float(distance_scale)
        self.time_scale = float(time_scale)

    def space_delta_time(self, host_delta_time: float) -> float:
        """Simulated seconds covered by host_delta_time host seconds."""
        return self.time_scale * host_delta_time

    def to_space(self, render_position) -> Vector3d:
        """Render-space position (any 3-component sequence) to simulation metres."""
        return Vector3d.from_iterable(render_position) * self.distance_scale

    def from_space(self, position: Vector3d) -> np.ndarray:
        """Simulation position to a single-precision render-space array."""
        return (position.to_array() / self.distance_scale).astype(np.float32)

    def velocity_to_space(self, render_velocity) -> Vector3d:
        """Render units per host second to metres per simulated second."""
        return Vector3d.from_iterable(render_velocity) * (self.distance_scale / self.time_scale)

    def velocity_from_space(self, velocity: Vector3d) -> np.ndarray:
        return (velocity.to_array() * (self.time_scale / self.distance_scale)).astype(np.float32)
