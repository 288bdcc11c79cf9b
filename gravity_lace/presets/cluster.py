"""Random cluster of bodies in a uniform sphere."""

from typing import Optional, Tuple

import numpy as np

from gravity_lace.constants import ASTRONOMICAL_UNIT, G_SI, SOLAR_MASS
from gravity_lace.presets.base import Preset


class RandomCluster(Preset):
    """Bodies sampled uniformly inside a sphere with small isotropic velocities.

    Velocities are scaled to ``velocity_fraction`` of the characteristic speed
    sqrt(G M / R), so the cluster starts sub-virial and collapses.
    """

    def __init__(
        self,
        n_bodies: int = 50,
        total_mass: float = 10.0 * SOLAR_MASS,
        radius: float = 10.0 * ASTRONOMICAL_UNIT,
        velocity_fraction: float = 0.3,
        seed: Optional[int] = None,
        gravitational_constant: float = G_SI,
    ):
        super().__init__(seed=seed, gravitational_constant=gravitational_constant)
        if n_bodies < 1:
            raise ValueError(f"n_bodies must be >= 1, got {n_bodies}")
        self.n_bodies = n_bodies
        self.total_mass = total_mass
        self.radius = radius
        self.velocity_fraction = velocity_fraction

    @property
    def name(self) -> str:
        return "cluster"

    def generate(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        n = self.n_bodies

        # Uniform in volume: r ~ R * u^(1/3), isotropic direction
        directions = self.rng.normal(size=(n, 3))
        directions /= np.linalg.norm(directions, axis=1, keepdims=True)
        radii = self.radius * self.rng.uniform(0.0, 1.0, n) ** (1.0 / 3.0)
        positions = directions * radii[:, np.newaxis]

        speed_scale = self.velocity_fraction * np.sqrt(self.gravitational_constant * self.total_mass / self.radius)
        velocities = self.rng.normal(0.0, speed_scale / np.sqrt(3.0), size=(n, 3))

        masses = np.full(n, self.total_mass / n)

        if n > 1:
            positions, velocities = self.to_center_of_mass_frame(positions, velocities, masses)
        return positions, velocities, masses
