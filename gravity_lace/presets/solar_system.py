"""Sun and the eight planets on circular coplanar orbits."""

from typing import Optional, Tuple

import numpy as np

from gravity_lace.constants import ASTRONOMICAL_UNIT, G_SI, SOLAR_MASS
from gravity_lace.presets.base import Preset

# (name, mass in kg, orbital radius in AU)
PLANETS = (
    ("mercury", 3.3011e23, 0.387),
    ("venus", 4.8675e24, 0.723),
    ("earth", 5.972e24, 1.0),
    ("mars", 6.4171e23, 1.524),
    ("jupiter", 1.8982e27, 5.203),
    ("saturn", 5.6834e26, 9.537),
    ("uranus", 8.6810e25, 19.19),
    ("neptune", 1.02413e26, 30.07),
)


class SolarSystem(Preset):
    """Simplified solar system in SI units.

    Each planet starts at a random phase (seeded) on a circular orbit around
    the Sun; the whole system is then moved to its centre-of-mass frame.
    """

    def __init__(
        self,
        n_planets: int = len(PLANETS),
        seed: Optional[int] = None,
        gravitational_constant: float = G_SI,
    ):
        super().__init__(seed=seed, gravitational_constant=gravitational_constant)
        if not 0 <= n_planets <= len(PLANETS):
            raise ValueError(f"n_planets must be between 0 and {len(PLANETS)}, got {n_planets}")
        self.n_planets = n_planets
        self.names = ["sun"] + [planet[0] for planet in PLANETS[:n_planets]]

    @property
    def name(self) -> str:
        return "solar_system"

    def generate(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        planets = PLANETS[:self.n_planets]
        n = len(planets) + 1

        positions = np.zeros((n, 3))
        velocities = np.zeros((n, 3))
        masses = np.empty(n)
        masses[0] = SOLAR_MASS

        phases = self.rng.uniform(0.0, 2.0 * np.pi, len(planets))
        for i, ((_, mass, radius_au), phase) in enumerate(zip(planets, phases), start=1):
            radius = radius_au * ASTRONOMICAL_UNIT
            speed = np.sqrt(self.gravitational_constant * SOLAR_MASS / radius)
            positions[i] = [radius * np.cos(phase), radius * np.sin(phase), 0.0]
            velocities[i] = [-speed * np.sin(phase), speed * np.cos(phase), 0.0]
            masses[i] = mass

        positions, velocities = self.to_center_of_mass_frame(positions, velocities, masses)
        return positions, velocities, masses
