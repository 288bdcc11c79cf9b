"""Circular two-body orbit in the centre-of-mass frame."""

import math
from typing import Optional, Tuple

import numpy as np

from gravity_lace.constants import EARTH_MASS, EARTH_MOON_DISTANCE, G_SI, MOON_MASS
from gravity_lace.physics.diagnostics import orbital_period
from gravity_lace.presets.base import Preset


class TwoBodyOrbit(Preset):
    """Two bodies on circular orbits about their common centre of mass.

    Defaults are the Earth/Moon system in SI units. The pair starts on the
    x axis and orbits counter-clockwise in the xy plane.
    """

    def __init__(
        self,
        primary_mass: float = EARTH_MASS,
        secondary_mass: float = MOON_MASS,
        separation: float = EARTH_MOON_DISTANCE,
        seed: Optional[int] = None,
        gravitational_constant: float = G_SI,
    ):
        super().__init__(seed=seed, gravitational_constant=gravitational_constant)
        self.primary_mass = primary_mass
        self.secondary_mass = secondary_mass
        self.separation = separation
        self.names = ["primary", "secondary"]

    @property
    def name(self) -> str:
        return "two_body"

    @property
    def period(self) -> float:
        """Orbital period from Kepler's third law."""
        return orbital_period(self.gravitational_constant, self.primary_mass, self.secondary_mass, self.separation)

    def generate(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        total_mass = self.primary_mass + self.secondary_mass
        f_primary = self.secondary_mass / total_mass
        f_secondary = self.primary_mass / total_mass

        # Relative speed of a circular orbit
        v_rel = math.sqrt(self.gravitational_constant * total_mass / self.separation)

        positions = np.array([
            [-f_primary * self.separation, 0.0, 0.0],
            [f_secondary * self.separation, 0.0, 0.0],
        ])
        velocities = np.array([
            [0.0, -f_primary * v_rel, 0.0],
            [0.0, f_secondary * v_rel, 0.0],
        ])
        masses = np.array([self.primary_mass, self.secondary_mass])
        return positions, velocities, masses
