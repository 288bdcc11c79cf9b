"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np

from gravity_lace.constants import G_SI


class Preset(ABC):
    """Abstract base class for preset scenarios.

    Presets produce initial conditions in simulation units consistent with
    ``gravitational_constant``.
    """

    def __init__(self, seed: Optional[int] = None, gravitational_constant: float = G_SI):
        """Initialize preset.

        Args:
            seed: Random seed for reproducibility
            gravitational_constant: G the velocities are computed with
        """
        self.seed = seed
        self.gravitational_constant = gravitational_constant
        self.rng = np.random.default_rng(seed)
        self.names: Optional[List[str]] = None

    @abstractmethod
    def generate(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Generate initial conditions.

        Returns:
            Tuple of (positions (n, 3), velocities (n, 3), masses (n,))
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass

    @staticmethod
    def to_center_of_mass_frame(positions: np.ndarray, velocities: np.ndarray, masses: np.ndarray):
        """Subtract the centre-of-mass position and velocity."""
        total_mass = np.sum(masses)
        com = np.sum(masses[:, np.newaxis] * positions, axis=0) / total_mass
        com_v = np.sum(masses[:, np.newaxis] * velocities, axis=0) / total_mass
        return positions - com, velocities - com_v
