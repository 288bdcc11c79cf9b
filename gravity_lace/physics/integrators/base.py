"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Sequence

from gravity_lace.physics.body import Body


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    An integrator advances the velocity and position of every body it is
    handed by one tick of elapsed time. It keeps no state between ticks.
    """

    @abstractmethod
    def step(self, bodies: Sequence[Body], dt: float) -> None:
        """Advance bodies in place by dt.

        Args:
            bodies: Bodies to advance, in iteration order
            dt: Elapsed simulation time for this tick
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler-type schemes)."""
        pass
