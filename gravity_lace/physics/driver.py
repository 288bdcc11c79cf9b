"""Fixed-timestep driver bridging a host frame loop and a Simulation."""

import logging
import math
from typing import Dict, Optional

import numpy as np

from gravity_lace.constants import DEFAULT_FIXED_DELTA_TIME
from gravity_lace.physics.registry import BodyHandle
from gravity_lace.physics.simulation import Simulation
from gravity_lace.physics.space import Space

logger = logging.getLogger(__name__)

# Relative slack when counting whole fixed intervals in the accumulator
_INTERVAL_TOLERANCE = 1e-9


class FixedStepDriver:
    """Accumulates host time and runs fixed simulation ticks.

    Plays the part of a host engine's fixed-update loop: spawn/despawn model
    the host's create and destroy hooks, ``advance`` runs the ticks due for a
    frame, and ``render_position`` maps results back to render space.
    """

    def __init__(
        self,
        simulation: Simulation,
        space: Optional[Space] = None,
        fixed_delta_time: float = DEFAULT_FIXED_DELTA_TIME,
        max_ticks_per_advance: int = 8,
    ):
        """Initialize driver.

        Args:
            simulation: Simulation to drive
            space: Scale policy (default Space())
            fixed_delta_time: Host seconds per tick
            max_ticks_per_advance: Cap on ticks run by a single advance() call
        """
        if not math.isfinite(fixed_delta_time) or fixed_delta_time <= 0.0:
            raise ValueError(f"fixed_delta_time must be finite and > 0, got {fixed_delta_time}")
        if max_ticks_per_advance < 1:
            raise ValueError(f"max_ticks_per_advance must be >= 1, got {max_ticks_per_advance}")
        self.simulation = simulation
        self.space = space or Space()
        self.fixed_delta_time = float(fixed_delta_time)
        self.max_ticks_per_advance = int(max_ticks_per_advance)
        self._accumulator = 0.0

    def spawn(self, mass: float, render_position, velocity=None, name: Optional[str] = None) -> BodyHandle:
        """Register a body placed in render space.

        Args:
            mass: Mass in kilograms
            render_position: Position in render units
            velocity: Initial velocity in metres per second (simulation units)
            name: Optional label
        """
        position = self.space.to_space(render_position)
        return self.simulation.create_body(mass, position, velocity, name=name)

    def despawn(self, handle: BodyHandle) -> None:
        self.simulation.destroy_body(handle)

    def advance(self, host_elapsed: float) -> int:
        """Run every fixed tick that fits in the accumulated host time.

        Args:
            host_elapsed: Host seconds since the previous call

        Returns:
            Number of ticks run
        """
        if not math.isfinite(host_elapsed) or host_elapsed < 0.0:
            raise ValueError(f"host_elapsed must be finite and >= 0, got {host_elapsed}")
        self._accumulator += host_elapsed
        space_dt = self.space.space_delta_time(self.fixed_delta_time)

        ticks = 0
        while self._intervals_due() >= 1 and ticks < self.max_ticks_per_advance:
            self.simulation.tick(space_dt)
            self._accumulator = max(0.0, self._accumulator - self.fixed_delta_time)
            ticks += 1

        behind = self._intervals_due()
        if behind >= 1:
            dropped = behind * self.fixed_delta_time
            logger.warning(
                "Driver fell behind: dropping %.4f s of host time after %d ticks", dropped, ticks
            )
            self._accumulator = max(0.0, self._accumulator - dropped)
        return ticks

    def _intervals_due(self) -> int:
        """Whole fixed intervals in the accumulator, forgiving rounding left by repeated subtraction."""
        return math.floor((self._accumulator + _INTERVAL_TOLERANCE * self.fixed_delta_time) / self.fixed_delta_time)

    @property
    def accumulated_time(self) -> float:
        """Host seconds carried over to the next advance()."""
        return self._accumulator

    def render_position(self, handle: BodyHandle) -> np.ndarray:
        return self.space.from_space(self.simulation.position(handle))

    def render_positions(self) -> Dict[BodyHandle, np.ndarray]:
        """Render-space position of every live body."""
        return {handle: self.render_position(handle) for handle in self.simulation.handles()}
