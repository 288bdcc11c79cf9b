"""Simulation context: create / tick / destroy entry points for a host driver."""

import logging
import math
import threading
from typing import Callable, List, Optional, Sequence

import numpy as np

from gravity_lace.exceptions import InvalidTimeStepError
from gravity_lace.numerics.vector3d import Vector3d
from gravity_lace.physics.body import Body
from gravity_lace.physics.integrators.base import Integrator
from gravity_lace.physics.integrators.symplectic_euler import SymplecticEulerIntegrator
from gravity_lace.physics.registry import BodyHandle, BodyRegistry

logger = logging.getLogger(__name__)


class Simulation:
    """Owns one body registry and advances it with an integrator.

    The driver owns the lifetime of the context and of every body: it
    creates bodies, calls ``tick`` once per fixed host update, and destroys
    bodies when the host does. There are no frames here, only ticks with an
    explicit elapsed time.

    Ticks are serialized. Structural changes never happen under a running
    integration pass: a ``destroy_body`` issued from another thread while a
    tick is in flight is queued and applied at the tick boundary (the body
    still takes part in that tick), and a body created mid-tick joins the
    next tick. ``on_tick_callback`` runs after the boundary, so changes made
    from it apply immediately.
    """

    def __init__(self, integrator: Optional[Integrator] = None):
        """Initialize simulation.

        Args:
            integrator: Integrator to use (default: SymplecticEulerIntegrator with SI constants)
        """
        self.integrator = integrator or SymplecticEulerIntegrator()
        self.registry = BodyRegistry()
        self.time = 0.0
        self.tick_count = 0

        # Callbacks
        self.on_tick_callback: Optional[Callable[["Simulation"], None]] = None

        self._tick_lock = threading.Lock()
        self._state_lock = threading.RLock()
        self._ticking = False
        self._pending_removals: List[BodyHandle] = []

    @classmethod
    def from_config(cls, config) -> "Simulation":
        """Build a simulation whose integrator is described by a Config."""
        return cls(config.make_integrator())

    # Lifecycle entry points

    def create_body(self, mass: float, position=None, velocity=None, name: Optional[str] = None) -> BodyHandle:
        """Validate and register a new body.

        Args:
            mass: Non-negative finite mass
            position: Initial position in simulation units
            velocity: Initial velocity in simulation units
            name: Optional label

        Returns:
            Handle of the new body

        Raises:
            InvalidBodyError: If the initial state is invalid
        """
        body = Body(mass, position, velocity, name=name)
        with self._state_lock:
            handle = self.registry.register(body)
        logger.info("Created body %s (%s) with mass %g", handle, name or "unnamed", body.mass)
        return handle

    def destroy_body(self, handle: BodyHandle) -> None:
        """Unregister a body; deferred to the tick boundary if a tick is running.

        Raises:
            StaleHandleError: If handle does not refer to a live body
        """
        with self._state_lock:
            # Validates the handle in both branches
            self.registry.get(handle)
            if self._ticking:
                if handle not in self._pending_removals:
                    self._pending_removals.append(handle)
                logger.warning("Tick in progress, removal of %s deferred to the tick boundary", handle)
                return
            self.registry.unregister(handle)
        logger.info("Destroyed body %s", handle)

    def tick(self, dt: float) -> None:
        """Advance every live body by dt.

        Args:
            dt: Elapsed simulation time, already in the integrator's time unit

        Raises:
            InvalidTimeStepError: If dt is negative or not finite
        """
        if isinstance(dt, bool):
            raise InvalidTimeStepError(f"dt must be a number, got {dt!r}")
        try:
            dt = float(dt)
        except (TypeError, ValueError) as exc:
            raise InvalidTimeStepError(f"dt must be a number, got {dt!r}") from exc
        if not math.isfinite(dt) or dt < 0.0:
            raise InvalidTimeStepError(f"dt must be finite and >= 0, got {dt}")

        with self._tick_lock:
            with self._state_lock:
                self._ticking = True
                bodies = self.registry.bodies()
            try:
                self.integrator.step(bodies, dt)
            finally:
                with self._state_lock:
                    self._ticking = False
                    self._flush_pending_removals()

            self.time += dt
            self.tick_count += 1
            logger.debug("Tick %d: dt=%g, %d bodies, t=%g", self.tick_count, dt, len(bodies), self.time)

        if self.on_tick_callback is not None:
            self.on_tick_callback(self)

    def _flush_pending_removals(self) -> None:
        for handle in self._pending_removals:
            if handle in self.registry:
                self.registry.unregister(handle)
                logger.info("Destroyed body %s at tick boundary", handle)
        self._pending_removals.clear()

    # Accessors

    @property
    def pending_removals(self) -> List[BodyHandle]:
        with self._state_lock:
            return list(self._pending_removals)

    @property
    def n_bodies(self) -> int:
        return len(self.registry)

    def body(self, handle: BodyHandle) -> Body:
        """Live body behind handle (StaleHandleError if destroyed)."""
        with self._state_lock:
            return self.registry.get(handle)

    def bodies(self) -> List[Body]:
        with self._state_lock:
            return self.registry.bodies()

    def handles(self) -> List[BodyHandle]:
        with self._state_lock:
            return self.registry.handles()

    def populate(self, positions, velocities, masses, names: Optional[Sequence[str]] = None) -> List[BodyHandle]:
        """Create one body per row of the given arrays.

        Args:
            positions: Array of shape (n, 3)
            velocities: Array of shape (n, 3)
            masses: Array of shape (n,)
            names: Optional labels

        Returns:
            Handles in row order
        """
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64).flatten()
        if positions.shape != velocities.shape or positions.shape != (len(masses), 3):
            raise ValueError(
                f"Expected positions/velocities of shape ({len(masses)}, 3), "
                f"got {positions.shape} and {velocities.shape}"
            )
        handles = []
        for i in range(len(masses)):
            name = names[i] if names is not None else None
            handles.append(self.create_body(float(masses[i]), positions[i], velocities[i], name=name))
        return handles

    def get_state(self):
        """Current state of live bodies in slot order.

        Returns:
            Tuple of (positions, velocities, masses) as numpy arrays
        """
        bodies = self.bodies()
        positions = np.array([b.position.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
        velocities = np.array([b.velocity.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
        masses = np.array([b.mass for b in bodies], dtype=np.float64)
        return positions, velocities, masses

    def position(self, handle: BodyHandle) -> Vector3d:
        """Copy of the position of the body behind handle."""
        return self.body(handle).position.copy()
