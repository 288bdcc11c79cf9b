"""Substepped semi-implicit (symplectic) Euler integrator with pairwise Newtonian gravity."""

import logging
import math
from typing import Sequence

import numpy as np

from gravity_lace.constants import DEFAULT_SUBSTEPS, G_SI, MASS_EPSILON
from gravity_lace.numerics.vector3d import Vector3d
from gravity_lace.physics.body import Body
from gravity_lace.physics.integrators.base import Integrator

logger = logging.getLogger(__name__)

KERNELS = ("loop", "vectorized")

# Pairs closer than this have no defined direction and are skipped
_COINCIDENT_SQR_DISTANCE = Vector3d.K_EPSILON * Vector3d.K_EPSILON


class SymplecticEulerIntegrator(Integrator):
    """Semi-implicit Euler over S equal substeps.

    Each substep first kicks every subject's velocity with the acceleration
    from every attractor (positions frozen at the start of the substep), then
    drifts every position with the updated velocity:

        for each attractor a with mass >= mass_epsilon:
            for each subject s != a:
                r = s.position - a.position
                s.velocity -= G * a.mass / |r|^2 * h * normalize(r)
        for each subject s:
            s.position += s.velocity * h

    with h = dt / S. Pairs whose separation is at most Vector3d.K_EPSILON are
    skipped: their direction is undefined and they contribute no force.

    Two kernels evaluate the same algorithm. ``loop`` walks the pairs with
    Vector3d arithmetic in registration order. ``vectorized`` evaluates each
    substep over numpy (n, n, 3) separation arrays, which pays off for larger
    body counts; its summation order differs, so results agree with ``loop``
    to rounding, not bit for bit.
    """

    def __init__(
        self,
        gravitational_constant: float = G_SI,
        substeps: int = DEFAULT_SUBSTEPS,
        mass_epsilon: float = MASS_EPSILON,
        kernel: str = "loop",
    ):
        """Initialize integrator.

        Args:
            gravitational_constant: G in units consistent with mass, distance and time
            substeps: Number of equal substeps per tick (>= 1)
            mass_epsilon: Bodies lighter than this exert no gravity
            kernel: 'loop' or 'vectorized'

        Raises:
            ValueError: If any parameter is out of range
        """
        gravitational_constant = float(gravitational_constant)
        if not math.isfinite(gravitational_constant) or gravitational_constant <= 0.0:
            raise ValueError(f"gravitational_constant must be finite and > 0, got {gravitational_constant}")
        if isinstance(substeps, bool) or not isinstance(substeps, (int, np.integer)) or substeps < 1:
            raise ValueError(f"substeps must be an integer >= 1, got {substeps!r}")
        mass_epsilon = float(mass_epsilon)
        if not math.isfinite(mass_epsilon) or mass_epsilon < 0.0:
            raise ValueError(f"mass_epsilon must be finite and >= 0, got {mass_epsilon}")
        if kernel not in KERNELS:
            raise ValueError(f"Unknown kernel '{kernel}'. Available: {list(KERNELS)}")

        self.gravitational_constant = gravitational_constant
        self.substeps = int(substeps)
        self.mass_epsilon = mass_epsilon
        self.kernel = kernel

    @property
    def name(self) -> str:
        return "symplectic_euler"

    @property
    def order(self) -> int:
        return 1

    def acceleration(self, attractor: Body, subject: Body) -> Vector3d:
        """Acceleration attractor induces on subject at their current positions.

        Returns the zero vector when attractor and subject are the same body,
        when the attractor is below the mass epsilon, or when the two are
        coincident.
        """
        if attractor is subject or not attractor.is_attractor(self.mass_epsilon):
            return Vector3d.zero()
        r = subject.position - attractor.position
        sqr_distance = r.sqr_magnitude
        if sqr_distance <= _COINCIDENT_SQR_DISTANCE:
            return Vector3d.zero()
        return -(self.gravitational_constant * attractor.mass / sqr_distance) * r.normalized

    def step(self, bodies: Sequence[Body], dt: float) -> None:
        """Advance bodies in place by dt using `substeps` substeps."""
        if not bodies or dt == 0.0:
            return
        if self.kernel == "vectorized":
            self._step_vectorized(bodies, dt)
        else:
            self._step_loop(bodies, dt)

    def _step_loop(self, bodies: Sequence[Body], dt: float) -> None:
        """Reference kernel: pairwise Vector3d arithmetic in iteration order."""
        h = dt / self.substeps
        G = self.gravitational_constant
        attractors = [body for body in bodies if body.is_attractor(self.mass_epsilon)]

        for _ in range(self.substeps):
            # Kick: every velocity from positions frozen at the start of the substep
            for attractor in attractors:
                gm = G * attractor.mass
                origin = attractor.position
                for subject in bodies:
                    if subject is attractor:
                        continue
                    r = subject.position - origin
                    sqr_distance = r.sqr_magnitude
                    if sqr_distance <= _COINCIDENT_SQR_DISTANCE:
                        continue
                    a = gm / sqr_distance
                    subject.velocity = subject.velocity - a * h * r.normalized

            # Drift: positions from the updated velocities
            for subject in bodies:
                subject.position = subject.position + h * subject.velocity

    def _step_vectorized(self, bodies: Sequence[Body], dt: float) -> None:
        """Same algorithm on numpy arrays; one gather and one scatter per tick."""
        n = len(bodies)
        h = dt / self.substeps

        positions = np.array([body.position.to_tuple() for body in bodies], dtype=np.float64)
        velocities = np.array([body.velocity.to_tuple() for body in bodies], dtype=np.float64)
        masses = np.array([body.mass for body in bodies], dtype=np.float64)

        # G * m for attractors, 0 for bodies below the mass epsilon
        attracting = masses >= self.mass_epsilon
        gm = np.where(attracting, self.gravitational_constant * masses, 0.0)

        not_self = ~np.eye(n, dtype=bool)
        coefficients = np.zeros((n, n), dtype=np.float64)

        for _ in range(self.substeps):
            # r[s, a] = position of subject s minus position of attractor a
            r = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
            sqr_distance = np.einsum("ijk,ijk->ij", r, r)
            valid = (sqr_distance > _COINCIDENT_SQR_DISTANCE) & not_self & attracting[np.newaxis, :]

            # |a| * r_hat = G m / |r|^2 * r / |r| = G m * r / |r|^3
            coefficients.fill(0.0)
            np.divide(
                gm[np.newaxis, :],
                sqr_distance * np.sqrt(sqr_distance),
                out=coefficients,
                where=valid,
            )
            accelerations = -np.einsum("ij,ijk->ik", coefficients, r)

            velocities += accelerations * h
            positions += velocities * h

        for i, body in enumerate(bodies):
            body.velocity = Vector3d(*velocities[i])
            body.position = Vector3d(*positions[i])
