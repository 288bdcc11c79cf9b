"""Point mass with mutable kinematic state."""

import math
import numbers
from typing import Optional

from gravity_lace.exceptions import InvalidBodyError
from gravity_lace.numerics.vector3d import Vector3d


def _coerce_vector(value, label: str) -> Vector3d:
    """Copy value into a new Vector3d, rejecting wrong sizes and non-finite components."""
    if value is None:
        return Vector3d.zero()
    try:
        vector = Vector3d.from_iterable(value)
    except (TypeError, ValueError) as exc:
        raise InvalidBodyError(f"{label} must have three numeric components: {exc}") from exc
    if not vector.is_finite():
        raise InvalidBodyError(f"{label} must be finite, got {vector}")
    return vector


class Body:
    """A registered point mass.

    ``position`` and ``velocity`` are plain Vector3d attributes; once the body
    is registered only the integrator writes them. ``mass`` is fixed for the
    lifetime of the body.
    """

    __slots__ = ("_mass", "position", "velocity", "name", "handle")

    def __init__(self, mass: float, position=None, velocity=None, name: Optional[str] = None):
        """Create a body, validating its state.

        Args:
            mass: Non-negative finite mass
            position: Three components (Vector3d, tuple, list or numpy array); origin if None
            velocity: Three components; at rest if None
            name: Optional label

        Raises:
            InvalidBodyError: If mass is negative/non-finite or a vector is malformed
        """
        if isinstance(mass, bool) or not isinstance(mass, numbers.Real):
            raise InvalidBodyError(f"mass must be a real number, got {mass!r}")
        mass = float(mass)
        if not math.isfinite(mass) or mass < 0.0:
            raise InvalidBodyError(f"mass must be finite and >= 0, got {mass}")

        self._mass = mass
        self.position = _coerce_vector(position, "position")
        self.velocity = _coerce_vector(velocity, "velocity")
        self.name = name
        self.handle = None

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def registered(self) -> bool:
        return self.handle is not None

    def is_attractor(self, mass_epsilon: float) -> bool:
        """Whether this body exerts gravity (mass at or above the threshold)."""
        return self._mass >= mass_epsilon

    def momentum(self) -> Vector3d:
        return self.velocity * self._mass

    def kinetic_energy(self) -> float:
        return 0.5 * self._mass * self.velocity.sqr_magnitude

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Body({label}mass={self._mass!r}, position={self.position}, velocity={self.velocity})"
