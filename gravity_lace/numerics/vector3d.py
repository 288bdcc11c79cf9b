"""Double-precision 3D vector."""

import math
import operator
from typing import Iterable, Iterator, Tuple

import numpy as np

from gravity_lace.numerics.mathd import Mathd


def _component_index(index) -> int:
    """Integer component index; bools and floats are rejected rather than truncated."""
    if isinstance(index, bool):
        raise TypeError("Vector indices must be integers, not bool")
    return operator.index(index)


class Vector3d:
    """Representation of 3D vectors and points using doubles.

    Arithmetic operators return new vectors. Only ``set``, ``scale`` and
    ``normalize`` mutate the receiver.

    Equality is approximate: two vectors compare equal when the squared
    length of their difference is below ``K_EPSILON_NORMAL_SQRT``. Compare
    components directly when exact equality is needed.
    """

    K_EPSILON = 1e-5
    K_EPSILON_NORMAL_SQRT = 1e-15

    __slots__ = ("x", "y", "z")

    # Mutable with approximate equality, so not usable as a dict key
    __hash__ = None
    # numpy scalars defer to our reflected operators instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3d":
        """Build from any three-element iterable (tuple, list, numpy array)."""
        components = [float(v) for v in values]
        if len(components) != 3:
            raise ValueError(f"Vector3d needs 3 components, got {len(components)}")
        return cls(*components)

    @classmethod
    def from_vector2d(cls, v) -> "Vector3d":
        """Promote a Vector2d, z = 0."""
        return cls(v.x, v.y, 0.0)

    # Named constructors (new instance each call, vectors are mutable)

    @classmethod
    def zero(cls) -> "Vector3d":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> "Vector3d":
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def forward(cls) -> "Vector3d":
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def back(cls) -> "Vector3d":
        return cls(0.0, 0.0, -1.0)

    @classmethod
    def up(cls) -> "Vector3d":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def down(cls) -> "Vector3d":
        return cls(0.0, -1.0, 0.0)

    @classmethod
    def left(cls) -> "Vector3d":
        return cls(-1.0, 0.0, 0.0)

    @classmethod
    def right(cls) -> "Vector3d":
        return cls(1.0, 0.0, 0.0)

    # Component access

    def __getitem__(self, index: int) -> float:
        index = _component_index(index)
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError(f"Invalid Vector3d index: {index}")

    def __setitem__(self, index: int, value: float) -> None:
        index = _component_index(index)
        if index == 0:
            self.x = float(value)
        elif index == 1:
            self.y = float(value)
        elif index == 2:
            self.z = float(value)
        else:
            raise IndexError(f"Invalid Vector3d index: {index}")

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    # Read-only properties

    @property
    def magnitude(self) -> float:
        """Length of this vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @property
    def sqr_magnitude(self) -> float:
        """Squared length of this vector. Prefer over magnitude for comparisons."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def normalized(self) -> "Vector3d":
        """This vector with a magnitude of 1, or zero if it is too short to normalize."""
        return Vector3d.normalize_of(self)

    # Mutating methods

    def set(self, x: float, y: float, z: float) -> None:
        """Set all three components in place."""
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def scale(self, other: "Vector3d") -> None:
        """Multiply component-wise by ``other`` in place."""
        self.x *= other.x
        self.y *= other.y
        self.z *= other.z

    def normalize(self) -> None:
        """Make this vector unit length in place (zero if too short)."""
        n = Vector3d.normalize_of(self)
        self.x, self.y, self.z = n.x, n.y, n.z

    # Helpers

    def copy(self) -> "Vector3d":
        return Vector3d(self.x, self.y, self.z)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def format(self, spec: str) -> str:
        """Format every component with ``spec``, e.g. ``v.format('.2f')``."""
        return f"({format(self.x, spec)}, {format(self.y, spec)}, {format(self.z, spec)})"

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __repr__(self) -> str:
        return f"Vector3d({self.x!r}, {self.y!r}, {self.z!r})"

    # Operators

    def __add__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3d":
        return Vector3d(-self.x, -self.y, -self.z)

    def __mul__(self, d: float) -> "Vector3d":
        if isinstance(d, Vector3d):
            return NotImplemented
        return Vector3d(self.x * d, self.y * d, self.z * d)

    __rmul__ = __mul__

    def __truediv__(self, d: float) -> "Vector3d":
        if isinstance(d, Vector3d):
            return NotImplemented
        return Vector3d(self.x / d, self.y / d, self.z / d)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3d):
            return NotImplemented
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz < Vector3d.K_EPSILON_NORMAL_SQRT

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Static operations

    @staticmethod
    def lerp(a: "Vector3d", b: "Vector3d", t: float) -> "Vector3d":
        """Linear interpolation from a to b, t clamped to [0, 1]."""
        t = Mathd.clamp01(t)
        return Vector3d(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t, a.z + (b.z - a.z) * t)

    @staticmethod
    def move_towards(current: "Vector3d", target: "Vector3d", max_distance_delta: float) -> "Vector3d":
        """Move current towards target by at most max_distance_delta."""
        delta = target - current
        distance = delta.magnitude
        if distance <= max_distance_delta or distance == 0.0:
            return target.copy()
        return current + delta / distance * max_distance_delta

    @staticmethod
    def smooth_damp(
        current: "Vector3d",
        target: "Vector3d",
        current_velocity: "Vector3d",
        smooth_time: float,
        delta_time: float,
        max_speed: float = math.inf,
    ) -> Tuple["Vector3d", "Vector3d"]:
        """Critically damped approach of current towards target.

        Args:
            current: Current position
            target: Position being approached
            current_velocity: Velocity returned by the previous call
            smooth_time: Approximate time to reach the target
            delta_time: Time since the previous call
            max_speed: Optional speed cap

        Returns:
            Tuple of (new_position, new_velocity)
        """
        smooth_time = max(0.0001, smooth_time)
        omega = 2.0 / smooth_time
        x = omega * delta_time
        decay = 1.0 / (1.0 + x + 0.479999989271164 * x * x + 0.234999999403954 * x * x * x)
        original_target = target
        change = Vector3d.clamp_magnitude(current - target, max_speed * smooth_time)
        target = current - change
        temp = (current_velocity + omega * change) * delta_time
        new_velocity = (current_velocity - omega * temp) * decay
        result = target + (change + temp) * decay
        # Prevent overshooting
        if Vector3d.dot(original_target - current, result - original_target) > 0.0:
            result = original_target.copy()
            new_velocity = Vector3d.zero()
        return result, new_velocity

    @staticmethod
    def scaled(a: "Vector3d", b: "Vector3d") -> "Vector3d":
        """Component-wise product."""
        return Vector3d(a.x * b.x, a.y * b.y, a.z * b.z)

    @staticmethod
    def cross(lhs: "Vector3d", rhs: "Vector3d") -> "Vector3d":
        return Vector3d(
            lhs.y * rhs.z - lhs.z * rhs.y,
            lhs.z * rhs.x - lhs.x * rhs.z,
            lhs.x * rhs.y - lhs.y * rhs.x,
        )

    @staticmethod
    def reflect(in_direction: "Vector3d", in_normal: "Vector3d") -> "Vector3d":
        """Reflect a vector off the plane defined by a normal."""
        return -2.0 * Vector3d.dot(in_normal, in_direction) * in_normal + in_direction

    @staticmethod
    def normalize_of(value: "Vector3d") -> "Vector3d":
        """Unit vector in the direction of value; zero when |value| <= K_EPSILON."""
        length = value.magnitude
        if length > Vector3d.K_EPSILON:
            return value / length
        return Vector3d.zero()

    @staticmethod
    def dot(lhs: "Vector3d", rhs: "Vector3d") -> float:
        return lhs.x * rhs.x + lhs.y * rhs.y + lhs.z * rhs.z

    @staticmethod
    def project(vector: "Vector3d", on_normal: "Vector3d") -> "Vector3d":
        """Project a vector onto another vector."""
        sqr_length = Vector3d.dot(on_normal, on_normal)
        if sqr_length < Mathd.EPSILON:
            return Vector3d.zero()
        return on_normal * Vector3d.dot(vector, on_normal) / sqr_length

    @staticmethod
    def exclude(exclude_this: "Vector3d", from_that: "Vector3d") -> "Vector3d":
        """Remove the component of from_that that lies along exclude_this."""
        return from_that - Vector3d.project(from_that, exclude_this)

    @staticmethod
    def angle(a: "Vector3d", b: "Vector3d") -> float:
        """Unsigned angle in degrees between a and b."""
        cosine = Mathd.clamp(Vector3d.dot(a.normalized, b.normalized), -1.0, 1.0)
        return math.acos(cosine) * Mathd.RAD2DEG

    @staticmethod
    def distance(a: "Vector3d", b: "Vector3d") -> float:
        return (a - b).magnitude

    @staticmethod
    def clamp_magnitude(vector: "Vector3d", max_length: float) -> "Vector3d":
        """Copy of vector with its length capped at max_length, direction unchanged."""
        if vector.sqr_magnitude > max_length * max_length:
            return vector.normalized * max_length
        return vector.copy()

    @staticmethod
    def magnitude_of(a: "Vector3d") -> float:
        return a.magnitude

    @staticmethod
    def sqr_magnitude_of(a: "Vector3d") -> float:
        return a.sqr_magnitude

    @staticmethod
    def min(lhs: "Vector3d", rhs: "Vector3d") -> "Vector3d":
        return Vector3d(min(lhs.x, rhs.x), min(lhs.y, rhs.y), min(lhs.z, rhs.z))

    @staticmethod
    def max(lhs: "Vector3d", rhs: "Vector3d") -> "Vector3d":
        return Vector3d(max(lhs.x, rhs.x), max(lhs.y, rhs.y), max(lhs.z, rhs.z))
