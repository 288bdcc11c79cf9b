"""Double-precision 2D vector."""

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


class Vector2d:
    """Representation of 2D vectors and points using doubles.

    Same contract as Vector3d: pure operators, approximate equality,
    ``set``/``scale``/``normalize``/``rotate`` mutate in place.
    """

    K_EPSILON = 1e-5
    K_EPSILON_NORMAL_SQRT = 1e-15

    __slots__ = ("x", "y")

    __hash__ = None
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector2d":
        components = [float(v) for v in values]
        if len(components) != 2:
            raise ValueError(f"Vector2d needs 2 components, got {len(components)}")
        return cls(*components)

    @classmethod
    def from_vector3d(cls, v) -> "Vector2d":
        """Drop the z component."""
        return cls(v.x, v.y)

    def to_vector3d(self):
        from gravity_lace.numerics.vector3d import Vector3d

        return Vector3d(self.x, self.y, 0.0)

    @classmethod
    def zero(cls) -> "Vector2d":
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "Vector2d":
        return cls(1.0, 1.0)

    @classmethod
    def up(cls) -> "Vector2d":
        return cls(0.0, 1.0)

    @classmethod
    def down(cls) -> "Vector2d":
        return cls(0.0, -1.0)

    @classmethod
    def right(cls) -> "Vector2d":
        return cls(1.0, 0.0)

    @classmethod
    def left(cls) -> "Vector2d":
        return cls(-1.0, 0.0)

    def __getitem__(self, index: int) -> float:
        index = _component_index(index)
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        raise IndexError(f"Invalid Vector2d index: {index}")

    def __setitem__(self, index: int, value: float) -> None:
        index = _component_index(index)
        if index == 0:
            self.x = float(value)
        elif index == 1:
            self.y = float(value)
        else:
            raise IndexError(f"Invalid Vector2d index: {index}")

    def __len__(self) -> int:
        return 2

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def sqr_magnitude(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def normalized(self) -> "Vector2d":
        return Vector2d.normalize_of(self)

    def set(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def scale(self, other: "Vector2d") -> None:
        self.x *= other.x
        self.y *= other.y

    def normalize(self) -> None:
        n = Vector2d.normalize_of(self)
        self.x, self.y = n.x, n.y

    def rotate(self, angle: float) -> None:
        """Rotate in place by ``angle`` radians counter-clockwise."""
        sin = math.sin(angle)
        cos = math.cos(angle)
        self.set(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def copy(self) -> "Vector2d":
        return Vector2d(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    def format(self, spec: str) -> str:
        return f"({format(self.x, spec)}, {format(self.y, spec)})"

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Vector2d({self.x!r}, {self.y!r})"

    def __add__(self, other: "Vector2d") -> "Vector2d":
        if not isinstance(other, Vector2d):
            return NotImplemented
        return Vector2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2d") -> "Vector2d":
        if not isinstance(other, Vector2d):
            return NotImplemented
        return Vector2d(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2d":
        return Vector2d(-self.x, -self.y)

    def __mul__(self, d: float) -> "Vector2d":
        if isinstance(d, Vector2d):
            return NotImplemented
        return Vector2d(self.x * d, self.y * d)

    __rmul__ = __mul__

    def __truediv__(self, d: float) -> "Vector2d":
        if isinstance(d, Vector2d):
            return NotImplemented
        return Vector2d(self.x / d, self.y / d)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2d):
            return NotImplemented
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy < Vector2d.K_EPSILON_NORMAL_SQRT

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    @staticmethod
    def lerp(a: "Vector2d", b: "Vector2d", t: float) -> "Vector2d":
        t = Mathd.clamp01(t)
        return Vector2d(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)

    @staticmethod
    def move_towards(current: "Vector2d", target: "Vector2d", max_distance_delta: float) -> "Vector2d":
        delta = target - current
        distance = delta.magnitude
        if distance <= max_distance_delta or distance == 0.0:
            return target.copy()
        return current + delta / distance * max_distance_delta

    @staticmethod
    def smooth_damp(
        current: "Vector2d",
        target: "Vector2d",
        current_velocity: "Vector2d",
        smooth_time: float,
        delta_time: float,
        max_speed: float = math.inf,
    ) -> Tuple["Vector2d", "Vector2d"]:
        """2D counterpart of Vector3d.smooth_damp; returns (new_position, new_velocity)."""
        smooth_time = max(0.0001, smooth_time)
        omega = 2.0 / smooth_time
        x = omega * delta_time
        decay = 1.0 / (1.0 + x + 0.479999989271164 * x * x + 0.234999999403954 * x * x * x)
        original_target = target
        change = Vector2d.clamp_magnitude(current - target, max_speed * smooth_time)
        target = current - change
        temp = (current_velocity + omega * change) * delta_time
        new_velocity = (current_velocity - omega * temp) * decay
        result = target + (change + temp) * decay
        if Vector2d.dot(original_target - current, result - original_target) > 0.0:
            result = original_target.copy()
            new_velocity = Vector2d.zero()
        return result, new_velocity

    @staticmethod
    def scaled(a: "Vector2d", b: "Vector2d") -> "Vector2d":
        return Vector2d(a.x * b.x, a.y * b.y)

    @staticmethod
    def cross(lhs: "Vector2d", rhs: "Vector2d") -> float:
        """Z component of the cross product of the two vectors lifted to 3D."""
        return lhs.x * rhs.y - lhs.y * rhs.x

    @staticmethod
    def rotated(source: "Vector2d", angle: float) -> "Vector2d":
        """Copy of source rotated by ``angle`` radians."""
        result = source.copy()
        result.rotate(angle)
        return result

    @staticmethod
    def reflect(in_direction: "Vector2d", in_normal: "Vector2d") -> "Vector2d":
        return -2.0 * Vector2d.dot(in_normal, in_direction) * in_normal + in_direction

    @staticmethod
    def normalize_of(value: "Vector2d") -> "Vector2d":
        length = value.magnitude
        if length > Vector2d.K_EPSILON:
            return value / length
        return Vector2d.zero()

    @staticmethod
    def dot(lhs: "Vector2d", rhs: "Vector2d") -> float:
        return lhs.x * rhs.x + lhs.y * rhs.y

    @staticmethod
    def angle(a: "Vector2d", b: "Vector2d") -> float:
        """Unsigned angle in degrees between a and b."""
        cosine = Mathd.clamp(Vector2d.dot(a.normalized, b.normalized), -1.0, 1.0)
        return math.acos(cosine) * Mathd.RAD2DEG

    @staticmethod
    def distance(a: "Vector2d", b: "Vector2d") -> float:
        return (a - b).magnitude

    @staticmethod
    def clamp_magnitude(vector: "Vector2d", max_length: float) -> "Vector2d":
        if vector.sqr_magnitude > max_length * max_length:
            return vector.normalized * max_length
        return vector.copy()

    @staticmethod
    def magnitude_of(a: "Vector2d") -> float:
        return a.magnitude

    @staticmethod
    def sqr_magnitude_of(a: "Vector2d") -> float:
        return a.sqr_magnitude

    @staticmethod
    def min(lhs: "Vector2d", rhs: "Vector2d") -> "Vector2d":
        return Vector2d(min(lhs.x, rhs.x), min(lhs.y, rhs.y))

    @staticmethod
    def max(lhs: "Vector2d", rhs: "Vector2d") -> "Vector2d":
        return Vector2d(max(lhs.x, rhs.x), max(lhs.y, rhs.y))
