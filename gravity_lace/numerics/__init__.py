"""Double-precision vector and scalar math."""

from gravity_lace.numerics.mathd import Mathd
from gravity_lace.numerics.vector2d import Vector2d
from gravity_lace.numerics.vector3d import Vector3d

__all__ = ["Mathd", "Vector2d", "Vector3d"]
