"""Double-precision scalar math helpers.

Mirrors the usual game-engine scalar math surface (trigonometry, rounding,
clamping, interpolation and damping) on Python floats, which are IEEE 754
doubles. Functions that would take a ``ref`` argument elsewhere return the
updated value alongside the result instead.
"""

import math
from typing import Optional, Tuple


class Mathd:
    """Namespace of static double-precision scalar functions."""

    E = math.e
    PI = math.pi
    INFINITY = math.inf
    NEGATIVE_INFINITY = -math.inf
    DEG2RAD = math.pi / 180.0
    RAD2DEG = 180.0 / math.pi
    # Smallest positive single-precision float
    EPSILON = 1.401298e-45

    # Floor for the absolute tolerance used by approximately()
    APPROXIMATELY_EPSILON = 1.121039e-44

    @staticmethod
    def sin(d: float) -> float:
        """Sine of angle ``d`` in radians."""
        return math.sin(d)

    @staticmethod
    def cos(d: float) -> float:
        """Cosine of angle ``d`` in radians."""
        return math.cos(d)

    @staticmethod
    def tan(d: float) -> float:
        return math.tan(d)

    @staticmethod
    def asin(d: float) -> float:
        return math.asin(d)

    @staticmethod
    def acos(d: float) -> float:
        return math.acos(d)

    @staticmethod
    def atan(d: float) -> float:
        return math.atan(d)

    @staticmethod
    def atan2(y: float, x: float) -> float:
        """Angle in radians whose tangent is y/x."""
        return math.atan2(y, x)

    @staticmethod
    def sqrt(d: float) -> float:
        return math.sqrt(d)

    @staticmethod
    def abs(d: float) -> float:
        return abs(d)

    @staticmethod
    def min(*values: float) -> float:
        """Smallest of the values; 0 when called without arguments."""
        if not values:
            return 0.0
        result = values[0]
        for value in values[1:]:
            if value < result:
                result = value
        return result

    @staticmethod
    def max(*values: float) -> float:
        """Largest of the values; 0 when called without arguments."""
        if not values:
            return 0.0
        result = values[0]
        for value in values[1:]:
            if value > result:
                result = value
        return result

    @staticmethod
    def pow(d: float, p: float) -> float:
        return math.pow(d, p)

    @staticmethod
    def exp(power: float) -> float:
        return math.exp(power)

    @staticmethod
    def log(d: float, base: Optional[float] = None) -> float:
        """Natural logarithm, or logarithm in ``base`` when given."""
        if base is None:
            return math.log(d)
        return math.log(d, base)

    @staticmethod
    def log10(d: float) -> float:
        return math.log10(d)

    @staticmethod
    def ceil(d: float) -> float:
        return float(math.ceil(d))

    @staticmethod
    def floor(d: float) -> float:
        return float(math.floor(d))

    @staticmethod
    def round(d: float) -> float:
        """Round to the nearest integer, halves to even."""
        return float(round(d))

    @staticmethod
    def ceil_to_int(d: float) -> int:
        return int(math.ceil(d))

    @staticmethod
    def floor_to_int(d: float) -> int:
        return int(math.floor(d))

    @staticmethod
    def round_to_int(d: float) -> int:
        return int(round(d))

    @staticmethod
    def sign(d: float) -> float:
        """1 for zero and positive values, -1 otherwise."""
        return 1.0 if d >= 0.0 else -1.0

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        if value < min_value:
            return min_value
        if value > max_value:
            return max_value
        return value

    @staticmethod
    def clamp01(value: float) -> float:
        if value < 0.0:
            return 0.0
        if value > 1.0:
            return 1.0
        return value

    @staticmethod
    def lerp(a: float, b: float, t: float) -> float:
        """Linear interpolation from a to b, t clamped to [0, 1]."""
        return a + (b - a) * Mathd.clamp01(t)

    @staticmethod
    def lerp_angle(a: float, b: float, t: float) -> float:
        """Lerp between angles in degrees, taking the short way around 360."""
        delta = Mathd.repeat(b - a, 360.0)
        if delta > 180.0:
            delta -= 360.0
        return a + delta * Mathd.clamp01(t)

    @staticmethod
    def move_towards(current: float, target: float, max_delta: float) -> float:
        """Move current towards target by at most max_delta."""
        if abs(target - current) <= max_delta:
            return target
        return current + Mathd.sign(target - current) * max_delta

    @staticmethod
    def move_towards_angle(current: float, target: float, max_delta: float) -> float:
        target = current + Mathd.delta_angle(current, target)
        return Mathd.move_towards(current, target, max_delta)

    @staticmethod
    def smooth_step(a: float, b: float, t: float) -> float:
        """Hermite interpolation between a and b, t clamped to [0, 1]."""
        t = Mathd.clamp01(t)
        t = -2.0 * t * t * t + 3.0 * t * t
        return b * t + a * (1.0 - t)

    @staticmethod
    def gamma(value: float, absmax: float, gamma: float) -> float:
        """Apply a gamma curve to |value| within [0, absmax], keeping the sign."""
        negative = value < 0.0
        magnitude = abs(value)
        if magnitude > absmax:
            return -magnitude if negative else magnitude
        curved = math.pow(magnitude / absmax, gamma) * absmax
        return -curved if negative else curved

    @staticmethod
    def approximately(a: float, b: float) -> bool:
        """Relative comparison with a tolerance of 1e-6 of the larger operand."""
        tolerance = Mathd.max(1e-6 * Mathd.max(abs(a), abs(b)), Mathd.APPROXIMATELY_EPSILON)
        return abs(b - a) < tolerance

    @staticmethod
    def smooth_damp(
        current: float,
        target: float,
        current_velocity: float,
        smooth_time: float,
        delta_time: float,
        max_speed: float = math.inf,
    ) -> Tuple[float, float]:
        """Critically damped approach of current towards target.

        Args:
            current: Current value
            target: Value being approached
            current_velocity: Velocity returned by the previous call (0 initially)
            smooth_time: Approximate time to reach the target
            delta_time: Time since the previous call
            max_speed: Optional speed cap

        Returns:
            Tuple of (new_value, new_velocity)
        """
        smooth_time = max(0.0001, smooth_time)
        omega = 2.0 / smooth_time
        x = omega * delta_time
        decay = 1.0 / (1.0 + x + 0.479999989271164 * x * x + 0.234999999403954 * x * x * x)
        original_target = target
        max_change = max_speed * smooth_time
        change = Mathd.clamp(current - target, -max_change, max_change)
        target = current - change
        temp = (current_velocity + omega * change) * delta_time
        new_velocity = (current_velocity - omega * temp) * decay
        result = target + (change + temp) * decay
        # Prevent overshooting
        if (original_target - current > 0.0) == (result > original_target):
            result = original_target
            new_velocity = 0.0
        return result, new_velocity

    @staticmethod
    def smooth_damp_angle(
        current: float,
        target: float,
        current_velocity: float,
        smooth_time: float,
        delta_time: float,
        max_speed: float = math.inf,
    ) -> Tuple[float, float]:
        """smooth_damp for angles in degrees."""
        target = current + Mathd.delta_angle(current, target)
        return Mathd.smooth_damp(current, target, current_velocity, smooth_time, delta_time, max_speed)

    @staticmethod
    def repeat(t: float, length: float) -> float:
        """Wrap t into [0, length)."""
        return t - math.floor(t / length) * length

    @staticmethod
    def ping_pong(t: float, length: float) -> float:
        """Bounce t back and forth between 0 and length."""
        t = Mathd.repeat(t, length * 2.0)
        return length - abs(t - length)

    @staticmethod
    def inverse_lerp(a: float, b: float, value: float) -> float:
        """Fraction of the way value lies between a and b, clamped to [0, 1]."""
        if a < b:
            if value < a:
                return 0.0
            if value > b:
                return 1.0
            return (value - a) / (b - a)
        if a <= b:
            return 0.0
        if value < b:
            return 1.0
        if value > a:
            return 0.0
        return 1.0 - (value - b) / (a - b)

    @staticmethod
    def delta_angle(current: float, target: float) -> float:
        """Shortest signed difference between two angles in degrees."""
        delta = Mathd.repeat(target - current, 360.0)
        if delta > 180.0:
            delta -= 360.0
        return delta

    @staticmethod
    def line_intersection(p1, p2, p3, p4):
        """Intersection point of the infinite lines p1-p2 and p3-p4.

        Returns:
            Vector2d, or None if the lines are parallel
        """
        from gravity_lace.numerics.vector2d import Vector2d

        dx1 = p2.x - p1.x
        dy1 = p2.y - p1.y
        dx2 = p4.x - p3.x
        dy2 = p4.y - p3.y
        denominator = dx1 * dy2 - dy1 * dx2
        if denominator == 0.0:
            return None
        ox = p3.x - p1.x
        oy = p3.y - p1.y
        t = (ox * dy2 - oy * dx2) / denominator
        return Vector2d(p1.x + t * dx1, p1.y + t * dy1)

    @staticmethod
    def line_segment_intersection(p1, p2, p3, p4):
        """Intersection point of segments p1-p2 and p3-p4.

        Returns:
            Vector2d, or None if the segments do not cross
        """
        from gravity_lace.numerics.vector2d import Vector2d

        dx1 = p2.x - p1.x
        dy1 = p2.y - p1.y
        dx2 = p4.x - p3.x
        dy2 = p4.y - p3.y
        denominator = dx1 * dy2 - dy1 * dx2
        if denominator == 0.0:
            return None
        ox = p3.x - p1.x
        oy = p3.y - p1.y
        t = (ox * dy2 - oy * dx2) / denominator
        if t < 0.0 or t > 1.0:
            return None
        u = (ox * dy1 - oy * dx1) / denominator
        if u < 0.0 or u > 1.0:
            return None
        return Vector2d(p1.x + t * dx1, p1.y + t * dy1)
