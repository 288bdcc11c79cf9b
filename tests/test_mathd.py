"""Tests for the scalar math helpers."""

import math

import pytest

from gravity_lace.numerics import Mathd, Vector2d


def test_approximately():
    assert Mathd.approximately(1.0, 1.0 + 1e-7)
    assert not Mathd.approximately(1.0, 1.0001)
    assert Mathd.approximately(0.0, 0.0)
    assert Mathd.approximately(1e12, 1e12 + 1.0)


def test_clamp_and_lerp():
    assert Mathd.clamp(5.0, 0.0, 1.0) == 1.0
    assert Mathd.clamp(-5.0, 0.0, 1.0) == 0.0
    assert Mathd.clamp01(0.25) == 0.25
    assert Mathd.lerp(0.0, 10.0, 0.5) == 5.0
    assert Mathd.lerp(0.0, 10.0, 3.0) == 10.0
    assert Mathd.lerp(0.0, 10.0, -3.0) == 0.0


@pytest.mark.parametrize("a, b, value, expected", [
    (0.0, 10.0, 5.0, 0.5),
    (0.0, 10.0, -1.0, 0.0),
    (0.0, 10.0, 11.0, 1.0),
    (10.0, 0.0, 5.0, 0.5),
    (10.0, 0.0, 2.0, 0.8),
    (5.0, 5.0, 7.0, 0.0),
])
def test_inverse_lerp(a, b, value, expected):
    assert math.isclose(Mathd.inverse_lerp(a, b, value), expected)


def test_repeat_and_ping_pong():
    assert math.isclose(Mathd.repeat(370.0, 360.0), 10.0)
    assert math.isclose(Mathd.repeat(-10.0, 360.0), 350.0)
    assert math.isclose(Mathd.ping_pong(3.0, 2.0), 1.0)
    assert math.isclose(Mathd.ping_pong(1.5, 2.0), 1.5)


def test_angles():
    assert math.isclose(Mathd.delta_angle(10.0, 350.0), -20.0)
    assert math.isclose(Mathd.delta_angle(350.0, 10.0), 20.0)
    assert math.isclose(Mathd.lerp_angle(350.0, 10.0, 0.5), 360.0)
    assert math.isclose(Mathd.move_towards_angle(350.0, 10.0, 5.0), 355.0)


def test_move_towards():
    assert Mathd.move_towards(0.0, 10.0, 3.0) == 3.0
    assert Mathd.move_towards(0.0, -10.0, 3.0) == -3.0
    assert Mathd.move_towards(0.0, 2.0, 3.0) == 2.0


def test_smooth_step():
    assert Mathd.smooth_step(0.0, 1.0, 0.5) == 0.5
    assert Mathd.smooth_step(0.0, 1.0, 2.0) == 1.0
    assert Mathd.smooth_step(0.0, 1.0, 0.25) < 0.25


def test_min_max_sign():
    assert Mathd.min() == 0.0
    assert Mathd.max() == 0.0
    assert Mathd.min(3.0, 1.0, 2.0) == 1.0
    assert Mathd.max(3.0, 1.0, 2.0) == 3.0
    assert Mathd.sign(0.0) == 1.0
    assert Mathd.sign(-2.0) == -1.0


def test_rounding():
    """round uses banker's rounding for halves."""
    assert Mathd.round(2.5) == 2.0
    assert Mathd.round(3.5) == 4.0
    assert Mathd.round_to_int(3.5) == 4
    assert Mathd.floor_to_int(-1.5) == -2
    assert Mathd.ceil_to_int(-1.5) == -1
    assert Mathd.ceil(1.2) == 2.0
    assert Mathd.floor(1.8) == 1.0


def test_logarithms():
    assert math.isclose(Mathd.log(8.0, 2.0), 3.0)
    assert math.isclose(Mathd.log(Mathd.E), 1.0)
    assert math.isclose(Mathd.log10(1000.0), 3.0)


def test_gamma():
    assert math.isclose(Mathd.gamma(0.5, 1.0, 2.0), 0.25)
    assert math.isclose(Mathd.gamma(-0.5, 1.0, 2.0), -0.25)
    assert Mathd.gamma(2.0, 1.0, 2.0) == 2.0


def test_smooth_damp_converges():
    value, velocity = 0.0, 0.0
    for _ in range(1000):
        value, velocity = Mathd.smooth_damp(value, 10.0, velocity, 0.3, 0.02)
    assert math.isclose(value, 10.0, abs_tol=1e-9)


def test_smooth_damp_does_not_overshoot():
    value, velocity = 0.0, 0.0
    for _ in range(200):
        value, velocity = Mathd.smooth_damp(value, 1.0, velocity, 0.1, 0.05)
        assert value <= 1.0


def test_smooth_damp_angle_wraps():
    value, velocity = Mathd.smooth_damp_angle(350.0, 10.0, 0.0, 0.1, 0.02)
    assert value > 350.0


def test_line_intersection():
    point = Mathd.line_intersection(
        Vector2d(0.0, 0.0), Vector2d(1.0, 1.0), Vector2d(0.0, 1.0), Vector2d(1.0, 0.0)
    )
    assert point == Vector2d(0.5, 0.5)

    parallel = Mathd.line_intersection(
        Vector2d(0.0, 0.0), Vector2d(1.0, 0.0), Vector2d(0.0, 1.0), Vector2d(1.0, 1.0)
    )
    assert parallel is None


def test_line_segment_intersection():
    crossing = Mathd.line_segment_intersection(
        Vector2d(0.0, 0.0), Vector2d(2.0, 0.0), Vector2d(1.0, -1.0), Vector2d(1.0, 1.0)
    )
    assert crossing == Vector2d(1.0, 0.0)

    # The infinite lines meet at (2, 0), beyond the end of the first segment
    apart = Mathd.line_segment_intersection(
        Vector2d(0.0, 0.0), Vector2d(1.0, 0.0), Vector2d(2.0, 1.0), Vector2d(2.0, -1.0)
    )
    assert apart is None
