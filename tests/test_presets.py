"""Tests for preset scenarios."""

import numpy as np
import pytest

from gravity_lace.constants import EARTH_MOON_DISTANCE
from gravity_lace.presets import RandomCluster, SolarSystem, TwoBodyOrbit, get_preset, list_presets


def assert_center_of_mass_frame(positions, velocities, masses):
    total = np.sum(masses)
    com = np.sum(masses[:, np.newaxis] * positions, axis=0) / total
    com_v = np.sum(masses[:, np.newaxis] * velocities, axis=0) / total
    scale = np.max(np.linalg.norm(positions, axis=1))
    v_scale = np.max(np.linalg.norm(velocities, axis=1))
    assert np.allclose(com, 0.0, atol=1e-12 * scale)
    assert np.allclose(com_v, 0.0, atol=1e-12 * v_scale)


def test_two_body_orbit():
    """Test two-body preset generation."""
    preset = TwoBodyOrbit()
    positions, velocities, masses = preset.generate()

    assert positions.shape == (2, 3)
    assert velocities.shape == (2, 3)
    assert masses.shape == (2,)
    assert preset.names == ["primary", "secondary"]
    assert np.isclose(np.linalg.norm(positions[1] - positions[0]), EARTH_MOON_DISTANCE)
    assert_center_of_mass_frame(positions, velocities, masses)


def test_two_body_period():
    """The Earth/Moon sidereal period is about 27 days."""
    period_days = TwoBodyOrbit().period / 86400.0
    assert 26.0 < period_days < 29.0

    preset = TwoBodyOrbit(primary_mass=0.5, secondary_mass=0.5, separation=1.0, gravitational_constant=1.0)
    assert np.isclose(preset.period, 2.0 * np.pi)


def test_solar_system():
    """Test solar system preset generation."""
    preset = SolarSystem(seed=42)
    positions, velocities, masses = preset.generate()

    assert len(masses) == 9
    assert preset.names[0] == "sun"
    assert preset.names[-1] == "neptune"
    assert masses[0] == np.max(masses)
    assert_center_of_mass_frame(positions, velocities, masses)


def test_solar_system_reproducible():
    a = SolarSystem(seed=7).generate()
    b = SolarSystem(seed=7).generate()
    for x, y in zip(a, b):
        assert np.array_equal(x, y)


def test_solar_system_subset():
    preset = SolarSystem(n_planets=3, seed=1)
    _, _, masses = preset.generate()
    assert len(masses) == 4
    assert preset.names == ["sun", "mercury", "venus", "earth"]

    with pytest.raises(ValueError):
        SolarSystem(n_planets=9)


def test_cluster():
    """Test random cluster preset generation."""
    preset = RandomCluster(n_bodies=30, seed=42)
    positions, velocities, masses = preset.generate()

    assert positions.shape == (30, 3)
    assert velocities.shape == (30, 3)
    assert np.allclose(masses, masses[0])
    assert_center_of_mass_frame(positions, velocities, masses)

    with pytest.raises(ValueError):
        RandomCluster(n_bodies=0)


def test_preset_registry():
    assert list_presets() == ["two_body", "solar_system", "cluster"]
    assert isinstance(get_preset("two_body"), TwoBodyOrbit)
    assert isinstance(get_preset("Cluster", n_bodies=3, seed=1), RandomCluster)
    with pytest.raises(ValueError):
        get_preset("galaxy")
