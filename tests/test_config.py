"""Tests for configuration loading and saving."""

import json

import pytest
import yaml

from gravity_lace.physics.integrators.symplectic_euler import SymplecticEulerIntegrator
from gravity_lace.physics.space import Space
from gravity_lace.utils.config import Config, load_config, save_config


def test_defaults():
    config = Config()
    assert config.gravitational_constant == 6.674e-11
    assert config.substeps == 100
    assert config.kernel == "loop"
    assert config.preset == "two_body"
    assert config.preset_params == {}


@pytest.mark.parametrize("kwargs", [
    {"substeps": 0},
    {"gravitational_constant": -1.0},
    {"distance_scale": 0.0},
    {"time_scale": float("inf")},
    {"dt": -1.0},
    {"mass_epsilon": -1e-3},
    {"kernel": "cuda"},
    {"ticks": -1},
    {"debug_every": 0},
])
def test_validation(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)


def test_factories():
    config = Config(gravitational_constant=1.0, substeps=4, kernel="vectorized", distance_scale=2.0, time_scale=3.0)

    integrator = config.make_integrator()
    assert isinstance(integrator, SymplecticEulerIntegrator)
    assert integrator.substeps == 4
    assert integrator.kernel == "vectorized"

    space = config.make_space()
    assert isinstance(space, Space)
    assert space.distance_scale == 2.0
    assert space.time_scale == 3.0


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_save_and_load(tmp_path, suffix):
    config = Config(substeps=12, dt=60.0, preset="cluster", preset_params={"n_bodies": 5}, seed=3)
    path = tmp_path / f"config{suffix}"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded == config


def test_load_partial_yaml(tmp_path):
    path = tmp_path / "partial.yml"
    path.write_text(yaml.safe_dump({"substeps": 8, "kernel": "vectorized"}))

    config = load_config(str(path))
    assert config.substeps == 8
    assert config.kernel == "vectorized"
    assert config.ticks == Config().ticks


def test_load_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == Config()


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"substeps": 4, "integrator": "leapfrog"}))
    with pytest.raises(ValueError, match="integrator"):
        load_config(str(path))


def test_exponent_without_dot_in_yaml(tmp_path):
    """YAML 1.1 loads 1e-10 as a string; it still configures a float."""
    path = tmp_path / "units.yaml"
    path.write_text("gravitational_constant: 1e-10\nsubsteps: '4'\ndt: 60\n")

    config = load_config(str(path))
    assert config.gravitational_constant == 1e-10
    assert isinstance(config.gravitational_constant, float)
    assert config.substeps == 4
    assert isinstance(config.dt, float)


@pytest.mark.parametrize("kwargs", [
    {"gravitational_constant": "heavy"},
    {"gravitational_constant": None},
    {"substeps": 2.5},
    {"ticks": True},
    {"seed": "abc"},
    {"log_level": "chatty"},
])
def test_malformed_values_raise_value_error(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)
