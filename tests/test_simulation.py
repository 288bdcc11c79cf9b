"""Tests for the simulation context (create / tick / destroy)."""

import logging
import threading

import numpy as np
import pytest

from gravity_lace.exceptions import InvalidBodyError, InvalidTimeStepError, StaleHandleError
from gravity_lace.physics.integrators.base import Integrator
from gravity_lace.physics.integrators.symplectic_euler import SymplecticEulerIntegrator
from gravity_lace.physics.simulation import Simulation
from gravity_lace.utils.config import Config


class RecordingIntegrator(Integrator):
    """Records what it was asked to step and optionally runs a hook mid-step."""

    def __init__(self, hook=None):
        self.hook = hook
        self.calls = []

    @property
    def name(self) -> str:
        return "recording"

    @property
    def order(self) -> int:
        return 0

    def step(self, bodies, dt):
        self.calls.append((list(bodies), dt))
        if self.hook is not None:
            self.hook()


def test_create_and_destroy():
    sim = Simulation()
    handle = sim.create_body(5.0, position=(1.0, 0.0, 0.0), name="a")

    assert sim.n_bodies == 1
    assert sim.body(handle).name == "a"
    assert sim.position(handle).to_tuple() == (1.0, 0.0, 0.0)

    sim.destroy_body(handle)
    assert sim.n_bodies == 0
    with pytest.raises(StaleHandleError):
        sim.body(handle)
    with pytest.raises(StaleHandleError):
        sim.destroy_body(handle)


def test_invalid_body_leaves_registry_unchanged():
    sim = Simulation()
    with pytest.raises(InvalidBodyError):
        sim.create_body(-1.0)
    with pytest.raises(InvalidBodyError):
        sim.create_body(1.0, position=(float("nan"), 0.0, 0.0))
    assert sim.n_bodies == 0


def test_position_is_a_copy():
    sim = Simulation()
    handle = sim.create_body(1.0, position=(1.0, 2.0, 3.0))
    sim.position(handle).set(0.0, 0.0, 0.0)
    assert sim.position(handle).to_tuple() == (1.0, 2.0, 3.0)


@pytest.mark.parametrize("dt", [-1.0, float("nan"), float("inf"), "soon", None, True])
def test_invalid_dt(dt):
    sim = Simulation()
    sim.create_body(1.0)
    with pytest.raises(InvalidTimeStepError):
        sim.tick(dt)
    assert sim.tick_count == 0


def test_invalid_dt_is_value_error():
    with pytest.raises(ValueError):
        Simulation().tick(-5.0)


def test_zero_dt_counts_as_a_tick():
    sim = Simulation()
    handle = sim.create_body(1.0, velocity=(1.0, 0.0, 0.0))
    sim.tick(0.0)
    assert sim.tick_count == 1
    assert sim.time == 0.0
    assert sim.position(handle).to_tuple() == (0.0, 0.0, 0.0)


def test_tick_advances_time():
    integrator = RecordingIntegrator()
    sim = Simulation(integrator)
    sim.create_body(1.0)
    sim.tick(2.0)
    sim.tick(3.0)

    assert sim.time == 5.0
    assert sim.tick_count == 2
    assert [dt for _, dt in integrator.calls] == [2.0, 3.0]


def test_tick_with_no_bodies():
    sim = Simulation()
    sim.tick(10.0)
    assert sim.tick_count == 1


def test_on_tick_callback():
    sim = Simulation()
    seen = []
    sim.on_tick_callback = lambda s: seen.append(s.tick_count)
    sim.tick(1.0)
    sim.tick(1.0)
    assert seen == [1, 2]


def test_destroy_from_callback_applies_immediately():
    sim = Simulation()
    handle = sim.create_body(1.0)
    sim.on_tick_callback = lambda s: s.destroy_body(handle)
    sim.tick(1.0)
    assert sim.n_bodies == 0
    assert sim.pending_removals == []


def test_destroy_during_tick_is_deferred(caplog):
    """A removal requested while the integrator runs waits for the tick boundary."""
    state = {}

    def destroy_mid_step():
        sim.destroy_body(state["handle"])
        state["still_registered"] = state["handle"] in sim.registry
        state["pending"] = sim.pending_removals

    integrator = RecordingIntegrator(hook=destroy_mid_step)
    sim = Simulation(integrator)
    state["handle"] = sim.create_body(1.0)
    keep = sim.create_body(2.0)

    with caplog.at_level(logging.WARNING, logger="gravity_lace"):
        sim.tick(1.0)

    assert state["still_registered"]
    assert state["pending"] == [state["handle"]]
    assert len(integrator.calls[0][0]) == 2
    assert sim.handles() == [keep]
    assert sim.pending_removals == []
    assert "deferred" in caplog.text


def test_destroy_from_other_thread_during_tick():
    started = threading.Event()
    destroyed = threading.Event()

    def wait_for_destroy():
        started.set()
        assert destroyed.wait(timeout=5.0)

    sim = Simulation(RecordingIntegrator(hook=wait_for_destroy))
    handle = sim.create_body(1.0)

    def destroyer():
        started.wait(timeout=5.0)
        sim.destroy_body(handle)
        destroyed.set()

    thread = threading.Thread(target=destroyer)
    thread.start()
    sim.tick(1.0)
    thread.join(timeout=5.0)

    assert sim.n_bodies == 0


def test_body_created_mid_tick_joins_next_tick():
    sim_holder = {}

    def create_mid_step():
        if "new" not in sim_holder:
            sim_holder["new"] = sim_holder["sim"].create_body(3.0)

    integrator = RecordingIntegrator(hook=create_mid_step)
    sim = Simulation(integrator)
    sim_holder["sim"] = sim
    sim.create_body(1.0)

    sim.tick(1.0)
    sim.tick(1.0)

    assert len(integrator.calls[0][0]) == 1
    assert len(integrator.calls[1][0]) == 2


def test_integrator_failure_still_flushes_removals():
    def fail():
        sim.destroy_body(handle)
        raise RuntimeError("boom")

    sim = Simulation(RecordingIntegrator(hook=fail))
    handle = sim.create_body(1.0)

    with pytest.raises(RuntimeError):
        sim.tick(1.0)
    assert sim.n_bodies == 0
    assert sim.tick_count == 0


def test_populate_and_get_state():
    sim = Simulation()
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    velocities = np.array([[0.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    masses = np.array([1.0, 2.0])

    handles = sim.populate(positions, velocities, masses, names=["a", "b"])

    assert len(handles) == 2
    assert sim.body(handles[1]).name == "b"
    p, v, m = sim.get_state()
    assert np.allclose(p, positions)
    assert np.allclose(v, velocities)
    assert np.allclose(m, masses)


def test_populate_shape_mismatch():
    sim = Simulation()
    with pytest.raises(ValueError):
        sim.populate(np.zeros((2, 3)), np.zeros((3, 3)), np.ones(2))
    with pytest.raises(ValueError):
        sim.populate(np.zeros((2, 2)), np.zeros((2, 2)), np.ones(2))


def test_get_state_empty():
    positions, velocities, masses = Simulation().get_state()
    assert positions.shape == (0, 3)
    assert velocities.shape == (0, 3)
    assert masses.shape == (0,)


def test_from_config():
    sim = Simulation.from_config(Config(substeps=7, kernel="vectorized", gravitational_constant=1.0))
    assert isinstance(sim.integrator, SymplecticEulerIntegrator)
    assert sim.integrator.substeps == 7
    assert sim.integrator.kernel == "vectorized"
    assert sim.integrator.gravitational_constant == 1.0
