# Generic imports
import threading
import pytest

# Custom imports
from chiflow.src.core.simulation       import *
from chiflow.src.flow.potential_solver import SolveResult

@pytest.fixture
def sim():
    s = Simulation(50, 50, max_particles=40, seed=0)
    yield s
    s.close()

def test_simulate_on_caller_thread(sim, single_door_room):
    result = sim.simulate(single_door_room)

    assert isinstance(result, SolveResult)
    assert sim.ready
    assert sim.result is result
    assert sim.geometry is single_door_room
    assert sim.step()
    assert sim.particles.count == 40

def test_submit_runs_in_background(sim, single_door_room):
    future = sim.submit(single_door_room)
    result = future.result(timeout=60)

    assert isinstance(result, SolveResult)
    assert not sim.busy
    assert sim.ready
    assert sim.wait() is result

def test_newer_request_supersedes_running_one(sim, single_door_room, enclosed_room):
    gate    = threading.Event()
    entered = threading.Event()
    rasterize = sim.rasterizer.rasterize

    def gated(geometry):
        entered.set()
        gate.wait(10)
        rasterize(geometry)

    sim.rasterizer.rasterize = gated
    first = sim.submit(enclosed_room)
    assert entered.wait(10)

    # Particles are frozen while a solve is in flight
    assert sim.busy
    assert not sim.ready
    assert not sim.step()

    second = sim.submit(single_door_room)
    gate.set()

    assert first.result(timeout=60) is None
    assert isinstance(second.result(timeout=60), SolveResult)
    assert sim.geometry is single_door_room
    assert sim.ready
    assert sim.step()

def test_cancelled_job_leaves_particles_frozen(sim, single_door_room):
    sim.simulate(single_door_room)
    gate    = threading.Event()
    entered = threading.Event()
    rasterize = sim.rasterizer.rasterize

    def gated(geometry):
        entered.set()
        gate.wait(10)
        rasterize(geometry)

    sim.rasterizer.rasterize = gated
    future = sim.submit(single_door_room)
    assert entered.wait(10)
    sim.cancel()
    gate.set()

    assert future.result(timeout=60) is None
    assert not sim.busy
    assert not sim.grid.ready
    assert not sim.step()

def test_closed_simulation_refuses_work(single_door_room):
    with Simulation(20, 20) as s:
        pass

    assert s.closed
    with pytest.raises(RuntimeError):
        s.submit(single_door_room)
    with pytest.raises(RuntimeError):
        s.simulate(single_door_room)
