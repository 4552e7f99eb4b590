# Generic imports
import threading
import numpy as np
import pytest

# Custom imports
from chiflow.src.flow.grid             import FlowGrid
from chiflow.src.flow.geometry         import *
from chiflow.src.flow.rasterizer       import Rasterizer
from chiflow.src.flow.potential_solver import *

def prepared(geometry, n=50):
    g = FlowGrid(n, n)
    Rasterizer(g).rasterize(geometry)

    return g

def test_defaults():
    s = PotentialSolver(FlowGrid(5, 5))

    assert s.iterations == 600
    assert s.omega == pytest.approx(1.7)
    assert s.tol is None

def test_no_source_means_no_flow(enclosed_room):
    geom = RoomGeometry(enclosed_room.bounds, enclosed_room.walls,
                        furniture=[Furniture(20, 20, 5, 5, element="plant"),
                                   Furniture(30, 30, 5, 5, resistance=0.6, sharp_corner=True)])
    g = prepared(geom)
    result = PotentialSolver(g).solve()

    assert result.sinks == 0
    assert result.converged
    assert not g.potential.any()
    assert g.get_max_speed() == 0.0
    assert g.ready

def test_sources_keep_fixed_potential(single_door_room):
    g = prepared(single_door_room)
    result = PotentialSolver(g).solve()

    assert result.iterations == 600
    assert g.potential[g.idx(0, 25)] == pytest.approx(100.0)
    assert g.potential[g.idx(1, 25)] == pytest.approx(80.0)

def test_far_wall_cells_become_sinks(single_door_room):
    g = prepared(single_door_room)
    result = PotentialSolver(g).solve()

    sinks = g.source < 0.0
    assert result.sinks == np.count_nonzero(sinks)
    assert result.sinks > 0
    assert np.allclose(g.potential[sinks], 100.0*g.source[sinks])
    assert g.potential[sinks].max() < 0.0
    assert g.potential[sinks].min() >= -8.0

    # Right wall is far from the door, the near corner of the left wall is not
    assert g.source[g.idx(48, 25)] < 0.0
    assert g.source[g.idx(2, 25)] == 0.0

def test_potential_stays_between_sink_and_source(single_door_room):
    g = prepared(single_door_room)
    PotentialSolver(g).solve()

    interior = g.field("potential")[1:-1, 1:-1]
    assert interior.max() <= 100.0 + 1.0e-3
    assert interior.min() >= -8.0 - 1.0e-3

def test_tolerance_stops_early(single_door_room):
    g = prepared(single_door_room)
    result = PotentialSolver(g, iterations=5000, tol=1.0e-3, chunk=10).solve()

    assert result.iterations < 5000
    assert result.residual < 1.0e-3
    assert g.ready

def test_iterations_are_configurable(single_door_room):
    g = prepared(single_door_room)
    result = PotentialSolver(g, iterations=30, omega=1.2).solve()

    assert result.iterations == 30
    assert g.get_max_speed() > 0.0

def test_cancelled_solve_leaves_grid_not_ready(single_door_room):
    g = prepared(single_door_room)
    cancel = threading.Event()
    cancel.set()
    solver = PotentialSolver(g)

    assert solver.solve(cancel) is None
    assert not g.ready
    assert solver.result is None
