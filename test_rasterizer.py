# Generic imports
import numpy as np
import pytest

# Custom imports
from chiflow.src.flow.grid       import FlowGrid
from chiflow.src.flow.geometry   import *
from chiflow.src.flow.rasterizer import *

def rasterized(geometry, n):
    g = FlowGrid(n, n)
    Rasterizer(g).rasterize(geometry)

    return g

def ring_is_wall(g):
    m = g.field("material")
    return (m[0, :].min() == 1.0 and m[-1, :].min() == 1.0 and
            m[:, 0].min() == 1.0 and m[:, -1].min() == 1.0)

def test_bresenham_endpoints_and_zero_length():
    pts = bresenham(0, 0, 4, 2)

    assert tuple(pts[0])  == (0, 0)
    assert tuple(pts[-1]) == (4, 2)
    assert len(pts) == 5
    assert bresenham(3, 4, 3, 4).tolist() == [[3, 4]]

def test_ring_is_wall_even_with_doors_on_it(single_door_room, furnished_room):
    assert ring_is_wall(rasterized(single_door_room, 50))
    assert ring_is_wall(rasterized(furnished_room, 100))
    assert ring_is_wall(rasterized(RoomGeometry(RoomBounds(0, 0, 1, 1), []), 10))

def test_rasterizing_twice_gives_the_same_grid(furnished_room):
    g = FlowGrid(100, 100)
    r = Rasterizer(g)
    r.rasterize(furnished_room)
    first = g.snapshot()
    g.potential[:] = 5.0
    r.rasterize(furnished_room)

    for name, arr in g.snapshot().items():
        assert np.array_equal(arr, first[name]), name

def test_walls_are_thickened_to_neighbours():
    geom = RoomGeometry(RoomBounds(0, 0, 20, 20), [Wall(5, 10, 15, 10)])
    g    = rasterized(geom, 20)

    for x in range(5, 16):
        assert g.is_wall(x, 9) and g.is_wall(x, 10) and g.is_wall(x, 11)
    assert g.is_wall(4, 10) and g.is_wall(16, 10)
    assert not g.is_wall(4, 9)
    assert not g.is_wall(5, 12)

def test_zero_length_wall_marks_a_cross():
    geom = RoomGeometry(RoomBounds(0, 0, 20, 20), [Wall(8, 8, 8, 8)])
    g    = rasterized(geom, 20)

    assert np.count_nonzero(g.field("material")[1:-1, 1:-1]) == 5

def test_door_carves_wall_and_sets_sources(furnished_room):
    g = rasterized(furnished_room, 100)

    # Door from (10, 40) to (10, 55)
    for y in range(40, 56):
        assert g.material[g.idx(10, y)] == 0.0
        assert g.source[g.idx(10, y)]   == 1.0
    assert g.source[g.idx(9, 45)]  == pytest.approx(0.8)
    assert g.source[g.idx(11, 45)] == pytest.approx(0.8)
    assert g.source[g.idx(10, 39)] == pytest.approx(0.8)
    assert not g.is_wall(11, 45)
    assert g.is_wall(10, 38)

def test_window_is_a_weaker_source(furnished_room):
    g = rasterized(furnished_room, 100)

    assert g.source[g.idx(50, 10)] == pytest.approx(0.4)
    assert g.source[g.idx(50, 9)]  == pytest.approx(0.2)
    assert g.source[g.idx(50, 11)] == pytest.approx(0.2)
    assert not g.is_wall(50, 10)

def test_door_on_border_keeps_its_source(single_door_room):
    g = rasterized(single_door_room, 50)

    assert g.is_wall(0, 25)
    assert g.source[g.idx(0, 25)] == 1.0
    assert g.source[g.idx(1, 25)] == pytest.approx(0.8)
    assert not g.is_wall(1, 25)
    assert g.is_wall(1, 19)

def test_furniture_elements(furnished_room):
    g = rasterized(furnished_room, 100)

    # Solid table
    assert g.material[g.idx(35, 35)] == pytest.approx(0.7)
    assert g.is_obstacle(30, 40)
    assert not g.is_obstacle(41, 35)

    # Plant attracts
    assert g.material[g.idx(63, 63)]      == 0.0
    assert g.flow_modifier[g.idx(63, 63)] == pytest.approx(0.5)

    # Mirror emits
    assert g.source[g.idx(74, 32)]   == pytest.approx(0.3)
    assert g.material[g.idx(74, 32)] == 0.0

    # Rug is light and attracting
    assert g.material[g.idx(45, 70)]      == pytest.approx(0.15)
    assert g.flow_modifier[g.idx(45, 70)] == pytest.approx(0.2)

def test_furniture_is_clamped_to_interior(furnished_room):
    g = rasterized(furnished_room, 100)

    assert g.material[g.idx(98, 98)] == pytest.approx(0.5)
    assert g.material[g.idx(85, 85)] == pytest.approx(0.5)
    assert g.is_wall(99, 98)
    assert g.is_wall(98, 99)

def test_sharp_corners_add_a_disrupting_halo(furnished_room):
    g   = rasterized(furnished_room, 100)
    mod = lambda x, y: g.flow_modifier[g.idx(x, y)]

    assert mod(30, 30) == pytest.approx(-0.6)
    assert mod(31, 30) == pytest.approx(-0.45)
    assert mod(33, 30) == pytest.approx(-0.15)
    assert mod(34, 30) == 0.0
    assert mod(40, 40) == pytest.approx(-0.6)
    assert mod(35, 35) == 0.0

def test_rasterize_leaves_no_potential_or_velocity(furnished_room):
    g = FlowGrid(100, 100)
    g.potential[:] = 1.0
    g.speed[:]     = 1.0
    Rasterizer(g).rasterize(furnished_room)

    assert not g.potential.any()
    assert not g.speed.any()
