# Generic imports
import pytest

# Custom imports
from chiflow.src.flow.geometry import *

### ************************************************
### Four walls running along the bounds of a square room
def square_walls(size):
    s = float(size)
    return [Wall(0, 0, s, 0),
            Wall(s, 0, s, s),
            Wall(s, s, 0, s),
            Wall(0, s, 0, 0)]

def square_bounds(size):
    return RoomBounds(0, 0, size, size)

### ************************************************
### 50x50 room with one door of length 10 centered on the left wall
@pytest.fixture
def single_door_room():
    return RoomGeometry(square_bounds(50), square_walls(50),
                        doors=[Door(0, 20, 0, 30)])

### ************************************************
### Closed wall loop, no door and no window
@pytest.fixture
def enclosed_room():
    return RoomGeometry(square_bounds(50), square_walls(50))

### ************************************************
### Room with every kind of geometry, nothing touching the border
@pytest.fixture
def furnished_room():
    walls = [Wall(10, 10, 90, 10), Wall(90, 10, 90, 90),
             Wall(90, 90, 10, 90), Wall(10, 90, 10, 10)]
    return RoomGeometry(RoomBounds(0, 0, 100, 100), walls,
                        doors     = [Door(10, 40, 10, 55)],
                        windows   = [Window(40, 10, 60, 10)],
                        furniture = [Furniture(30, 30, 10, 10, resistance=0.7, sharp_corner=True),
                                     Furniture(60, 60,  6,  6, element="plant"),
                                     Furniture(70, 30,  8,  4, element="mirror"),
                                     Furniture(40, 65, 12,  8, element="rug"),
                                     Furniture(85, 85, 30, 30, resistance=0.5)])
