# Generic imports
import numpy as np

# Custom imports
from chiflow.src.flow.velocity import *

### ************************************************
### Regular flow grid
### Each cell stores material, source strength, potential,
### velocity, speed and flow modifier in flat parallel buffers
### indexed by y*width + x
class FlowGrid:
    ### ************************************************
    ### Constructor
    def __init__(self, width=200, height=200):
        if (width < 3 or height < 3):
            raise ValueError(f"Grid must be at least 3x3, got {width}x{height}")

        self.width  = int(width)
        self.height = int(height)
        n           = self.width*self.height

        self.material      = np.zeros(n) # 0 = open, 1 = wall, in-between = obstacle
        self.source        = np.zeros(n) # > 0 source, < 0 sink
        self.potential     = np.zeros(n)
        self.vx            = np.zeros(n)
        self.vy            = np.zeros(n)
        self.speed         = np.zeros(n) # velocity magnitude
        self.flow_modifier = np.zeros(n) # > 0 attracts, < 0 disrupts

        # Cleared while a solve is writing the buffers
        self.ready = True

    ### ************************************************
    ### Number of cells
    @property
    def size(self):
        return self.width*self.height

    def idx(self, x, y):
        return y*self.width + x

    def in_bounds(self, x, y):
        return (x >= 0 and x < self.width and y >= 0 and y < self.height)

    ### ************************************************
    ### Reset all buffers
    def clear(self):
        self.material[:]      = 0.0
        self.source[:]        = 0.0
        self.potential[:]     = 0.0
        self.vx[:]            = 0.0
        self.vy[:]            = 0.0
        self.speed[:]         = 0.0
        self.flow_modifier[:] = 0.0

    ### ************************************************
    ### Setters, silently ignoring out-of-bounds cells
    def set_wall(self, x, y):
        if self.in_bounds(x, y): self.material[self.idx(x, y)] = 1.0

    def set_obstacle(self, x, y, resistance=0.5):
        if self.in_bounds(x, y): self.material[self.idx(x, y)] = resistance

    def set_source(self, x, y, strength=1.0):
        if self.in_bounds(x, y): self.source[self.idx(x, y)] = strength

    def set_flow_modifier(self, x, y, mod):
        if self.in_bounds(x, y): self.flow_modifier[self.idx(x, y)] = mod

    ### ************************************************
    ### Queries
    def is_wall(self, x, y):
        if not self.in_bounds(x, y):
            return True

        return self.material[self.idx(x, y)] >= 1.0

    def is_obstacle(self, x, y):
        if not self.in_bounds(x, y):
            return False

        v = self.material[self.idx(x, y)]
        return (v > 0.0 and v < 1.0)

    def get_speed(self, x, y):
        if not self.in_bounds(x, y):
            return 0.0

        return float(self.speed[self.idx(x, y)])

    def get_velocity(self, x, y):
        u, v = cell_velocity(self.vx, self.vy, self.width, self.height, int(x), int(y))
        return float(u), float(v)

    def get_velocity_at(self, fx, fy):
        u, v = sample_velocity(self.vx, self.vy, self.width, self.height, float(fx), float(fy))
        return float(u), float(v)

    def get_max_speed(self):
        return float(max_speed(self.speed))

    ### ************************************************
    ### Read-only (height, width) view of a buffer, for renderers
    def field(self, name):
        arr      = getattr(self, name)
        view     = arr.reshape(self.height, self.width).view()
        view.flags.writeable = False

        return view

    ### ************************************************
    ### Copy of every buffer, keyed by name
    def snapshot(self):
        return {name: getattr(self, name).copy() for name in FIELDS}

FIELDS = ("material", "source", "potential", "vx", "vy", "speed", "flow_modifier")
