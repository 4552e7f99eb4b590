# Generic imports
import math
import numpy as np
import numba as nb

# Custom imports
from chiflow.src.core.debug       import dbg
from chiflow.src.element.element  import create_element

log = dbg("rasterizer")

### ************************************************
### Class rasterizing room geometry onto a flow grid
class Rasterizer:
    ### ************************************************
    ### Constructor
    def __init__(self, grid,
                 door_strength        = 1.0,
                 door_edge_strength   = 0.8,
                 window_strength      = 0.4,
                 window_edge_strength = 0.2,
                 halo_radius          = 3,
                 halo_strength        = 0.6):

        self.grid                 = grid
        self.door_strength        = door_strength
        self.door_edge_strength   = door_edge_strength
        self.window_strength      = window_strength
        self.window_edge_strength = window_edge_strength
        self.halo_radius          = halo_radius
        self.halo_strength        = halo_strength

    ### ************************************************
    ### Reset the grid and rewrite it from a geometry snapshot
    def rasterize(self, geometry):
        g = self.grid
        b = geometry.bounds
        g.clear()

        def to_grid(wx, wy):
            return b.to_grid(wx, wy, g.width, g.height)

        def walk(seg):
            x0, y0 = to_grid(seg.x1, seg.y1)
            x1, y1 = to_grid(seg.x2, seg.y2)
            return bresenham(x0, y0, x1, y1)

        # 1. Outer ring first
        force_border(g.material, g.width, g.height)

        # 2. Walls, thickened by one cell each direction
        for wall in geometry.walls:
            stamp_wall(g.material, g.width, g.height, walk(wall))

        # 3. Doors carve the wall and act as strong sources
        for door in geometry.doors:
            stamp_opening(g.material, g.source, g.width, g.height, walk(door),
                          self.door_strength, self.door_edge_strength)

        # 4. Windows are weaker sources
        for win in geometry.windows:
            stamp_opening(g.material, g.source, g.width, g.height, walk(win),
                          self.window_strength, self.window_edge_strength)

        # 5. Furniture
        for item in geometry.furniture:
            self.rasterize_furniture(item, to_grid)

        # 6. Openings on the room border must not break the outer ring
        force_border(g.material, g.width, g.height)

        log.debug("rasterized %d walls, %d doors, %d windows, %d furniture on %dx%d grid",
                  len(geometry.walls), len(geometry.doors), len(geometry.windows),
                  len(geometry.furniture), g.width, g.height)

    ### ************************************************
    ### Stamp one furniture item
    def rasterize_furniture(self, item, to_grid):
        g = self.grid

        tl_x, tl_y = to_grid(item.x, item.y)
        br_x, br_y = to_grid(item.x + item.width, item.y + item.height)

        # Clamp to the interior, excluding the outer ring
        x0 = max(1, min(tl_x, br_x))
        x1 = min(g.width - 2, max(tl_x, br_x))
        y0 = max(1, min(tl_y, br_y))
        y1 = min(g.height - 2, max(tl_y, br_y))

        resistance = -1.0 if item.resistance is None else float(item.resistance)
        element    = create_element(item.element)
        mat, src, mod = element.stamp(resistance, item.flow_modifier)

        stamp_box(g.material, g.source, g.flow_modifier, g.width,
                  x0, y0, x1, y1, mat, src, mod)

        # Poison arrows from sharp corners
        if item.sharp_corner:
            for cx, cy in item.corners():
                gx, gy = to_grid(cx, cy)
                stamp_halo(g.flow_modifier, g.width, g.height, gx, gy,
                           self.halo_radius, self.halo_strength)

### ************************************************
### Bresenham line, returns visited cells as an (n, 2) array
### A zero-length segment yields its single point
@nb.njit(cache=True, nogil=True)
def bresenham(x0, y0, x1, y1):
    dx  = abs(x1 - x0)
    dy  = abs(y1 - y0)
    sx  = 1 if x0 < x1 else -1
    sy  = 1 if y0 < y1 else -1
    err = dx - dy

    pts = np.zeros((max(dx, dy) + 1, 2), dtype=np.int64)
    n   = 0

    while True:
        pts[n, 0] = x0
        pts[n, 1] = y0
        n += 1
        if (x0 == x1 and y0 == y1):
            break

        e2 = 2*err
        if (e2 > -dy):
            err -= dy
            x0  += sx
        if (e2 < dx):
            err += dx
            y0  += sy

    return pts[:n]

### ************************************************
### Force the outer ring of cells to wall
@nb.njit(cache=True, nogil=True)
def force_border(material, w, h):
    for x in range(w):
        material[x]           = 1.0
        material[(h-1)*w + x] = 1.0
    for y in range(h):
        material[y*w]         = 1.0
        material[y*w + w - 1] = 1.0

### ************************************************
### Mark each visited cell and its 4 neighbours as wall
@nb.njit(cache=True, nogil=True)
def stamp_wall(material, w, h, pts):
    for k in range(pts.shape[0]):
        x = pts[k, 0]
        y = pts[k, 1]
        for d in range(5):
            nx = x + NEIGHBOURS[d, 0]
            ny = y + NEIGHBOURS[d, 1]
            if (nx >= 0 and nx < w and ny >= 0 and ny < h):
                material[ny*w + nx] = 1.0

### ************************************************
### Carve an opening: clear wall material and set sources,
### strong on the line itself and weaker on its neighbours
@nb.njit(cache=True, nogil=True)
def stamp_opening(material, source, w, h, pts, strength, edge_strength):
    for k in range(pts.shape[0]):
        x = pts[k, 0]
        y = pts[k, 1]
        if (x >= 0 and x < w and y >= 0 and y < h):
            i           = y*w + x
            material[i] = 0.0
            source[i]   = strength

        for d in range(1, 5):
            nx = x + NEIGHBOURS[d, 0]
            ny = y + NEIGHBOURS[d, 1]
            if (nx >= 0 and nx < w and ny >= 0 and ny < h):
                i           = ny*w + nx
                material[i] = 0.0
                # Do not weaken a cell already on the line
                if (source[i] < edge_strength):
                    source[i] = edge_strength

### ************************************************
### Stamp a furniture footprint, bounds inclusive
### Negative mat, zero src or zero mod leave that buffer untouched
@nb.njit(cache=True, nogil=True)
def stamp_box(material, source, modifier, w, x0, y0, x1, y1, mat, src, mod):
    for y in range(y0, y1+1):
        for x in range(x0, x1+1):
            i = y*w + x
            if (mat >= 0.0):
                material[i] = mat
            if (src != 0.0):
                source[i]   = src
            if (mod != 0.0):
                modifier[i] = mod

### ************************************************
### Negative modifier halo around a sharp corner,
### decaying linearly with distance
@nb.njit(cache=True, nogil=True)
def stamp_halo(modifier, w, h, cx, cy, radius, strength):
    for dy in range(-radius, radius+1):
        for dx in range(-radius, radius+1):
            dist = math.sqrt(dx*dx + dy*dy)
            if (dist > radius):
                continue

            x = cx + dx
            y = cy + dy
            if (x >= 0 and x < w and y >= 0 and y < h):
                modifier[y*w + x] = -strength*(1.0 - dist/(radius + 1.0))

# Center first, then the 4 orthogonal neighbours
NEIGHBOURS = np.array([[0, 0], [1, 0], [-1, 0], [0, 1], [0, -1]], dtype=np.int64)
