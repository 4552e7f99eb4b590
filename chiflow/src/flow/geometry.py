# Generic imports
import math

### ************************************************
### Room bounds: continuous rectangle mapped onto the grid
class RoomBounds:
    ### ************************************************
    ### Constructor
    def __init__(self, x, y, width, height):
        if (width <= 0.0 or height <= 0.0):
            raise ValueError(f"Room bounds must have a positive size, got {width}x{height}")

        self.x      = float(x)
        self.y      = float(y)
        self.width  = float(width)
        self.height = float(height)

    ### ************************************************
    ### Map a continuous point to integer grid coordinates
    def to_grid(self, wx, wy, nx, ny):
        scale_x = nx / self.width
        scale_y = ny / self.height
        gx = _round_half_up((wx - self.x) * scale_x)
        gy = _round_half_up((wy - self.y) * scale_y)

        return gx, gy

    def __repr__(self):
        return f"RoomBounds({self.x}, {self.y}, {self.width}, {self.height})"

### ************************************************
### Line segment base class
class Segment:
    kind = "segment"

    ### ************************************************
    ### Constructor
    def __init__(self, x1, y1, x2, y2):
        self.x1 = float(x1)
        self.y1 = float(y1)
        self.x2 = float(x2)
        self.y2 = float(y2)

    def length(self):
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def __repr__(self):
        return f"{type(self).__name__}({self.x1}, {self.y1}, {self.x2}, {self.y2})"

class Wall(Segment):
    kind = "wall"

class Door(Segment):
    kind = "door"

class Window(Segment):
    kind = "window"

### ************************************************
### Axis-aligned furniture rectangle
class Furniture:
    kind = "furniture"

    ### ************************************************
    ### Constructor
    ### resistance    : flow resistance fraction, None for element default
    ### flow_modifier : signed bias, > 0 attracts, < 0 disrupts
    ### sharp_corner  : emits poison arrows from its corners
    ### element       : behavior tag (mirror, plant, rug, anything else blocks)
    def __init__(self, x, y, width, height,
                 resistance    = None,
                 flow_modifier = 0.0,
                 sharp_corner  = False,
                 element       = "solid",
                 label         = None):

        self.x             = float(x)
        self.y             = float(y)
        self.width         = float(width)
        self.height        = float(height)
        self.resistance    = resistance
        self.flow_modifier = float(flow_modifier)
        self.sharp_corner  = bool(sharp_corner)
        self.element       = element
        self.label         = label if label is not None else element

    ### ************************************************
    ### Four corners: top-left, top-right, bottom-left, bottom-right
    def corners(self):
        return [(self.x,              self.y),
                (self.x + self.width, self.y),
                (self.x,              self.y + self.height),
                (self.x + self.width, self.y + self.height)]

    def __repr__(self):
        return (f"Furniture({self.label!r}, {self.x}, {self.y}, "
                f"{self.width}x{self.height}, element={self.element!r})")

### ************************************************
### Immutable snapshot of a room handed to the rasterizer
class RoomGeometry:
    ### ************************************************
    ### Constructor
    def __init__(self, bounds, walls=(), doors=(), windows=(), furniture=()):
        self.bounds    = bounds
        self.walls     = tuple(walls)
        self.doors     = tuple(doors)
        self.windows   = tuple(windows)
        self.furniture = tuple(furniture)

    ### ************************************************
    ### Build from the editor's plain state dict
    @classmethod
    def from_dict(cls, state):
        rb     = state["roomBounds"]
        bounds = RoomBounds(rb["x"], rb["y"], rb["width"], rb["height"])

        def segments(key, kind):
            return [kind(s["x1"], s["y1"], s["x2"], s["y2"])
                    for s in state.get(key) or []]

        furniture = []
        for item in state.get("furniture") or []:
            element = item.get("element", item.get("type", "solid"))
            furniture.append(Furniture(item["x"], item["y"],
                                       item["width"], item["height"],
                                       resistance    = item.get("flowResistance"),
                                       flow_modifier = item.get("flowModifier", 0.0) or 0.0,
                                       sharp_corner  = item.get("poisonArrow", False),
                                       element       = element,
                                       label         = item.get("label", element)))

        return cls(bounds,
                   walls     = segments("walls",   Wall),
                   doors     = segments("doors",   Door),
                   windows   = segments("windows", Window),
                   furniture = furniture)

    ### ************************************************
    ### Bounds enclosing every wall segment, with a margin
    @classmethod
    def bounds_of(cls, walls, margin=0.0):
        xs = [w.x1 for w in walls] + [w.x2 for w in walls]
        ys = [w.y1 for w in walls] + [w.y2 for w in walls]

        return RoomBounds(min(xs) - margin, min(ys) - margin,
                          max(xs) - min(xs) + 2.0*margin,
                          max(ys) - min(ys) + 2.0*margin)

### ************************************************
### Round halves up: floor(v + 0.5)
def _round_half_up(v):
    return int(math.floor(v + 0.5))
