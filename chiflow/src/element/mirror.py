from numba import float64
from numba.experimental import jitclass

### ************************************************
### Class defining a mirror element
### Mirrors reflect chi back into the room: they act as a
### weak local source instead of an obstacle
spec = [
    ('source', float64)
]
@jitclass(spec)
class mirror():
    ### ************************************************
    ### Constructor
    def __init__(self):

        # Local source strength (unitless)
        self.source = 0.3

    ### ************************************************
    ### Values stamped on each covered cell: (material, source, modifier)
    def stamp(self, resistance, modifier):
        return -1.0, self.source, 0.0
