from numba import float64
from numba.experimental import jitclass

### ************************************************
### Class defining a plant element (wood)
spec = [
    ('modifier', float64)
]
@jitclass(spec)
class plant():
    ### ************************************************
    ### Constructor
    def __init__(self):

        # Default flow enhancement (unitless)
        self.modifier = 0.5

    ### ************************************************
    ### Values stamped on each covered cell: (material, source, modifier)
    def stamp(self, resistance, modifier):
        if (modifier > 0.0):
            return -1.0, 0.0, modifier

        return -1.0, 0.0, self.modifier
