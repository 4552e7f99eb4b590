from numba import float64
from numba.experimental import jitclass

### ************************************************
### Class defining a blocking furniture element
### (sofa, bed, table, cabinet...)
spec = [
    ('resistance', float64),
    ('source',     float64)
]
@jitclass(spec)
class solid():
    ### ************************************************
    ### Constructor
    def __init__(self):

        # Resistance used when the item does not carry one (unitless)
        self.resistance = 0.8

        # Blocking items never inject chi
        self.source     = 0.0

    ### ************************************************
    ### Values stamped on each covered cell: (material, source, modifier)
    ### A negative material leaves the cell material untouched
    def stamp(self, resistance, modifier):
        material = self.resistance
        if (resistance > 0.0):
            material = min(resistance, 1.0)

        return material, self.source, modifier
