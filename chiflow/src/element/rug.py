from numba import float64
from numba.experimental import jitclass

### ************************************************
### Class defining a rug element (earth)
### Rugs slightly slow the flow and ground it
spec = [
    ('resistance', float64),
    ('modifier',   float64)
]
@jitclass(spec)
class rug():
    ### ************************************************
    ### Constructor
    def __init__(self):

        # Small flow resistance (unitless)
        self.resistance = 0.15

        # Default flow enhancement (unitless)
        self.modifier   = 0.2

    ### ************************************************
    ### Values stamped on each covered cell: (material, source, modifier)
    def stamp(self, resistance, modifier):
        if (modifier > 0.0):
            return self.resistance, 0.0, modifier

        return self.resistance, 0.0, self.modifier
