# Generic imports
import collections
import numpy as np

### ************************************************
### Flow summary of a solved grid
### coverage   : fraction of open cells flowing faster than
###              stagnant_fraction * max_speed
### stagnation : fraction of open cells below that threshold
class FlowSummary(collections.namedtuple("FlowSummary",
                                         ["max_speed", "open_cells", "flowing_cells",
                                          "stagnant_cells", "coverage", "stagnation"])):
    __slots__ = ()

    @property
    def has_flow(self):
        return self.max_speed > 0.0

### ************************************************
### Summarize flow over the interior open cells
def summarize_flow(grid, stagnant_fraction=0.1):
    max_speed = grid.get_max_speed()

    material = grid.field("material")[1:-1, 1:-1]
    speed    = grid.field("speed")[1:-1, 1:-1]
    is_open  = material < 1.0
    n_open   = int(np.count_nonzero(is_open))

    # No source, no flow: nothing to rate
    if (max_speed == 0.0 or n_open == 0):
        return FlowSummary(max_speed, n_open, 0, n_open, 0.0, 0.0)

    flowing   = int(np.count_nonzero(is_open & (speed > stagnant_fraction*max_speed)))
    stagnant  = n_open - flowing

    return FlowSummary(max_speed, n_open, flowing, stagnant,
                       flowing/n_open, stagnant/n_open)

### ************************************************
### Qualitative rating of a coverage ratio
def rate_coverage(coverage):
    if (coverage > 0.6):
        return "good"
    if (coverage > 0.3):
        return "moderate"

    return "poor"
