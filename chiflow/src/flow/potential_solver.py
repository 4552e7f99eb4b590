# Generic imports
import math
import collections
import numba as nb

# Custom imports
from chiflow.src.core.debug    import dbg
from chiflow.src.flow.velocity import derive_velocity

log = dbg("solver")

# Outcome of a solve: sweeps done, max update of the last sweep,
# whether that update fell below the convergence tolerance,
# and number of sink cells placed
SolveResult = collections.namedtuple("SolveResult",
                                     ["iterations", "residual", "converged", "sinks"])

### ************************************************
### Class solving the potential field by SOR relaxation
class PotentialSolver:
    ### ************************************************
    ### Constructor
    def __init__(self, grid,
                 iterations     = 600,
                 omega          = 1.7,
                 tol            = None,
                 converge_tol   = 1.0e-4,
                 source_scale   = 100.0,
                 attract_gain   = 2.0,
                 disrupt_gain   = 3.0,
                 door_threshold = 0.5,
                 sink_threshold = 0.3,
                 sink_scale     = 8.0,
                 chunk          = 50):

        self.grid = grid

        # SOR Parameters
        self.iterations   = iterations
        self.omega        = omega
        self.tol          = tol          # Optional early exit on max update
        self.converge_tol = converge_tol
        self.chunk        = chunk        # Sweeps between cancellation checks

        # Boundary Parameters
        self.source_scale   = source_scale
        self.attract_gain   = attract_gain
        self.disrupt_gain   = disrupt_gain
        self.door_threshold = door_threshold
        self.sink_threshold = sink_threshold
        self.sink_scale     = sink_scale

        self.result = None

    ### ************************************************
    ### Solve the potential, then derive the velocity field
    ### Returns None if cancelled, leaving the grid not ready
    def solve(self, cancel=None):
        g = self.grid
        w, h = g.width, g.height
        g.ready = False

        # 1. Fixed potentials on sources and sinks
        init_potential(g.potential, g.source, self.source_scale)

        # 2. Far-wall sinks for cross-room flow
        sinks = place_sinks(g.potential, g.source, g.material, w, h,
                            self.door_threshold, self.sink_threshold,
                            self.sink_scale, self.source_scale)

        if (cancel is not None and cancel.is_set()):
            log.info("solve cancelled before relaxation")
            return None

        # 3. Relaxation
        # Without any fixed cell nothing drives the field: it stays at 0
        done     = 0
        residual = math.inf
        if not g.source.any():
            residual = 0.0
            log.info("no source or sink on the grid, potential left at zero")

        while (done < self.iterations and residual > 0.0):
            n = min(self.chunk, self.iterations - done)
            residual = sor_sweeps(g.potential, g.material, g.source, g.flow_modifier,
                                  w, h, n, self.omega,
                                  self.attract_gain, self.disrupt_gain)
            done += n

            if (cancel is not None and cancel.is_set()):
                log.info("solve cancelled after %d sweeps", done)
                return None
            if (self.tol is not None and residual < self.tol):
                break

        # 4. Velocity
        derive_velocity(g.potential, g.material, g.vx, g.vy, g.speed, w, h)
        g.ready = True

        self.result = SolveResult(done, residual, residual < self.converge_tol, sinks)
        log.info("solved %dx%d grid: %d sweeps, residual %.3e, %d sinks",
                 w, h, done, residual, sinks)

        return self.result

### ************************************************
### Initialize potential: fixed cells at strength*scale, others 0
@nb.njit(cache=True, nogil=True)
def init_potential(phi, source, scale):
    for i in range(phi.shape[0]):
        if (source[i] != 0.0):
            phi[i] = source[i]*scale
        else:
            phi[i] = 0.0

### ************************************************
### Mark wall-adjacent cells far from the doors as fixed sinks
### Sink strength grows with the squared distance ratio
@nb.njit(cache=True, nogil=True)
def place_sinks(phi, source, material, w, h, door_threshold, ratio_threshold, scale, source_scale):
    # Average door position
    sum_x = 0.0
    sum_y = 0.0
    count = 0
    for y in range(1, h-1):
        for x in range(1, w-1):
            if (source[y*w + x] > door_threshold):
                sum_x += x
                sum_y += y
                count += 1

    if (count == 0):
        return 0

    avg_x    = sum_x/count
    avg_y    = sum_y/count
    max_dist = math.sqrt(w*w + h*h)
    sinks    = 0

    for y in range(1, h-1):
        for x in range(1, w-1):
            i = y*w + x
            if (material[i] >= 1.0 or source[i] > 0.0):
                continue

            near_wall = (material[i-1] >= 1.0 or material[i+1] >= 1.0 or
                         material[i-w] >= 1.0 or material[i+w] >= 1.0)
            if not near_wall:
                continue

            dist  = math.sqrt((x - avg_x)**2 + (y - avg_y)**2)
            ratio = dist/max_dist
            if (ratio > ratio_threshold):
                strength  = -scale*ratio*ratio
                phi[i]    = strength
                source[i] = strength/source_scale
                sinks    += 1

    return sinks

### ************************************************
### In-place SOR sweeps of the modified Laplace equation
### Returns the largest update of the last sweep
@nb.njit(cache=True, nogil=True)
def sor_sweeps(phi, material, source, modifier, w, h, n_sweeps, omega, attract_gain, disrupt_gain):
    max_diff = 0.0

    for it in range(n_sweeps):
        max_diff = 0.0
        for y in range(1, h-1):
            for x in range(1, w-1):
                i = y*w + x

                # Skip walls and fixed sources/sinks
                if (material[i] >= 1.0 or source[i] != 0.0):
                    continue

                # Laplace average of 4 neighbours
                avg = (phi[i-1] + phi[i+1] + phi[i-w] + phi[i+w])/4.0

                # Obstacles hold on to their previous value
                r = material[i]
                if (r > 0.0):
                    new_val = (1.0 - r)*avg + r*phi[i]
                else:
                    new_val = avg

                # Attractors raise the potential, sharp corners disrupt it
                m = modifier[i]
                if (m > 0.0):
                    new_val += m*attract_gain
                elif (m < 0.0):
                    new_val += m*disrupt_gain

                delta   = omega*(new_val - phi[i])
                phi[i] += delta

                if (abs(delta) > max_diff):
                    max_diff = abs(delta)

    return max_diff
