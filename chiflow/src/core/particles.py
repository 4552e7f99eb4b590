# Generic imports
import numpy as np

# Custom imports
from chiflow.src.core.debug    import dbg
from chiflow.src.flow.velocity import sample_velocity_many

log = dbg("particles")

### ************************************************
### Read-only view of one particle, for drawing
class Particle:
    __slots__ = ("x", "y", "life", "age", "trail")

    def __init__(self, x, y, life, age, trail):
        self.x     = x
        self.y     = y
        self.life  = life
        self.age   = age
        self.trail = trail

    def __repr__(self):
        return f"Particle({self.x:.2f}, {self.y:.2f}, life={self.life:.2f})"

### ************************************************
### Class defining the tracer particle population
### Particles spawn at sources (doors/windows) and follow
### the velocity field; dead particles are respawned at once
class ParticleSystem:
    ### ************************************************
    ### Constructor
    def __init__(self, grid,
                 max_particles    = 800,
                 trail_length     = 12,
                 rng              = None,
                 seed             = None,
                 source_threshold = 0.5,
                 spawn_jitter     = 2.0,
                 drift            = 0.3,
                 speed_eps        = 0.01,
                 cells_per_tick   = 1.5,
                 stagnation_limit = 60,
                 stagnation_decay = 0.005,
                 min_age          = 200.0,
                 age_spread       = 300.0):

        self.grid             = grid
        self.max_particles    = int(max_particles)
        self.trail_length     = int(trail_length)
        self.rng              = rng if rng is not None else np.random.default_rng(seed)

        self.source_threshold = source_threshold
        self.spawn_jitter     = spawn_jitter     # Full width of the spawn square
        self.drift            = drift            # Full width of the stagnant jitter
        self.speed_eps        = speed_eps
        self.cells_per_tick   = cells_per_tick   # Advance of the fastest particle
        self.stagnation_limit = stagnation_limit # Ticks before extra decay
        self.stagnation_decay = stagnation_decay
        self.min_age          = min_age
        self.age_spread       = age_spread

        self.sources = np.zeros((0, 2), dtype=np.int64)
        self.allocate()

    ### ************************************************
    ### Allocate particle arrays
    def allocate(self):
        cap = self.max_particles
        self.n = 0

        self.x         = np.zeros(cap)
        self.y         = np.zeros(cap)
        self.age       = np.zeros(cap)
        self.life      = np.zeros(cap)
        self.max_age   = np.zeros(cap)
        self.stagnant  = np.zeros(cap, dtype=np.int64)
        self.trail     = np.zeros((cap, self.trail_length, 2)) # Oldest first
        self.trail_len = np.zeros(cap, dtype=np.int64)

    ### ************************************************
    ### Drop all particles and re-scan sources
    def reset(self):
        self.n = 0
        self.find_sources()

    ### ************************************************
    ### Collect the open cells where particles spawn
    def find_sources(self):
        g    = self.grid
        mask = (g.source > self.source_threshold) & (g.material < 1.0)
        idx  = np.nonzero(mask)[0]

        self.sources = np.column_stack((idx % g.width, idx // g.width)).astype(np.int64)
        log.debug("found %d source cells", len(self.sources))

        return len(self.sources)

    ### ************************************************
    ### Respawn the given slots at random source cells
    def spawn(self, slots):
        k = len(slots)
        if (k == 0 or len(self.sources) == 0):
            return

        rng  = self.rng
        pick = rng.integers(0, len(self.sources), size=k)

        self.x[slots]         = self.sources[pick, 0] + (rng.random(k) - 0.5)*self.spawn_jitter
        self.y[slots]         = self.sources[pick, 1] + (rng.random(k) - 0.5)*self.spawn_jitter
        self.age[slots]       = 0.0
        self.life[slots]      = 1.0
        self.max_age[slots]   = self.min_age + rng.random(k)*self.age_spread
        self.stagnant[slots]  = 0
        self.trail_len[slots] = 0

    ### ************************************************
    ### Advance every particle by one tick
    ### Returns False when the grid is being solved
    def update(self, dt=1.0):
        g = self.grid
        if not g.ready:
            log.debug("update rejected, grid not ready")
            return False

        # Fill the population up to the cap
        if (len(self.sources) > 0 and self.n < self.max_particles):
            self.spawn(np.arange(self.n, self.max_particles))
            self.n = self.max_particles

        n = self.n
        if (n == 0):
            return True

        w, h = g.width, g.height
        x    = self.x[:n]
        y    = self.y[:n]

        # 1. Trail, oldest evicted
        self.push_trail(n)

        # 2. Particles sitting in a wall or outside die at once
        dead_now = ~self.open_cells(x, y)
        live     = ~dead_now

        # 3. Sample velocity
        u = np.zeros(n)
        v = np.zeros(n)
        sample_velocity_many(g.vx, g.vy, w, h, x, y, u, v)
        speed = np.hypot(u, v)

        # 4. Move, scaled so the fastest particle covers cells_per_tick
        max_speed = g.get_max_speed()
        scale     = self.cells_per_tick/max_speed if (max_speed > 0.0) else 0.0
        moving    = live & (speed > self.speed_eps)

        x[moving] += u[moving]*scale*dt
        y[moving] += v[moving]*scale*dt
        self.stagnant[:n][moving] = 0

        # 5. Random drift in stagnant pockets
        still = live & ~moving
        k     = int(np.count_nonzero(still))
        if (k > 0):
            x[still] += (self.rng.random(k) - 0.5)*self.drift
            y[still] += (self.rng.random(k) - 0.5)*self.drift
            self.stagnant[:n][still] += 1

        # 6. Age and life
        age  = self.age[:n]
        life = self.life[:n]
        age[live]  += dt
        life[live]  = np.maximum(0.0, 1.0 - age[live]/self.max_age[:n][live])

        stagnant = self.stagnant[:n]
        over     = live & (stagnant > self.stagnation_limit)
        if np.any(over):
            extra      = self.stagnation_decay*(stagnant[over] - self.stagnation_limit)
            life[over] = np.maximum(0.0, life[over] - extra)

        # 7. Death and respawn
        out  = ~self.in_grid(x, y)
        dead = dead_now | (live & ((life <= 0.0) | (age > self.max_age[:n]) | out))
        self.replace(np.nonzero(dead)[0])

        return True

    ### ************************************************
    ### Append current positions to the trails
    def push_trail(self, n):
        trail = self.trail[:n]
        trail[:, :-1, :] = trail[:, 1:, :]
        trail[:, -1, 0]  = self.x[:n]
        trail[:, -1, 1]  = self.y[:n]
        self.trail_len[:n] = np.minimum(self.trail_len[:n] + 1, self.trail_length)

    ### ************************************************
    ### Replace dead particles, or drop them if no source is left
    def replace(self, slots):
        if (len(slots) == 0):
            return

        if (len(self.sources) > 0):
            self.spawn(slots)
            return

        keep = np.ones(self.n, dtype=bool)
        keep[slots] = False
        m = int(np.count_nonzero(keep))
        for arr in (self.x, self.y, self.age, self.life, self.max_age,
                    self.stagnant, self.trail, self.trail_len):
            arr[:m] = arr[:self.n][keep]
        self.n = m

    ### ************************************************
    ### Position checks
    def in_grid(self, x, y):
        cx = np.floor(x)
        cy = np.floor(y)

        return (cx >= 0) & (cx < self.grid.width) & (cy >= 0) & (cy < self.grid.height)

    def open_cells(self, x, y):
        g      = self.grid
        inside = self.in_grid(x, y)
        ok     = np.zeros(len(x), dtype=bool)

        cx = np.floor(x[inside]).astype(np.int64)
        cy = np.floor(y[inside]).astype(np.int64)
        ok[inside] = g.material[cy*g.width + cx] < 1.0

        return ok

    ### ************************************************
    ### Accessors for renderers
    @property
    def count(self):
        return self.n

    @property
    def positions(self):
        return np.column_stack((self.x[:self.n], self.y[:self.n]))

    def trail_of(self, i):
        k = self.trail_len[i]
        return self.trail[i, self.trail_length - k:].copy()

    @property
    def particles(self):
        return [Particle(float(self.x[i]), float(self.y[i]), float(self.life[i]),
                         float(self.age[i]), self.trail_of(i))
                for i in range(self.n)]
