# Generic imports
import threading
from concurrent.futures import ThreadPoolExecutor

# Custom imports
from chiflow.src.core.debug            import dbg
from chiflow.src.core.particles        import ParticleSystem
from chiflow.src.flow.grid             import FlowGrid
from chiflow.src.flow.rasterizer       import Rasterizer
from chiflow.src.flow.potential_solver import PotentialSolver

log = dbg("simulation")

### ************************************************
### Class tying grid, rasterizer, solver and particles together
### A simulate request runs rasterize + solve + velocity as one job,
### either on the caller thread or on a single background worker.
### A newer request cancels the in-flight one, and particle updates
### are rejected while a job is running.
class Simulation:
    ### ************************************************
    ### Constructor
    def __init__(self,
                 width           = 200,
                 height          = 200,
                 max_particles   = 800,
                 seed            = None,
                 rng             = None,
                 solver_params   = None,
                 raster_params   = None,
                 particle_params = None):

        self.grid       = FlowGrid(width, height)
        self.rasterizer = Rasterizer(self.grid, **(raster_params or {}))
        self.solver     = PotentialSolver(self.grid, **(solver_params or {}))
        self.particles  = ParticleSystem(self.grid,
                                         max_particles = max_particles,
                                         rng           = rng,
                                         seed          = seed,
                                         **(particle_params or {}))

        self.geometry = None
        self.result   = None

        # Worker state
        self.lock     = threading.Lock()
        self.executor = None
        self.future   = None
        self.cancel_  = None
        self.pending  = 0
        self.closed   = False

    ### ************************************************
    ### True while a simulate job is queued or running
    @property
    def busy(self):
        with self.lock:
            return self.pending > 0

    @property
    def ready(self):
        return (not self.busy) and self.grid.ready

    ### ************************************************
    ### Rasterize and solve on the caller thread
    def simulate(self, geometry):
        self.check_open()

        # Supersede any background job first
        self.cancel()
        self.wait()

        return self.run(geometry)

    ### ************************************************
    ### Rasterize and solve on the background worker
    def submit(self, geometry):
        self.check_open()

        with self.lock:
            if (self.cancel_ is not None):
                self.cancel_.set()
            if (self.executor is None):
                self.executor = ThreadPoolExecutor(max_workers=1,
                                                   thread_name_prefix="chiflow-solve")

            cancel        = threading.Event()
            self.cancel_  = cancel
            self.pending += 1
            self.future   = self.executor.submit(self.job, geometry, cancel)

            return self.future

    ### ************************************************
    ### Cancel the in-flight job, if any
    def cancel(self):
        with self.lock:
            if (self.cancel_ is not None):
                self.cancel_.set()

    ### ************************************************
    ### Wait for the last submitted job, returns its result
    def wait(self, timeout=None):
        future = self.future
        if (future is None):
            return self.result

        return future.result(timeout)

    ### ************************************************
    ### Advance particles by one tick
    ### Returns False if a job is in flight
    def step(self, dt=1.0):
        with self.lock:
            if (self.pending > 0):
                return False

            return self.particles.update(dt)

    ### ************************************************
    ### Background job body
    def job(self, geometry, cancel):
        try:
            if cancel.is_set():
                log.info("simulation skipped, superseded before start")
                return None

            return self.run(geometry, cancel)
        finally:
            with self.lock:
                self.pending -= 1

    ### ************************************************
    ### Rasterize, solve and reset the particles
    def run(self, geometry, cancel=None):
        log.info("simulation started on %dx%d grid", self.grid.width, self.grid.height)
        self.grid.ready = False
        self.rasterizer.rasterize(geometry)

        result = self.solver.solve(cancel)
        if (result is None):
            return None

        with self.lock:
            self.geometry = geometry
            self.result   = result
            self.particles.reset()

        log.info("simulation finished, max speed %.4g", self.grid.get_max_speed())

        return result

    ### ************************************************
    ### Shut down the worker
    def close(self):
        if self.closed:
            return

        self.cancel()
        if (self.executor is not None):
            self.executor.shutdown(wait=True)
        self.closed = True

    def check_open(self):
        if self.closed:
            raise RuntimeError("Simulation is closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
