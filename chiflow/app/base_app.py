# Generic imports
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

# Custom imports
from chiflow.src.core.simulation import *
from chiflow.src.core.analysis   import *
from chiflow.src.flow.geometry   import *

### ************************************************
### Base class for room apps
### Subclasses build self.geometry in their constructor
class base_app:
    ### ************************************************
    ### Constructor
    def __init__(self):

        # Parameters
        self.nx        = 200
        self.ny        = 200
        self.nt        = 500
        self.dt        = 1.0
        self.it        = 0
        self.plot_freq = 2
        self.plot_show = True
        self.plot_png  = False
        self.n_parts   = 800
        self.seed      = None

        self.geometry  = None
        self.sim       = None
        self.fig       = None

    ### ************************************************
    ### Build the simulation and solve the room
    def setup(self):
        self.sim = Simulation(self.nx, self.ny,
                              max_particles = self.n_parts,
                              seed          = self.seed)
        result  = self.sim.simulate(self.geometry)
        summary = summarize_flow(self.sim.grid)

        print(f"Solved in {result.iterations} sweeps, residual {result.residual:.2e}")
        if not summary.has_flow:
            print("No flow detected, add at least one door")
        else:
            print(f"Flow coverage {100*summary.coverage:.0f}% ({rate_coverage(summary.coverage)})")

    ### ************************************************
    ### Advance particles
    def update(self):
        self.sim.step(self.dt)
        self.it += 1

    ### ************************************************
    ### Plot speed heatmap and particle trails
    def plot(self):
        if (self.it % self.plot_freq != 0):
            return

        g = self.sim.grid
        if (self.fig is None):
            self.fig = plt.figure(figsize=(7, 7))

        plt.clf()
        ax = plt.gca()
        ax.set_aspect('equal')
        ax.set_xlim(0, g.width)
        ax.set_ylim(g.height, 0)
        ax.set_axis_off()

        max_speed = g.get_max_speed()
        speed     = g.field("speed")
        walls     = np.ma.masked_where(g.field("material") < 1.0, g.field("material"))
        if (max_speed > 0.0):
            plt.imshow(np.sqrt(speed/max_speed), cmap='inferno', vmin=0, vmax=1,
                       extent=[0, g.width, g.height, 0])
        plt.imshow(walls, cmap='Greys', vmin=0, vmax=1.5,
                   extent=[0, g.width, g.height, 0])

        # Trails
        segments = []
        alphas   = []
        for p in self.sim.particles.particles:
            if (len(p.trail) < 2):
                continue
            pts = np.vstack([p.trail, [[p.x, p.y]]])
            segments.append(pts)
            alphas.append(0.7*p.life)

        if segments:
            colors = np.zeros((len(segments), 4))
            colors[:, :3] = [0.4, 0.9, 1.0]
            colors[:, 3]  = alphas
            ax.add_collection(LineCollection(segments, colors=colors, linewidths=1.0))

        if self.plot_png:
            plt.savefig(f"{type(self).__name__}_{self.it:05d}.png", dpi=100)
        if self.plot_show:
            plt.pause(0.001)

    ### ************************************************
    ### Main loop
    def run(self):
        self.setup()
        for _ in range(self.nt):
            self.update()
            self.plot()

        self.sim.close()
