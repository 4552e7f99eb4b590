# Generic imports
import argparse

# Custom imports
from chiflow.app.app      import *
from chiflow.src.core     import debug

### ************************************************
### Run a registered room app
def main(argv=None):
    parser = argparse.ArgumentParser(description="Chi flow room demo")
    parser.add_argument("app", nargs="?", default="studio",
                        choices=sorted(app_factory.keys))
    parser.add_argument("--steps", type=int,  default=None, help="number of particle ticks")
    parser.add_argument("--png",   action="store_true",     help="save frames instead of showing them")
    parser.add_argument("--seed",  type=int,  default=None)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    if args.debug:
        debug.enable(True)

    app = app_factory.create(args.app)
    if (args.steps is not None):
        app.nt = args.steps
    if args.png:
        app.plot_png  = True
        app.plot_show = False
    app.seed = args.seed

    app.run()

if __name__ == "__main__":
    main()
