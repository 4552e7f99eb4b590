# Custom imports
from chiflow.app.base_app import *

### ************************************************
### Studio apartment with a bathroom partition
class studio(base_app):
    ### ************************************************
    ### Constructor
    def __init__(self):
        super().__init__()

        # Parameters
        self.nt        = 400
        self.plot_freq = 2

        walls = [Wall( 50,  50, 400,  50),
                 Wall(400,  50, 400, 350),
                 Wall(400, 350,  50, 350),
                 Wall( 50, 350,  50,  50),
                 # Bathroom partition
                 Wall(320,  50, 320, 180),
                 Wall(320, 180, 400, 180)]

        doors = [Door( 50, 180,  50, 220),  # Main entrance
                 Door(320,  90, 320, 130)]  # Bathroom

        windows = [Window(150,  50, 250,  50),
                   Window(400, 250, 400, 320)]

        furniture = [Furniture(200, 250, 80, 35, resistance=0.7, label="sofa"),
                     Furniture(120, 100, 50, 50, resistance=0.5, sharp_corner=True, label="table"),
                     Furniture(100, 300, 15, 15, flow_modifier=0.2, element="plant")]

        self.geometry = RoomGeometry(RoomGeometry.bounds_of(walls, margin=10.0),
                                     walls, doors, windows, furniture)
