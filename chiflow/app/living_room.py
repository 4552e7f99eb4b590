# Custom imports
from chiflow.app.base_app import *

### ************************************************
### Living room, single door and three windows
class living_room(base_app):
    ### ************************************************
    ### Constructor
    def __init__(self):
        super().__init__()

        # Parameters
        self.nt        = 400
        self.n_parts   = 1000

        state = {
            "roomBounds": {"x": 40, "y": 40, "width": 420, "height": 320},
            "walls":   [{"x1":  50, "y1":  50, "x2": 450, "y2":  50},
                        {"x1": 450, "y1":  50, "x2": 450, "y2": 350},
                        {"x1": 450, "y1": 350, "x2":  50, "y2": 350},
                        {"x1":  50, "y1": 350, "x2":  50, "y2":  50}],
            "doors":   [{"x1":  50, "y1": 150, "x2":  50, "y2": 200}],
            "windows": [{"x1": 150, "y1":  50, "x2": 250, "y2":  50},
                        {"x1": 300, "y1":  50, "x2": 400, "y2":  50},
                        {"x1": 450, "y1": 200, "x2": 450, "y2": 300}],
            "furniture": [
                {"type": "sofa",   "label": "Sofa",   "x": 200, "y": 280, "width": 80, "height": 35,
                 "flowResistance": 0.7, "flowModifier": 0.0, "poisonArrow": False},
                {"type": "mirror", "label": "Mirror", "x": 400, "y": 100, "width": 30, "height": 5,
                 "flowResistance": 0.0, "flowModifier": 0.3, "poisonArrow": False},
                {"type": "rug",    "label": "Rug",    "x": 180, "y": 150, "width": 60, "height": 40,
                 "flowResistance": 0.05, "flowModifier": 0.1, "poisonArrow": False},
                {"type": "desk",   "label": "Desk",   "x": 380, "y": 260, "width": 60, "height": 30,
                 "flowResistance": 0.5, "flowModifier": 0.0, "poisonArrow": True}]
        }

        self.geometry = RoomGeometry.from_dict(state)
