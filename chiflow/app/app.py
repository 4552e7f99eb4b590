# Custom imports
from chiflow.src.core.factory  import *
from chiflow.app.studio        import *
from chiflow.app.living_room   import *

# Declare factory
app_factory = factory()

# Register apps
app_factory.register("studio",      studio)
app_factory.register("living_room", living_room)
