# Custom imports
from chiflow.src.core.factory   import *
from chiflow.src.element.solid  import *
from chiflow.src.element.mirror import *
from chiflow.src.element.plant  import *
from chiflow.src.element.rug    import *

# Declare factory
element_factory = factory()

# Register elements
element_factory.register("solid",  solid)
element_factory.register("mirror", mirror)
element_factory.register("plant",  plant)
element_factory.register("rug",    rug)

### ************************************************
### Resolve a furniture element tag to its behavior
### Any tag without a dedicated behavior blocks the flow
def create_element(tag):
    if (tag is not None and element_factory.has(tag)):
        return element_factory.create(tag)

    return element_factory.create("solid")
