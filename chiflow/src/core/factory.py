### ************************************************
### Class factory: maps a registered name to a class
class factory:
    ### ************************************************
    ### Constructor
    def __init__(self):
        self.keys = {}

    ### ************************************************
    ### Register a new class under a name
    def register(self, key, creator):
        self.keys[key] = creator

    ### ************************************************
    ### Check if a name is registered
    def has(self, key):
        return key in self.keys

    ### ************************************************
    ### Create an instance of a registered class
    def create(self, key, **kwargs):
        creator = self.keys.get(key)
        if creator is None:
            raise KeyError(f"Unknown key '{key}', registered: {sorted(self.keys)}")

        return creator(**kwargs)
