"""Exception hierarchy shared by the storage, logic and API layers."""


class MealPlanError(Exception):
    """Base class for all meal planner errors."""
    pass


class MalformedPersistedDataError(MealPlanError):
    """Raised when a stored value is not the JSON list we expect.

    Repositories catch it and fall back to an empty collection.
    """

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        super().__init__(f"Malformed data under '{key}': {reason}" if reason else f"Malformed data under '{key}'")


class PersistenceWriteError(MealPlanError):
    """Raised when the key-value store rejects a write (disk full, permissions...)."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not write '{key}': {reason}" if reason else f"Could not write '{key}'")


class ConfigurationError(MealPlanError):
    """Raised when data or settings make a computation meaningless."""
    pass


class DegenerateScalingError(ConfigurationError):
    """Raised when a quantity would be scaled from zero or negative servings."""

    def __init__(self, original_servings):
        self.original_servings = original_servings
        super().__init__(f"Cannot scale from {original_servings} servings")
