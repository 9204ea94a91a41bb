"""Error taxonomy for the diet manager stores."""


class DietManagerError(Exception):
    """Base class for diet manager errors."""


class ValidationError(DietManagerError):
    """Raised when input is rejected before any mutation happens."""


class NotFoundError(DietManagerError):
    """Raised when a requested food or profile record does not exist."""


class PersistenceError(DietManagerError):
    """Raised when a store cannot be read from or written to disk."""


class InvariantViolation(DietManagerError):
    """Raised when a command cannot be applied to the current state."""
