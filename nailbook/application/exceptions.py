
class MalformedTimeError(ValueError):
    """Raised when a wall-clock value is not a valid HH:MM time."""
    pass


class RemoteUnavailableError(RuntimeError):
    """Raised inside gateway adapters on transport failures; never leaves the adapter."""
    pass


class SlotConflictError(RuntimeError):
    """Raised when the remote store refused a booking; the time must be picked again."""
    pass


class NoStylistAvailableError(LookupError):
    """Raised when no stylist can take a slot; absorbed by stylist assignment."""
    pass


class InvalidTransitionError(ValueError):
    """Raised when a booking session operation is not allowed in the current state."""
    pass


class BookingInFlightError(RuntimeError):
    """Raised when a confirm arrives while a previous confirm is still running."""
    pass
