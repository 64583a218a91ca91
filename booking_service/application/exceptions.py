class BookingError(Exception):
    """Base class for every error the booking engine raises on purpose."""
    pass


class ValidationError(BookingError):
    """Raised for malformed or missing input. Never touches storage."""
    pass


class InvalidTransitionError(ValidationError):
    """Raised when a status change would leave the terminal cancelled state."""
    pass


class ConflictError(BookingError):
    """Raised when the requested slot is already held by a non-cancelled booking."""
    pass


class NotFoundError(BookingError):
    """Raised when no booking has the given id."""
    pass


class AccessDeniedError(BookingError):
    """Raised when the caller lacks the required role or ownership."""

    def __init__(self, message: str, authenticated: bool = False) -> None:
        super().__init__(message)
        self.authenticated = authenticated


class StorageUnavailableError(BookingError):
    """Raised when the slot store cannot be read or written."""
    pass
