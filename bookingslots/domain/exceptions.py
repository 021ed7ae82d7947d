"""
Domain-specific exception hierarchy for the booking slots application.
"""


class BookingSlotsError(Exception):
    """Base class for all application-level errors."""


class NotFoundError(BookingSlotsError):
    """Raised when a user, event or availability template does not exist."""


class InvalidInputError(BookingSlotsError):
    """Raised when an availability payload or time value is malformed."""


class DataFileError(BookingSlotsError):
    """Raised when the repository data file cannot be read or parsed."""
