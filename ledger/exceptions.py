"""Domain-specific exceptions for the expense ledger."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidDateError(ValidationError):
    """Raised when a date cannot be parsed as YYYY-MM-DD."""


class RecordNotFoundError(LookupError):
    """Raised when no record exists at the requested position."""


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""


class MalformedRecordError(PersistenceError):
    """Raised when a line of the backing file cannot be parsed into a record."""
