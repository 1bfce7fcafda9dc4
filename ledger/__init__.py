"""Core business logic package for the expense ledger."""

from .config import Settings, load_settings
from .models import Entry, Record, Selection
from .services import LedgerQueries, LedgerStore
from .storage import LineFileStorage
from .exceptions import (
    InvalidDateError,
    MalformedRecordError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)

__all__ = [
    "Entry",
    "Record",
    "Selection",
    "LedgerQueries",
    "LedgerStore",
    "LineFileStorage",
    "Settings",
    "load_settings",
    "InvalidDateError",
    "MalformedRecordError",
    "PersistenceError",
    "RecordNotFoundError",
    "ValidationError",
]
