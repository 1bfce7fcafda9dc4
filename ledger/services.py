"""Framework-agnostic business services for the expense ledger."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Iterable, List, Tuple

from .exceptions import MalformedRecordError, PersistenceError, RecordNotFoundError
from .models import Entry, Record, Selection
from .storage import LineFileStorage
from .validators import parse_iso_date

logger = logging.getLogger(__name__)


class LedgerStore:
    """Owns the ordered record list and keeps the backing file in step with it.

    Positions are 0-based here; surfaces convert from the 1-based numbers they
    display. Edits and deletes at a position outside the list are ignored
    without raising.
    """

    def __init__(self, storage: LineFileStorage) -> None:
        self._storage = storage
        self._records: List[Record] = []

    # Public API -----------------------------------------------------------
    def load(self) -> None:
        """Replace the in-memory list with the contents of the backing file.

        A missing or unreadable file yields an empty ledger. A malformed line
        aborts the load with MalformedRecordError and leaves the current list
        untouched.
        """
        if not self._storage.exists():
            logger.info("No previous data found.")
            self._records = []
            return
        try:
            lines = self._storage.load()
        except PersistenceError as exc:
            logger.info("No previous data found (%s).", exc)
            self._records = []
            return

        records: List[Record] = []
        for lineno, line in enumerate(lines, start=1):
            try:
                records.append(Record.from_line(line))
            except MalformedRecordError as exc:
                raise MalformedRecordError(
                    f"{self._storage.path}:{lineno}: {exc}"
                ) from exc
        self._records = records
        logger.debug("Loaded %d records from %s", len(records), self._storage.path)

    def append(self, record: Record) -> None:
        self._records.append(record)
        self.persist()

    def replace_at(self, index: int, record: Record) -> None:
        if 0 <= index < len(self._records):
            self._records[index] = record
            self.persist()

    def remove_at(self, index: int) -> None:
        if 0 <= index < len(self._records):
            del self._records[index]
            self.persist()

    def persist(self) -> None:
        """Rewrite the backing file from the in-memory list.

        On failure the in-memory list is kept as is and PersistenceError is
        raised for the caller to report.
        """
        try:
            self._storage.save(record.to_line() for record in self._records)
        except PersistenceError:
            logger.debug("Error saving expenses to %s", self._storage.path, exc_info=True)
            raise

    def get(self, index: int) -> Record:
        """Return the record at a 0-based position or raise if there is none."""
        if not 0 <= index < len(self._records):
            raise RecordNotFoundError(f"No expense at position {index + 1}")
        return self._records[index]

    def records(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


class LedgerQueries:
    """Read-only views and aggregates over a LedgerStore's current records."""

    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    def list_all(self) -> Selection:
        return self._select(lambda record: True, "No expenses recorded.")

    def filter_by_category(self, name: str) -> Selection:
        wanted = name.casefold()
        return self._select(
            lambda record: record.category.casefold() == wanted,
            f"No expenses found for category: {name}",
        )

    def filter_by_date_range(self, start: str, end: str) -> Selection:
        """Select records dated within [start, end], both bounds included.

        Raises InvalidDateError if either bound or any record date is not a
        valid YYYY-MM-DD date.
        """
        start_date = parse_iso_date(start, "from date")
        end_date = parse_iso_date(end, "to date")
        return self._select(
            lambda record: start_date <= parse_iso_date(record.date, "record date") <= end_date,
            "No expenses found in this date range.",
        )

    def total_all(self) -> Decimal:
        return _sum_amounts(self._store.records())

    def total_for_month(self, month_prefix: str) -> Decimal:
        """Sum amounts whose date text starts with the prefix.

        This is a plain string prefix test: "2024-1" also matches "2024-10-01".
        """
        return _sum_amounts(
            record for record in self._store.records() if record.date.startswith(month_prefix)
        )

    # Internal helpers -----------------------------------------------------
    def _select(self, matches: Callable[[Record], bool], empty_message: str) -> Selection:
        entries = tuple(
            Entry(position=index, record=record)
            for index, record in enumerate(self._store.records(), start=1)
            if matches(record)
        )
        return Selection(entries=entries, empty_message=empty_message)


def _sum_amounts(records: Iterable[Record]) -> Decimal:
    return sum((record.amount for record in records), start=Decimal("0"))
