"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple

from .exceptions import MalformedRecordError, ValidationError
from .validators import FIELD_DELIMITER, parse_amount, validate_line_field

__all__ = ["Entry", "Record", "Selection"]

FIELD_COUNT = 4


@dataclass(frozen=True)
class Record:
    date: str
    category: str
    amount: Decimal
    note: str = ""

    def to_line(self) -> str:
        """Serialise the record to one line of the backing file (no line terminator)."""
        return FIELD_DELIMITER.join((self.date, self.category, str(self.amount), self.note))

    @classmethod
    def from_line(cls, line: str) -> "Record":
        """Parse one line; the note takes everything after the third delimiter."""
        parts = line.split(FIELD_DELIMITER, FIELD_COUNT - 1)
        if len(parts) != FIELD_COUNT:
            raise MalformedRecordError(
                f"expected {FIELD_COUNT} comma-separated fields, found {len(parts)}"
            )
        date, category, raw_amount, note = parts
        try:
            amount = parse_amount(raw_amount)
        except ValidationError as exc:
            raise MalformedRecordError(f"non-numeric amount {raw_amount!r}") from exc
        return cls(date=date, category=category, amount=amount, note=note)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives."""
        return {
            "date": self.date,
            "category": self.category,
            "amount": str(self.amount),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        """Hydrate a Record from JSON-native data, rejecting values the file cannot hold."""
        return cls(
            date=validate_line_field(data.get("date"), "date"),
            category=validate_line_field(data.get("category"), "category"),
            amount=parse_amount(data.get("amount")),
            note=validate_line_field(data.get("note", ""), "note", allow_delimiter=True),
        )


@dataclass(frozen=True)
class Entry:
    position: int
    record: Record

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position, **self.record.to_dict()}


@dataclass(frozen=True)
class Selection:
    """Outcome of a listing or filter query.

    An empty selection still means the query ran; failures are raised instead.
    """

    entries: Tuple[Entry, ...]
    empty_message: str

    @property
    def found(self) -> bool:
        return bool(self.entries)

    @property
    def records(self) -> Tuple[Record, ...]:
        return tuple(entry.record for entry in self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
