"""Validation helpers shared across the ledger services and surfaces."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from .exceptions import InvalidDateError, ValidationError

FIELD_DELIMITER = ","
DATE_FORMAT_HINT = "YYYY-MM-DD"
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a signed, finite Decimal without rounding it."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def parse_iso_date(value: object, field: str = "date") -> date:
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
        raise InvalidDateError(f"{field} must use the format {DATE_FORMAT_HINT}, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(f"{field} is not a valid calendar date: {value!r}") from exc


def validate_line_field(value: object, field: str, *, allow_delimiter: bool = False) -> str:
    """Check that a text field can be written to a single line of the ledger file.

    Only the note may carry the delimiter: it is the last field and consumes
    the rest of the line when read back.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if "\n" in value or "\r" in value:
        raise ValidationError(f"{field} cannot contain line breaks")
    if not allow_delimiter and FIELD_DELIMITER in value:
        raise ValidationError(f"{field} cannot contain '{FIELD_DELIMITER}'")
    return value


def parse_position(raw: object, field: str = "position") -> int:
    """Parse a 1-based display position entered by the user."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a whole number")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be a whole number") from exc
