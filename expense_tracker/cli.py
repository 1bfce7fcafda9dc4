"""Console interface for the expense ledger."""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from ledger.config import LOG_LEVELS, Settings, load_settings
from ledger.exceptions import (
    MalformedRecordError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)
from ledger.models import Record, Selection
from ledger.services import LedgerQueries, LedgerStore
from ledger.storage import LineFileStorage
from ledger.validators import parse_amount, parse_position


MENU = """
Expense Tracker
1. Add Expense
2. Edit Expense
3. Delete Expense
4. Show All Expenses
5. View Total
6. Monthly Summary
7. Filter by Category
8. Filter by Date Range
9. Exit"""

EXIT_CHOICE = 9

Prompt = Callable[[str], str]
T = TypeVar("T")


class InputCancelled(Exception):
    """Raised when the user keeps entering values that cannot be parsed."""


_log_handler: Optional[logging.Handler] = None


def configure_logging(level: str) -> None:
    """Send ``ledger`` log records to stderr; INFO messages read like plain notices.

    Calling it again swaps the handler rather than stacking a second one.
    """
    global _log_handler
    package_logger = logging.getLogger("ledger")
    if _log_handler is not None:
        package_logger.removeHandler(_log_handler)
    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(_log_handler)
    package_logger.setLevel(level.upper())


def _parse_amount(value: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_position(value: str) -> int:
    try:
        return parse_position(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _load_ledger(data_file: Path) -> Tuple[LedgerStore, LedgerQueries]:
    store = LedgerStore(LineFileStorage(data_file))
    store.load()
    return store, LedgerQueries(store)


def _build_record(date: str, category: str, amount: Decimal, note: str) -> Record:
    return Record.from_dict({"date": date, "category": category, "amount": amount, "note": note})


def _format_amount(amount: Decimal, settings: Settings) -> str:
    return f"{settings.currency_symbol}{amount}"


def print_selection(selection: Selection) -> None:
    if not selection.found:
        print(selection.empty_message)
        return
    for entry in selection:
        print(f"{entry.position}. {entry.record.to_line()}")


# Interactive menu -----------------------------------------------------------
def _read_parsed(
    prompt: Prompt,
    message: str,
    retry_message: str,
    parse: Callable[[str], T],
    attempts: int,
) -> T:
    for attempt in range(attempts):
        raw = prompt(message if attempt == 0 else retry_message)
        try:
            return parse(raw)
        except ValidationError:
            continue
    raise InputCancelled("Too many invalid entries; returning to the menu.")


def _read_int(prompt: Prompt, message: str, attempts: int) -> int:
    return _read_parsed(prompt, message, "Invalid number. Try again: ", parse_position, attempts)


def _read_record(prompt: Prompt, attempts: int) -> Record:
    date = prompt("Date (YYYY-MM-DD): ")
    category = prompt("Category: ")
    amount = _read_parsed(prompt, "Amount: ", "Invalid amount. Try again: ", parse_amount, attempts)
    note = prompt("Note: ")
    return _build_record(date, category, amount, note)


def _read_existing_index(prompt: Prompt, store: LedgerStore, action: str, attempts: int) -> Optional[int]:
    position = _read_int(prompt, f"Enter expense number to {action}: ", attempts)
    index = position - 1
    if not 0 <= index < len(store):
        print(f"No expense at position {position}.")
        return None
    return index


def run_menu(
    store: LedgerStore,
    queries: LedgerQueries,
    settings: Settings,
    prompt: Prompt = input,
) -> int:
    """Run the interactive menu until the user exits or input ends."""
    attempts = settings.max_input_attempts

    def add() -> None:
        store.append(_read_record(prompt, attempts))
        print("Expense added.")

    def edit() -> None:
        print_selection(queries.list_all())
        index = _read_existing_index(prompt, store, "edit", attempts)
        if index is None:
            return
        store.replace_at(index, _read_record(prompt, attempts))
        print("Expense updated.")

    def delete() -> None:
        print_selection(queries.list_all())
        index = _read_existing_index(prompt, store, "delete", attempts)
        if index is None:
            return
        store.remove_at(index)
        print("Expense deleted.")

    def show() -> None:
        print_selection(queries.list_all())

    def total() -> None:
        print(f"Total Expenses: {_format_amount(queries.total_all(), settings)}")

    def monthly() -> None:
        month = prompt("Enter month (YYYY-MM): ")
        print(f"Total for {month}: {_format_amount(queries.total_for_month(month), settings)}")

    def by_category() -> None:
        print_selection(queries.filter_by_category(prompt("Enter category to filter: ")))

    def by_date_range() -> None:
        start = prompt("From date (YYYY-MM-DD): ")
        end = prompt("To date (YYYY-MM-DD): ")
        print_selection(queries.filter_by_date_range(start, end))

    actions = {
        1: add,
        2: edit,
        3: delete,
        4: show,
        5: total,
        6: monthly,
        7: by_category,
        8: by_date_range,
    }

    try:
        while True:
            print(MENU)
            try:
                choice = _read_int(prompt, "Choose: ", attempts)
            except InputCancelled as exc:
                print(exc)
                continue
            if choice == EXIT_CHOICE:
                break
            action = actions.get(choice)
            if action is None:
                print("Invalid choice. Try again.")
                continue
            try:
                action()
            except InputCancelled as exc:
                print(exc)
            except ValidationError as exc:
                print(f"Validation error: {exc}")
            except PersistenceError as exc:
                # The change is kept in memory; only the file is behind.
                print(f"Storage error: {exc}")
    except (EOFError, KeyboardInterrupt):
        print()
    print("Goodbye!")
    return 0


# One-shot commands ----------------------------------------------------------
def handle_command(args: argparse.Namespace, store: LedgerStore, queries: LedgerQueries, settings: Settings) -> None:
    if args.command == "add":
        store.append(_build_record(args.date, args.category, args.amount, args.note))
        print("Expense added.")
    elif args.command == "list":
        print_selection(queries.list_all())
    elif args.command == "edit":
        index = args.position - 1
        store.get(index)
        store.replace_at(index, _build_record(args.date, args.category, args.amount, args.note))
        print("Expense updated.")
    elif args.command == "delete":
        index = args.position - 1
        store.get(index)
        store.remove_at(index)
        print("Expense deleted.")
    elif args.command == "total":
        if args.month is None:
            print(f"Total Expenses: {_format_amount(queries.total_all(), settings)}")
        else:
            amount = queries.total_for_month(args.month)
            print(f"Total for {args.month}: {_format_amount(amount, settings)}")
    elif args.command == "category":
        print_selection(queries.filter_by_category(args.name))
    elif args.command == "range":
        print_selection(queries.filter_by_date_range(args.start, args.end))


def _add_record_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("date", help="Date as YYYY-MM-DD")
    parser.add_argument("category")
    parser.add_argument("amount", type=_parse_amount)
    parser.add_argument("note", nargs="?", default="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Expense Tracker. Runs the interactive menu when no command is given."
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="Ledger file (default: $EXPENSE_TRACKER_DATA_FILE or ./expenses.txt)",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper)

    subparsers = parser.add_subparsers(dest="command")

    add_parser = subparsers.add_parser("add", help="Add a new expense")
    _add_record_arguments(add_parser)

    subparsers.add_parser("list", help="Show all expenses")

    edit_parser = subparsers.add_parser("edit", help="Replace the expense at a position")
    edit_parser.add_argument("position", type=_parse_position, help="1-based position from 'list'")
    _add_record_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete the expense at a position")
    delete_parser.add_argument("position", type=_parse_position, help="1-based position from 'list'")

    total_parser = subparsers.add_parser("total", help="Total of all expenses or of one month")
    total_parser.add_argument("--month", help="Date prefix such as YYYY-MM")

    category_parser = subparsers.add_parser("category", help="Filter expenses by category")
    category_parser.add_argument("name")

    range_parser = subparsers.add_parser("range", help="Filter expenses by inclusive date range")
    range_parser.add_argument("start", help="From date as YYYY-MM-DD")
    range_parser.add_argument("end", help="To date as YYYY-MM-DD")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    configure_logging(args.log_level or settings.log_level)

    try:
        store, queries = _load_ledger(args.data_file or settings.data_file)
    except MalformedRecordError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1

    if args.command is None:
        return run_menu(store, queries, settings)

    try:
        handle_command(args, store, queries, settings)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
