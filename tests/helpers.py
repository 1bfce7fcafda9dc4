"""Record builders shared by the test modules."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from ledger.models import Record
from ledger.services import LedgerStore


def make_record(date: str, category: str = "food", amount: str = "1", note: str = "") -> Record:
    return Record(date=date, category=category, amount=Decimal(amount), note=note)


def fill(store: LedgerStore, records: Iterable[Record]) -> List[Record]:
    added = list(records)
    for record in added:
        store.append(record)
    return added
