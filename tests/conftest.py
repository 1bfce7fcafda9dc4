"""Shared fixtures: every test gets its own ledger file and a clean environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from ledger.services import LedgerQueries, LedgerStore
from ledger.storage import LineFileStorage


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer EXPENSE_TRACKER_* settings out of the tests."""
    for name in (
        "EXPENSE_TRACKER_DATA_FILE",
        "EXPENSE_TRACKER_CURRENCY_SYMBOL",
        "EXPENSE_TRACKER_MAX_INPUT_ATTEMPTS",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_ENV",
        "EXPENSE_TRACKER_ALLOWED_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "expenses.txt"


@pytest.fixture
def store(data_file: Path) -> LedgerStore:
    ledger_store = LedgerStore(LineFileStorage(data_file))
    ledger_store.load()
    return ledger_store


@pytest.fixture
def queries(store: LedgerStore) -> LedgerQueries:
    return LedgerQueries(store)
