"""Environment-driven settings for the expense ledger surfaces."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .exceptions import ValidationError

DEFAULT_DATA_FILE = "expenses.txt"
DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_MAX_INPUT_ATTEMPTS = 3
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    data_file: Path
    currency_symbol: str
    max_input_attempts: int
    log_level: str
    environment: str
    allowed_origins: Tuple[str, ...]

    @property
    def is_development(self) -> bool:
        return self.environment in {"dev", "development"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the process environment (or a supplied mapping)."""
    env = os.environ if environ is None else environ
    origins = env.get("EXPENSE_TRACKER_ALLOWED_ORIGINS", "")
    return Settings(
        data_file=Path(env.get("EXPENSE_TRACKER_DATA_FILE") or DEFAULT_DATA_FILE),
        currency_symbol=env.get("EXPENSE_TRACKER_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
        max_input_attempts=_positive_int(
            env.get("EXPENSE_TRACKER_MAX_INPUT_ATTEMPTS"),
            "EXPENSE_TRACKER_MAX_INPUT_ATTEMPTS",
            DEFAULT_MAX_INPUT_ATTEMPTS,
        ),
        log_level=_log_level(env.get("EXPENSE_TRACKER_LOG_LEVEL")),
        environment=env.get("EXPENSE_TRACKER_ENV", "prod").lower(),
        allowed_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()),
    )


def _positive_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValidationError(f"{name} must be at least 1")
    return value


def _log_level(raw: Optional[str]) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(f"EXPENSE_TRACKER_LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")
    return level
