"""Persistence utilities for the expense ledger."""

from __future__ import annotations

from contextlib import suppress
from pathlib import Path
from typing import Iterable, List

from .exceptions import PersistenceError


class LineFileStorage:
    """Plain-text storage holding one record per line, rewritten in full on save."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> List[str]:
        if not self._path.exists():
            return []
        try:
            # Universal newlines: "\r\n" and "\r" endings arrive as "\n".
            # Bytes that are not UTF-8 become U+FFFD so the other lines still load.
            with self._path.open("r", encoding="utf-8", errors="replace") as handle:
                return [line.rstrip("\n") for line in handle]
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {self._path}: {exc}") from exc

    def save(self, lines: Iterable[str]) -> None:
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(line)
                    handle.write("\n")
                handle.flush()
            # Use replace for atomic move on POSIX; the file is never half-written.
            temp_path.replace(self._path)
        except OSError as exc:
            with suppress(OSError):
                temp_path.unlink()
            raise PersistenceError(f"Unable to write to {self._path}: {exc}") from exc

    @property
    def path(self) -> Path:
        return self._path
