"""Persistence backends for the expense tracker core services."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import PersistenceError
from .logging_setup import get_logger

logger = get_logger(__name__)


class JSONStorage:
    """Single-file JSON storage with crash-safe whole-file rewrites.

    There is no locking: two processes saving the same file concurrently
    lose updates, and the last save wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        path = self._path
        if not path.exists():
            logger.debug("Backing file %s does not exist; starting empty", path)
            return []
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not raw.strip():
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc

        if not isinstance(payload, list):
            raise PersistenceError(f"Expected list payload in {path}")
        logger.debug("Loaded %d records from %s", len(payload), path)
        return payload

    def save(self, records: Iterable[Dict[str, Any]]) -> None:
        path = self._path
        temp_path = path.with_suffix(path.suffix + ".tmp")
        payload = list(records)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.flush()
            # Use replace for atomic move on POSIX; ensures crash-safe persistence.
            temp_path.replace(path)
        except (OSError, TypeError, ValueError) as exc:
            temp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.debug("Saved %d records to %s", len(payload), path)

    @property
    def path(self) -> Path:
        return self._path


class MemoryStorage:
    """In-process stand-in for :class:`JSONStorage`, used by tests."""

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._records: List[Dict[str, Any]] = copy.deepcopy(list(records or []))
        self.save_count = 0

    def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    def save(self, records: Iterable[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(list(records))
        self.save_count += 1

    @property
    def records(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)
