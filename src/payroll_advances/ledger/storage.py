"""Persistence for the advance ledger.

The ledger keeps two collections, each serialized as a JSON array under its
own key in a key-value store:

- ``employee_advances``: AdvancePayment records
- ``advance_deductions``: AdvanceDeduction records

Backends only move text in and out. Decoding is tolerant: a missing,
unreadable or malformed collection loads as empty and is logged.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Protocol, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from payroll_advances.database import init_db, session_scope
from payroll_advances.ledger.types import AdvanceDeduction, AdvancePayment
from payroll_advances.models import LedgerStateEntry

if TYPE_CHECKING:
    from payroll_advances.config import Settings

logger = logging.getLogger(__name__)

ADVANCES_KEY = "employee_advances"
DEDUCTIONS_KEY = "advance_deductions"

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Protocol for text key-value backends."""

    def get(self, key: str) -> str | None:
        """Return the stored text for key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...


class InMemoryKeyValueStore:
    """Process-local store. Contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """Store backed by a single JSON object file.

    The file maps keys to their text values. Writes go to a temporary file
    in the same directory which then replaces the original.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable ledger file %s, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ledger file %s does not hold an object, treating as empty", self.path)
            return {}
        return data

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class SqlKeyValueStore:
    """Store backed by the ``ledger_state`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self.session_factory() as session:
            entry = session.get(LedgerStateEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with session_scope(self.session_factory) as session:
            entry = session.get(LedgerStateEntry, key)
            if entry is None:
                session.add(LedgerStateEntry(key=key, value=value))
            else:
                entry.value = value


def create_key_value_store(settings: Settings) -> KeyValueStore:
    """Build the backend selected by configuration."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(settings.storage_path)
    if settings.storage_backend == "database":
        _, factory = init_db(settings.database_url)
        return SqlKeyValueStore(factory)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


class LedgerStorage:
    """Loads and saves the two ledger collections through a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load_advances(self) -> list[AdvancePayment]:
        return self._load(ADVANCES_KEY, AdvancePayment.from_dict)

    def save_advances(self, advances: list[AdvancePayment]) -> None:
        self._save(ADVANCES_KEY, [a.to_dict() for a in advances])

    def load_deductions(self) -> list[AdvanceDeduction]:
        return self._load(DEDUCTIONS_KEY, AdvanceDeduction.from_dict)

    def save_deductions(self, deductions: list[AdvanceDeduction]) -> None:
        self._save(DEDUCTIONS_KEY, [d.to_dict() for d in deductions])

    def _load(self, key: str, decode: Callable[[dict[str, Any]], T]) -> list[T]:
        try:
            raw = self.store.get(key)
        except Exception:
            logger.exception("Failed to read %s from storage, treating as empty", key)
            return []
        if not raw:
            return []

        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning("Malformed %s collection, treating as empty: %s", key, e)
            return []
        if not isinstance(items, list):
            logger.warning("Stored %s is not a list, treating as empty", key)
            return []

        try:
            return [decode(item) for item in items]
        except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.warning("Malformed record in %s, treating as empty: %s", key, e)
            return []

    def _save(self, key: str, items: list[dict[str, Any]]) -> None:
        self.store.set(key, json.dumps(items))
