"""StatusStore - Main API for Status Store operations."""

from __future__ import annotations

import json
import threading
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from pimainteno.status_store.database import Database
from pimainteno.status_store.exceptions import StatusStoreError, StoredValueError
from pimainteno.status_store.models import StatusEntry


class StatusStore:
    """Durable key/value map holding all externally observable daemon state.

    Every write is an independent upsert; there are no multi-key transactions.
    Readers may observe a snapshot taken halfway through a pipeline pass.
    """

    def __init__(self, db_path: str = "pimainteno.db") -> None:
        """Initialize Status Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file

        Raises:
            StatusStoreError: If the database cannot be opened
        """
        self._db = Database(db_path)
        self._lock = threading.RLock()
        try:
            self._db.create_tables()
        except SQLAlchemyError as e:
            raise StatusStoreError(f"Cannot open status store '{db_path}': {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def get(self, key: str) -> str | None:
        """Get the value stored under a key.

        Args:
            key: The key to look up

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StatusStoreError: If the database read fails
        """
        with self._lock:
            session = self._db.get_session()
            try:
                entry = session.get(StatusEntry, key)
                return entry.value if entry is not None else None
            except SQLAlchemyError as e:
                raise StatusStoreError(f"Failed to read key '{key}': {e}") from e
            finally:
                session.close()

    def insert(self, key: str, value: str) -> None:
        """Insert or replace the value stored under a key.

        Raises:
            StatusStoreError: If the database write fails
        """
        stmt = sqlite_insert(StatusEntry).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[StatusEntry.key],
            set_={"value": stmt.excluded.value, "updated_at": func.now()},
        )
        with self._lock:
            session = self._db.get_session()
            try:
                session.execute(stmt)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise StatusStoreError(f"Failed to write key '{key}': {e}") from e
            finally:
                session.close()

    def flush(self) -> None:
        """Make all previous writes durable in the main database file.

        Raises:
            StatusStoreError: If the checkpoint fails
        """
        with self._lock:
            try:
                self._db.checkpoint()
            except SQLAlchemyError as e:
                raise StatusStoreError(f"Failed to flush status store: {e}") from e

    def items(self, prefix: str = "") -> dict[str, str]:
        """Return every key/value pair whose key starts with ``prefix``."""
        with self._lock:
            session = self._db.get_session()
            try:
                stmt = select(StatusEntry).order_by(StatusEntry.key)
                if prefix:
                    stmt = stmt.where(StatusEntry.key.startswith(prefix, autoescape=True))
                return {entry.key: entry.value for entry in session.execute(stmt).scalars()}
            except SQLAlchemyError as e:
                raise StatusStoreError(f"Failed to list keys under '{prefix}': {e}") from e
            finally:
                session.close()

    # --- JSON helpers ---

    def get_json(self, key: str, default: Any = None) -> Any:
        """Get a JSON-encoded value, or ``default`` if the key is absent.

        Raises:
            StoredValueError: If the stored value is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoredValueError(f"Value under '{key}' is not valid JSON: {e}") from e

    def set_json(self, key: str, value: Any) -> None:
        self.insert(key, json.dumps(value))

    def append_bounded(self, key: str, item: str, limit: int) -> list[str]:
        """Append to a JSON string list, keeping only the newest ``limit`` items.

        A missing or undecodable list starts over empty.

        Returns:
            The list as persisted, oldest first.
        """
        with self._lock:
            try:
                current = self.get_json(key, default=[])
            except StoredValueError:
                current = []
            if not isinstance(current, list):
                current = []
            current.append(item)
            trimmed = current[-limit:] if limit > 0 else []
            self.set_json(key, trimmed)
            return trimmed
