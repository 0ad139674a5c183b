"""SQLite engine and sessions backing the Status Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pimainteno.status_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY = ":memory:"

# Applied to every new DBAPI connection
_CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA busy_timeout=5000",
)


def _build_engine(db_path: str) -> Engine:
    """Create an engine whose connections may be shared by the daemon's threads."""
    connect_args = {"check_same_thread": False}
    if db_path == MEMORY:
        # A single connection, otherwise every pooled connection gets its own database
        engine = create_engine(
            "sqlite:///:memory:", poolclass=StaticPool, connect_args=connect_args
        )
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(f"sqlite:///{db_path}", connect_args=connect_args)

    @event.listens_for(engine, "connect")
    def apply_pragmas(dbapi_connection: object, _connection_record: object) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
        for pragma in _CONNECTION_PRAGMAS:
            cursor.execute(pragma)
        cursor.close()

    return engine


class Database:
    """Owns the engine of one status database.

    The engine is created lazily so constructing a store never touches disk
    until the first query.
    """

    def __init__(self, db_path: str = "pimainteno.db") -> None:
        """Initialize database connection.

        Args:
            db_path: Path to the SQLite file, or ":memory:".
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = _build_engine(self.db_path)
        return self._engine

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Open a session; callers close it."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions()

    def journal_mode(self) -> str:
        with self.engine.connect() as conn:
            return str(conn.execute(text("PRAGMA journal_mode")).scalar())

    def is_wal_mode(self) -> bool:
        return self.journal_mode() == "wal"

    def checkpoint(self) -> None:
        """Fold the write-ahead log back into the main database file."""
        with self.engine.connect() as conn:
            conn.execute(text("PRAGMA wal_checkpoint(PASSIVE)"))

    def close(self) -> None:
        """Dispose of the engine; the next query reconnects."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
