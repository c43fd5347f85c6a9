"""SQLite-backed TTL store implementation."""

import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

import structlog

from action_toolkit.store.errors import StoreConnectionError, StoreError
from action_toolkit.store.models import StoredValue


logger = structlog.get_logger()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS ttl_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    expires_at REAL NOT NULL
)
"""


class SqliteTtlStore:
    """SQLite TTL store for local runs.

    Persists entries across process invocations on the same machine.
    Uses WAL mode so concurrent invocations can read while one writes;
    last write wins.
    """

    def __init__(
        self,
        db_path: Path | str,
        clock: Callable[[], float] = time.time,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file.
            clock: Returns the current Unix time in seconds.
            log: Logger to use; defaults to the module logger.
        """
        self._db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self._clock = clock
        self._conn: sqlite3.Connection | None = None
        self._log = (log or logger).bind(
            component="store",
            db_path=str(self._db_path),
        )

    @property
    def db_path(self) -> Path:
        """Get the database path."""
        return self._db_path

    @property
    def is_connected(self) -> bool:
        """Check if connected to database."""
        return self._conn is not None

    def connect(self) -> None:
        """Open the database and create the entries table.

        Creates the database file and parent directories if they don't exist.

        Raises:
            StoreConnectionError: If the database cannot be opened.
        """
        if self._conn is not None:
            return

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.execute(_SCHEMA)
            conn.commit()
        except (OSError, sqlite3.Error) as e:
            msg = f"Cannot open TTL store at {self._db_path}: {e}"
            raise StoreConnectionError(msg) from e

        self._conn = conn
        self._log.debug("store_connected")

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._log.debug("store_closed")

    def __enter__(self) -> "SqliteTtlStore":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()

    def _ensure_connected(self) -> sqlite3.Connection:
        """Ensure database is connected.

        Returns:
            The database connection.

        Raises:
            StoreConnectionError: If not connected.
        """
        if self._conn is None:
            raise StoreConnectionError("Store not connected. Call connect() first.")
        return self._conn

    def get(self, key: str) -> StoredValue | None:
        """Read a live entry.

        Args:
            key: Entry key.

        Returns:
            The stored value, or None when absent or expired.
        """
        conn = self._ensure_connected()
        try:
            row = conn.execute(
                "SELECT value, expires_at FROM ttl_entries WHERE key = ? AND expires_at > ?",
                (key, self._clock()),
            ).fetchone()
        except sqlite3.Error as e:
            msg = f"Failed to read key {key!r}: {e}"
            raise StoreError(msg) from e

        if row is None:
            return None
        return StoredValue(value=row[0], expires_at=row[1])

    def put(self, key: str, value: str, ttl: int) -> None:
        """Write an entry, replacing any previous value.

        Args:
            key: Entry key.
            value: String value to store.
            ttl: Time-to-live in seconds.
        """
        conn = self._ensure_connected()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO ttl_entries (key, value, expires_at) VALUES (?, ?, ?)",
                (key, value, self._clock() + ttl),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            msg = f"Failed to write key {key!r}: {e}"
            raise StoreError(msg) from e

        self._log.debug("store_put", key=key, ttl=ttl)

    def purge_expired(self) -> int:
        """Delete expired entries.

        Returns:
            Number of rows removed.
        """
        conn = self._ensure_connected()
        cursor = conn.execute(
            "DELETE FROM ttl_entries WHERE expires_at <= ?", (self._clock(),)
        )
        conn.commit()
        return cursor.rowcount
