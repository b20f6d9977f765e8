"""
SQLite-based credential store implementation.

Tables:
- credentials: key/value pairs for the persisted session
  (access_token, user_id, user_email, account_id)
"""

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path


class CredentialKey(str, Enum):
    """Keys persisted for the authenticated session."""

    ACCESS_TOKEN = "access_token"
    USER_ID = "user_id"
    USER_EMAIL = "user_email"
    ACCOUNT_ID = "account_id"


class CredentialStore:
    """
    SQLite key/value store for the local session.

    Read once by the Session at startup to decide whether the user is
    already authenticated, and written through on every session change.
    """

    def __init__(self, db_path: Path | str):
        """
        Initialize credential store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS credentials (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )

    def get(self, key: CredentialKey | str) -> str | None:
        """Get a stored value, or None if the key is absent."""
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM credentials WHERE key = ?", (_key(key),)
            ).fetchone()
        finally:
            conn.close()
        return row["value"] if row else None

    def set(self, key: CredentialKey | str, value: str | int) -> None:
        """Insert or replace a value."""
        now = datetime.now(timezone.utc).isoformat()
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO credentials (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (_key(key), str(value), now),
            )

    def delete(self, key: CredentialKey | str) -> None:
        """Remove a value. Missing keys are ignored."""
        self.delete_many([key])

    def delete_many(self, keys: Iterable[CredentialKey | str]) -> None:
        """Remove several values in one transaction."""
        with self._transaction() as conn:
            conn.executemany(
                "DELETE FROM credentials WHERE key = ?",
                [(_key(k),) for k in keys],
            )

    def all(self) -> dict[str, str]:
        """Return every stored key/value pair."""
        conn = self._get_connection()
        try:
            rows = conn.execute("SELECT key, value FROM credentials").fetchall()
        finally:
            conn.close()
        return {row["key"]: row["value"] for row in rows}


def _key(key: CredentialKey | str) -> str:
    return key.value if isinstance(key, CredentialKey) else key
