"""SQLite persistence for the signed-in session record."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from menu_order.config import DB_PATH
from menu_order.models import Session, parse_timestamp

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds at most one `{token, expiry}` record on local disk."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the session table if it does not already exist."""
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS session (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    token TEXT NOT NULL,
                    expiry TEXT NOT NULL
                );
                """
            )

    def load(self) -> Session | None:
        """Return the stored session, or None when absent or unreadable."""
        self.bootstrap_schema()
        with self._connect() as conn:
            row = conn.execute("SELECT token, expiry FROM session WHERE id = 1").fetchone()
        if row is None:
            return None

        token, expiry_text = row
        expiry = parse_timestamp(expiry_text)
        if not token or expiry is None:
            logger.warning("Discarding malformed session record (expiry=%r)", expiry_text)
            return None
        return Session(token=token, expiry=expiry)

    def save(self, session: Session) -> None:
        self.bootstrap_schema()
        with self._connect() as conn:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO session (id, token, expiry) VALUES (1, ?, ?)",
                    (session.token, session.expiry.isoformat()),
                )

    def clear(self) -> None:
        self.bootstrap_schema()
        with self._connect() as conn:
            with conn:
                conn.execute("DELETE FROM session")
