# finance_tracker/db/connection.py

"""
SQLite connection handler
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from simple_logger import Slogger

IN_MEMORY = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    type        TEXT NOT NULL DEFAULT 'expense' CHECK (type IN ('income', 'expense')),
    status      TEXT NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'inactive')),
    created_on  TEXT NOT NULL,
    updated_on  TEXT
);

CREATE TABLE IF NOT EXISTS payment_modes (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    mode        TEXT NOT NULL,
    created_on  TEXT NOT NULL,
    updated_on  TEXT
);

CREATE TABLE IF NOT EXISTS bank_details (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    bank_name       TEXT NOT NULL,
    holder_name     TEXT NOT NULL,
    account_number  TEXT,
    ifsc_code       TEXT,
    branch          TEXT,
    status          TEXT NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'inactive')),
    created_on      TEXT NOT NULL,
    updated_on      TEXT
);

CREATE TABLE IF NOT EXISTS transactions (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    transaction_date  TEXT NOT NULL,
    amount            REAL NOT NULL CHECK (amount > 0),
    type              TEXT NOT NULL CHECK (type IN ('income', 'expense')),
    category_id       INTEGER NOT NULL REFERENCES categories (id),
    payment_mode_id   INTEGER NOT NULL REFERENCES payment_modes (id),
    bank_account_id   INTEGER REFERENCES bank_details (id) ON DELETE SET NULL,
    description       TEXT,
    created_on        TEXT NOT NULL,
    updated_on        TEXT
);

CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions (transaction_date);
"""


class SQLiteConnection:
    """
    Handles basic connection to SQLite

    The connection is shared by the worker threads that run repository
    calls; `locked()` serialises access to it.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize SQLite connection

        Args:
            config: Configuration dictionary containing SQLite settings
        """
        db_path_str = config["sqlite"]["db_path"]

        if db_path_str != IN_MEMORY:
            db_path = Path(db_path_str)
            if not db_path.parent.exists():
                Slogger.info(f"Creating database directory: {db_path.parent}")
                db_path.parent.mkdir(parents=True, exist_ok=True)

        Slogger.debug("SQLiteConnection: connecting", {"db_path": db_path_str})
        self.conn = sqlite3.connect(db_path_str, check_same_thread=False)
        # Enable foreign keys
        self.conn.execute("PRAGMA foreign_keys = ON")
        # Return rows as dictionaries
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()

        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self.locked():
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    @contextmanager
    def locked(self) -> Iterator["SQLiteConnection"]:
        """Hold the connection for a read-then-write sequence."""
        with self._lock:
            yield self

    def cursor(self):
        """
        Get a cursor for database operations

        Returns:
            SQLite cursor
        """
        return self.conn.cursor()

    def commit(self):
        """Commit the current transaction"""
        self.conn.commit()

    def rollback(self):
        """Discard the current transaction"""
        self.conn.rollback()

    def close(self):
        """Close the connection"""
        self.conn.close()
