"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a write transaction (``transaction``)
and applying migrations on application start (``init_db``).  Every
function takes the configured ``database_url`` explicitly; the value
comes from the ``Settings`` instance owned by the application.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

# Seconds a connection waits for another writer to release the lock.
BUSY_TIMEOUT = 10.0
# Largest value an SQLite INTEGER column or bound parameter can hold.
MAX_INTEGER = 2**63 - 1

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS opportunities (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            organization TEXT NOT NULL,
            location TEXT NOT NULL,
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            tags TEXT NOT NULL DEFAULT '[]',
            spots_remaining INTEGER NOT NULL DEFAULT 0 CHECK (spots_remaining >= 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- opportunity_id is nulled rather than cascaded when an
        -- opportunity is archived so the signup history survives.
        CREATE TABLE IF NOT EXISTS signups (
            id TEXT PRIMARY KEY,
            opportunity_id TEXT,
            volunteer_name TEXT NOT NULL,
            volunteer_email TEXT NOT NULL,
            notes TEXT,
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            FOREIGN KEY(opportunity_id) REFERENCES opportunities(id) ON DELETE SET NULL
        );
        """,
    ),
    # Migration 2: indices for the listing queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_opportunities_date ON opportunities(date);
        CREATE INDEX IF NOT EXISTS idx_signups_opportunity_id ON signups(opportunity_id);
        CREATE INDEX IF NOT EXISTS idx_signups_created_at ON signups(created_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used directly.  Relative paths are resolved
    against the package root (the ``volunteer_board_api`` directory).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # volunteer_board_api/
    return str((base_dir / database_url).resolve())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name, and foreign key enforcement is switched on for the lifetime
    of the connection (SQLite leaves it off by default, which would
    silently ignore the ``ON DELETE SET NULL`` clause on signups).
    """
    conn = sqlite3.connect(get_database_path(database_url), timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(database_url: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(database_url)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction(database_url: str) -> Iterator[sqlite3.Connection]:
    """Run a block inside a ``BEGIN IMMEDIATE`` transaction.

    The write lock is taken up front, so concurrent writers queue on
    it instead of interleaving a read and a later update.  The
    transaction is committed when the block exits normally and rolled
    back when it raises.
    """
    conn = get_connection(database_url)
    try:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException:
            conn.rollback()
            raise
        conn.commit()
    finally:
        conn.close()


def new_id() -> str:
    """Return a fresh opaque identifier for a row."""
    return uuid.uuid4().hex


def init_db(database_url: str) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries from
    ``MIGRATIONS``.  To add a migration, append it with an incremented
    version number.
    """
    with get_cursor(database_url) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
