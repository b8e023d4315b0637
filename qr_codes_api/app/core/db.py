"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and for applying migrations on application start
(``init_db``).  Applied migration versions are recorded in the
``migrations`` table and new migrations are executed in order.

Timestamps are stored as ISO 8601 text produced by Python (UTC, with
microseconds) rather than SQLite's ``CURRENT_TIMESTAMP``, because the
service layer needs sub-second precision to keep ``updated_at``
strictly increasing.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: QR codes and their scan events
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS qr_codes (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            label TEXT,
            content_type TEXT,
            content_value TEXT NOT NULL CHECK (content_value <> ''),
            size REAL,
            error_correction_level TEXT,
            foreground_color TEXT,
            background_color TEXT,
            logo_url TEXT,
            style_json TEXT,
            image_url TEXT,
            is_favorite INTEGER NOT NULL DEFAULT 0,
            is_archived INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS qr_scan_events (
            id TEXT PRIMARY KEY,
            qr_code_id TEXT NOT NULL,
            scanned_at TEXT NOT NULL,
            user_agent TEXT,
            ip_hash TEXT,
            location_hint TEXT,
            FOREIGN KEY(qr_code_id) REFERENCES qr_codes(id)
        );
        """,
    ),
    # Migration 2: indices for owner-scoped lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_qr_codes_user_id ON qr_codes(user_id);
        CREATE INDEX IF NOT EXISTS idx_qr_scan_events_qr_code_id ON qr_scan_events(qr_code_id);
        """,
    ),
    # Migration 3: qr_codes.size becomes NUMERIC so whole pixel sizes are
    # stored and returned as integers.  SQLite cannot change a column
    # type in place, so the table is rebuilt; foreign keys are switched
    # off meanwhile because qr_scan_events references it.
    (
        3,
        """
        PRAGMA foreign_keys = OFF;
        BEGIN;
        CREATE TABLE qr_codes_new (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            label TEXT,
            content_type TEXT,
            content_value TEXT NOT NULL CHECK (content_value <> ''),
            size NUMERIC,
            error_correction_level TEXT,
            foreground_color TEXT,
            background_color TEXT,
            logo_url TEXT,
            style_json TEXT,
            image_url TEXT,
            is_favorite INTEGER NOT NULL DEFAULT 0,
            is_archived INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        INSERT INTO qr_codes_new SELECT * FROM qr_codes;
        DROP TABLE qr_codes;
        ALTER TABLE qr_codes_new RENAME TO qr_codes;
        CREATE INDEX IF NOT EXISTS idx_qr_codes_user_id ON qr_codes(user_id);
        COMMIT;
        PRAGMA foreign_keys = ON;
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # qr_codes_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    Foreign key enforcement is switched on for every connection since
    SQLite leaves it off by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits on success and always closes."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    To change the schema, append a new entry to ``MIGRATIONS`` with an
    incremented version number; never edit an applied one.
    """
    with get_cursor() as cursor:
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
