"""Tests for the SQLite migrations."""

import sqlite3

from qr_codes_api.app.core import db
from qr_codes_api.app.core.config import settings


def _connect(path):
    conn = sqlite3.connect(path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def test_fresh_database_has_all_migrations(database):
    conn = _connect(database)
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        size_type = next(row[2] for row in conn.execute("PRAGMA table_info(qr_codes)") if row[1] == "size")
    finally:
        conn.close()
    assert versions == [version for version, _ in db.MIGRATIONS]
    assert size_type == "NUMERIC"


def test_init_db_is_idempotent(database):
    db.init_db()
    conn = _connect(database)
    try:
        count = conn.execute("SELECT COUNT(*) FROM migrations").fetchone()[0]
    finally:
        conn.close()
    assert count == len(db.MIGRATIONS)


def test_size_rebuild_keeps_rows_and_scan_events(tmp_path, monkeypatch):
    path = tmp_path / "upgrade.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(db, "MIGRATIONS", db.MIGRATIONS[:2])
    db.init_db()

    conn = _connect(path)
    try:
        conn.execute(
            "INSERT INTO qr_codes (id, user_id, content_value, size, created_at, updated_at) "
            "VALUES ('q1', 'alice', 'https://example.com', 256, 't', 't')"
        )
        conn.execute("INSERT INTO qr_scan_events (id, qr_code_id, scanned_at) VALUES ('e1', 'q1', 't')")
        conn.commit()
        assert conn.execute("SELECT typeof(size) FROM qr_codes").fetchone()[0] == "real"
    finally:
        conn.close()

    monkeypatch.undo()
    monkeypatch.setattr(settings, "database_url", str(path))
    db.init_db()

    conn = _connect(path)
    try:
        assert conn.execute("SELECT size, typeof(size) FROM qr_codes WHERE id = 'q1'").fetchone() == (256, "integer")
        assert conn.execute("SELECT qr_code_id FROM qr_scan_events").fetchone() == ("q1",)
        assert conn.execute("PRAGMA foreign_key_check").fetchall() == []
        indexes = {row[1] for row in conn.execute("PRAGMA index_list(qr_codes)")}
        assert "idx_qr_codes_user_id" in indexes
    finally:
        conn.close()
