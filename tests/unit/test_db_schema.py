# ABOUTME: Unit tests for schema creation and additive column migrations.
# ABOUTME: Validates tables, idempotence, legacy upgrades, and tolerance of a failing migration.

import logging
import sqlite3
from pathlib import Path

import pytest

from lectio.db.connection import (
    _column_exists,
    drop_verse_tables,
    ensure_schema,
    open_bible,
)
from lectio.db.errors import SchemaError, StorageError

_TABLES = {
    "verses",
    "metadata",
    "highlights",
    "bookmarks",
    "notes",
    "reading_history",
    "recent_searches",
    "settings",
}

_LEGACY_NOTES = """
CREATE TABLE notes (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book       TEXT NOT NULL,
    chapter    INTEGER NOT NULL,
    verse      INTEGER NOT NULL,
    content    TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);
"""


def _tables(conn: sqlite3.Connection) -> set[str]:
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in cursor.fetchall()}


class TestSchemaCreation:
    """Tests for tables created by open_bible."""

    def test_creates_all_tables(self, conn: sqlite3.Connection) -> None:
        assert _TABLES <= _tables(conn)

    def test_range_columns_present(self, conn: sqlite3.Connection) -> None:
        assert _column_exists(conn, "notes", "verse_end")
        assert _column_exists(conn, "bookmarks", "verse_end")

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "bible.db"
        connection = open_bible(path)
        connection.close()
        assert path.exists()

    def test_row_factory_and_wal(self, conn: sqlite3.Connection) -> None:
        assert conn.row_factory is sqlite3.Row
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"

    def test_casefold_function_registered(self, conn: sqlite3.Connection) -> None:
        assert conn.execute("SELECT casefold('LUMIÈRE')").fetchone()[0] == "lumière"
        assert conn.execute("SELECT casefold(NULL)").fetchone()[0] is None

    def test_non_database_file_raises_storage_error(self, tmp_path: Path) -> None:
        """A file that is not SQLite surfaces as StorageError, not a raw sqlite3 error."""
        path = tmp_path / "bogus.db"
        path.write_bytes(b"this is not a sqlite database at all" * 100)
        with pytest.raises(StorageError, match="not a database"):
            open_bible(path)

    def test_directory_path_raises_storage_error(self, tmp_path: Path) -> None:
        with pytest.raises(StorageError):
            open_bible(tmp_path)


class TestColumnMigrations:
    """Tests for the additive migration pass."""

    def test_fresh_database_applies_both(self) -> None:
        conn = sqlite3.connect(":memory:")
        assert ensure_schema(conn) == ["notes.verse_end", "bookmarks.verse_end"]
        conn.close()

    def test_second_run_is_a_no_op(self, conn: sqlite3.Connection) -> None:
        assert ensure_schema(conn) == []
        assert ensure_schema(conn) == []

    def test_reopen_keeps_data(self, db_path: Path) -> None:
        conn = open_bible(db_path)
        conn.execute(
            "INSERT INTO notes (book, chapter, verse, verse_end, content) "
            "VALUES ('Genesis', 1, 1, 3, 'kept')"
        )
        conn.commit()
        conn.close()

        conn = open_bible(db_path)
        row = conn.execute("SELECT content, verse_end FROM notes").fetchone()
        conn.close()
        assert (row["content"], row["verse_end"]) == ("kept", 3)

    def test_upgrades_legacy_notes_table(self, db_path: Path) -> None:
        """A notes table created before ranges existed gains verse_end and keeps its rows."""
        legacy = sqlite3.connect(str(db_path))
        legacy.executescript(_LEGACY_NOTES)
        legacy.execute(
            "INSERT INTO notes (book, chapter, verse, content) VALUES ('Genesis', 1, 4, 'old')"
        )
        legacy.commit()
        legacy.close()

        conn = open_bible(db_path)
        row = conn.execute("SELECT verse, verse_end, content FROM notes").fetchone()
        conn.close()
        assert (row["verse"], row["verse_end"], row["content"]) == (4, None, "old")

    def test_failing_migration_is_logged_and_skipped(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setattr(
            "lectio.db.connection.COLUMN_MIGRATIONS",
            [("no_such_table", "extra", "INTEGER"), ("notes", "verse_end", "INTEGER")],
        )
        conn = sqlite3.connect(":memory:")
        with caplog.at_level(logging.ERROR, logger="lectio.db.connection"):
            applied = ensure_schema(conn)
        conn.close()
        assert applied == ["notes.verse_end"]
        assert "no_such_table.extra" in caplog.text

    def test_schema_failure_raises(self) -> None:
        conn = sqlite3.connect(":memory:")
        conn.close()
        with pytest.raises(SchemaError):
            ensure_schema(conn)

    def test_schema_error_is_storage_error(self) -> None:
        assert issubclass(SchemaError, StorageError)


class TestDropVerseTables:
    """Tests for dropping the verse tables during repair."""

    def test_drops_only_verse_tables(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            "INSERT INTO highlights (book, chapter, verse, color) "
            "VALUES ('Genesis', 1, 1, '#fff000')"
        )
        conn.commit()
        drop_verse_tables(conn)
        tables = _tables(conn)
        assert "verses" not in tables
        assert "metadata" not in tables
        assert conn.execute("SELECT COUNT(*) FROM highlights").fetchone()[0] == 1
