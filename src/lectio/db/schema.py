# ABOUTME: SQL DDL statements for the lectio reader database.
# ABOUTME: Defines verse, metadata, annotation, history, and settings tables plus column migrations.

# Every statement is idempotent so the whole script can run on each start.
SCHEMA = """
-- Scripture text, one row per (book, chapter, verse, version); written only by seeding
CREATE TABLE IF NOT EXISTS verses (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    book    TEXT NOT NULL,
    chapter INTEGER NOT NULL,
    verse   INTEGER NOT NULL,
    text    TEXT NOT NULL,
    version TEXT NOT NULL DEFAULT 'KJV'
);

CREATE INDEX IF NOT EXISTS idx_verses_chapter ON verses(version, book, chapter, verse);

-- Seeding markers and other internal key/value state
CREATE TABLE IF NOT EXISTS metadata (
    key   TEXT PRIMARY KEY,
    value TEXT
);

-- One color per verse, kept unique by delete-then-insert
CREATE TABLE IF NOT EXISTS highlights (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book       TEXT NOT NULL,
    chapter    INTEGER NOT NULL,
    verse      INTEGER NOT NULL,
    color      TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_highlights_chapter ON highlights(book, chapter);

CREATE TABLE IF NOT EXISTS bookmarks (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book       TEXT NOT NULL,
    chapter    INTEGER NOT NULL,
    verse      INTEGER NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_bookmarks_chapter ON bookmarks(book, chapter);

CREATE TABLE IF NOT EXISTS notes (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book       TEXT NOT NULL,
    chapter    INTEGER NOT NULL,
    verse      INTEGER NOT NULL,
    content    TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_notes_chapter ON notes(book, chapter);

-- Most recent first by id; one row per (book, chapter)
CREATE TABLE IF NOT EXISTS reading_history (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book       TEXT NOT NULL,
    chapter    INTEGER NOT NULL,
    verse      INTEGER NOT NULL DEFAULT 1,
    visited_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE TABLE IF NOT EXISTS recent_searches (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    term        TEXT NOT NULL UNIQUE,
    searched_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- User preferences; kept apart from metadata so a repair does not reset them
CREATE TABLE IF NOT EXISTS settings (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

# Additive column migrations: (table, column, declaration). Applied only when
# PRAGMA table_info shows the column missing.
COLUMN_MIGRATIONS: list[tuple[str, str, str]] = [
    ("notes", "verse_end", "INTEGER"),
    ("bookmarks", "verse_end", "INTEGER"),
]

# Tables rebuilt by the repair operation. Annotation tables are never listed here.
VERSE_TABLES = ("verses", "metadata")
