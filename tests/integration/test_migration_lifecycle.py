# ABOUTME: Integration tests for upgrading a database created before verse ranges existed.
# ABOUTME: Validates that legacy notes and bookmarks survive and gain range support.

import sqlite3
from pathlib import Path

from lectio.core.session import BibleSession
from lectio.db.ranges import VerseRange
from lectio.translations.loader import MemoryTranslations

_LEGACY_SCHEMA = """
CREATE TABLE verses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    book TEXT NOT NULL,
    chapter INTEGER NOT NULL,
    verse INTEGER NOT NULL,
    text TEXT NOT NULL,
    version TEXT NOT NULL DEFAULT 'KJV'
);
CREATE TABLE bookmarks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    book TEXT NOT NULL,
    chapter INTEGER NOT NULL,
    verse INTEGER NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);
CREATE TABLE notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    book TEXT NOT NULL,
    chapter INTEGER NOT NULL,
    verse INTEGER NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);
INSERT INTO verses (book, chapter, verse, text) VALUES ('Genesis', 1, 1, 'stale');
INSERT INTO bookmarks (book, chapter, verse) VALUES ('Genesis', 1, 2);
INSERT INTO notes (book, chapter, verse, content) VALUES ('Genesis', 1, 3, 'old note');
"""


class TestLegacyUpgrade:
    """Integration tests for the additive migration path."""

    def test_legacy_database_upgrades_and_reseeds(self, db_path: Path, datasets: dict) -> None:
        # Step 1: Create a database in the pre-range layout, with no seed marker
        legacy = sqlite3.connect(str(db_path))
        legacy.executescript(_LEGACY_SCHEMA)
        legacy.close()

        # Step 2: Open it; the schema is upgraded and the verses reseeded
        session = BibleSession.open(db_path, source=MemoryTranslations(datasets))
        result = session.ensure_seeded()
        assert result.inserted == 22
        assert session.verses.get_verse("Genesis", 1, 1, "KJV").text.startswith("In the")

        # Step 3: Old single-verse annotations read back unchanged
        assert session.annotations.find_bookmark("Genesis", 1, 2).range == VerseRange(2)
        assert session.annotations.get_note("Genesis", 1, 3).content == "old note"

        # Step 4: Ranges now work on the upgraded tables
        session.annotations.save_note("Genesis", 1, 4, "new range", 6)
        view = session.annotations.get_notes_for_chapter("Genesis", 1)
        assert view[5].content == "new range"
        assert view[3].content == "old note"
        session.close()

    def test_multiple_reopens_are_safe(self, db_path: Path, datasets: dict) -> None:
        source = MemoryTranslations(datasets)
        for _ in range(3):
            with BibleSession.open(db_path, source=source) as session:
                session.ensure_seeded()
                session.annotations.add_bookmark("John", 1, 1, 2)

        with BibleSession.open(db_path, source=source) as session:
            assert len(session.annotations.list_bookmarks()) == 1
            assert session.verses.count_verses() == 22
