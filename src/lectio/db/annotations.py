# ABOUTME: CRUD for user annotations: highlights, bookmarks, and notes.
# ABOUTME: Bookmarks and notes may span verse ranges; chapter reads expand them via RangeIndex.

import sqlite3
from collections.abc import Iterable, Mapping

from lectio.canon import book_sort_key
from lectio.db.errors import storage_errors
from lectio.db.mapping import (
    Bookmark,
    Highlight,
    Note,
    row_to_bookmark,
    row_to_highlight,
    row_to_note,
)
from lectio.db.ranges import RangeIndex, VerseRange

HIGHLIGHT_COLORS: dict[str, str] = {
    "yellow": "#fef3c7",
    "green": "#dcfce7",
    "blue": "#dbeafe",
    "pink": "#fce7f3",
}

_NOW = "strftime('%Y-%m-%dT%H:%M:%S', 'now')"


def resolve_color(value: str) -> str:
    """Map a palette name to its hex value; `#rrggbb` strings pass through lowercased.

    Raises:
        ValueError: For anything else.
    """
    name = value.strip().lower()
    if name in HIGHLIGHT_COLORS:
        return HIGHLIGHT_COLORS[name]
    if len(name) == 7 and name.startswith("#") and all(c in "0123456789abcdef" for c in name[1:]):
        return name
    palette = ", ".join(HIGHLIGHT_COLORS)
    raise ValueError(f"Unknown color {value!r} (use {palette} or #rrggbb)")


def _match_range(rng: VerseRange) -> tuple[str, tuple[int, ...]]:
    """WHERE fragment selecting rows stored with exactly this range.

    A single verse also matches legacy rows whose verse_end equals verse.
    """
    if rng.is_single:
        return "verse = ? AND (verse_end IS NULL OR verse_end = verse)", (rng.start,)
    return "verse = ? AND verse_end = ?", (rng.start, rng.last)


def _text_join(table: str) -> str:
    # Joins the start verse's text in the requested translation.
    return (
        f"SELECT a.*, v.text AS text FROM {table} a "
        "LEFT JOIN verses v ON v.book = a.book AND v.chapter = a.chapter "
        "AND v.verse = a.verse AND v.version = ?"
    )


class AnnotationStore:
    """Wraps a sqlite3 connection and provides typed CRUD for annotation tables.

    Annotations are keyed by book, chapter, and verse only: they apply to a
    passage in every translation. Every write commits before returning.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Highlight operations ---

    def get_highlights(self, book: str, chapter: int) -> dict[int, str]:
        """Return verse -> color for a chapter."""
        with storage_errors("get highlights"):
            cursor = self._conn.execute(
                "SELECT verse, color FROM highlights WHERE book = ? AND chapter = ? ORDER BY id",
                (book, chapter),
            )
            return {row["verse"]: row["color"] for row in cursor.fetchall()}

    def list_highlights(self, version: str | None = None) -> list[Highlight]:
        """All highlights in canon order, with verse text from `version` when given."""
        with storage_errors("list highlights"):
            if version is None:
                cursor = self._conn.execute("SELECT * FROM highlights")
            else:
                cursor = self._conn.execute(_text_join("highlights"), (version,))
            records = [row_to_highlight(row) for row in cursor.fetchall()]
        records.sort(key=lambda h: (book_sort_key(h.book), h.chapter, h.verse, h.id))
        return records

    def add_highlight(self, book: str, chapter: int, verse: int, color: str) -> int:
        """Set the highlight color of a verse, replacing any existing one.

        Returns:
            The row ID of the new highlight.
        """
        with storage_errors("add highlight", self._conn):
            self._conn.execute(
                "DELETE FROM highlights WHERE book = ? AND chapter = ? AND verse = ?",
                (book, chapter, verse),
            )
            cursor = self._conn.execute(
                "INSERT INTO highlights (book, chapter, verse, color) VALUES (?, ?, ?, ?)",
                (book, chapter, verse, color),
            )
        return cursor.lastrowid  # type: ignore[return-value]

    def add_highlights(self, book: str, chapter: int, verses: Iterable[int], color: str) -> int:
        """Highlight each verse of a selection, one independent write per verse.

        A failure part-way leaves the earlier verses highlighted; since every
        write replaces rather than appends, retrying the whole batch is safe.

        Returns:
            The number of verses written.
        """
        count = 0
        for verse in sorted(set(verses)):
            self.add_highlight(book, chapter, verse, color)
            count += 1
        return count

    def remove_highlight(self, book: str, chapter: int, verse: int) -> bool:
        """Remove a verse's highlight. Returns False if it had none."""
        with storage_errors("remove highlight", self._conn):
            cursor = self._conn.execute(
                "DELETE FROM highlights WHERE book = ? AND chapter = ? AND verse = ?",
                (book, chapter, verse),
            )
        return cursor.rowcount > 0

    def remove_highlights(self, book: str, chapter: int, verses: Iterable[int]) -> int:
        """Remove highlights from each verse of a selection; returns how many existed."""
        return sum(self.remove_highlight(book, chapter, v) for v in sorted(set(verses)))

    # --- Bookmark operations ---

    def bookmark_index(self, book: str, chapter: int) -> RangeIndex[Bookmark]:
        """Index of the chapter's bookmarks by every verse they cover."""
        with storage_errors("get bookmarks"):
            cursor = self._conn.execute(
                "SELECT * FROM bookmarks WHERE book = ? AND chapter = ?", (book, chapter)
            )
            return RangeIndex(row_to_bookmark(row) for row in cursor.fetchall())

    def get_bookmarks_for_chapter(self, book: str, chapter: int) -> Mapping[int, Bookmark]:
        """Read-only map of verse -> Bookmark; all verses of a range share one Bookmark."""
        return self.bookmark_index(book, chapter).projection()

    def find_bookmark(self, book: str, chapter: int, verse: int) -> Bookmark | None:
        """The bookmark whose range contains `verse`, if any."""
        return self.bookmark_index(book, chapter).get(verse)

    def list_bookmarks(self, version: str | None = None) -> list[Bookmark]:
        """All bookmarks in canon order, with start-verse text from `version` when given."""
        with storage_errors("list bookmarks"):
            if version is None:
                cursor = self._conn.execute("SELECT * FROM bookmarks")
            else:
                cursor = self._conn.execute(_text_join("bookmarks"), (version,))
            records = [row_to_bookmark(row) for row in cursor.fetchall()]
        records.sort(key=lambda b: (book_sort_key(b.book), b.chapter, b.verse, b.id))
        return records

    def add_bookmark(
        self, book: str, chapter: int, verse: int, verse_end: int | None = None
    ) -> int:
        """Bookmark a verse or range. Adding an identical bookmark again is a no-op.

        Returns:
            The row ID of the (new or existing) bookmark.
        """
        rng = VerseRange(verse, verse_end)
        clause, params = _match_range(rng)
        with storage_errors("add bookmark", self._conn):
            cursor = self._conn.execute(
                f"SELECT id FROM bookmarks WHERE book = ? AND chapter = ? AND {clause}",
                (book, chapter, *params),
            )
            existing = cursor.fetchone()
            if existing is not None:
                return existing["id"]
            cursor = self._conn.execute(
                "INSERT INTO bookmarks (book, chapter, verse, verse_end) VALUES (?, ?, ?, ?)",
                (book, chapter, rng.start, rng.end),
            )
        return cursor.lastrowid  # type: ignore[return-value]

    def remove_bookmark(
        self, book: str, chapter: int, verse: int, verse_end: int | None = None
    ) -> bool:
        """Remove the bookmark stored with exactly this range. Returns False if none matched."""
        clause, params = _match_range(VerseRange(verse, verse_end))
        with storage_errors("remove bookmark", self._conn):
            cursor = self._conn.execute(
                f"DELETE FROM bookmarks WHERE book = ? AND chapter = ? AND {clause}",
                (book, chapter, *params),
            )
        return cursor.rowcount > 0

    def toggle_bookmark(
        self, book: str, chapter: int, verse: int, verse_end: int | None = None
    ) -> bool:
        """Bookmark a selection, or un-bookmark it if any of its verses is already covered.

        Covered means inside an existing bookmark's range, not merely sharing
        its start verse, so toggling verse 6 inside a 5-7 bookmark removes
        that bookmark rather than adding an overlapping one.

        Returns:
            True if the selection is bookmarked afterwards, False if removed.
        """
        rng = VerseRange(verse, verse_end)
        index = self.bookmark_index(book, chapter)
        covering: set[int] = set()
        for v in rng:
            existing = index.get(v)
            if existing is not None:
                covering.add(existing.id)
        if not covering:
            self.add_bookmark(book, chapter, rng.start, rng.end)
            return True

        with storage_errors("remove bookmark", self._conn):
            self._conn.executemany(
                "DELETE FROM bookmarks WHERE id = ?", [(bid,) for bid in sorted(covering)]
            )
        return False

    # --- Note operations ---

    def note_index(self, book: str, chapter: int) -> RangeIndex[Note]:
        """Index of the chapter's notes by every verse they cover."""
        with storage_errors("get notes"):
            cursor = self._conn.execute(
                "SELECT * FROM notes WHERE book = ? AND chapter = ?", (book, chapter)
            )
            return RangeIndex(row_to_note(row) for row in cursor.fetchall())

    def get_notes_for_chapter(self, book: str, chapter: int) -> Mapping[int, Note]:
        """Read-only map of verse -> Note; all verses of a range share one Note."""
        return self.note_index(book, chapter).projection()

    def get_note(
        self, book: str, chapter: int, verse: int, verse_end: int | None = None
    ) -> Note | None:
        """Look up the note stored with exactly this range.

        A verse inside a ranged note does not match here; use
        get_notes_for_chapter to find the note covering a verse.
        """
        clause, params = _match_range(VerseRange(verse, verse_end))
        with storage_errors("get note"):
            cursor = self._conn.execute(
                f"SELECT * FROM notes WHERE book = ? AND chapter = ? AND {clause} "
                "ORDER BY id DESC LIMIT 1",
                (book, chapter, *params),
            )
            row = cursor.fetchone()
        return row_to_note(row) if row else None

    def list_notes(self, version: str | None = None) -> list[Note]:
        """All notes in canon order, with start-verse text from `version` when given."""
        with storage_errors("list notes"):
            if version is None:
                cursor = self._conn.execute("SELECT * FROM notes")
            else:
                cursor = self._conn.execute(_text_join("notes"), (version,))
            records = [row_to_note(row) for row in cursor.fetchall()]
        records.sort(key=lambda n: (book_sort_key(n.book), n.chapter, n.verse, n.id))
        return records

    def save_note(
        self,
        book: str,
        chapter: int,
        verse: int,
        content: str,
        verse_end: int | None = None,
    ) -> int:
        """Create or update the note for exactly this range.

        An existing note gets the new content, a normalized verse_end, and a
        refreshed created_at.

        Returns:
            The row ID of the saved note.
        """
        rng = VerseRange(verse, verse_end)
        clause, params = _match_range(rng)
        with storage_errors("save note", self._conn):
            cursor = self._conn.execute(
                f"SELECT id FROM notes WHERE book = ? AND chapter = ? AND {clause} "
                "ORDER BY id DESC LIMIT 1",
                (book, chapter, *params),
            )
            existing = cursor.fetchone()
            if existing is not None:
                note_id = existing["id"]
                self._conn.execute(
                    f"UPDATE notes SET content = ?, verse_end = ?, created_at = {_NOW} "
                    "WHERE id = ?",
                    (content, rng.end, note_id),
                )
            else:
                cursor = self._conn.execute(
                    "INSERT INTO notes (book, chapter, verse, verse_end, content) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (book, chapter, rng.start, rng.end, content),
                )
                note_id = cursor.lastrowid
        return note_id

    def delete_note(
        self, book: str, chapter: int, verse: int, verse_end: int | None = None
    ) -> bool:
        """Delete the note stored with exactly this range. Returns False if none matched."""
        clause, params = _match_range(VerseRange(verse, verse_end))
        with storage_errors("delete note", self._conn):
            cursor = self._conn.execute(
                f"DELETE FROM notes WHERE book = ? AND chapter = ? AND {clause}",
                (book, chapter, *params),
            )
        return cursor.rowcount > 0
