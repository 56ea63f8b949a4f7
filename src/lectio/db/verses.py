# ABOUTME: Read-only queries over seeded scripture text.
# ABOUTME: Chapter lookup, case-insensitive substring search, and verse counts.

import sqlite3
from collections.abc import Collection

from lectio.canon import book_sort_key
from lectio.db.errors import storage_errors
from lectio.db.mapping import Verse, row_to_verse


class VerseStore:
    """Wraps a sqlite3 connection and provides typed reads of the verses table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_verses(self, book: str, chapter: int, version: str) -> list[Verse]:
        """Return a chapter's verses in one translation, ascending by verse number."""
        with storage_errors("get verses"):
            cursor = self._conn.execute(
                "SELECT * FROM verses WHERE book = ? AND chapter = ? AND version = ? "
                "ORDER BY verse ASC",
                (book, chapter, version),
            )
            return [row_to_verse(row) for row in cursor.fetchall()]

    def get_verse(self, book: str, chapter: int, verse: int, version: str) -> Verse | None:
        with storage_errors("get verse"):
            cursor = self._conn.execute(
                "SELECT * FROM verses WHERE book = ? AND chapter = ? AND verse = ? "
                "AND version = ? ORDER BY id LIMIT 1",
                (book, chapter, verse, version),
            )
            row = cursor.fetchone()
        return row_to_verse(row) if row else None

    def search_verses(
        self,
        query: str,
        version: str,
        *,
        books: Collection[str] | None = None,
    ) -> list[Verse]:
        """Find verses whose text contains `query`, ignoring case.

        Pure substring matching: no tokenization and no ranking. `%` and `_`
        in the query are matched literally. Markup braces in the stored text
        are part of the searched string. Results come back in canon order.

        Args:
            query: Substring to look for. Length limits are the caller's concern.
            version: Translation code to search.
            books: Optional set of book keys to restrict the search to.
        """
        sql = "SELECT * FROM verses WHERE version = ? AND instr(casefold(text), ?) > 0"
        params: list[object] = [version, query.casefold()]
        if books is not None:
            if not books:
                return []
            sql += f" AND book IN ({', '.join('?' for _ in books)})"
            params.extend(books)

        with storage_errors("search verses"):
            cursor = self._conn.execute(sql, params)
            verses = [row_to_verse(row) for row in cursor.fetchall()]
        verses.sort(key=lambda v: (book_sort_key(v.book), v.chapter, v.verse))
        return verses

    def count_verses(
        self,
        version: str | None = None,
        *,
        book: str | None = None,
        chapter: int | None = None,
    ) -> int:
        """Count verse rows matching the given filters (all rows when none are given)."""
        clauses: list[str] = []
        params: list[object] = []
        for column, value in (("version", version), ("book", book), ("chapter", chapter)):
            if value is not None:
                clauses.append(f"{column} = ?")
                params.append(value)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with storage_errors("count verses"):
            cursor = self._conn.execute(f"SELECT COUNT(*) FROM verses{where}", params)
            return cursor.fetchone()[0]

    def list_books(self, version: str) -> list[str]:
        """Books present in a translation, in canon order."""
        with storage_errors("list books"):
            cursor = self._conn.execute(
                "SELECT DISTINCT book FROM verses WHERE version = ?", (version,)
            )
            books = [row[0] for row in cursor.fetchall()]
        return sorted(books, key=book_sort_key)

    def chapter_count(self, book: str, version: str) -> int:
        """Number of chapters seeded for a book in a translation."""
        with storage_errors("count chapters"):
            cursor = self._conn.execute(
                "SELECT COALESCE(MAX(chapter), 0) FROM verses WHERE book = ? AND version = ?",
                (book, version),
            )
            return cursor.fetchone()[0]

    def list_versions(self) -> list[str]:
        """Translation codes that have at least one verse row."""
        with storage_errors("list versions"):
            cursor = self._conn.execute("SELECT DISTINCT version FROM verses ORDER BY version")
            return [row[0] for row in cursor.fetchall()]
