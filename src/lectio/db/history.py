# ABOUTME: Reading history and recent search terms, most recent first.
# ABOUTME: Both lists are deduplicated on write and trimmed to a fixed length.

import sqlite3

from lectio.db.errors import storage_errors
from lectio.db.mapping import Visit, row_to_visit

MAX_VISITS = 20
MAX_SEARCHES = 10


class HistoryStore:
    """Wraps a sqlite3 connection for the reading_history and recent_searches tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Reading history ---

    def record_visit(self, book: str, chapter: int, verse: int = 1) -> None:
        """Move (book, chapter) to the front of the history, keeping the latest verse.

        Only one entry per chapter is kept, and the list is capped at MAX_VISITS.
        """
        with storage_errors("record visit", self._conn):
            self._conn.execute(
                "DELETE FROM reading_history WHERE book = ? AND chapter = ?", (book, chapter)
            )
            self._conn.execute(
                "INSERT INTO reading_history (book, chapter, verse) VALUES (?, ?, ?)",
                (book, chapter, verse),
            )
            self._conn.execute(
                "DELETE FROM reading_history WHERE id NOT IN "
                "(SELECT id FROM reading_history ORDER BY id DESC LIMIT ?)",
                (MAX_VISITS,),
            )

    def list_visits(self) -> list[Visit]:
        with storage_errors("list visits"):
            cursor = self._conn.execute("SELECT * FROM reading_history ORDER BY id DESC")
            return [row_to_visit(row) for row in cursor.fetchall()]

    def last_visit(self) -> Visit | None:
        with storage_errors("get last visit"):
            cursor = self._conn.execute("SELECT * FROM reading_history ORDER BY id DESC LIMIT 1")
            row = cursor.fetchone()
        return row_to_visit(row) if row else None

    def clear_visits(self) -> None:
        with storage_errors("clear visits", self._conn):
            self._conn.execute("DELETE FROM reading_history")

    # --- Recent searches ---

    def record_search(self, term: str) -> None:
        """Move a search term to the front of the recent list. Blank terms are ignored."""
        term = term.strip()
        if not term:
            return
        with storage_errors("record search", self._conn):
            self._conn.execute("DELETE FROM recent_searches WHERE term = ?", (term,))
            self._conn.execute("INSERT INTO recent_searches (term) VALUES (?)", (term,))
            self._conn.execute(
                "DELETE FROM recent_searches WHERE id NOT IN "
                "(SELECT id FROM recent_searches ORDER BY id DESC LIMIT ?)",
                (MAX_SEARCHES,),
            )

    def list_searches(self) -> list[str]:
        with storage_errors("list searches"):
            cursor = self._conn.execute("SELECT term FROM recent_searches ORDER BY id DESC")
            return [row[0] for row in cursor.fetchall()]

    def clear_searches(self) -> None:
        with storage_errors("clear searches", self._conn):
            self._conn.execute("DELETE FROM recent_searches")
