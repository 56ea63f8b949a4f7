# ABOUTME: Seeding controller that loads every bundled translation into the verses table.
# ABOUTME: Decides whether to (re)seed from a marker plus count-based integrity probes.

import enum
import logging
import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass, field

from lectio.db.connection import drop_verse_tables, ensure_schema
from lectio.db.errors import storage_errors
from lectio.translations.loader import TranslationLoadError, TranslationSource, iter_verse_rows

logger = logging.getLogger(__name__)

SEED_MARKER = "seeded_full"

DEFAULT_ANCHOR = ("Genesis", 1)


class SeedState(enum.Enum):
    """Where the verses table stands relative to the bundled translations."""

    UNSEEDED = "unseeded"
    SEEDED = "seeded"
    RESEEDING = "reseeding"


@dataclass
class SeedResult:
    """Outcome of one ensure() call."""

    state: SeedState
    inserted: int = 0
    failed_probes: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def reseeded(self) -> bool:
        return self.state is SeedState.SEEDED and self.inserted > 0


def marker_present(conn: sqlite3.Connection) -> bool:
    cursor = conn.execute("SELECT value FROM metadata WHERE key = ?", (SEED_MARKER,))
    return cursor.fetchone() is not None


def anchor_chapter_present(
    conn: sqlite3.Connection, book: str, chapter: int, version: str
) -> bool:
    """Integrity probe: the anchor chapter has at least one verse in `version`."""
    cursor = conn.execute(
        "SELECT COUNT(*) FROM verses WHERE book = ? AND chapter = ? AND version = ?",
        (book, chapter, version),
    )
    return cursor.fetchone()[0] > 0


def translation_present(conn: sqlite3.Connection, version: str) -> bool:
    """Integrity probe: the translation has at least one verse row."""
    cursor = conn.execute("SELECT COUNT(*) FROM verses WHERE version = ?", (version,))
    return cursor.fetchone()[0] > 0


class SeedingController:
    """Brings the verses table in line with a TranslationSource.

    The first code of the source is the primary translation: its anchor
    chapter (Genesis 1 by default) must be present. Every other code must
    have at least one row. A missing marker or any failed probe means the
    table is reseeded from scratch.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        source: TranslationSource,
        *,
        anchor: tuple[str, int] = DEFAULT_ANCHOR,
    ) -> None:
        self._conn = conn
        self._source = source
        self._anchor = anchor
        self._state = SeedState.UNSEEDED

    @property
    def state(self) -> SeedState:
        """State as of the last assess() or ensure() call."""
        return self._state

    @property
    def codes(self) -> Sequence[str]:
        return self._source.codes

    def probe_failures(self) -> list[str]:
        """Run the integrity probes and name the ones that fail."""
        codes = list(self._source.codes)
        if not codes:
            return []
        primary, *secondary = codes
        book, chapter = self._anchor

        failures: list[str] = []
        if not anchor_chapter_present(self._conn, book, chapter, primary):
            failures.append(f"anchor {book} {chapter} ({primary})")
        for code in secondary:
            if not translation_present(self._conn, code):
                failures.append(f"translation {code}")
        return failures

    def assess(self) -> tuple[SeedState, list[str]]:
        """Classify the table without changing it."""
        if not marker_present(self._conn):
            self._state = SeedState.UNSEEDED
            return self._state, []
        failures = self.probe_failures()
        for failure in failures:
            logger.warning("Integrity check failed: %s missing", failure)
        self._state = SeedState.UNSEEDED if failures else SeedState.SEEDED
        return self._state, failures

    def ensure(self) -> SeedResult:
        """Seed if needed. A no-op when already seeded.

        A failed seed is rolled back and reported in the result with state
        UNSEEDED; the marker stays absent so the next call retries.
        Any other exception raised by the source propagates after the
        rollback.
        """
        try:
            state, failures = self.assess()
        except sqlite3.Error as exc:
            logger.error("Could not read seed state: %s", exc)
            self._state = SeedState.UNSEEDED
            return SeedResult(SeedState.UNSEEDED, error=str(exc))

        if state is SeedState.SEEDED:
            return SeedResult(SeedState.SEEDED)

        self._state = SeedState.RESEEDING
        try:
            result = self._reseed()
        except BaseException:
            self._state = SeedState.UNSEEDED
            raise
        result.failed_probes = failures
        self._state = result.state
        return result

    def _clear(self) -> None:
        self._conn.execute("DELETE FROM verses")
        self._conn.execute("DELETE FROM metadata WHERE key = ?", (SEED_MARKER,))
        self._conn.commit()

    def _reseed(self) -> SeedResult:
        logger.info("Seeding full database...")
        try:
            self._clear()
        except sqlite3.Error as exc:
            self._rollback()
            logger.error("Clearing verses before seeding failed: %s", exc)
            return SeedResult(SeedState.UNSEEDED, error=str(exc))

        inserted = 0
        try:
            for code in self._source.codes:
                logger.info("Seeding version: %s", code)
                books = self._source.load(code)
                rows = [
                    (r.book, r.chapter, r.verse, r.text, r.version)
                    for r in iter_verse_rows(books, code)
                ]
                self._conn.executemany(
                    "INSERT INTO verses (book, chapter, verse, text, version) "
                    "VALUES (?, ?, ?, ?, ?)",
                    rows,
                )
                inserted += len(rows)
                logger.info("Finished seeding version: %s (%d verses)", code, len(rows))
            self._conn.execute(
                "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                (SEED_MARKER, "true"),
            )
            self._conn.commit()
        except (sqlite3.Error, TranslationLoadError) as exc:
            self._rollback()
            logger.error("Error during seeding transaction, rolled back: %s", exc)
            return SeedResult(SeedState.UNSEEDED, error=str(exc))
        except BaseException:
            self._rollback()
            logger.error("Seeding interrupted, rolled back")
            raise

        logger.info("Database seeded successfully (%d verses).", inserted)
        return SeedResult(SeedState.SEEDED, inserted=inserted)

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlite3.Error as exc:
            logger.error("Rollback failed: %s", exc)


def force_reset(
    conn: sqlite3.Connection,
    source: TranslationSource,
    *,
    anchor: tuple[str, int] = DEFAULT_ANCHOR,
) -> SeedResult:
    """Drop and rebuild the verse and metadata tables, then reseed.

    Highlights, bookmarks, notes, history, and settings are untouched.
    """
    logger.warning("Forced reset: dropping verse tables")
    with storage_errors("drop verse tables"):
        drop_verse_tables(conn)
    ensure_schema(conn)
    return SeedingController(conn, source, anchor=anchor).ensure()
