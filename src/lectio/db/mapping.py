# ABOUTME: Record types for verses, annotations, and history, and their row converters.
# ABOUTME: Range annotations carry a normalized VerseRange instead of raw verse/verse_end columns.

from dataclasses import dataclass
from typing import Any

from lectio.db.ranges import VerseRange


@dataclass(frozen=True)
class Verse:
    """One verse of one translation."""

    id: int
    book: str
    chapter: int
    verse: int
    text: str
    version: str


@dataclass(frozen=True)
class Highlight:
    """A highlight color on one verse. `text` is filled only by list queries joined to verses."""

    id: int
    book: str
    chapter: int
    verse: int
    color: str
    created_at: str
    text: str | None = None


@dataclass(frozen=True)
class Bookmark:
    """A bookmark on a single verse or an inclusive verse range."""

    id: int
    book: str
    chapter: int
    range: VerseRange
    created_at: str
    text: str | None = None

    @property
    def verse(self) -> int:
        return self.range.start

    @property
    def verse_end(self) -> int | None:
        return self.range.end

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}:{self.range}"


@dataclass(frozen=True)
class Note:
    """Free-text note on a single verse or an inclusive verse range."""

    id: int
    book: str
    chapter: int
    range: VerseRange
    content: str
    created_at: str
    text: str | None = None

    @property
    def verse(self) -> int:
        return self.range.start

    @property
    def verse_end(self) -> int | None:
        return self.range.end

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}:{self.range}"


@dataclass(frozen=True)
class Visit:
    """An entry in the reading history."""

    book: str
    chapter: int
    verse: int
    visited_at: str


def _optional(row: Any, column: str) -> Any:
    return row[column] if column in row.keys() else None


def _row_range(row: Any) -> VerseRange:
    # Legacy rows may store verse_end equal to verse; VerseRange folds that to None.
    return VerseRange(row["verse"], row["verse_end"])


def row_to_verse(row: Any) -> Verse:
    return Verse(
        id=row["id"],
        book=row["book"],
        chapter=row["chapter"],
        verse=row["verse"],
        text=row["text"],
        version=row["version"],
    )


def row_to_highlight(row: Any) -> Highlight:
    return Highlight(
        id=row["id"],
        book=row["book"],
        chapter=row["chapter"],
        verse=row["verse"],
        color=row["color"],
        created_at=row["created_at"],
        text=_optional(row, "text"),
    )


def row_to_bookmark(row: Any) -> Bookmark:
    return Bookmark(
        id=row["id"],
        book=row["book"],
        chapter=row["chapter"],
        range=_row_range(row),
        created_at=row["created_at"],
        text=_optional(row, "text"),
    )


def row_to_note(row: Any) -> Note:
    return Note(
        id=row["id"],
        book=row["book"],
        chapter=row["chapter"],
        range=_row_range(row),
        content=row["content"],
        created_at=row["created_at"],
        text=_optional(row, "text"),
    )


def row_to_visit(row: Any) -> Visit:
    return Visit(
        book=row["book"],
        chapter=row["chapter"],
        verse=row["verse"],
        visited_at=row["visited_at"],
    )
