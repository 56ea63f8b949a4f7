# ABOUTME: Search front end: validates the query, applies testament/book filters, records history.
# ABOUTME: The verse store itself only does substring matching; everything else happens here.

from dataclasses import dataclass, field

from lectio.canon import books_in_testament, resolve_book
from lectio.core.session import BibleSession
from lectio.db.mapping import Verse

MIN_QUERY_LENGTH = 3


class QueryTooShortError(ValueError):
    """Raised for queries below MIN_QUERY_LENGTH characters (after trimming)."""


@dataclass
class SearchResult:
    """Verses matching a query, plus the filters that produced them."""

    query: str
    version: str
    verses: list[Verse] = field(default_factory=list)
    testament: str | None = None
    book: str | None = None

    @property
    def books(self) -> list[str]:
        """Distinct books among the results, in result order."""
        return list(dict.fromkeys(v.book for v in self.verses))


def run_search(
    session: BibleSession,
    query: str,
    version: str,
    *,
    testament: str | None = None,
    book: str | None = None,
    record: bool = True,
) -> SearchResult:
    """Search a translation for a substring.

    Args:
        session: Open reader session.
        query: Search text; surrounding whitespace is ignored.
        version: Translation code to search.
        testament: Optional "OT" or "NT" restriction.
        book: Optional single book (any resolvable English or French name).
        record: Whether to add the query to the recent-search list.

    Raises:
        QueryTooShortError: If the trimmed query is shorter than MIN_QUERY_LENGTH.
        ValueError: For an unknown testament or book.
    """
    term = query.strip()
    if len(term) < MIN_QUERY_LENGTH:
        raise QueryTooShortError(
            f"Search needs at least {MIN_QUERY_LENGTH} characters, got {len(term)}"
        )

    scope: set[str] | None = None
    if testament is not None:
        testament = testament.upper()
        scope = set(books_in_testament(testament))
    if book is not None:
        key = resolve_book(book)
        if key is None:
            raise ValueError(f"Unknown book {book!r}")
        book = key
        scope = {key} if scope is None else scope & {key}

    if record:
        session.history.record_search(term)

    verses = session.verses.search_verses(term, version, books=scope)
    return SearchResult(query=term, version=version, verses=verses, testament=testament, book=book)
