# ABOUTME: Canonical table of the 66 books: names, testament, and chapter counts.
# ABOUTME: Resolves English/French book names to canonical keys and walks chapter order.

import unicodedata
from dataclasses import dataclass


@dataclass(frozen=True)
class BookInfo:
    """One canonical book. `name` is the English key used throughout the database."""

    name: str
    french: str
    testament: str
    chapters: int


_OT = "OT"
_NT = "NT"

BOOKS: tuple[BookInfo, ...] = (
    BookInfo("Genesis", "Genèse", _OT, 50),
    BookInfo("Exodus", "Exode", _OT, 40),
    BookInfo("Leviticus", "Lévitique", _OT, 27),
    BookInfo("Numbers", "Nombres", _OT, 36),
    BookInfo("Deuteronomy", "Deutéronome", _OT, 34),
    BookInfo("Joshua", "Josué", _OT, 24),
    BookInfo("Judges", "Juges", _OT, 21),
    BookInfo("Ruth", "Ruth", _OT, 4),
    BookInfo("1 Samuel", "1 Samuel", _OT, 31),
    BookInfo("2 Samuel", "2 Samuel", _OT, 24),
    BookInfo("1 Kings", "1 Rois", _OT, 22),
    BookInfo("2 Kings", "2 Rois", _OT, 25),
    BookInfo("1 Chronicles", "1 Chroniques", _OT, 29),
    BookInfo("2 Chronicles", "2 Chroniques", _OT, 36),
    BookInfo("Ezra", "Esdras", _OT, 10),
    BookInfo("Nehemiah", "Néhémie", _OT, 13),
    BookInfo("Esther", "Esther", _OT, 10),
    BookInfo("Job", "Job", _OT, 42),
    BookInfo("Psalms", "Psaumes", _OT, 150),
    BookInfo("Proverbs", "Proverbes", _OT, 31),
    BookInfo("Ecclesiastes", "Ecclésiaste", _OT, 12),
    BookInfo("Song of Solomon", "Cantique des Cantiques", _OT, 8),
    BookInfo("Isaiah", "Ésaïe", _OT, 66),
    BookInfo("Jeremiah", "Jérémie", _OT, 52),
    BookInfo("Lamentations", "Lamentations", _OT, 5),
    BookInfo("Ezekiel", "Ézéchiel", _OT, 48),
    BookInfo("Daniel", "Daniel", _OT, 12),
    BookInfo("Hosea", "Osée", _OT, 14),
    BookInfo("Joel", "Joël", _OT, 3),
    BookInfo("Amos", "Amos", _OT, 9),
    BookInfo("Obadiah", "Abdias", _OT, 1),
    BookInfo("Jonah", "Jonas", _OT, 4),
    BookInfo("Micah", "Michée", _OT, 7),
    BookInfo("Nahum", "Nahum", _OT, 3),
    BookInfo("Habakkuk", "Habacuc", _OT, 3),
    BookInfo("Zephaniah", "Sophonie", _OT, 3),
    BookInfo("Haggai", "Aggée", _OT, 2),
    BookInfo("Zechariah", "Zacharie", _OT, 14),
    BookInfo("Malachi", "Malachie", _OT, 4),
    BookInfo("Matthew", "Matthieu", _NT, 28),
    BookInfo("Mark", "Marc", _NT, 16),
    BookInfo("Luke", "Luc", _NT, 24),
    BookInfo("John", "Jean", _NT, 21),
    BookInfo("Acts", "Actes", _NT, 28),
    BookInfo("Romans", "Romains", _NT, 16),
    BookInfo("1 Corinthians", "1 Corinthiens", _NT, 16),
    BookInfo("2 Corinthians", "2 Corinthiens", _NT, 13),
    BookInfo("Galatians", "Galates", _NT, 6),
    BookInfo("Ephesians", "Éphésiens", _NT, 6),
    BookInfo("Philippians", "Philippiens", _NT, 4),
    BookInfo("Colossians", "Colossiens", _NT, 4),
    BookInfo("1 Thessalonians", "1 Thessaloniciens", _NT, 5),
    BookInfo("2 Thessalonians", "2 Thessaloniciens", _NT, 3),
    BookInfo("1 Timothy", "1 Timothée", _NT, 6),
    BookInfo("2 Timothy", "2 Timothée", _NT, 4),
    BookInfo("Titus", "Tite", _NT, 3),
    BookInfo("Philemon", "Philémon", _NT, 1),
    BookInfo("Hebrews", "Hébreux", _NT, 13),
    BookInfo("James", "Jacques", _NT, 5),
    BookInfo("1 Peter", "1 Pierre", _NT, 5),
    BookInfo("2 Peter", "2 Pierre", _NT, 3),
    BookInfo("1 John", "1 Jean", _NT, 5),
    BookInfo("2 John", "2 Jean", _NT, 1),
    BookInfo("3 John", "3 Jean", _NT, 1),
    BookInfo("Jude", "Jude", _NT, 1),
    BookInfo("Revelation", "Apocalypse", _NT, 22),
)

TESTAMENTS = (_OT, _NT)

_EXTRA_ALIASES = {
    "psalm": "Psalms",
    "song of songs": "Song of Solomon",
    "canticles": "Song of Solomon",
    "revelations": "Revelation",
    "revelation of john": "Revelation",
}

_BY_NAME = {book.name: book for book in BOOKS}
_ORDER = {book.name: index for index, book in enumerate(BOOKS)}


def _fold(name: str) -> str:
    """Case-, accent-, and whitespace-insensitive form of a book name."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())


_LOOKUP: dict[str, str] = {}
for _book in BOOKS:
    _LOOKUP[_fold(_book.name)] = _book.name
    _LOOKUP[_fold(_book.french)] = _book.name
for _alias, _target in _EXTRA_ALIASES.items():
    _LOOKUP[_fold(_alias)] = _target


def resolve_book(name: str) -> str | None:
    """Return the canonical English key for an English or French book name.

    Matching ignores case, accents, and repeated whitespace, so "genese",
    "GENÈSE" and "Genesis" all resolve to "Genesis". Returns None for names
    outside the 66-book canon.
    """
    return _LOOKUP.get(_fold(name))


def get_book(name: str) -> BookInfo | None:
    """Look up a canonical book by its key (or any resolvable name)."""
    key = resolve_book(name)
    return _BY_NAME.get(key) if key else None


def books_in_testament(testament: str) -> list[str]:
    """Canonical keys of every book in `OT` or `NT`."""
    testament = testament.upper()
    if testament not in TESTAMENTS:
        raise ValueError(f"Unknown testament {testament!r}; expected one of {TESTAMENTS}")
    return [book.name for book in BOOKS if book.testament == testament]


def book_sort_key(name: str) -> tuple[int, str]:
    """Sort key placing canonical books in canon order, unknown names after them."""
    return (_ORDER.get(name, len(BOOKS)), name)


def localized_name(book: str, version: str) -> str:
    """Display name of a book for a translation code (French codes start with FR)."""
    info = _BY_NAME.get(book)
    if info is None:
        return book
    return info.french if version.upper().startswith("FR") else info.name


def next_chapter(book: str, chapter: int) -> tuple[str, int] | None:
    """The chapter after (book, chapter) in canon order, or None after Revelation 22."""
    info = _BY_NAME.get(book)
    if info is None:
        return None
    if chapter < info.chapters:
        return book, chapter + 1
    index = _ORDER[book]
    if index + 1 >= len(BOOKS):
        return None
    return BOOKS[index + 1].name, 1


def previous_chapter(book: str, chapter: int) -> tuple[str, int] | None:
    """The chapter before (book, chapter) in canon order, or None before Genesis 1."""
    info = _BY_NAME.get(book)
    if info is None:
        return None
    if chapter > 1:
        return book, min(chapter - 1, info.chapters)
    index = _ORDER[book]
    if index == 0:
        return None
    prior = BOOKS[index - 1]
    return prior.name, prior.chapters
