# ABOUTME: Turns translation datasets (books of chapters of verse strings) into flat verse rows.
# ABOUTME: Chapter and verse numbers are positional and 1-based; book names are canonicalized.

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from lectio.canon import resolve_book
from lectio.translations.registry import DEFAULT_DATA_DIR, TRANSLATIONS, Translation

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


class TranslationLoadError(ValueError):
    """Raised when a translation dataset is missing or malformed."""


@dataclass(frozen=True)
class BookData:
    """One book of a dataset: its name and ordered chapters of verse strings."""

    name: str
    chapters: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class VerseRow:
    """A flattened verse, ready for insertion into the verses table."""

    book: str
    chapter: int
    verse: int
    text: str
    version: str


@runtime_checkable
class TranslationSource(Protocol):
    """Anything that can hand the seeder the datasets for a set of translation codes."""

    @property
    def codes(self) -> Sequence[str]: ...

    def load(self, code: str) -> list[BookData]: ...


def parse_dataset(raw: Any, *, code: str = "?") -> list[BookData]:
    """Validate a decoded dataset and convert it to BookData.

    Expects a list of objects with a string `name` and a `chapters` list whose
    items are lists of verse strings. Verse text is kept byte-for-byte,
    including any `{...}` emphasis markup.

    Raises:
        TranslationLoadError: If the structure does not match.
    """
    if not isinstance(raw, list):
        raise TranslationLoadError(f"{code}: dataset must be a list of books")

    books: list[BookData] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise TranslationLoadError(f"{code}: book #{index + 1} is not an object")
        name = entry.get("name")
        chapters = entry.get("chapters")
        if not isinstance(name, str) or not name.strip():
            raise TranslationLoadError(f"{code}: book #{index + 1} has no name")
        if not isinstance(chapters, list):
            raise TranslationLoadError(f"{code}: {name} has no chapter list")
        parsed: list[tuple[str, ...]] = []
        for ch_index, chapter in enumerate(chapters):
            if not isinstance(chapter, list) or not all(isinstance(v, str) for v in chapter):
                raise TranslationLoadError(
                    f"{code}: {name} chapter {ch_index + 1} is not a list of verse strings"
                )
            parsed.append(tuple(chapter))
        books.append(BookData(name=name.strip(), chapters=tuple(parsed)))
    return books


def load_dataset_file(path: Path, *, code: str = "?") -> list[BookData]:
    """Read a dataset JSON file, tolerating a leading UTF-8 byte-order mark."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TranslationLoadError(f"{code}: dataset not found at {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TranslationLoadError(f"{code}: cannot read {path}: {exc}") from exc

    if text.startswith(_BOM):
        text = text[len(_BOM):]

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TranslationLoadError(f"{code}: invalid JSON in {path}: {exc}") from exc
    return parse_dataset(raw, code=code)


def iter_verse_rows(books: Sequence[BookData], version: str) -> Iterator[VerseRow]:
    """Flatten books into VerseRows in dataset order.

    Chapter numbers are the 1-based position of the chapter within the book,
    verse numbers the 1-based position within the chapter. Book names are
    mapped to their canonical English key when recognised, otherwise kept.
    """
    for book in books:
        key = resolve_book(book.name)
        if key is None:
            logger.debug("%s: keeping unrecognised book name %r", version, book.name)
            key = book.name
        for chapter_number, verses in enumerate(book.chapters, start=1):
            for verse_number, text in enumerate(verses, start=1):
                yield VerseRow(key, chapter_number, verse_number, text, version)


class FileTranslations:
    """TranslationSource reading `<data_dir>/<filename>` for each registered translation."""

    def __init__(
        self,
        data_dir: Path | None = None,
        translations: Mapping[str, Translation] | None = None,
    ) -> None:
        self._data_dir = data_dir or DEFAULT_DATA_DIR
        self._translations = dict(translations or TRANSLATIONS)

    @property
    def codes(self) -> Sequence[str]:
        return list(self._translations)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, code: str) -> Path:
        """Location of the dataset file for a translation code."""
        return self._data_dir / self._translations[code].filename

    def missing(self) -> list[str]:
        """Codes whose dataset file is not present in the data dir."""
        return [code for code in self._translations if not self.path_for(code).exists()]

    def load(self, code: str) -> list[BookData]:
        if code not in self._translations:
            raise TranslationLoadError(f"Unknown translation {code!r}")
        return load_dataset_file(self.path_for(code), code=code)


class MemoryTranslations:
    """TranslationSource over already-decoded datasets, keyed by translation code."""

    def __init__(self, datasets: Mapping[str, Any]) -> None:
        self._datasets = dict(datasets)

    @property
    def codes(self) -> Sequence[str]:
        return list(self._datasets)

    def load(self, code: str) -> list[BookData]:
        try:
            raw = self._datasets[code]
        except KeyError as exc:
            raise TranslationLoadError(f"Unknown translation {code!r}") from exc
        return parse_dataset(raw, code=code)
