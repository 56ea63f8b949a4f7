# ABOUTME: Translation datasets: registry, loader, and downloader.
# ABOUTME: Exports the types the seeder and CLI need to reach bundled scripture text.

from lectio.translations.loader import (
    BookData,
    FileTranslations,
    MemoryTranslations,
    TranslationLoadError,
    TranslationSource,
    VerseRow,
    iter_verse_rows,
)
from lectio.translations.registry import (
    DEFAULT_DATA_DIR,
    DEFAULT_TRANSLATION,
    TRANSLATIONS,
    Translation,
    get_translation,
)

__all__ = [
    "DEFAULT_DATA_DIR",
    "DEFAULT_TRANSLATION",
    "TRANSLATIONS",
    "BookData",
    "FileTranslations",
    "MemoryTranslations",
    "Translation",
    "TranslationLoadError",
    "TranslationSource",
    "VerseRow",
    "get_translation",
    "iter_verse_rows",
]
