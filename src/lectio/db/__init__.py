# ABOUTME: Public API for the lectio database layer.
# ABOUTME: Exports connection management, the stores, record types, and storage errors.

from lectio.db.annotations import HIGHLIGHT_COLORS, AnnotationStore, resolve_color
from lectio.db.connection import DEFAULT_DB_PATH, ensure_schema, open_bible
from lectio.db.errors import SchemaError, StorageError
from lectio.db.history import HistoryStore
from lectio.db.mapping import Bookmark, Highlight, Note, Verse, Visit
from lectio.db.ranges import RangeIndex, VerseRange
from lectio.db.settings import SettingsStore
from lectio.db.verses import VerseStore

__all__ = [
    "DEFAULT_DB_PATH",
    "HIGHLIGHT_COLORS",
    "AnnotationStore",
    "Bookmark",
    "Highlight",
    "HistoryStore",
    "Note",
    "RangeIndex",
    "SchemaError",
    "SettingsStore",
    "StorageError",
    "Verse",
    "VerseRange",
    "VerseStore",
    "Visit",
    "ensure_schema",
    "open_bible",
    "resolve_color",
]
