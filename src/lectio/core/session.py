# ABOUTME: The reader session: owns the single database connection and every store built on it.
# ABOUTME: Created once per process and handed to the CLI; closes the connection on exit.

import sqlite3
from pathlib import Path

from lectio.core.seeding import SeedingController, SeedResult, force_reset
from lectio.db.annotations import AnnotationStore
from lectio.db.connection import open_bible
from lectio.db.history import HistoryStore
from lectio.db.settings import SettingsStore
from lectio.db.verses import VerseStore
from lectio.translations.loader import FileTranslations, TranslationSource


class BibleSession:
    """Everything the reader needs, sharing one sqlite3 connection."""

    def __init__(self, conn: sqlite3.Connection, source: TranslationSource) -> None:
        self.conn = conn
        self.source = source
        self.verses = VerseStore(conn)
        self.annotations = AnnotationStore(conn)
        self.history = HistoryStore(conn)
        self.settings = SettingsStore(conn)
        self.seeder = SeedingController(conn, source)

    @classmethod
    def open(
        cls,
        db_path: Path | None = None,
        data_dir: Path | None = None,
        *,
        source: TranslationSource | None = None,
    ) -> "BibleSession":
        """Open the database (ensuring its schema) and wire up the stores.

        Seeding is not run here; call ensure_seeded() once the session exists.
        """
        conn = open_bible(db_path)
        return cls(conn, source or FileTranslations(data_dir))

    def ensure_seeded(self) -> SeedResult:
        return self.seeder.ensure()

    def repair(self) -> SeedResult:
        """Rebuild the verse tables from the datasets, keeping annotations."""
        return force_reset(self.conn, self.source)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "BibleSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
