# ABOUTME: Persistent user preferences stored as key/value strings.
# ABOUTME: Holds the preferred translation; survives the verse-table repair.

import sqlite3

from lectio.db.errors import storage_errors
from lectio.translations.registry import DEFAULT_TRANSLATION, get_translation

_TRANSLATION_KEY = "bible_version"


class SettingsStore:
    """Wraps a sqlite3 connection for the settings table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, key: str, default: str | None = None) -> str | None:
        with storage_errors("read setting"):
            cursor = self._conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cursor.fetchone()
        return row[0] if row else default

    def set(self, key: str, value: str) -> None:
        with storage_errors("write setting", self._conn):
            self._conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, value)
            )

    def preferred_translation(self) -> str:
        """The user's chosen translation code, or the default when unset or unknown."""
        value = self.get(_TRANSLATION_KEY)
        if value is None:
            return DEFAULT_TRANSLATION
        try:
            return get_translation(value).code
        except KeyError:
            return DEFAULT_TRANSLATION

    def set_preferred_translation(self, code: str) -> str:
        """Store a preferred translation.

        Raises:
            KeyError: If the code is not a registered translation.
        """
        translation = get_translation(code)
        self.set(_TRANSLATION_KEY, translation.code)
        return translation.code
