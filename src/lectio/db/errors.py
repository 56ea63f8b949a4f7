# ABOUTME: Storage error types and the guard that converts sqlite3 failures into them.
# ABOUTME: Write guards roll back the open transaction so a failed write leaves nothing behind.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying database rejects a read or write."""


class SchemaError(StorageError):
    """Raised (or reported) when table creation or a column migration fails."""


@contextmanager
def storage_errors(
    action: str,
    conn: sqlite3.Connection | None = None,
) -> Iterator[None]:
    """Translate sqlite3.Error raised in the block into StorageError.

    When `conn` is given the block is treated as a write: its transaction is
    committed on success and rolled back on failure.
    """
    try:
        yield
        if conn is not None:
            conn.commit()
    except sqlite3.Error as exc:
        if conn is not None:
            _rollback(conn)
        logger.error("%s failed: %s", action, exc)
        raise StorageError(f"{action} failed: {exc}") from exc


def _rollback(conn: sqlite3.Connection) -> None:
    try:
        conn.rollback()
    except sqlite3.Error as exc:
        logger.warning("Rollback failed: %s", exc)
