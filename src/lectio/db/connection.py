# ABOUTME: SQLite connection management and schema upkeep for the lectio database.
# ABOUTME: Opens or creates the database, creates tables, and applies additive column migrations.

import logging
import sqlite3
from pathlib import Path

from lectio.db.errors import SchemaError, StorageError
from lectio.db.schema import COLUMN_MIGRATIONS, SCHEMA, VERSE_TABLES

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".lectio" / "bible.db"


def _casefold(value: object) -> object:
    return value.casefold() if isinstance(value, str) else value


def _column_exists(conn: sqlite3.Connection, table: str, column: str) -> bool:
    """Check the live table definition for a column."""
    cursor = conn.execute(f"PRAGMA table_info({table})")
    return any(row[1] == column for row in cursor.fetchall())


def _apply_column_migrations(conn: sqlite3.Connection) -> list[str]:
    """Add every missing column from COLUMN_MIGRATIONS.

    A failing migration is logged and skipped so startup can continue; the
    affected feature may misbehave until the migration succeeds.
    """
    applied: list[str] = []
    for table, column, declaration in COLUMN_MIGRATIONS:
        try:
            if _column_exists(conn, table, column):
                continue
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {declaration}")
            conn.commit()
        except sqlite3.Error as exc:
            error = SchemaError(f"Migration {table}.{column} failed: {exc}")
            logger.error("%s; continuing with existing schema", error)
            continue
        logger.info("Added column %s.%s", table, column)
        applied.append(f"{table}.{column}")
    return applied


def ensure_schema(conn: sqlite3.Connection) -> list[str]:
    """Create any missing tables, then apply pending column migrations.

    Safe to call on every start: existing tables and columns are left as they
    are.

    Returns:
        The "table.column" names of migrations applied by this call.

    Raises:
        SchemaError: If the tables themselves cannot be created.
    """
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error as exc:
        logger.error("Schema creation failed: %s", exc)
        raise SchemaError(f"Schema creation failed: {exc}") from exc
    return _apply_column_migrations(conn)


def drop_verse_tables(conn: sqlite3.Connection) -> None:
    """Drop the verse text and seeding metadata tables, leaving annotations alone."""
    conn.executescript("".join(f"DROP TABLE IF EXISTS {table};\n" for table in VERSE_TABLES))


def open_bible(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the lectio database.

    Creates the database file and parent directories if they don't exist and
    ensures the schema. Sets WAL journal mode and sqlite3.Row factory for
    dict-like column access, and registers a `casefold()` SQL function used
    for case-insensitive substring search.

    Args:
        path: Path to the database file. Defaults to ~/.lectio/bible.db.

    Returns:
        A configured sqlite3.Connection.

    Raises:
        StorageError: If the file cannot be opened as a SQLite database or
            its schema cannot be ensured.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn: sqlite3.Connection | None = None
    try:
        conn = sqlite3.connect(str(db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.create_function("casefold", 1, _casefold, deterministic=True)
    except sqlite3.Error as exc:
        if conn is not None:
            conn.close()
        logger.error("Opening database %s failed: %s", db_path, exc)
        raise StorageError(f"open database {db_path} failed: {exc}") from exc

    try:
        ensure_schema(conn)
    except SchemaError:
        conn.close()
        raise

    return conn
