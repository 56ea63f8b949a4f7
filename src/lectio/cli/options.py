# ABOUTME: Shared Click options, parameter types, and session setup for lectio CLI commands.
# ABOUTME: Provides --db, --data-dir, --translation, book and verse types, and open_session().

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from rich.console import Console

from lectio.canon import resolve_book
from lectio.core.seeding import SeedState
from lectio.core.session import BibleSession
from lectio.db.connection import DEFAULT_DB_PATH
from lectio.db.errors import StorageError
from lectio.db.ranges import VerseRange
from lectio.translations.registry import DEFAULT_DATA_DIR, TRANSLATIONS

# Longer than any chapter (Psalm 119 has 176 verses).
MAX_SELECTION = 200

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to reader database (default: {DEFAULT_DB_PATH})",
)

data_dir_option = click.option(
    "--data-dir",
    "data_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help=f"Directory holding translation datasets (default: {DEFAULT_DATA_DIR})",
)

translation_option = click.option(
    "-t",
    "--translation",
    "translation",
    type=click.Choice(list(TRANSLATIONS), case_sensitive=False),
    default=None,
    help="Translation code (default: your preferred translation).",
)


class BookType(click.ParamType):
    """A book name in English or French, converted to its canonical key."""

    name = "book"

    def convert(self, value: str, param: click.Parameter | None, ctx: click.Context | None) -> str:
        key = resolve_book(value)
        if key is None:
            self.fail(f"Unknown book {value!r}", param, ctx)
        return key


class VersesType(click.ParamType):
    """A verse selection: "5", "5-7", or a comma list such as "5,7,9-10"."""

    name = "verses"

    def convert(
        self, value: str | list[int], param: click.Parameter | None, ctx: click.Context | None
    ) -> list[int]:
        if isinstance(value, list):
            return value
        verses: set[int] = set()
        for part in value.split(","):
            try:
                rng = VerseRange.parse(part)
            except ValueError as exc:
                self.fail(str(exc), param, ctx)
            if len(rng) > MAX_SELECTION:
                self.fail(f"Selection {rng} is longer than {MAX_SELECTION} verses", param, ctx)
            verses.update(rng)
            if len(verses) > MAX_SELECTION:
                self.fail(f"Selection is longer than {MAX_SELECTION} verses", param, ctx)
        if not verses:
            self.fail("Empty verse selection", param, ctx)
        return sorted(verses)


BOOK = BookType()
VERSES = VersesType()


def selection_range(verses: list[int]) -> VerseRange:
    """Collapse a selection to the range a note or bookmark is stored under."""
    return VerseRange.from_verses(verses)


@contextmanager
def open_session(
    console: Console,
    db_path: Path | None,
    data_dir: Path | None = None,
    *,
    seed: bool = True,
) -> Iterator[BibleSession]:
    """Open a session for one command, seeding first unless told not to.

    A failed seed is reported but does not stop the command. Storage errors
    raised by the command are printed and turned into exit status 1.
    """
    try:
        session = BibleSession.open(db_path or DEFAULT_DB_PATH, data_dir)
    except StorageError as exc:
        console.print(f"[red]Cannot open database: {exc}[/red]")
        raise SystemExit(1) from exc

    try:
        if seed:
            result = session.ensure_seeded()
            if result.state is not SeedState.SEEDED:
                console.print(
                    f"[yellow]Scripture text is not loaded ({result.error}). "
                    "Run `lectio fetch`, then `lectio seed`.[/yellow]"
                )
        yield session
    except StorageError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        session.close()


def resolve_translation(session: BibleSession, translation: str | None) -> str:
    return translation or session.settings.preferred_translation()
