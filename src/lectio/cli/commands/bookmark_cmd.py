# ABOUTME: The `lectio bookmark` command group for bookmarking verses and verse ranges.
# ABOUTME: A selection such as 5,7 is stored as the range 5-7.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lectio.cli.options import (
    BOOK,
    VERSES,
    data_dir_option,
    db_option,
    open_session,
    resolve_translation,
    selection_range,
    translation_option,
)
from lectio.cli.render import reference, verse_text

console = Console()


@click.group("bookmark")
def bookmark() -> None:
    """Toggle, remove, or list bookmarks."""


@bookmark.command("toggle")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@db_option
@data_dir_option
def toggle(
    book: str, chapter: int, verses: list[int], db_path: Path | None, data_dir: Path | None
) -> None:
    """Bookmark VERSES of BOOK CHAPTER, or remove the bookmarks covering them."""
    rng = selection_range(verses)
    with open_session(console, db_path, data_dir, seed=False) as session:
        added = session.annotations.toggle_bookmark(book, chapter, rng.start, rng.end)
    ref = reference(book, chapter, str(rng))
    if added:
        console.print(f"[green]Bookmarked[/green] {ref}")
    else:
        console.print(f"[yellow]Removed bookmark[/yellow] at {ref}")


@bookmark.command("rm")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@db_option
@data_dir_option
def rm(
    book: str, chapter: int, verses: list[int], db_path: Path | None, data_dir: Path | None
) -> None:
    """Remove the bookmark stored with exactly the range VERSES."""
    rng = selection_range(verses)
    with open_session(console, db_path, data_dir, seed=False) as session:
        removed = session.annotations.remove_bookmark(book, chapter, rng.start, rng.end)
    if not removed:
        console.print(f"[yellow]No bookmark at {reference(book, chapter, str(rng))}[/yellow]")
        raise SystemExit(1)
    console.print(f"[green]Removed bookmark[/green] at {reference(book, chapter, str(rng))}")


@bookmark.command("ls")
@translation_option
@db_option
@data_dir_option
def ls(translation: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """List all bookmarks in Bible order."""
    with open_session(console, db_path, data_dir) as session:
        version = resolve_translation(session, translation)
        records = session.annotations.list_bookmarks(version)

    if not records:
        console.print("[yellow]No bookmarks yet.[/yellow]")
        return

    table = Table()
    table.add_column("Reference", style="cyan", no_wrap=True)
    table.add_column("Text")
    table.add_column("Added", style="dim")

    for record in records:
        table.add_row(
            reference(record.book, record.chapter, str(record.range), version=version),
            verse_text(record.text) if record.text else Text("(text unavailable)", style="dim"),
            record.created_at,
        )

    console.print(table)
