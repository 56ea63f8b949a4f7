# ABOUTME: The `lectio highlight` command group for coloring verses.
# ABOUTME: Highlights apply to a passage in every translation.

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
    translation_option,
)
from lectio.cli.render import reference, verse_text
from lectio.db.annotations import HIGHLIGHT_COLORS, resolve_color

console = Console()


class ColorType(click.ParamType):
    """A palette name or a `#rrggbb` value, converted to its hex string."""

    name = "color"

    def convert(self, value: str, param: click.Parameter | None, ctx: click.Context | None) -> str:
        try:
            return resolve_color(value)
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


@click.group("highlight")
def highlight() -> None:
    """Add, remove, or list verse highlights."""


@highlight.command("add")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@click.argument("color", type=ColorType(), default="yellow")
@db_option
@data_dir_option
def add(
    book: str,
    chapter: int,
    verses: list[int],
    color: str,
    db_path: Path | None,
    data_dir: Path | None,
) -> None:
    """Highlight VERSES (e.g. 5, 5-7 or 5,7,9) of BOOK CHAPTER in COLOR.

    COLOR is one of the palette names or a #rrggbb value (default: yellow).
    """
    with open_session(console, db_path, data_dir, seed=False) as session:
        count = session.annotations.add_highlights(book, chapter, verses, color)
    console.print(f"[green]Highlighted {count} verse(s)[/green] in {reference(book, chapter)}")


@highlight.command("rm")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@db_option
@data_dir_option
def rm(
    book: str, chapter: int, verses: list[int], db_path: Path | None, data_dir: Path | None
) -> None:
    """Remove highlights from VERSES of BOOK CHAPTER."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        count = session.annotations.remove_highlights(book, chapter, verses)
    if count == 0:
        console.print("[yellow]No highlights to remove.[/yellow]")
        return
    console.print(f"[green]Removed {count} highlight(s)[/green]")


@highlight.command("ls")
@translation_option
@db_option
@data_dir_option
def ls(translation: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """List all highlights in Bible order."""
    with open_session(console, db_path, data_dir) as session:
        version = resolve_translation(session, translation)
        records = session.annotations.list_highlights(version)

    if not records:
        console.print("[yellow]No highlights yet.[/yellow]")
        return

    names = {hex_value: name for name, hex_value in HIGHLIGHT_COLORS.items()}
    table = Table()
    table.add_column("Reference", style="cyan", no_wrap=True)
    table.add_column("Color")
    table.add_column("Text")

    for record in records:
        table.add_row(
            reference(record.book, record.chapter, record.verse, version=version),
            Text(names.get(record.color, record.color), style=f"black on {record.color}"),
            verse_text(record.text) if record.text else Text("(text unavailable)", style="dim"),
        )

    console.print(table)
