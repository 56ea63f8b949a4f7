# ABOUTME: The `lectio read`, `lectio next`, and `lectio prev` commands for reading a chapter.
# ABOUTME: Prints verses with highlight, bookmark, and note markers and records reading history.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lectio.canon import next_chapter, previous_chapter
from lectio.cli.options import (
    BOOK,
    data_dir_option,
    db_option,
    open_session,
    resolve_translation,
    translation_option,
)
from lectio.cli.render import reference, verse_text
from lectio.core.session import BibleSession

console = Console()

_START = ("Genesis", 1)


def show_chapter(session: BibleSession, book: str, chapter: int, version: str) -> None:
    """Render a chapter with its annotations and add it to the reading history."""
    verses = session.verses.get_verses(book, chapter, version)
    if not verses:
        console.print(f"[yellow]No verses for {reference(book, chapter)} in {version}.[/yellow]")
        raise SystemExit(1)

    highlights = session.annotations.get_highlights(book, chapter)
    bookmarks = session.annotations.bookmark_index(book, chapter)
    notes = session.annotations.note_index(book, chapter)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Verse", style="dim", justify="right", width=4)
    table.add_column("Marks", width=3)
    table.add_column("Text")

    for verse in verses:
        marks = Text()
        if verse.verse in bookmarks:
            marks.append("B", style="bold cyan")
        if verse.verse in notes:
            marks.append("N", style="bold magenta")
        color = highlights.get(verse.verse)
        style = f"black on {color}" if color else ""
        table.add_row(str(verse.verse), marks, verse_text(verse.text, style=style))

    heading = reference(book, chapter, version=version)
    console.print(f"[bold]{heading}[/bold] [dim]({version})[/dim]\n")
    console.print(table)

    for note in notes.records():
        console.print()
        console.print(Text.assemble((f"Note {note.range}: ", "magenta"), note.content))

    session.history.record_visit(book, chapter)


@click.command("read")
@click.argument("book", type=BOOK, required=False)
@click.argument("chapter", type=click.IntRange(min=1), required=False)
@translation_option
@db_option
@data_dir_option
def read(
    book: str | None,
    chapter: int | None,
    translation: str | None,
    db_path: Path | None,
    data_dir: Path | None,
) -> None:
    """Read a chapter. With no arguments, reopens the last chapter read."""
    with open_session(console, db_path, data_dir) as session:
        if book is None:
            last = session.history.last_visit()
            book, chapter = (last.book, last.chapter) if last else _START
        show_chapter(session, book, chapter or 1, resolve_translation(session, translation))


def _step(
    db_path: Path | None, data_dir: Path | None, translation: str | None, forward: bool
) -> None:
    with open_session(console, db_path, data_dir) as session:
        last = session.history.last_visit()
        book, chapter = (last.book, last.chapter) if last else _START
        target = next_chapter(book, chapter) if forward else previous_chapter(book, chapter)
        if target is None:
            edge = "end" if forward else "beginning"
            console.print(f"[yellow]Already at the {edge} of the Bible.[/yellow]")
            raise SystemExit(1)
        show_chapter(session, *target, resolve_translation(session, translation))


@click.command("next")
@translation_option
@db_option
@data_dir_option
def next_(translation: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """Read the chapter after the last one read."""
    _step(db_path, data_dir, translation, forward=True)


@click.command("prev")
@translation_option
@db_option
@data_dir_option
def prev(translation: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """Read the chapter before the last one read."""
    _step(db_path, data_dir, translation, forward=False)
