# ABOUTME: The `lectio note` command group for writing notes on verses and verse ranges.
# ABOUTME: Notes are stored per exact range; `show` finds the note covering a single verse.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

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
from lectio.cli.render import reference

console = Console()


@click.group("note")
def note() -> None:
    """Write, show, remove, or list notes."""


@note.command("set")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@click.argument("content", required=False)
@db_option
@data_dir_option
def set_(
    book: str,
    chapter: int,
    verses: list[int],
    content: str | None,
    db_path: Path | None,
    data_dir: Path | None,
) -> None:
    """Save a note on VERSES of BOOK CHAPTER.

    Without CONTENT, opens your editor on the existing note (if any).
    """
    rng = selection_range(verses)
    ref = reference(book, chapter, str(rng))
    with open_session(console, db_path, data_dir, seed=False) as session:
        if content is None:
            existing = session.annotations.get_note(book, chapter, rng.start, rng.end)
            content = click.edit(existing.content if existing else "")
            if content is None:
                console.print("[yellow]Note unchanged.[/yellow]")
                return
        content = content.strip()
        if not content:
            console.print("[red]Note is empty; use `lectio note rm` to delete a note.[/red]")
            raise SystemExit(1)
        session.annotations.save_note(book, chapter, rng.start, content, rng.end)
    console.print(f"[green]Saved note[/green] on {ref}")


@note.command("show")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verse", type=click.IntRange(min=1))
@db_option
@data_dir_option
def show(
    book: str, chapter: int, verse: int, db_path: Path | None, data_dir: Path | None
) -> None:
    """Show the note covering VERSE of BOOK CHAPTER."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        found = session.annotations.note_index(book, chapter).get(verse)
    if found is None:
        console.print(f"[yellow]No note on {reference(book, chapter, verse)}[/yellow]")
        raise SystemExit(1)
    console.print(f"[bold]{reference(book, chapter, str(found.range))}[/bold]")
    console.print(found.content, markup=False)
    console.print(f"[dim]{found.created_at}[/dim]")


@note.command("rm")
@click.argument("book", type=BOOK)
@click.argument("chapter", type=click.IntRange(min=1))
@click.argument("verses", type=VERSES)
@db_option
@data_dir_option
def rm(
    book: str, chapter: int, verses: list[int], db_path: Path | None, data_dir: Path | None
) -> None:
    """Delete the note stored with exactly the range VERSES."""
    rng = selection_range(verses)
    ref = reference(book, chapter, str(rng))
    with open_session(console, db_path, data_dir, seed=False) as session:
        removed = session.annotations.delete_note(book, chapter, rng.start, rng.end)
    if not removed:
        console.print(f"[yellow]No note on {ref}[/yellow]")
        raise SystemExit(1)
    console.print(f"[green]Deleted note[/green] on {ref}")


@note.command("ls")
@translation_option
@db_option
@data_dir_option
def ls(translation: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """List all notes in Bible order."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        version = resolve_translation(session, translation)
        records = session.annotations.list_notes()

    if not records:
        console.print("[yellow]No notes yet.[/yellow]")
        return

    table = Table()
    table.add_column("Reference", style="cyan", no_wrap=True)
    table.add_column("Note")
    table.add_column("Updated", style="dim")

    for record in records:
        table.add_row(
            reference(record.book, record.chapter, str(record.range), version=version),
            record.content,
            record.created_at,
        )

    console.print(table)
