# ABOUTME: The `lectio search` command for case-insensitive substring search of one translation.
# ABOUTME: Supports testament and book filters and records the query in recent searches.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lectio.cli.options import (
    BOOK,
    data_dir_option,
    db_option,
    open_session,
    resolve_translation,
    translation_option,
)
from lectio.cli.render import reference, verse_text
from lectio.core.search import run_search

console = Console()


@click.command("search")
@click.argument("query")
@translation_option
@click.option(
    "--testament",
    type=click.Choice(["OT", "NT"], case_sensitive=False),
    default=None,
    help="Only search the Old or New Testament.",
)
@click.option("--book", "book", type=BOOK, default=None, help="Only search one book.")
@db_option
@data_dir_option
def search(
    query: str,
    translation: str | None,
    testament: str | None,
    book: str | None,
    db_path: Path | None,
    data_dir: Path | None,
) -> None:
    """Search verse text for QUERY (at least three characters, case-insensitive)."""
    with open_session(console, db_path, data_dir) as session:
        version = resolve_translation(session, translation)
        try:
            result = run_search(session, query, version, testament=testament, book=book)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    if not result.verses:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("Reference", style="cyan", no_wrap=True)
    table.add_column("Text")

    for verse in result.verses:
        table.add_row(
            reference(verse.book, verse.chapter, verse.verse, version=version),
            verse_text(verse.text),
        )

    console.print(table)
    console.print(f"\n[dim]{len(result.verses)} result(s) in {len(result.books)} book(s)[/dim]")
