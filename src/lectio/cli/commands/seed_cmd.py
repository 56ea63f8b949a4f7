# ABOUTME: The `lectio seed` and `lectio repair` commands for loading scripture text.
# ABOUTME: Seed is idempotent; repair drops and rebuilds the verse tables, keeping annotations.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lectio.cli.options import data_dir_option, db_option, open_session
from lectio.core.seeding import SeedResult, SeedState
from lectio.core.session import BibleSession

console = Console()


def _report(session: BibleSession, result: SeedResult) -> None:
    for probe in result.failed_probes:
        console.print(f"[yellow]Integrity check failed:[/yellow] {probe}")

    if result.state is not SeedState.SEEDED:
        console.print(f"[red]Seeding failed: {result.error}[/red]")
        raise SystemExit(1)

    if result.inserted:
        console.print(f"[green]Seeded {result.inserted} verses.[/green]")
    else:
        console.print("[green]Already seeded.[/green]")

    table = Table()
    table.add_column("Translation", style="cyan")
    table.add_column("Books", justify="right")
    table.add_column("Verses", justify="right")
    for code in session.seeder.codes:
        table.add_row(
            code,
            str(len(session.verses.list_books(code))),
            str(session.verses.count_verses(code)),
        )
    console.print(table)


@click.command("seed")
@db_option
@data_dir_option
def seed(db_path: Path | None, data_dir: Path | None) -> None:
    """Load translation datasets into the database if they are missing or incomplete."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        _report(session, session.ensure_seeded())


@click.command("repair")
@db_option
@data_dir_option
@click.confirmation_option(
    prompt="This deletes and reloads all scripture text. Highlights, bookmarks and notes are kept. "
    "Continue?"
)
def repair(db_path: Path | None, data_dir: Path | None) -> None:
    """Rebuild the scripture tables from the datasets (for missing or corrupt text)."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        _report(session, session.repair())
