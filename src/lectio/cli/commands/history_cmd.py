# ABOUTME: The `lectio history` command for recent chapters and recent searches.
# ABOUTME: Both lists are capped; --clear empties the chosen one.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lectio.cli.options import data_dir_option, db_option, open_session
from lectio.cli.render import reference

console = Console()


@click.command("history")
@click.option("--searches", is_flag=True, default=False, help="Show recent searches instead.")
@click.option("--clear", is_flag=True, default=False, help="Empty the list instead of showing it.")
@db_option
@data_dir_option
def history(searches: bool, clear: bool, db_path: Path | None, data_dir: Path | None) -> None:
    """Show recently read chapters (or recent searches), newest first."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        if clear:
            if searches:
                session.history.clear_searches()
            else:
                session.history.clear_visits()
            console.print("[green]History cleared.[/green]")
            return
        terms = session.history.list_searches() if searches else []
        visits = [] if searches else session.history.list_visits()

    if searches:
        if not terms:
            console.print("[yellow]No recent searches.[/yellow]")
            return
        for term in terms:
            console.print(term, markup=False)
        return

    if not visits:
        console.print("[yellow]Nothing read yet.[/yellow]")
        return

    table = Table()
    table.add_column("Chapter", style="cyan")
    table.add_column("Visited", style="dim")
    for visit in visits:
        table.add_row(reference(visit.book, visit.chapter), visit.visited_at)
    console.print(table)
