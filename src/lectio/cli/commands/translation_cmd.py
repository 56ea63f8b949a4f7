# ABOUTME: The `lectio translation` command for showing or setting the preferred translation.
# ABOUTME: The preference is stored in the database and used when --translation is omitted.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lectio.cli.options import data_dir_option, db_option, open_session
from lectio.translations.registry import TRANSLATIONS

console = Console()


@click.command("translation")
@click.argument("code", type=click.Choice(list(TRANSLATIONS), case_sensitive=False), required=False)
@db_option
@data_dir_option
def translation(code: str | None, db_path: Path | None, data_dir: Path | None) -> None:
    """List translations, or make CODE the preferred one."""
    with open_session(console, db_path, data_dir, seed=False) as session:
        if code is not None:
            session.settings.set_preferred_translation(code)
            console.print(f"[green]Preferred translation set to {code}[/green]")
            return
        preferred = session.settings.preferred_translation()
        loaded = set(session.verses.list_versions())

    table = Table()
    table.add_column("", width=1)
    table.add_column("Code", style="cyan")
    table.add_column("Title")
    table.add_column("Language")
    table.add_column("Loaded")
    for entry in TRANSLATIONS.values():
        table.add_row(
            "*" if entry.code == preferred else "",
            entry.code,
            entry.title,
            entry.language,
            "yes" if entry.code in loaded else "[dim]no[/dim]",
        )
    console.print(table)
