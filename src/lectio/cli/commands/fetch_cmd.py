# ABOUTME: The `lectio fetch` command for downloading translation datasets.
# ABOUTME: Saves each registered translation's JSON into the data directory.

from pathlib import Path

import click
from rich.console import Console

from lectio.cli.options import data_dir_option
from lectio.translations.fetch import fetch_translations
from lectio.translations.http import LectioHttpClient
from lectio.translations.registry import DEFAULT_DATA_DIR, TRANSLATIONS

console = Console()


@click.command("fetch")
@click.argument(
    "codes",
    nargs=-1,
    type=click.Choice(list(TRANSLATIONS), case_sensitive=False),
)
@data_dir_option
@click.option("--force", is_flag=True, default=False, help="Re-download files already present.")
def fetch(codes: tuple[str, ...], data_dir: Path | None, force: bool) -> None:
    """Download translation datasets (all registered translations by default)."""
    target = data_dir or DEFAULT_DATA_DIR
    client = LectioHttpClient()
    try:
        result = fetch_translations(target, client, codes=list(codes) or None, force=force)
    finally:
        client.close()

    for code in result.downloaded:
        console.print(f"[green]Downloaded[/green] {code}")
    for code in result.skipped:
        console.print(f"[dim]Already present:[/dim] {code}")
    for code, message in result.errors:
        console.print(f"[red]Failed {code}:[/red] {message}")

    console.print(f"\n[dim]Datasets in {target}[/dim]")
    if result.errors:
        raise SystemExit(1)
