# ABOUTME: CLI package for lectio, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from lectio.cli.commands import (
    bookmark_cmd,
    fetch_cmd,
    highlight_cmd,
    history_cmd,
    note_cmd,
    read_cmd,
    search_cmd,
    seed_cmd,
    translation_cmd,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=verbose, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="lectio")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """lectio - read, search, and annotate the Bible from the terminal."""
    _configure_logging(verbose)


cli.add_command(fetch_cmd.fetch)
cli.add_command(seed_cmd.seed)
cli.add_command(seed_cmd.repair)
cli.add_command(read_cmd.read)
cli.add_command(read_cmd.next_)
cli.add_command(read_cmd.prev)
cli.add_command(search_cmd.search)
cli.add_command(highlight_cmd.highlight)
cli.add_command(bookmark_cmd.bookmark)
cli.add_command(note_cmd.note)
cli.add_command(history_cmd.history)
cli.add_command(translation_cmd.translation)
