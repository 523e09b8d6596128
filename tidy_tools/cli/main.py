"""
Main CLI entry point for Tidy Tools.

Groups the organize, undo, fetch, duplicates and report commands.
"""

import click

from ..shared import setup_logging
from ..version import get_version_string
from .duplicate_cli import duplicates
from .fetch_cli import fetch
from .organize import organize, undo_command
from .report_cli import report


@click.group()
@click.version_option(
    version=get_version_string(), prog_name="Tidy Tools", message="%(prog)s %(version)s"
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable verbose logging",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """
    Tidy Tools - organize directories safely.

    Sorts files into folders by extension, category or date, undoes the last
    run, flattens nested directories and finds duplicate files.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, quiet=not verbose)


cli.add_command(organize)
cli.add_command(undo_command)
cli.add_command(fetch)
cli.add_command(fetch, name="flatten")
cli.add_command(duplicates)
cli.add_command(report)


if __name__ == "__main__":
    cli()
