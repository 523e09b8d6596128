"""Console output shared by the CLI commands."""

import sys
from typing import List, NoReturn

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..core.types import ItemFailure, MoveAction

console = Console()

MAX_LISTED_ERRORS = 10


def spinner(quiet: bool = False) -> Progress:
    """Progress display for walks whose length is not known up front."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=quiet,
    )


def print_actions(actions: List[MoveAction], dry_run: bool) -> None:
    for action in actions:
        if dry_run:
            console.print(
                f"[yellow][DRY][/yellow] Would move {action.source_path} → {action.target_path}",
                highlight=False,
            )
        else:
            console.print(
                f"Moved {action.source_path} → {action.target_path}", highlight=False
            )


def print_failures(failures: List[ItemFailure]) -> None:
    """Show per-file errors, first ten only."""
    if not failures:
        return

    console.print("\n[red]Errors:[/red]")
    for failure in failures[:MAX_LISTED_ERRORS]:
        console.print(f"  [red]• {failure}[/red]", highlight=False)
    if len(failures) > MAX_LISTED_ERRORS:
        console.print(f"  [dim]... and {len(failures) - MAX_LISTED_ERRORS} more[/dim]")


def abort(error: Exception, verbose: bool = False) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    console.print(f"\n[red]✗ Error: {error}[/red]", highlight=False)
    if verbose:
        console.print_exception()
    sys.exit(1)
