"""
CLI for flattening a directory.

Pulls files out of nested subdirectories into the directory itself.
"""

from pathlib import Path

import click

from ..organization import FileJournal, Flattener
from .output import abort, console, print_actions, print_failures, spinner


@click.command("fetch")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False), default="."
)
@click.option(
    "--cleanup",
    is_flag=True,
    default=False,
    help="Remove subdirectories left empty",
)
@click.option(
    "-d",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Preview changes without moving files",
)
@click.pass_context
def fetch(ctx: click.Context, directory: str, cleanup: bool, dry_run: bool) -> None:
    """
    Move every file below DIRECTORY up into DIRECTORY.

    Name clashes get a numeric suffix ("notes (1).txt"). The moves are
    recorded, so `tidy-tools undo DIRECTORY` puts the files back.
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    root = Path(directory).resolve()
    journal = FileJournal.for_directory(root)

    if dry_run:
        console.print("\n[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]")

    try:
        flattener = Flattener(root, journal=journal)
        with spinner() as progress:
            task = progress.add_task("Fetching files...", total=None)
            result = flattener.fetch(
                cleanup_empty_dirs=cleanup,
                dry_run=dry_run,
                on_item=lambda _path: progress.advance(task),
            )
    except Exception as e:
        abort(e, verbose)

    if result.found == 0:
        console.print("[yellow]No files found in subdirectories.[/yellow]")
        return

    print_actions(result.actions, dry_run)
    console.print(
        f"\n[green]✓ Fetch complete: {result.moved}/{result.found} files "
        f"moved to {root}[/green]",
        highlight=False,
    )

    if cleanup and dry_run:
        console.print("[yellow][DRY] Would clean up empty directories[/yellow]")
    for removed in result.removed_directories:
        console.print(f"Removed empty directory: {removed}", highlight=False)

    print_failures(result.failures)
