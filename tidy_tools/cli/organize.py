"""
CLI commands for organizing files and undoing the last run.

Moves the files of a directory into folders by extension, category or date.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from ..core.types import ClassificationMode, DateGranularity
from ..organization import (
    FileJournal,
    FileOrganizer,
    NothingToUndoError,
    OrganizationResult,
    OrganizationStrategy,
    OrganizerConfig,
    parse_name_list,
    undo,
)
from ..shared import build_extension_table
from .output import abort, console, print_actions, print_failures, spinner


@click.command("organize")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False), default="."
)
@click.option(
    "-c",
    "--categories",
    is_flag=True,
    default=False,
    help="Group files by categories (Images, Documents, ...)",
)
@click.option(
    "--date-mode",
    type=click.Choice([g.value for g in DateGranularity], case_sensitive=False),
    default=None,
    help="Group files by modification date",
)
@click.option(
    "-d",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Preview changes without moving files",
)
@click.option(
    "-f",
    "--full",
    is_flag=True,
    default=False,
    help="Use full extensions (tar.gz instead of gz)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Use plain folder names without the tidy_ prefix",
)
@click.option(
    "--noext-folder",
    type=str,
    default=None,
    help="Folder for files without an extension (default: leave them)",
)
@click.option(
    "--case-sensitive",
    is_flag=True,
    default=False,
    help="Treat extensions as case-sensitive (JPG vs jpg)",
)
@click.option(
    "-i",
    "--include",
    type=str,
    default="",
    help="Comma-separated extensions or names to include ('.' for everything)",
)
@click.option(
    "-e",
    "--exclude",
    type=str,
    default="",
    help="Comma-separated extensions or names to exclude",
)
@click.option(
    "-r",
    "--recursive",
    is_flag=True,
    default=False,
    help="Process subdirectories recursively",
)
@click.option(
    "-t",
    "--target",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the organized folders (default: DIRECTORY)",
)
@click.pass_context
def organize(
    ctx: click.Context,
    directory: str,
    categories: bool,
    date_mode: Optional[str],
    dry_run: bool,
    full: bool,
    quiet: bool,
    noext_folder: Optional[str],
    case_sensitive: bool,
    include: str,
    exclude: str,
    recursive: bool,
    target: Optional[str],
) -> None:
    """
    Organize the files in DIRECTORY into folders.

    \b
    Examples:
        # Preview (always a good first step)
        tidy-tools organize ~/Downloads --dry-run

        # By extension: tidy_jpg/, tidy_pdf/, ...
        tidy-tools organize ~/Downloads

        # By category: Images/, Documents/, ...
        tidy-tools organize ~/Downloads -c

        # By month of last modification: 2024-03/, ...
        tidy-tools organize ~/Downloads --date-mode month

    Every move is recorded; `tidy-tools undo DIRECTORY` reverses the last run.
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    root = Path(directory).resolve()

    if date_mode:
        mode = ClassificationMode.DATE
    elif categories:
        mode = ClassificationMode.CATEGORY
    else:
        mode = ClassificationMode.EXTENSION

    strategy = OrganizationStrategy(
        mode=mode,
        date_granularity=DateGranularity((date_mode or "month").lower()),
        full_extension=full,
        case_sensitive=case_sensitive,
        quiet=quiet,
        no_ext_folder=noext_folder or None,
        category_table=build_extension_table() if mode == ClassificationMode.CATEGORY else {},
    )
    config = OrganizerConfig(
        strategy=strategy,
        target_directory=Path(target).absolute() if target else None,
        include=parse_name_list(include),
        exclude=parse_name_list(exclude),
        recursive=recursive,
        dry_run=dry_run,
    )

    journal = FileJournal.for_directory(root)
    if dry_run:
        console.print("\n[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]")
    elif journal.exists():
        console.print(
            "[yellow]⚠ An undo journal from a previous run exists and will be "
            "replaced. Run 'tidy-tools undo' first to keep it.[/yellow]"
        )

    try:
        organizer = FileOrganizer(config, journal=journal)
        with spinner() as progress:
            task = progress.add_task("Organizing files...", total=None)
            result = organizer.organize(
                root, on_item=lambda _path: progress.advance(task)
            )
    except Exception as e:
        abort(e, verbose)

    for folder in result.created_folders:
        console.print(f"[green][+][/green] Created folder: {folder}", highlight=False)
    print_actions(result.actions, dry_run)
    _display_result(result)


def _display_result(result: OrganizationResult) -> None:
    """Display organization result."""
    console.print("\n[green]✓ Organization complete![/green]\n")

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Folders created", str(len(result.created_folders)))
    table.add_row("Moved" if not result.dry_run else "Would move", str(result.moved))
    table.add_row("Skipped", str(result.skipped))
    table.add_row("Already in place", str(result.already_in_place))
    table.add_row("Failed", str(result.failed))

    console.print(table)

    if result.dry_run:
        console.print("\n[yellow]This was a DRY RUN - no files were modified[/yellow]")
    elif result.moved:
        console.print("\n[dim]Undo this run with: tidy-tools undo[/dim]")

    print_failures(result.failures)


@click.command("undo")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False), default="."
)
@click.pass_context
def undo_command(ctx: click.Context, directory: str) -> None:
    """
    Undo the last organize or fetch run in DIRECTORY.

    Files are moved back to where they were. The journal is removed once at
    least one file has been restored.
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    journal = FileJournal.for_directory(Path(directory).resolve())

    try:
        with spinner() as progress:
            task = progress.add_task("Restoring files...", total=None)
            result = undo(journal, on_item=lambda _action: progress.advance(task))
    except NothingToUndoError:
        console.print("[red]✗ Nothing to undo: no previous operation recorded.[/red]")
        sys.exit(1)
    except Exception as e:
        abort(e, verbose)

    if result.total == 0:
        console.print("[yellow]No actions to undo.[/yellow]")
        return

    for action in result.restored_actions:
        console.print(
            f"Restored {action.target_path} → {action.source_path}", highlight=False
        )

    console.print(
        f"\n[green]✓ Undo complete: {result.restored}/{result.total} files restored.[/green]"
    )
    print_failures(result.failures)
