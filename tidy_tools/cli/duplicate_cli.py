"""
CLI for duplicate file detection.

Finds files with identical content and optionally deletes the extra copies.
"""

from pathlib import Path
from typing import Optional

import click
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from ..analysis import DuplicateDetector, delete_duplicates
from ..config import settings
from ..shared import format_bytes
from .output import abort, console, print_failures
from .reports import render_duplicates_report, write_report


def _confirm_deletion(message: str) -> bool:
    console.print("\n[red]⚠ Delete duplicates mode enabled![/red]")
    console.print(f"   {message}")
    response = click.prompt(
        "   Type 'yes' to confirm deletion", default="", show_default=False
    )
    return response.strip() == "yes"


@click.command("duplicates")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False), default="."
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Report file (default: DIRECTORY/{settings.duplicates_report_name})",
)
@click.option(
    "--delete",
    "delete",
    is_flag=True,
    default=False,
    help="Delete duplicates, keeping the first copy (asks for confirmation)",
)
@click.pass_context
def duplicates(
    ctx: click.Context, directory: str, output: Optional[str], delete: bool
) -> None:
    """
    Find duplicate files in DIRECTORY.

    Files are compared by a digest of their full content. The first copy
    found in each group is kept; the others are reported as duplicates.
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    root = Path(directory).resolve()
    output_path = Path(output) if output else root / settings.duplicates_report_name

    detector = DuplicateDetector(root)

    try:
        files = detector.collect_files()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Hashing files...", total=len(files))
            result = detector.detect(
                on_item=lambda _path: progress.advance(task), files=files
            )
    except Exception as e:
        abort(e, verbose)

    print_failures(result.failures)

    if not result.groups:
        console.print("\n[green]✓ No duplicate files found![/green]")
        return

    try:
        write_report(render_duplicates_report(result), output_path)
    except OSError as e:
        abort(e, verbose)

    console.print(
        f"\n[green]✓ Duplicates report generated: {output_path}[/green]",
        highlight=False,
    )
    console.print(f"   Duplicate groups: {len(result.groups)}")
    console.print(f"   Duplicate files: {result.duplicate_count}")
    console.print(f"   Wasted space: {format_bytes(result.wasted_bytes)}")

    if not delete:
        return

    deletion = delete_duplicates(result.groups, confirm=_confirm_deletion)
    if not deletion.confirmed:
        console.print("[yellow]Deletion cancelled.[/yellow]")
        return

    for path in deletion.deleted:
        console.print(f"Deleted: {path}", highlight=False)

    console.print("\n[green]✓ Deletion complete![/green]")
    console.print(f"   Files deleted: {deletion.deleted_count}")
    console.print(f"   Space freed: {format_bytes(deletion.reclaimed_bytes)}")
    print_failures(deletion.failures)
