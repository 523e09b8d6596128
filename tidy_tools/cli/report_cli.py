"""
CLI for the directory report.
"""

from pathlib import Path
from typing import Optional

import click

from ..analysis import analyze_directory
from ..config import settings
from ..shared import format_bytes
from .output import abort, console
from .reports import render_directory_report, write_report


@click.command("report")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False), default="."
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Report file (default: DIRECTORY/{settings.report_name})",
)
@click.pass_context
def report(ctx: click.Context, directory: str, output: Optional[str]) -> None:
    """Write a markdown summary of what DIRECTORY contains."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    root = Path(directory).resolve()
    output_path = Path(output) if output else root / settings.report_name

    try:
        result = analyze_directory(
            root, skip_names=[settings.report_name, settings.duplicates_report_name]
        )
        write_report(render_directory_report(result), output_path)
    except Exception as e:
        abort(e, verbose)

    console.print(f"\n[green]✓ Report generated: {output_path}[/green]", highlight=False)
    console.print(f"   Total files analyzed: {result.total_files}")
    console.print(f"   Total size: {format_bytes(result.total_bytes)}")
