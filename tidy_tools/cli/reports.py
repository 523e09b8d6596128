"""
Markdown report writers.

Renders duplicate scan results and directory reports to files.
"""

from datetime import datetime
from pathlib import Path

from ..analysis import DirectoryReport, DuplicateScanResult
from ..shared import format_bytes

BAR_WIDTH = 50


def _header(title: str) -> str:
    return (
        f"# {title}\n\n"
        f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n"
        "---\n\n"
    )


def render_duplicates_report(result: DuplicateScanResult) -> str:
    lines = [_header("Tidy Tools Duplicate Files Report")]

    lines.append("## Summary\n\n")
    lines.append(f"- **Total Files Scanned**: {result.files_scanned}\n")
    lines.append(f"- **Duplicate Groups**: {len(result.groups)}\n")
    lines.append(f"- **Duplicate Files**: {result.duplicate_count}\n")
    lines.append(f"- **Wasted Space**: {format_bytes(result.wasted_bytes)}\n\n")

    lines.append("## Duplicate Groups\n\n")
    for i, group in enumerate(result.groups, 1):
        lines.append(
            f"### Group {i} (Size: {format_bytes(group.kept.size)}, "
            f"{len(group.members)} copies)\n\n"
        )
        for j, entry in enumerate(group.members):
            marker = "**[KEEP]** " if j == 0 else ""
            lines.append(f"- {marker}{entry.path}\n")
        lines.append("\n")

    return "".join(lines)


def render_directory_report(report: DirectoryReport) -> str:
    lines = [_header("Tidy Tools Directory Report")]

    lines.append("## Directory Summary\n\n")
    lines.append(f"- **Total Files**: {report.total_files}\n")
    lines.append(f"- **Total Size**: {format_bytes(report.total_bytes)}\n")
    lines.append(f"- **Total Directories**: {report.total_directories}\n")
    lines.append(f"- **Hidden Files**: {report.hidden_files} (skipped from analysis)\n")
    lines.append(f"- **Files Without Extension**: {report.no_extension_files}\n\n")

    lines.append("## File Type Distribution\n\n")
    lines.append("| Extension | Count | Total Size |\n")
    lines.append("|-----------|-------|------------|\n")
    for stats in report.extensions:
        lines.append(
            f"| {stats.extension} | {stats.count} | {format_bytes(stats.size_bytes)} |\n"
        )
    lines.append("\n")

    top = report.top_extensions(5)
    if top:
        lines.append("## Top 5 File Types (by size)\n\n")
        lines.append("```\n")
        max_size = top[0].size_bytes
        for stats in top:
            width = int(stats.size_bytes / max_size * BAR_WIDTH) if max_size else 0
            if width == 0 and stats.size_bytes > 0:
                width = 1
            bar = "█" * width
            lines.append(
                f"{stats.extension:>15} | {bar:<{BAR_WIDTH}} {format_bytes(stats.size_bytes)}\n"
            )
        lines.append("```\n\n")

    lines.append(f"## Top {len(report.largest_files)} Largest Files\n\n")
    lines.append("| # | File Path | Size |\n")
    lines.append("|---|-----------|------|\n")
    for i, item in enumerate(report.largest_files, 1):
        lines.append(f"| {i} | {item.path} | {format_bytes(item.size_bytes)} |\n")

    return "".join(lines)


def write_report(content: str, output_path: Path) -> Path:
    """
    Write a rendered report.

    Raises:
        OSError: If the report file cannot be created
    """
    output_path = Path(output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
    return output_path
