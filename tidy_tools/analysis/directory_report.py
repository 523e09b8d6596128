"""
Directory analysis for the tidy report.

Summarizes what a directory tree contains: file counts and sizes per
extension, the largest files, hidden files and files without an extension.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.types import get_extension, is_hidden
from ..shared.file_utils import ensure_readable_directory, list_directories, walk_files

logger = logging.getLogger(__name__)

NO_EXTENSION = "(no extension)"


class ExtensionStats(BaseModel):
    """File count and total size for one extension."""

    extension: str
    count: int = 0
    size_bytes: int = 0


class ReportedFile(BaseModel):
    path: Path
    size_bytes: int


class DirectoryReport(BaseModel):
    """Snapshot statistics of a directory tree."""

    root: Path
    total_files: int = 0
    total_bytes: int = 0
    total_directories: int = 0
    hidden_files: int = 0
    no_extension_files: int = 0
    extensions: List[ExtensionStats] = Field(default_factory=list)
    largest_files: List[ReportedFile] = Field(default_factory=list)

    def top_extensions(self, limit: int = 5) -> List[ExtensionStats]:
        return self.extensions[:limit]


def analyze_directory(
    root: Path, largest: int = 10, skip_names: Optional[List[str]] = None
) -> DirectoryReport:
    """
    Analyze a directory tree.

    Hidden files are counted but otherwise left out of the analysis.
    Extension statistics are sorted by total size, largest first.

    Args:
        root: Directory to analyze recursively
        largest: Number of largest files to list
        skip_names: File names to ignore entirely

    Returns:
        Directory report

    Raises:
        OSError: If the root directory cannot be read
    """
    root = Path(root)
    ensure_readable_directory(root)
    skip = set(skip_names or ())

    report = DirectoryReport(root=root)
    report.total_directories = len(list_directories(root))

    stats: Dict[str, ExtensionStats] = {}
    files: List[ReportedFile] = []

    for path in walk_files(root):
        if path.name in skip:
            continue
        if is_hidden(path.name):
            report.hidden_files += 1
            continue

        try:
            size = os.lstat(path).st_size
        except OSError as e:
            logger.warning(f"Cannot stat {path}: {e}")
            continue

        ext = get_extension(path.name)
        if ext:
            key = f".{ext.lower()}"
        else:
            key = NO_EXTENSION
            report.no_extension_files += 1

        report.total_files += 1
        report.total_bytes += size
        files.append(ReportedFile(path=path, size_bytes=size))

        entry = stats.setdefault(key, ExtensionStats(extension=key))
        entry.count += 1
        entry.size_bytes += size

    report.extensions = sorted(stats.values(), key=lambda s: s.size_bytes, reverse=True)
    files.sort(key=lambda f: f.size_bytes, reverse=True)
    report.largest_files = files[:largest]

    logger.info(
        f"Analyzed {report.total_files} files ({report.total_bytes} bytes) in {root}"
    )
    return report
