"""
File utilities for Tidy Tools.

Directory walking, checksums, formatting and logging setup shared by the
organizer, the fetch engine and the analyzers.
"""

import hashlib
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)


def ensure_readable_directory(directory: Path) -> None:
    """
    Check that a directory exists and can be listed.

    Raises:
        NotADirectoryError: If the path is not a directory
        OSError: If the directory cannot be read
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    # Listing raises PermissionError and friends for unreadable roots
    with os.scandir(directory):
        pass


def walk_files(
    directory: Path,
    prune: Optional[Callable[[Path], bool]] = None,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """
    Yield every file below a directory, top-down, in name order.

    Args:
        directory: Directory to walk
        prune: Called with each subdirectory; returning True skips it
        follow_symlinks: If True, descend into symlinked directories

    Yields:
        File paths (anything that is not a directory)
    """
    for root, dirs, files in os.walk(
        directory, followlinks=follow_symlinks, onerror=_log_walk_error
    ):
        root_path = Path(root)
        dirs.sort()
        if prune is not None:
            dirs[:] = [d for d in dirs if not prune(root_path / d)]
        for name in sorted(files):
            yield root_path / name


def list_directories(directory: Path) -> List[Path]:
    """
    List every directory below a directory (excluding itself) in walk order.

    Parents always come before their children.
    """
    result: List[Path] = []
    for root, dirs, _ in os.walk(directory, onerror=_log_walk_error):
        dirs.sort()
        root_path = Path(root)
        result.extend(root_path / d for d in dirs if not (root_path / d).is_symlink())
    return result


def _log_walk_error(error: OSError) -> None:
    logger.error(f"Error walking {error.filename}: {error}")


def is_within(path: Path, directory: Path) -> bool:
    """Return True if path is directory itself or lies below it."""
    try:
        Path(os.path.abspath(path)).relative_to(os.path.abspath(directory))
        return True
    except ValueError:
        return False


def compute_checksum(file_path: Path, algorithm: str = "md5") -> str:
    """
    Compute a checksum over the full byte stream of a file.

    Reads in chunks so large files are not loaded into memory.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm (md5, sha256, ...)

    Returns:
        Hexadecimal checksum string

    Raises:
        OSError: If the file cannot be read
    """
    hash_obj = hashlib.new(algorithm)

    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            hash_obj.update(chunk)

    return hash_obj.hexdigest()


def format_bytes(size_bytes: int) -> str:
    """
    Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "2.5 GB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    return f"{size:.1f} {units[unit_index]}"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
        quiet: If True, set logging level to WARNING
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
