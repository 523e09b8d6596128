"""
Shared utilities for Tidy Tools.

Common filesystem helpers used by the organizer, fetch engine and analyzers.
"""

from .categories import DEFAULT_CATEGORIES, build_extension_table
from .file_utils import (
    # Directory traversal
    ensure_readable_directory,
    is_within,
    list_directories,
    walk_files,
    # File operations
    compute_checksum,
    format_bytes,
    # Logging
    setup_logging,
)

__all__ = [
    # Constants
    "DEFAULT_CATEGORIES",
    # Functions
    "build_extension_table",
    "ensure_readable_directory",
    "is_within",
    "list_directories",
    "walk_files",
    "compute_checksum",
    "format_bytes",
    "setup_logging",
]
