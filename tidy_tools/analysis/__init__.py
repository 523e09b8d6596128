"""
Analysis module.

Scans of a directory tree: duplicate detection by content digest (with
optional deletion of the extra copies) and the directory report.
"""

from .directory_report import DirectoryReport, ExtensionStats, analyze_directory
from .duplicate_detector import (
    DeletionResult,
    DuplicateDetector,
    DuplicateScanResult,
    delete_duplicates,
    find_duplicates,
)

__all__ = [
    "DirectoryReport",
    "ExtensionStats",
    "analyze_directory",
    "DeletionResult",
    "DuplicateDetector",
    "DuplicateScanResult",
    "delete_duplicates",
    "find_duplicates",
]
