"""
Organization module for file reorganization operations.

This module handles moving files into classified folders with safety
features like dry-run mode, collision-free names, and an undo journal.
"""

from .fetch import FetchResult, Flattener, fetch
from .file_organizer import (
    FileOrganizer,
    OrganizationResult,
    OrganizerConfig,
    parse_name_list,
    should_process,
)
from .resolver import CollisionSpaceExhausted, PathResolver, avoid_collision
from .strategy import OrganizationStrategy, classify, get_date_folder
from .transaction import (
    FileJournal,
    MemoryJournal,
    NothingToUndoError,
    UndoJournal,
    UndoResult,
    undo,
)

__all__ = [
    "FetchResult",
    "Flattener",
    "fetch",
    "FileOrganizer",
    "OrganizationResult",
    "OrganizerConfig",
    "parse_name_list",
    "should_process",
    "CollisionSpaceExhausted",
    "PathResolver",
    "avoid_collision",
    "OrganizationStrategy",
    "classify",
    "get_date_folder",
    "FileJournal",
    "MemoryJournal",
    "NothingToUndoError",
    "UndoJournal",
    "UndoResult",
    "undo",
]
