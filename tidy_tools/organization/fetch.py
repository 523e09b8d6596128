"""
Flatten a directory tree.

Pulls every file from nested subdirectories up into the root directory and
optionally removes the directories left empty.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from ..config import settings
from ..core.types import FailureKind, ItemFailure, MoveAction
from ..shared.file_utils import ensure_readable_directory, list_directories, walk_files
from .resolver import CollisionSpaceExhausted, PathResolver
from .transaction import UndoJournal

logger = logging.getLogger(__name__)


class FetchResult(BaseModel):
    """Result of a flatten run."""

    root: Path
    dry_run: bool = False
    found: int = 0
    actions: List[MoveAction] = Field(default_factory=list)
    removed_directories: List[Path] = Field(default_factory=list)
    failures: List[ItemFailure] = Field(default_factory=list)

    @property
    def moved(self) -> int:
        return len(self.actions)

    @property
    def failed(self) -> int:
        return len(self.failures)


class Flattener:
    """Move nested files into the root of a directory."""

    def __init__(
        self,
        root: Path,
        journal: Optional[UndoJournal] = None,
        resolver: Optional[PathResolver] = None,
        journal_name: Optional[str] = None,
    ):
        """
        Initialize flattener.

        Args:
            root: Directory to flatten
            journal: If given, every move is recorded so the flatten can be undone
            resolver: Collision resolver (a fresh one by default)
            journal_name: Journal file name to leave alone (default from settings)
        """
        self.root = Path(root)
        self.journal = journal
        self.resolver = resolver or PathResolver()
        self.journal_name = journal_name or settings.journal_name

    def collect(self) -> List[Path]:
        """List every file at depth one or more below the root."""
        return [
            path
            for path in walk_files(self.root)
            if path.parent != self.root and path.name != self.journal_name
        ]

    def fetch(
        self,
        cleanup_empty_dirs: bool = False,
        dry_run: bool = False,
        on_item: Optional[Callable[[Path], None]] = None,
    ) -> FetchResult:
        """
        Move all nested files into the root.

        The walk is completed before anything is moved.

        Args:
            cleanup_empty_dirs: Remove directories left empty (not in dry-run)
            dry_run: Report the planned moves without touching the disk
            on_item: Called with each file once it is handled

        Returns:
            Fetch result with moves, removed directories and failures

        Raises:
            OSError: If the root directory cannot be read
        """
        ensure_readable_directory(self.root)
        logger.info(f"Fetching files from subdirectories of {self.root}")

        files = self.collect()
        result = FetchResult(root=self.root, dry_run=dry_run, found=len(files))

        if not files:
            logger.info("No files found in subdirectories")
        elif not dry_run and self.journal is not None:
            self.journal.start()

        for path in files:
            self._fetch_file(path, dry_run, result)
            if on_item is not None:
                on_item(path)

        logger.info(f"Fetch complete: {result.moved}/{result.found} files moved")

        if cleanup_empty_dirs and not dry_run:
            self.remove_empty_dirs(result)

        return result

    def _fetch_file(self, path: Path, dry_run: bool, result: FetchResult) -> None:
        try:
            destination = self.resolver.resolve(self.root / path.name)
        except CollisionSpaceExhausted as e:
            logger.error(f"Cannot find a free name for {path}: {e}")
            result.failures.append(
                ItemFailure(path=path, kind=FailureKind.COLLISION, message=str(e))
            )
            return

        action = MoveAction(source_path=path, target_path=destination)

        if self.journal is not None and not self.journal.can_record(action):
            logger.error(f"Cannot record a move of {path} for undo, leaving it in place")
            result.failures.append(
                ItemFailure(
                    path=path,
                    kind=FailureKind.JOURNAL,
                    message="path cannot be written to the undo journal",
                )
            )
            return

        if dry_run:
            self.resolver.reserve(destination)
            logger.info(f"[DRY RUN] Would move {path} → {destination}")
            result.actions.append(action)
            return

        try:
            shutil.move(str(path), str(destination))
        except OSError as e:
            logger.error(f"Error moving {path}: {e}")
            result.failures.append(
                ItemFailure(path=path, kind=FailureKind.MOVE, message=str(e))
            )
            return

        logger.info(f"Moved {path} → {destination}")
        result.actions.append(action)

        if self.journal is not None:
            try:
                self.journal.append(action)
            except OSError as e:
                logger.error(f"Moved {path} but could not record it for undo: {e}")
                result.failures.append(
                    ItemFailure(
                        path=destination, kind=FailureKind.JOURNAL, message=str(e)
                    )
                )

    def remove_empty_dirs(self, result: Optional[FetchResult] = None) -> List[Path]:
        """
        Remove empty directories below the root in one deepest-first sweep.

        Directories are visited in reverse walk order, so a parent is checked
        after its children. The sweep is not repeated.

        Returns:
            Directories that were removed
        """
        removed: List[Path] = []

        for directory in reversed(list_directories(self.root)):
            try:
                with os.scandir(directory) as entries:
                    if any(entries):
                        continue
                directory.rmdir()
            except OSError as e:
                logger.error(f"Error removing empty directory {directory}: {e}")
                if result is not None:
                    result.failures.append(
                        ItemFailure(path=directory, kind=FailureKind.RMDIR, message=str(e))
                    )
                continue

            logger.info(f"Removed empty directory: {directory}")
            removed.append(directory)

        if result is not None:
            result.removed_directories.extend(removed)
        return removed


def fetch(
    root: Path,
    cleanup_empty_dirs: bool = False,
    dry_run: bool = False,
    journal: Optional[UndoJournal] = None,
) -> FetchResult:
    """Flatten a directory; see Flattener.fetch."""
    return Flattener(root, journal=journal).fetch(cleanup_empty_dirs, dry_run)
