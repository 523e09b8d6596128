"""
File organizer for sorting a directory into classified folders.

Handles the actual file moves with safety features like dry-run,
collision-free destinations and an undo journal.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Iterator, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..core.types import (
    FailureKind,
    FileEntry,
    ItemFailure,
    MoveAction,
    get_extension,
    is_hidden,
)
from ..shared.file_utils import ensure_readable_directory, is_within, walk_files
from .resolver import CollisionSpaceExhausted, PathResolver
from .strategy import OrganizationStrategy
from .transaction import UndoJournal

logger = logging.getLogger(__name__)

# Include-list entry that accepts every (non-hidden) file
INCLUDE_ALL = "."


def parse_name_list(value: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated list of extensions or names."""
    if not value:
        return frozenset()
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def should_process(
    name: str, include: Iterable[str] = (), exclude: Iterable[str] = ()
) -> bool:
    """
    Decide whether a file takes part in a run.

    Hidden files are skipped unless named exactly in the include list.
    Extensions may be listed with or without the leading dot.

    Args:
        name: File name
        include: Extensions or names to keep; empty means no restriction
        exclude: Extensions or names to skip

    Returns:
        True if the file should be classified and moved
    """
    include = set(include)
    exclude = set(exclude)

    if is_hidden(name) and name not in include:
        return False

    keys = {name}
    ext = get_extension(name)
    if ext:
        keys.update({f".{ext}", ext})

    if exclude and keys & exclude:
        return False

    if include:
        return bool(keys & include) or INCLUDE_ALL in include

    return True


class OrganizerConfig(BaseModel):
    """Configuration of one organize run."""

    strategy: OrganizationStrategy = Field(default_factory=OrganizationStrategy)
    target_directory: Optional[Path] = Field(
        default=None,
        description="Where classified folders are created (default: the root)",
    )
    include: FrozenSet[str] = Field(default_factory=frozenset)
    exclude: FrozenSet[str] = Field(default_factory=frozenset)
    recursive: bool = False
    dry_run: bool = False
    journal_name: str = Field(default_factory=lambda: settings.journal_name)

    model_config = ConfigDict(frozen=True)


class OrganizationResult(BaseModel):
    """Result of an organize run."""

    root: Path
    target_directory: Path
    dry_run: bool = False
    actions: List[MoveAction] = Field(default_factory=list)
    created_folders: List[Path] = Field(default_factory=list)
    skipped: int = 0
    already_in_place: int = 0
    failures: List[ItemFailure] = Field(default_factory=list)

    @property
    def moved(self) -> int:
        return len(self.actions)

    @property
    def failed(self) -> int:
        return len(self.failures)


class FileOrganizer:
    """Organize the files of a directory according to a strategy."""

    def __init__(
        self,
        config: OrganizerConfig,
        journal: Optional[UndoJournal] = None,
        resolver: Optional[PathResolver] = None,
    ):
        """
        Initialize file organizer.

        Args:
            config: Run configuration
            journal: Undo journal; required unless config.dry_run is set
            resolver: Collision resolver (a fresh one by default)
        """
        if journal is None and not config.dry_run:
            raise ValueError("An undo journal is required for a live run")

        self.config = config
        self.strategy = config.strategy
        self.journal = journal
        self.resolver = resolver or PathResolver()

    def organize(
        self,
        root: Path,
        on_item: Optional[Callable[[Path], None]] = None,
    ) -> OrganizationResult:
        """
        Classify and move the files of a directory.

        Entries are moved as they are encountered, so later files see the
        folders created for earlier ones.

        Args:
            root: Directory to organize
            on_item: Called with each candidate path once it is handled

        Returns:
            Organization result with actions, created folders and failures

        Raises:
            OSError: If the root directory cannot be read
        """
        root = Path(root)
        ensure_readable_directory(root)

        target = self.config.target_directory or root
        if not target.is_absolute():
            target = root / target

        dry_run = self.config.dry_run
        logger.info(
            f"Starting organization of {root} ({'DRY RUN' if dry_run else 'LIVE'})"
        )

        result = OrganizationResult(root=root, target_directory=target, dry_run=dry_run)
        created: Set[Path] = set()

        if not dry_run:
            self.journal.start()

        for path in self._candidates(root, target):
            self._process_file(path, target, result, created)
            if on_item is not None:
                on_item(path)

        logger.info(
            f"Organization complete: {result.moved} moved, {result.skipped} skipped, "
            f"{result.failed} failed"
        )
        return result

    def _candidates(self, root: Path, target: Path) -> Iterator[Path]:
        journal_name = self.config.journal_name

        if not self.config.recursive:
            for path in sorted(root.iterdir()):
                if (path.is_dir() and not path.is_symlink()) or path.name == journal_name:
                    continue
                yield path
            return

        # A target nested inside the root holds the output of earlier runs
        separate_target = not _same_directory(target, root) and is_within(target, root)

        def prune(directory: Path) -> bool:
            return separate_target and is_within(directory, target)

        for path in walk_files(root, prune=prune):
            if path.name == journal_name:
                continue
            yield path

    def _process_file(
        self,
        path: Path,
        target: Path,
        result: OrganizationResult,
        created: Set[Path],
    ) -> None:
        """
        Classify and move a single file.

        Failures are recorded on the result; nothing is raised.
        """
        if not should_process(path.name, self.config.include, self.config.exclude):
            logger.debug(f"Skipping {path}: filtered")
            result.skipped += 1
            return

        try:
            entry = FileEntry.from_path(path)
        except OSError as e:
            logger.error(f"Cannot get file info for {path}: {e}")
            result.failures.append(
                ItemFailure(path=path, kind=FailureKind.STAT, message=str(e))
            )
            return

        classification = self.strategy.classify(entry)
        if classification.skip:
            logger.debug(f"Skipping {path}: no folder for this file")
            result.skipped += 1
            return

        folder = target / classification.folder_name

        # Numeric suffixes never add a separator, so the unresolved target decides
        planned = MoveAction(source_path=path, target_path=folder / path.name)
        if self.journal is not None and not self.journal.can_record(planned):
            logger.error(f"Cannot record a move of {path} for undo, leaving it in place")
            result.failures.append(
                ItemFailure(
                    path=path,
                    kind=FailureKind.JOURNAL,
                    message="path cannot be written to the undo journal",
                )
            )
            return

        if folder not in created and not folder.is_dir():
            if not self.config.dry_run:
                try:
                    folder.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.error(f"Cannot create folder {folder}: {e}")
                    result.failures.append(
                        ItemFailure(path=folder, kind=FailureKind.MKDIR, message=str(e))
                    )
                    return
            created.add(folder)
            result.created_folders.append(folder)
            logger.info(f"Created folder: {folder}")

        try:
            destination = self.resolver.resolve(folder / path.name, source=path)
        except CollisionSpaceExhausted as e:
            logger.error(f"Cannot find a free name for {path}: {e}")
            result.failures.append(
                ItemFailure(path=path, kind=FailureKind.COLLISION, message=str(e))
            )
            return

        if destination == path:
            logger.debug(f"Skipping {path}: already in place")
            result.already_in_place += 1
            return

        action = MoveAction(source_path=path, target_path=destination)

        if self.config.dry_run:
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

        try:
            self.journal.append(action)
        except OSError as e:
            logger.error(f"Moved {path} but could not record it for undo: {e}")
            result.failures.append(
                ItemFailure(path=destination, kind=FailureKind.JOURNAL, message=str(e))
            )


def _same_directory(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return a == b
