"""
Undo journal for organization operations.

Every committed move is appended to a journal so the most recent run can be
reversed. The on-disk format is one "<new path>|<old path>" record per line.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from ..config import settings
from ..core.types import FailureKind, ItemFailure, MoveAction

logger = logging.getLogger(__name__)

SEPARATOR = "|"


class NothingToUndoError(FileNotFoundError):
    """Raised when undo is requested but no journal exists."""


class UndoJournal(ABC):
    """Append-only record of the moves made by one run."""

    @abstractmethod
    def start(self) -> None:
        """Begin a new run, discarding any previous records."""

    @abstractmethod
    def append(self, action: MoveAction) -> None:
        """Record a committed move."""

    @abstractmethod
    def read_all(self) -> List[MoveAction]:
        """Return all records in the order they were written."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the journal."""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a journal from a previous run is present."""

    def can_record(self, action: MoveAction) -> bool:
        """Return True if the move can be written and read back intact."""
        return True


class FileJournal(UndoJournal):
    """Journal stored as a line-oriented text file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def for_directory(cls, directory: Path, name: Optional[str] = None) -> "FileJournal":
        """Journal kept inside the directory being organized."""
        return cls(Path(directory) / (name or settings.journal_name))

    def start(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")
        logger.debug(f"Started undo journal {self.path}")

    def append(self, action: MoveAction) -> None:
        # One open per record; completed moves are on disk before the next one
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(f"{action.target_path}{SEPARATOR}{action.source_path}\n")

    def read_all(self) -> List[MoveAction]:
        """
        Read the journal.

        Raises:
            NothingToUndoError: If the journal file does not exist
        """
        if not self.path.exists():
            raise NothingToUndoError(f"No undo journal found at {self.path}")

        actions: List[MoveAction] = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                line = line.rstrip("\n")
                if not line:
                    continue
                parts = line.split(SEPARATOR)
                if len(parts) != 2:
                    logger.warning(
                        f"Ignoring malformed journal line {line_number} in {self.path}"
                    )
                    continue
                actions.append(
                    MoveAction(source_path=Path(parts[1]), target_path=Path(parts[0]))
                )
        return actions

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug(f"Removed undo journal {self.path}")

    def exists(self) -> bool:
        return self.path.exists()

    def can_record(self, action: MoveAction) -> bool:
        """Paths containing the separator or a line break cannot be recorded."""
        for path in (action.source_path, action.target_path):
            text = str(path)
            if SEPARATOR in text or "\n" in text or "\r" in text:
                return False
        return True


class MemoryJournal(UndoJournal):
    """Journal kept in memory."""

    def __init__(self) -> None:
        self.actions: Optional[List[MoveAction]] = None

    def start(self) -> None:
        self.actions = []

    def append(self, action: MoveAction) -> None:
        if self.actions is None:
            self.actions = []
        self.actions.append(action)

    def read_all(self) -> List[MoveAction]:
        if self.actions is None:
            raise NothingToUndoError("No undo journal recorded")
        return list(self.actions)

    def clear(self) -> None:
        self.actions = None

    def exists(self) -> bool:
        return self.actions is not None


class UndoResult(BaseModel):
    """Result of replaying an undo journal."""

    total: int = 0
    restored: int = 0
    restored_actions: List[MoveAction] = Field(default_factory=list)
    failures: List[ItemFailure] = Field(default_factory=list)
    journal_cleared: bool = False

    @property
    def failed(self) -> int:
        return len(self.failures)


def undo(
    journal: UndoJournal,
    on_item: Optional[Callable[[MoveAction], None]] = None,
) -> UndoResult:
    """
    Reverse the moves recorded in a journal.

    Records are replayed in the order they were written; each one already
    names the move back (new path -> old path). The journal is removed only
    if at least one file was restored, so a fully failed undo can be retried.

    Args:
        journal: Journal of the most recent run
        on_item: Called after each record is processed

    Returns:
        Undo result with the restored count and per-file failures

    Raises:
        NothingToUndoError: If there is no journal
    """
    actions = journal.read_all()
    result = UndoResult(total=len(actions))

    if not actions:
        logger.info("Undo journal is empty, nothing to restore")
        return result

    logger.info(f"Undoing {len(actions)} file moves")

    for action in actions:
        try:
            if not action.target_path.exists() and not action.target_path.is_symlink():
                raise FileNotFoundError(f"{action.target_path} no longer exists")
            if action.source_path.exists() or action.source_path.is_symlink():
                raise FileExistsError(f"{action.source_path} already exists")
            action.source_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(action.target_path), str(action.source_path))
            logger.info(f"Restored {action.target_path} → {action.source_path}")
            result.restored += 1
            result.restored_actions.append(action)
        except OSError as e:
            logger.error(
                f"Error moving {action.target_path} back to {action.source_path}: {e}"
            )
            result.failures.append(
                ItemFailure(
                    path=action.target_path, kind=FailureKind.RESTORE, message=str(e)
                )
            )

        if on_item is not None:
            on_item(action)

    if result.restored > 0:
        journal.clear()
        result.journal_cleared = True

    logger.info(f"Undo complete: {result.restored}/{result.total} files restored")
    return result
