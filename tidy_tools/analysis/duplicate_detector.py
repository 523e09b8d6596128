"""
Duplicate detection system.

Identifies files with identical content by hashing the full byte stream of
every file, and deletes all but the first copy on explicit confirmation.
"""

import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, Field

from ..config import settings
from ..core.types import DigestGroup, FailureKind, FileEntry, ItemFailure, is_hidden
from ..shared.file_utils import compute_checksum, ensure_readable_directory, walk_files

logger = logging.getLogger(__name__)


class DuplicateScanResult(BaseModel):
    """Result of a duplicate scan."""

    root: Path
    files_scanned: int = 0
    total_bytes: int = 0
    groups: List[DigestGroup] = Field(default_factory=list)
    failures: List[ItemFailure] = Field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """Files that would be deleted (every member but the first)."""
        return sum(len(group.duplicates) for group in self.groups)

    @property
    def wasted_bytes(self) -> int:
        return sum(group.wasted_bytes for group in self.groups)


class DeletionResult(BaseModel):
    """Result of deleting duplicates."""

    confirmed: bool = False
    deleted: List[Path] = Field(default_factory=list)
    reclaimed_bytes: int = 0
    failures: List[ItemFailure] = Field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


class DuplicateDetector:
    """Detect duplicate files below a directory."""

    def __init__(
        self,
        root: Path,
        algorithm: Optional[str] = None,
        skip_names: Optional[Iterable[str]] = None,
    ):
        """
        Initialize duplicate detector.

        Args:
            root: Directory to scan recursively
            algorithm: Digest algorithm (default from settings, md5)
            skip_names: File names never considered (default: the generated
                reports and the undo journal)
        """
        self.root = Path(root)
        self.algorithm = algorithm or settings.hash_algorithm
        if skip_names is None:
            skip_names = (
                settings.report_name,
                settings.duplicates_report_name,
                settings.journal_name,
            )
        self.skip_names: Set[str] = set(skip_names)

    def collect_files(self) -> List[Tuple[Path, os.stat_result]]:
        """
        List the files to hash, in discovery order.

        Hidden files, generated artifacts and symbolic links are left out, and
        a path to an already-seen file (a hard link) is listed only once.

        Raises:
            OSError: If the root directory cannot be read
        """
        ensure_readable_directory(self.root)
        files: List[Tuple[Path, os.stat_result]] = []
        seen: Set[Tuple[int, int]] = set()

        for path in walk_files(self.root):
            name = path.name
            if is_hidden(name) or name in self.skip_names:
                continue
            try:
                st = path.lstat()
            except OSError as e:
                logger.warning(f"Cannot stat {path}: {e}")
                continue
            if path.is_symlink():
                logger.debug(f"Skipping symbolic link {path}")
                continue

            identity = (st.st_dev, st.st_ino)
            if identity in seen:
                logger.debug(f"Skipping {path}: same file as an earlier path")
                continue
            seen.add(identity)
            files.append((path, st))

        return files

    def detect(
        self,
        on_item: Optional[Callable[[Path], None]] = None,
        files: Optional[List[Tuple[Path, os.stat_result]]] = None,
    ) -> DuplicateScanResult:
        """
        Find groups of files with identical content.

        The walk is completed before any file is hashed. Each group keeps its
        members in discovery order; groups are ordered by file size, largest
        first.

        Args:
            on_item: Called with each file once it is hashed
            files: Output of a previous collect_files() call

        Returns:
            Scan result with duplicate groups and hashing failures

        Raises:
            OSError: If the root directory cannot be read
        """
        logger.info(f"Scanning {self.root} for duplicate files")

        if files is None:
            files = self.collect_files()
        result = DuplicateScanResult(root=self.root)
        by_digest: Dict[str, List[FileEntry]] = OrderedDict()

        for path, st in files:
            result.files_scanned += 1
            result.total_bytes += st.st_size
            try:
                digest = compute_checksum(path, self.algorithm)
            except OSError as e:
                logger.error(f"Error hashing {path}: {e}")
                result.failures.append(
                    ItemFailure(path=path, kind=FailureKind.HASH, message=str(e))
                )
            else:
                by_digest.setdefault(digest, []).append(
                    FileEntry.from_path(path, stat_result=st)
                )

            if on_item is not None:
                on_item(path)

        groups = [
            DigestGroup(digest=digest, members=members)
            for digest, members in by_digest.items()
            if len(members) > 1
        ]
        groups.sort(key=lambda group: group.kept.size, reverse=True)
        result.groups = groups

        logger.info(
            f"Found {len(groups)} duplicate groups, "
            f"{result.duplicate_count} duplicate files"
        )
        return result


def find_duplicates(root: Path, algorithm: Optional[str] = None) -> List[DigestGroup]:
    """Return the duplicate groups below a directory."""
    return DuplicateDetector(root, algorithm=algorithm).detect().groups


def delete_duplicates(
    groups: Iterable[DigestGroup],
    confirm: Callable[[str], bool],
    on_item: Optional[Callable[[Path], None]] = None,
) -> DeletionResult:
    """
    Delete every member of every group except the first.

    Args:
        groups: Duplicate groups from a scan
        confirm: Asked once with a description of the deletion; nothing is
            deleted unless it returns True
        on_item: Called with each deleted (or failed) path

    Returns:
        Deletion result with deleted paths, reclaimed bytes and failures
    """
    groups = list(groups)
    to_delete = [entry for group in groups for entry in group.duplicates]
    result = DeletionResult()

    if not to_delete:
        return result

    message = (
        f"This will delete {len(to_delete)} duplicate files "
        f"(keeping the first instance of each)."
    )
    if not confirm(message):
        logger.info("Deletion cancelled")
        return result

    result.confirmed = True

    for entry in to_delete:
        try:
            entry.path.unlink()
        except OSError as e:
            logger.error(f"Error deleting {entry.path}: {e}")
            result.failures.append(
                ItemFailure(path=entry.path, kind=FailureKind.DELETE, message=str(e))
            )
        else:
            logger.info(f"Deleted: {entry.path}")
            result.deleted.append(entry.path)
            result.reclaimed_bytes += entry.size

        if on_item is not None:
            on_item(entry.path)

    return result
