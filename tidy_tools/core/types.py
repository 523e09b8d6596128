"""
Type definitions shared by the organizer, undo engine and analyzers.
"""

import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClassificationMode(str, Enum):
    """Strategy used to derive a destination folder for a file."""

    EXTENSION = "extension"
    CATEGORY = "category"
    DATE = "date"


class DateGranularity(str, Enum):
    """Bucket size for date classification."""

    YEAR = "year"  # 2024
    MONTH = "month"  # 2024-03
    DAY = "day"  # 2024-03-15
    WEEK = "week"  # Week_11


class FailureKind(str, Enum):
    """Kind of per-item failure."""

    STAT = "stat"
    MKDIR = "mkdir"
    MOVE = "move"
    COLLISION = "collision"
    HASH = "hash"
    DELETE = "delete"
    RESTORE = "restore"
    RMDIR = "rmdir"
    JOURNAL = "journal"


def get_extension(name: str, full: bool = False) -> str:
    """
    Extract the extension of a file name, without the leading dot.

    Args:
        name: File name (not a path)
        full: Use the last two dot-delimited segments (tar.gz) when present

    Returns:
        Extension, or "" if the name has no dot
    """
    if full:
        parts = name.split(".")
        if len(parts) > 2:
            return ".".join(parts[-2:])

    index = name.rfind(".")
    if index < 0:
        return ""
    return name[index + 1 :]


def is_hidden(name: str) -> bool:
    """Hidden entries are those whose name begins with a dot."""
    return name.startswith(".")


class FileEntry(BaseModel):
    """A file seen during a run. Never persisted."""

    path: Path = Field(description="File path")
    size: int = Field(default=0, description="Size in bytes")
    modified_at: datetime = Field(description="Modification time")
    is_hidden: bool = Field(default=False, description="Name starts with a dot")

    @classmethod
    def from_path(cls, path: Path, stat_result: Optional[os.stat_result] = None) -> "FileEntry":
        """
        Build an entry from filesystem metadata.

        Args:
            path: File path
            stat_result: Result of a previous stat call, to avoid a second one

        Raises:
            OSError: If the file cannot be stat'ed
        """
        path = Path(path)
        st = stat_result if stat_result is not None else path.stat()
        return cls(
            path=path,
            size=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime),
            is_hidden=is_hidden(path.name),
        )

    @property
    def name(self) -> str:
        return self.path.name

    def extension(self, full: bool = False) -> str:
        return get_extension(self.path.name, full)


class ClassificationResult(BaseModel):
    """Destination folder for a file. An empty name means skip."""

    folder_name: str = ""

    @property
    def skip(self) -> bool:
        return not self.folder_name


class MoveAction(BaseModel):
    """A single committed (or, in preview, planned) move."""

    source_path: Path = Field(description="Where the file was")
    target_path: Path = Field(description="Where the file went")


class ItemFailure(BaseModel):
    """A per-item error that did not stop the run."""

    path: Path = Field(description="File or directory the failure relates to")
    kind: FailureKind = Field(description="What was being attempted")
    message: str = Field(default="", description="Error detail")

    model_config = ConfigDict(use_enum_values=True)

    def __str__(self) -> str:
        return f"{self.path}: {self.kind} failed: {self.message}"


class DigestGroup(BaseModel):
    """Files sharing one content digest, in discovery order."""

    digest: str
    members: List[FileEntry] = Field(default_factory=list)

    @property
    def kept(self) -> FileEntry:
        return self.members[0]

    @property
    def duplicates(self) -> List[FileEntry]:
        return self.members[1:]

    @property
    def wasted_bytes(self) -> int:
        return sum(entry.size for entry in self.duplicates)
