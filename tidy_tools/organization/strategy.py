"""
Organization strategies for file management.

Decides which folder a file belongs in: by extension, by category, or by
modification date.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..core.types import (
    ClassificationMode,
    ClassificationResult,
    DateGranularity,
    FileEntry,
    get_extension,
)

SKIP = ClassificationResult()


def get_date_folder(modified_at: datetime, granularity: DateGranularity) -> str:
    """
    Get the folder name for a modification time.

    Week folders use ISO-8601 week numbers, so the first days of January may
    land in week 52 or 53.
    """
    granularity = DateGranularity(granularity)
    if granularity == DateGranularity.YEAR:
        return modified_at.strftime("%Y")
    elif granularity == DateGranularity.MONTH:
        return modified_at.strftime("%Y-%m")
    elif granularity == DateGranularity.DAY:
        return modified_at.strftime("%Y-%m-%d")
    elif granularity == DateGranularity.WEEK:
        return f"Week_{modified_at.isocalendar()[1]:02d}"

    # All enum cases covered
    return "Unknown"  # type: ignore[unreachable]


class OrganizationStrategy(BaseModel):
    """Strategy for classifying files into folders."""

    mode: ClassificationMode = Field(
        default=ClassificationMode.EXTENSION,
        description="Classification mode",
    )

    date_granularity: DateGranularity = Field(
        default=DateGranularity.MONTH,
        description="Bucket size used in date mode",
    )

    full_extension: bool = Field(
        default=False,
        description="Use the last two extension segments (tar.gz)",
    )

    case_sensitive: bool = Field(
        default=False,
        description="Keep extension case (JPG and jpg go to different folders)",
    )

    quiet: bool = Field(
        default=False,
        description="Do not prefix extension folder names",
    )

    no_ext_folder: Optional[str] = Field(
        default=None,
        description="Catch-all folder for files without an extension",
    )

    folder_prefix: str = Field(
        default_factory=lambda: settings.folder_prefix,
        description="Prefix for extension folders",
    )

    category_table: Dict[str, str] = Field(
        default_factory=dict,
        description="Lowercase extension -> category name",
    )

    model_config = ConfigDict(frozen=True)

    def classify(self, entry: FileEntry) -> ClassificationResult:
        """
        Get the destination folder for a file.

        Args:
            entry: File to classify

        Returns:
            Result with the folder name, or an empty result to skip the file
        """
        if self.mode == ClassificationMode.DATE:
            return ClassificationResult(
                folder_name=get_date_folder(entry.modified_at, self.date_granularity)
            )

        ext = get_extension(entry.name, self.full_extension)
        if not ext:
            if self.no_ext_folder:
                return ClassificationResult(folder_name=self.no_ext_folder)
            return SKIP

        if not self.case_sensitive:
            ext = ext.lower()

        if self.mode == ClassificationMode.CATEGORY:
            category = self.category_table.get(ext.lower())
            return ClassificationResult(folder_name=category or ext)

        if self.quiet:
            return ClassificationResult(folder_name=ext)
        return ClassificationResult(folder_name=f"{self.folder_prefix}{ext}")


def classify(entry: FileEntry, strategy: OrganizationStrategy) -> ClassificationResult:
    """Classify a file with the given strategy."""
    return strategy.classify(entry)
