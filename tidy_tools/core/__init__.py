"""Core types for Tidy Tools."""

from .types import (
    ClassificationMode,
    ClassificationResult,
    DateGranularity,
    DigestGroup,
    FailureKind,
    FileEntry,
    ItemFailure,
    MoveAction,
    get_extension,
    is_hidden,
)

__all__ = [
    "ClassificationMode",
    "ClassificationResult",
    "DateGranularity",
    "DigestGroup",
    "FailureKind",
    "FileEntry",
    "ItemFailure",
    "MoveAction",
    "get_extension",
    "is_hidden",
]
