"""
Collision-free destination paths.

A taken destination gets a numeric suffix: "report.pdf" becomes
"report (1).pdf", then "report (2).pdf", and so on.
"""

import logging
from pathlib import Path
from typing import Optional, Set

from ..config import settings

logger = logging.getLogger(__name__)


class CollisionSpaceExhausted(ValueError):
    """Raised when every probed suffix for a destination is taken."""

    def __init__(self, path: Path, attempts: int):
        super().__init__(f"Too many naming conflicts for {path} ({attempts} tried)")
        self.path = path
        self.attempts = attempts


class PathResolver:
    """Resolve destination paths that do not collide with existing files."""

    def __init__(self, max_attempts: Optional[int] = None):
        """
        Initialize resolver.

        Args:
            max_attempts: Highest suffix to probe (default from settings)
        """
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.max_collision_attempts
        )
        self._reserved: Set[Path] = set()

    def reserve(self, path: Path) -> None:
        """Mark a path as taken without creating it (used by preview runs)."""
        self._reserved.add(Path(path))

    def is_taken(self, path: Path) -> bool:
        return path in self._reserved or path.exists() or path.is_symlink()

    def resolve(self, desired: Path, source: Optional[Path] = None) -> Path:
        """
        Get a destination path that is free at call time.

        Args:
            desired: Preferred destination
            source: Current location of the file being moved; a destination
                equal to it is not a collision

        Returns:
            desired, or the first free "<stem> (<n>)<suffix>" sibling

        Raises:
            CollisionSpaceExhausted: If no free suffix is found within max_attempts
        """
        desired = Path(desired)
        if source is not None and _same_path(desired, Path(source)):
            return Path(source)

        if not self.is_taken(desired):
            return desired

        stem = desired.stem
        suffix = desired.suffix
        parent = desired.parent

        for counter in range(1, self.max_attempts + 1):
            candidate = parent / f"{stem} ({counter}){suffix}"
            if not self.is_taken(candidate):
                logger.debug(f"Resolved collision {desired} -> {candidate}")
                return candidate

        raise CollisionSpaceExhausted(desired, self.max_attempts)


def _same_path(a: Path, b: Path) -> bool:
    if a == b:
        return True
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return False


def avoid_collision(path: Path, max_attempts: Optional[int] = None) -> Path:
    """Resolve a single destination path against the filesystem."""
    return PathResolver(max_attempts).resolve(path)
