"""Version information for Tidy Tools."""

import subprocess
from pathlib import Path
from typing import Optional

__version__ = "0.3.0"


def get_git_hash() -> Optional[str]:
    """
    Get the short git hash of the current checkout.

    Returns:
        7-character hash, or None if git is unavailable or this is not a repo
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short=7", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
            cwd=Path(__file__).parent,
        )
        return result.stdout.strip() or None
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return None


def get_version_string() -> str:
    """Get the version string, including the git hash when available."""
    git_hash = get_git_hash()
    if git_hash:
        return f"{__version__} (git:{git_hash})"
    return __version__
