"""
Pytest configuration and fixtures for tidy_tools tests.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest
from click.testing import CliRunner

MakeFile = Callable[..., Path]


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Directory to organize, inside pytest's tmp_path."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def make_file(temp_dir: Path) -> MakeFile:
    """
    Create a file below temp_dir.

    Usage: make_file("sub/photo.jpg", "content", mtime=datetime(2024, 3, 15))
    """

    def _make(
        relative: str, content: str = "data", mtime: Optional[datetime] = None
    ) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        if mtime is not None:
            timestamp = mtime.timestamp()
            os.utime(path, (timestamp, timestamp))
        return path

    return _make


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()
