"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary build workspace root. Artifacts are written under it."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace
