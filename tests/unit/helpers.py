"""Test-only helpers for unit tests. Not part of the public API."""

from __future__ import annotations

from pathlib import Path


def write_artifact(path: Path, content: str = "war-bytes") -> Path:
    """Create an artifact file (and parents) with utf-8 content.

    Args:
        path: Artifact path to create.
        content: File content.

    Returns:
        The created path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def names_in(directory: Path) -> set[str]:
    """Return the file names directly under a directory."""
    return {entry.name for entry in directory.iterdir()}
