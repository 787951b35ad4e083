"""Alias name derivation for build artifacts."""

from __future__ import annotations

import os
from pathlib import Path

ALIAS_MARKER = "##"


def has_alias_marker(artifact: Path) -> bool:
    """Return whether the artifact base name already carries the alias marker."""
    return ALIAS_MARKER in artifact.name


def printable_name(name: str) -> str:
    """Return a file name safe to print on a UTF-8 stream.

    Undecodable bytes in POSIX names arrive as surrogate escapes; they are
    shown as U+FFFD.
    """
    return os.fsencode(name).decode("utf-8", errors="replace")


def split_name(name: str) -> tuple[str, str]:
    """Split a file name into stem and extension at the last dot.

    A name without a dot has an empty extension. A leading dot is not special:
    ``.war`` splits into an empty stem and ``war``.

    Args:
        name: Final path segment.

    Returns:
        ``(stem, extension)`` with the dot removed.
    """
    stem, dot, extension = name.rpartition(".")
    if not dot:
        return name, ""
    return stem, extension


def format_build_id(build_id: int | str) -> str:
    """Render a build identifier as its minimal decimal string.

    Args:
        build_id: Non-negative integer, or its decimal string.

    Returns:
        Decimal string without sign or leading zeros.

    Raises:
        ValueError: If the identifier is negative or not a minimal decimal.
    """
    if isinstance(build_id, bool):
        raise ValueError(f"Build identifier must be an integer: {build_id!r}")
    if isinstance(build_id, int):
        if build_id < 0:
            raise ValueError(f"Build identifier must be non-negative: {build_id}")
        return str(build_id)
    text = str(build_id)
    if not text.isascii() or not text.isdigit() or str(int(text)) != text:
        raise ValueError(f"Build identifier is not a minimal decimal: {text!r}")
    return text


def derive_alias_path(artifact: Path, build_id: int | str) -> Path:
    """Derive the build-numbered alias path for an artifact.

    ``dir/stem.ext`` becomes ``dir/stem##<build_id>.ext``. With no extension no
    trailing dot is appended. No filesystem access is performed.

    Args:
        artifact: Artifact path with a non-empty final segment.
        build_id: Build identifier.

    Returns:
        Alias path in the artifact's directory.

    Raises:
        ValueError: If the path has no final segment or the build id is invalid.
    """
    name = artifact.name
    if not name:
        raise ValueError(f"Artifact path has no file name: {str(artifact)!r}")
    stem, extension = split_name(name)
    alias_name = f"{stem}{ALIAS_MARKER}{format_build_id(build_id)}"
    if extension:
        alias_name = f"{alias_name}.{extension}"
    return artifact.with_name(alias_name)
