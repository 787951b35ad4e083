"""Default artifact collaborator: glob enumeration under a build workspace."""

from __future__ import annotations

import logging
from pathlib import Path

from warnumbering.aliasing.errors import EnumerationError

DEFAULT_PATTERN = "**/*.war"

_LOGGER = logging.getLogger(__name__)


def list_artifacts(workspace: Path, pattern: str = DEFAULT_PATTERN) -> tuple[Path, ...]:
    """Resolve a workspace-relative glob into artifact files.

    Results are sorted so progress output is stable across runs.

    Args:
        workspace: Build workspace root.
        pattern: Relative glob pattern; ``**`` matches any directory depth.

    Returns:
        Matching regular files.

    Raises:
        EnumerationError: If the workspace is unreadable or the pattern invalid.
    """
    if not workspace.is_dir():
        raise EnumerationError(
            f"Workspace is not a directory: {workspace}",
            data={"workspace": str(workspace), "pattern": pattern},
        )
    try:
        matches = sorted(path for path in workspace.glob(pattern) if path.is_file())
    except (OSError, ValueError, NotImplementedError) as exc:
        raise EnumerationError(
            f"Cannot list {pattern!r} under {workspace}: {exc}",
            data={"workspace": str(workspace), "pattern": pattern},
        ) from exc
    _LOGGER.debug("Found %d artifact(s) matching %s", len(matches), pattern)
    return tuple(matches)
