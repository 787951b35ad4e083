"""Per-artifact aliasing unit of work.

A unit captures only immutable inputs (build id and output mode) so it can be
shipped to whichever execution context owns the artifact's storage. It runs
synchronously and to completion.
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from pathlib import Path

from warnumbering.aliasing.errors import AliasCreationError
from warnumbering.aliasing.models import AliasAction, OutputMode
from warnumbering.aliasing.naming import (
    derive_alias_path,
    has_alias_marker,
    printable_name,
)
from warnumbering.aliasing.sink import ProgressSink


def progress_line(alias: Path, source: Path) -> str:
    """Return the progress line announcing one alias."""
    alias_name = printable_name(alias.name)
    return f"Create link {alias_name} to {printable_name(source.name)}"


def _creation_error(
    exc: OSError, *, source: Path, alias: Path, mode: OutputMode
) -> AliasCreationError:
    """Wrap a filesystem failure for one artifact.

    Args:
        exc: Underlying filesystem error.
        source: Artifact path.
        alias: Target alias path.
        mode: Output mode that failed.

    Returns:
        Creation error carrying errno and paths as diagnostics.
    """
    if exc.errno == errno.EEXIST:
        reason = "alias already exists"
    elif exc.errno == errno.EXDEV:
        reason = "hard links cannot cross devices"
    else:
        reason = exc.strerror or str(exc)
    return AliasCreationError(
        f"Cannot create {mode.value} {printable_name(alias.name)} "
        f"for {printable_name(source.name)}: {reason}",
        data={
            "source": str(source),
            "alias": str(alias),
            "mode": mode.value,
            "errno": exc.errno,
        },
    )


@dataclass(frozen=True)
class AliasUnit:
    """Guard-check, derive, report and link-or-rename for one artifact."""

    build_id: str
    mode: OutputMode

    def invoke(self, artifact: Path, sink: ProgressSink) -> AliasAction | None:
        """Alias one artifact.

        Args:
            artifact: Existing artifact file.
            sink: Progress sink for the action line.

        Returns:
            Materialized action, or None when the marker guard skipped it.

        Raises:
            AliasCreationError: If the link or rename fails.
        """
        if has_alias_marker(artifact):
            return None

        alias = derive_alias_path(artifact, self.build_id)
        sink.println(progress_line(alias, artifact))
        try:
            if self.mode == OutputMode.RENAME:
                os.replace(artifact, alias)
            else:
                os.link(artifact, alias)
        except OSError as exc:
            raise _creation_error(
                exc, source=artifact, alias=alias, mode=self.mode
            ) from exc
        return AliasAction(source=artifact, alias=alias, mode=self.mode)
