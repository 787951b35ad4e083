"""Execution contexts that run aliasing units where artifacts live."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from warnumbering.aliasing.models import AliasAction
from warnumbering.aliasing.sink import ProgressSink
from warnumbering.aliasing.unit import AliasUnit


class ExecutionContext(Protocol):
    """Protocol for dispatching one unit of work against one artifact."""

    def run(
        self, unit: AliasUnit, artifact: Path, sink: ProgressSink
    ) -> AliasAction | None:
        """Run the unit synchronously and return its outcome.

        Args:
            unit: Unit of work to execute.
            artifact: Artifact path on the context's filesystem.
            sink: Progress sink forwarded to the unit.
        """


class LocalExecutionContext:
    """Run units in the current process against the local filesystem."""

    def run(
        self, unit: AliasUnit, artifact: Path, sink: ProgressSink
    ) -> AliasAction | None:
        """Invoke the unit in process.

        Args:
            unit: Unit of work to execute.
            artifact: Local artifact path.
            sink: Progress sink forwarded to the unit.

        Returns:
            Unit outcome.
        """
        return unit.invoke(artifact, sink)
