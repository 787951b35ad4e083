"""Batch aliasing of build artifacts."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from warnumbering.aliasing.context import ExecutionContext, LocalExecutionContext
from warnumbering.aliasing.errors import AliasError, AliasInterruptedError
from warnumbering.aliasing.models import AliasAction, AliasRunResult, OutputMode
from warnumbering.aliasing.naming import format_build_id
from warnumbering.aliasing.sink import ProgressSink
from warnumbering.aliasing.unit import AliasUnit

_LOGGER = logging.getLogger(__name__)


class CancellationToken:
    """Host interruption signal shared with a running batch."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Signal interruption."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Return whether interruption was signalled."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise when interruption was signalled.

        Raises:
            AliasInterruptedError: If the token is cancelled.
        """
        if self._event.is_set():
            raise AliasInterruptedError("Aliasing interrupted by host.")


def alias_artifacts(  # noqa: PLR0913
    artifacts: Iterable[Path],
    build_id: int | str,
    mode: OutputMode,
    sink: ProgressSink,
    *,
    context: ExecutionContext | None = None,
    cancellation: CancellationToken | None = None,
) -> AliasRunResult:
    """Alias every artifact in order, aborting on the first failure.

    Artifacts whose name already carries the alias marker are skipped without
    a progress line. Aliases created before a failure are kept.
    Aliasing errors carry the aliases created so far in ``data["actions"]``
    and the guarded paths in ``data["skipped"]``.

    Args:
        artifacts: Artifact paths in processing order.
        build_id: Build identifier embedded in alias names.
        mode: Hard link or rename, applied to every artifact.
        sink: Progress sink receiving one line per processed artifact.
        context: Execution context running each unit; local by default.
        cancellation: Optional host interruption signal.

    Returns:
        Successful run result listing created aliases and skipped paths.

    Raises:
        AliasCreationError: If an alias cannot be created.
        AliasInterruptedError: If cancellation is signalled.
        ValueError: If the build identifier is invalid.
    """
    unit = AliasUnit(build_id=format_build_id(build_id), mode=mode)
    executor = context or LocalExecutionContext()
    actions: list[AliasAction] = []
    skipped: list[Path] = []
    try:
        for artifact in artifacts:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            action = executor.run(unit, Path(artifact), sink)
            if action is None:
                skipped.append(Path(artifact))
            else:
                actions.append(action)
    except AliasError as exc:
        exc.data["actions"] = tuple(actions)
        exc.data["skipped"] = tuple(skipped)
        raise
    _LOGGER.debug(
        "Aliased %d artifact(s) for build %s (%d skipped)",
        len(actions),
        unit.build_id,
        len(skipped),
    )
    return AliasRunResult(success=True, actions=tuple(actions), skipped=tuple(skipped))
