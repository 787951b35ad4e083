"""Build step adapter: enumerate workspace artifacts and alias them.

The step mirrors a host build callback. Every internal failure is caught,
rendered to the progress sink and the diagnostic log, and converted into the
boolean the host sees. Under the default policy that boolean is always
``True``: aliasing problems never fail the build.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

from warnumbering.aliasing import (
    AliasAction,
    AliasCreationError,
    AliasError,
    AliasErrorCode,
    AliasRunResult,
    CancellationToken,
    EnumerationError,
    ExecutionContext,
    ProgressSink,
    alias_artifacts,
    format_build_id,
)
from warnumbering.config import WarNumberingConfig
from warnumbering.workspace import list_artifacts

_LOGGER = logging.getLogger(__name__)


class FailurePolicy(StrEnum):
    """What the step reports to the host after an internal error."""

    ALWAYS_SUCCEED = "always_succeed"
    REPORT_FAILURE = "report_failure"


def error_code_for(exc: Exception) -> AliasErrorCode:
    """Map any failure to a stable aliasing error code."""
    if isinstance(exc, AliasError):
        return exc.code
    if isinstance(exc, OSError):
        return AliasErrorCode.IO_FAILED
    return AliasErrorCode.INTERNAL


def format_io_error(exc: Exception) -> str:
    """Render an I/O failure summary for the progress stream.

    Args:
        exc: Enumeration, creation or transport failure.

    Returns:
        One-line summary.
    """
    return f"ERROR: [{error_code_for(exc).value}] {exc}"


class WarNumberingStep:
    """Alias every workspace artifact matching the configured pattern."""

    def __init__(self, config: WarNumberingConfig | None = None) -> None:
        """Store step configuration.

        Args:
            config: Step config; defaults apply when omitted.
        """
        self._config = config or WarNumberingConfig()

    @property
    def config(self) -> WarNumberingConfig:
        """Return the step configuration."""
        return self._config

    @property
    def failure_policy(self) -> FailurePolicy:
        """Return the policy derived from ``fail_on_error``."""
        if self._config.fail_on_error:
            return FailurePolicy.REPORT_FAILURE
        return FailurePolicy.ALWAYS_SUCCEED

    def perform(
        self,
        workspace: Path,
        build_number: int,
        sink: ProgressSink,
        *,
        context: ExecutionContext | None = None,
        cancellation: CancellationToken | None = None,
    ) -> AliasRunResult:
        """Run the step for one build.

        Args:
            workspace: Build workspace root.
            build_number: Build identifier.
            sink: Build-progress stream.
            context: Execution context for per-artifact units.
            cancellation: Host interruption signal.

        Returns:
            Run result whose ``success`` is the boolean reported to the host.

        Raises:
            ValueError: If ``build_number`` is negative.
        """
        build_id = format_build_id(build_number)
        try:
            artifacts = list_artifacts(workspace, self._config.pattern)
            return alias_artifacts(
                artifacts,
                build_id,
                self._config.output_mode,
                sink,
                context=context,
                cancellation=cancellation,
            )
        except (EnumerationError, AliasCreationError, OSError) as exc:
            self._report(sink, format_io_error(exc))
            _LOGGER.error("Aliasing build %s failed: %s", build_id, exc, exc_info=exc)
            return self._aborted(exc)
        except AliasError as exc:
            _LOGGER.error("Aliasing build %s stopped: %s", build_id, exc, exc_info=exc)
            return self._aborted(exc)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.error("Aliasing build %s crashed: %s", build_id, exc, exc_info=exc)
            return self._aborted(exc)

    def _report(self, sink: ProgressSink, line: str) -> None:
        """Write an error summary, logging when the sink itself is broken.

        Args:
            sink: Build-progress stream.
            line: Summary line.
        """
        try:
            sink.println(line)
        except (OSError, UnicodeError) as exc:
            _LOGGER.warning("Progress sink rejected error summary: %s", exc)

    def _aborted(self, exc: Exception) -> AliasRunResult:
        """Build the result reported after an internal error.

        Aliases created before an ``AliasError`` are listed in ``actions``. For
        other failures (transport or sink errors) ``actions`` and ``skipped``
        are empty even though earlier aliases remain on disk.

        Args:
            exc: Error that aborted processing.

        Returns:
            Result carrying the error code and the policy-selected success flag.
        """
        actions: tuple[AliasAction, ...] = ()
        skipped: tuple[Path, ...] = ()
        if isinstance(exc, AliasError):
            actions = tuple(exc.data.get("actions", ()))  # type: ignore[arg-type]
            skipped = tuple(exc.data.get("skipped", ()))  # type: ignore[arg-type]
        return AliasRunResult(
            success=self.failure_policy == FailurePolicy.ALWAYS_SUCCEED,
            actions=actions,
            skipped=skipped,
            error_code=error_code_for(exc),
            error_message=str(exc),
        )
