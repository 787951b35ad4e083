"""Unit tests for the build step failure policy."""

from __future__ import annotations

import errno
import logging
from pathlib import Path

import pytest

from warnumbering.aliasing import (
    AliasAction,
    AliasErrorCode,
    AliasUnit,
    CancellationToken,
    EnumerationError,
    ListSink,
    OutputMode,
    ProgressSink,
)
from warnumbering.build_step import FailurePolicy, WarNumberingStep, format_io_error
from warnumbering.config import WarNumberingConfig

from tests.unit.helpers import names_in, write_artifact


@pytest.mark.unit
def test_perform_aliases_every_matching_artifact(workspace_root: Path) -> None:
    """Step should enumerate the workspace and alias each WAR."""
    # Arrange - two modules and one already aliased artifact
    write_artifact(workspace_root / "api" / "api.war")
    write_artifact(workspace_root / "web" / "web.war")
    write_artifact(workspace_root / "web" / "web##6.war")
    sink = ListSink()

    # Act
    result = WarNumberingStep().perform(workspace_root, 7, sink)

    # Assert - hard links beside each source, marker file untouched
    assert result.success is True
    assert result.aborted is False
    assert names_in(workspace_root / "api") == {"api.war", "api##7.war"}
    assert names_in(workspace_root / "web") == {"web.war", "web##7.war", "web##6.war"}
    assert sink.lines == [
        "Create link api##7.war to api.war",
        "Create link web##7.war to web.war",
    ]
    assert result.skipped == (workspace_root / "web" / "web##6.war",)


@pytest.mark.unit
def test_perform_uses_configured_rename_mode(workspace_root: Path) -> None:
    """Configured rename mode should consume the originals."""
    write_artifact(workspace_root / "app.war")
    step = WarNumberingStep(WarNumberingConfig(output_mode=OutputMode.RENAME))

    step.perform(workspace_root, 12, ListSink())

    assert names_in(workspace_root) == {"app##12.war"}


@pytest.mark.unit
def test_perform_reports_success_after_creation_error(
    workspace_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Default policy should report success and log the failure."""
    # Arrange - alias already present so the hard link fails
    write_artifact(workspace_root / "app.war")
    write_artifact(workspace_root / "app##3.war")
    sink = ListSink()

    # Act
    with caplog.at_level(logging.ERROR, logger="warnumbering.build_step"):
        result = WarNumberingStep().perform(workspace_root, 3, sink)

    # Assert - success reported, error summarized and logged with traceback
    assert result.success is True
    assert result.error_code == AliasErrorCode.CREATION_FAILED
    assert sink.lines[0] == "Create link app##3.war to app.war"
    assert sink.lines[1].startswith("ERROR: [alias_creation_failed]")
    assert caplog.records[0].exc_info is not None


@pytest.mark.unit
def test_perform_reports_success_after_enumeration_error(tmp_path: Path) -> None:
    """Enumeration failure should be summarized and still report success."""
    sink = ListSink()

    result = WarNumberingStep().perform(tmp_path / "missing", 1, sink)

    assert result.success is True
    assert result.error_code == AliasErrorCode.ENUMERATION_FAILED
    assert len(sink.lines) == 1
    assert sink.lines[0].startswith("ERROR: [artifact_enumeration_failed]")


@pytest.mark.unit
def test_perform_interruption_logs_without_progress_summary(
    workspace_root: Path,
) -> None:
    """Interruption should abort silently on the progress stream."""
    write_artifact(workspace_root / "app.war")
    token = CancellationToken()
    token.cancel()
    sink = ListSink()

    result = WarNumberingStep().perform(
        workspace_root, 2, sink, cancellation=token
    )

    assert result.success is True
    assert result.error_code == AliasErrorCode.INTERRUPTED
    assert sink.lines == []
    assert names_in(workspace_root) == {"app.war"}


@pytest.mark.unit
def test_fail_on_error_reports_failure(workspace_root: Path) -> None:
    """Opt-in policy should surface internal errors as failure."""
    write_artifact(workspace_root / "app.war")
    write_artifact(workspace_root / "app##3.war")
    step = WarNumberingStep(WarNumberingConfig(fail_on_error=True))

    result = step.perform(workspace_root, 3, ListSink())

    assert step.failure_policy == FailurePolicy.REPORT_FAILURE
    assert result.success is False
    assert result.aborted is True


@pytest.mark.unit
def test_perform_rejects_negative_build_number(workspace_root: Path) -> None:
    """Negative build numbers violate the caller contract."""
    with pytest.raises(ValueError, match="non-negative"):
        WarNumberingStep().perform(workspace_root, -1, ListSink())


@pytest.mark.unit
def test_format_io_error_includes_code_and_message() -> None:
    """I/O summary should carry the stable code and message."""
    line = format_io_error(EnumerationError("boom"))

    assert line == "ERROR: [artifact_enumeration_failed] boom"


class _BrokenChannelContext:
    """Execution context whose transport to the artifact host drops."""

    def __init__(self, error: Exception) -> None:
        self._error = error

    def run(self, unit: AliasUnit, artifact: Path, sink: ProgressSink) -> None:
        raise self._error


class _BrokenPipeSink:
    """Progress sink whose stream has been closed by the reader."""

    def println(self, line: str) -> None:
        raise BrokenPipeError(errno.EPIPE, "Broken pipe")


@pytest.mark.unit
def test_perform_reports_success_when_context_channel_drops(
    workspace_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Transport I/O errors from the context should be summarized, not raised."""
    # Arrange - remote context losing its channel
    write_artifact(workspace_root / "app.war")
    sink = ListSink()
    context = _BrokenChannelContext(ConnectionResetError("agent channel closed"))

    # Act
    with caplog.at_level(logging.ERROR, logger="warnumbering.build_step"):
        result = WarNumberingStep().perform(workspace_root, 1, sink, context=context)

    # Assert - success reported, I/O summary on the progress stream
    assert result.success is True
    assert result.error_code == AliasErrorCode.IO_FAILED
    assert sink.lines == ["ERROR: [alias_io_failed] agent channel closed"]
    assert caplog.records[0].exc_info is not None


@pytest.mark.unit
def test_perform_reports_success_when_sink_pipe_breaks(
    workspace_root: Path,
) -> None:
    """A broken progress stream should not escape the step."""
    write_artifact(workspace_root / "app.war")

    result = WarNumberingStep().perform(workspace_root, 1, _BrokenPipeSink())

    assert result.success is True
    assert result.error_code == AliasErrorCode.IO_FAILED
    assert names_in(workspace_root) == {"app.war"}


@pytest.mark.unit
def test_perform_reports_success_on_unexpected_error(workspace_root: Path) -> None:
    """Non-I/O failures should be logged and mapped to the internal code."""
    write_artifact(workspace_root / "app.war")
    sink = ListSink()
    context = _BrokenChannelContext(RuntimeError("agent crashed"))

    result = WarNumberingStep().perform(workspace_root, 1, sink, context=context)

    assert result.success is True
    assert result.error_code == AliasErrorCode.INTERNAL
    assert result.error_message == "agent crashed"
    assert sink.lines == []


@pytest.mark.unit
def test_fail_on_error_reports_failure_for_transport_errors(
    workspace_root: Path,
) -> None:
    """Opt-in policy should also cover errors outside the aliasing taxonomy."""
    write_artifact(workspace_root / "app.war")
    step = WarNumberingStep(WarNumberingConfig(fail_on_error=True))
    context = _BrokenChannelContext(ConnectionResetError("agent channel closed"))

    result = step.perform(workspace_root, 1, ListSink(), context=context)

    assert result.success is False


@pytest.mark.unit
def test_aborted_result_lists_aliases_created_before_failure(
    workspace_root: Path,
) -> None:
    """Aliases kept on disk after an abort should appear in the result."""
    # Arrange - a.war aliases fine, b.war collides with an existing alias
    first = write_artifact(workspace_root / "a.war")
    write_artifact(workspace_root / "b.war")
    write_artifact(workspace_root / "b##4.war")

    # Act
    result = WarNumberingStep().perform(workspace_root, 4, ListSink())

    # Assert - first alias reported, marker file reported as skipped
    assert result.error_code == AliasErrorCode.CREATION_FAILED
    assert result.actions == (
        AliasAction(
            source=first, alias=workspace_root / "a##4.war", mode=OutputMode.HARDLINK
        ),
    )
    assert result.skipped == (workspace_root / "b##4.war",)
