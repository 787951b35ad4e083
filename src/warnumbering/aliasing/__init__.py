"""Artifact aliasing public surface."""

from warnumbering.aliasing.aliaser import CancellationToken, alias_artifacts
from warnumbering.aliasing.context import ExecutionContext, LocalExecutionContext
from warnumbering.aliasing.errors import (
    AliasCreationError,
    AliasError,
    AliasErrorCode,
    AliasInterruptedError,
    EnumerationError,
)
from warnumbering.aliasing.models import AliasAction, AliasRunResult, OutputMode
from warnumbering.aliasing.naming import (
    ALIAS_MARKER,
    derive_alias_path,
    format_build_id,
    has_alias_marker,
    printable_name,
    split_name,
)
from warnumbering.aliasing.sink import ConsoleSink, ListSink, ProgressSink, StreamSink
from warnumbering.aliasing.unit import AliasUnit, progress_line

__all__ = [
    "ALIAS_MARKER",
    "AliasAction",
    "AliasCreationError",
    "AliasError",
    "AliasErrorCode",
    "AliasInterruptedError",
    "AliasRunResult",
    "AliasUnit",
    "CancellationToken",
    "ConsoleSink",
    "EnumerationError",
    "ExecutionContext",
    "ListSink",
    "LocalExecutionContext",
    "OutputMode",
    "ProgressSink",
    "StreamSink",
    "alias_artifacts",
    "derive_alias_path",
    "format_build_id",
    "has_alias_marker",
    "printable_name",
    "progress_line",
    "split_name",
]
