"""Deterministic aliasing error contracts."""

from __future__ import annotations

from enum import StrEnum


class AliasErrorCode(StrEnum):
    """Stable aliasing error codes."""

    ENUMERATION_FAILED = "artifact_enumeration_failed"
    CREATION_FAILED = "alias_creation_failed"
    INTERRUPTED = "alias_interrupted"
    IO_FAILED = "alias_io_failed"
    INTERNAL = "alias_internal_error"


class AliasError(RuntimeError):
    """Aliasing failure with stable deterministic code."""

    code: AliasErrorCode

    def __init__(
        self,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create aliasing failure.

        Args:
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.data = data or {}


class EnumerationError(AliasError):
    """Raised when artifact discovery fails."""

    code = AliasErrorCode.ENUMERATION_FAILED


class AliasCreationError(AliasError):
    """Raised when a hard link or rename cannot be created for one artifact."""

    code = AliasErrorCode.CREATION_FAILED


class AliasInterruptedError(AliasError):
    """Raised when cancellation is signalled in the middle of a batch."""

    code = AliasErrorCode.INTERRUPTED
