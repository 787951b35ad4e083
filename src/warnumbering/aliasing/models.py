"""Aliasing mode and result models."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from warnumbering.aliasing.errors import AliasErrorCode


class OutputMode(StrEnum):
    """How an alias is materialized on disk."""

    HARDLINK = "hardlink"
    RENAME = "rename"


class AliasAction(BaseModel):
    """One alias materialized for one artifact."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: Path
    alias: Path
    mode: OutputMode


class AliasRunResult(BaseModel):
    """Outcome of one aliasing invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    success: bool
    actions: tuple[AliasAction, ...] = ()
    skipped: tuple[Path, ...] = ()
    error_code: AliasErrorCode | None = None
    error_message: str | None = None

    @property
    def aborted(self) -> bool:
        """Return whether processing stopped on an internal error."""
        return self.error_code is not None
