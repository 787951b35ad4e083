"""WAR numbering step config model and loading helpers."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from warnumbering.aliasing.models import OutputMode
from warnumbering.workspace import DEFAULT_PATTERN


class WarNumberingConfig(BaseModel):
    """Root WAR numbering step configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output_mode: OutputMode = OutputMode.HARDLINK
    pattern: str = Field(default=DEFAULT_PATTERN, min_length=1)
    fail_on_error: bool = False

    @model_validator(mode="before")
    @classmethod
    def _map_legacy_rename(cls, data: object) -> object:
        """Translate the legacy ``rename`` boolean into ``output_mode``.

        Args:
            data: Raw payload.

        Returns:
            Payload with ``rename`` replaced.

        Raises:
            ValueError: If both ``rename`` and ``output_mode`` are given.
        """
        if not isinstance(data, dict) or "rename" not in data:
            return data
        payload = dict(data)
        rename = payload.pop("rename")
        if "output_mode" in payload:
            raise ValueError("rename and output_mode are mutually exclusive.")
        if not isinstance(rename, bool):
            raise ValueError("rename must be a boolean.")
        payload["output_mode"] = OutputMode.RENAME if rename else OutputMode.HARDLINK
        return payload


class ConfigError(RuntimeError):
    """Raised when step config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def load_config(path: Path) -> WarNumberingConfig:
    """Load step config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config, or defaults when the file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return WarNumberingConfig()
    payload = _decode_config_payload(path)
    try:
        return WarNumberingConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc
