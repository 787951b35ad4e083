"""Typer CLI for build-numbered WAR aliases."""

from __future__ import annotations

import logging
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from warnumbering.aliasing import (
    AliasError,
    CancellationToken,
    ConsoleSink,
    OutputMode,
    alias_artifacts,
    derive_alias_path,
    has_alias_marker,
    printable_name,
)
from warnumbering.build_step import WarNumberingStep, format_io_error
from warnumbering.config import ConfigError, WarNumberingConfig, load_config
from warnumbering.workspace import list_artifacts

app = typer.Typer(no_args_is_help=True)
_CONSOLE = Console()
_LOGGING_CONFIGURED = False

_DEFAULT_CONFIG_FILE = Path(".war-numbering.yaml")

_BuildNumberOption = Annotated[
    int,
    typer.Option("--build-number", "-n", min=0, help="Build number to embed."),
]
_ModeOption = Annotated[
    bool | None,
    typer.Option(
        "--rename/--hardlink",
        help="Rename artifacts instead of hard-linking them (overrides config).",
    ),
]
_WorkspaceOption = Annotated[
    Path,
    typer.Option(file_okay=False, dir_okay=True, help="Build workspace root."),
]


def _configure_logging() -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def _load_config_or_exit(config_file: Path | None) -> WarNumberingConfig:
    """Load step config, exiting with code 1 when invalid.

    Args:
        config_file: Explicit config path, or None for the workspace default.

    Returns:
        Loaded config.

    Raises:
        Exit: When the config cannot be decoded or validated.
    """
    try:
        return load_config(config_file or _DEFAULT_CONFIG_FILE)
    except ConfigError as exc:
        _CONSOLE.print(str(exc), style="bold red", markup=False)
        raise typer.Exit(code=1) from exc


def _resolve_mode(rename: bool | None, config: WarNumberingConfig) -> OutputMode:
    if rename is None:
        return config.output_mode
    return OutputMode.RENAME if rename else OutputMode.HARDLINK


@contextmanager
def _interrupt_to_cancel(token: CancellationToken) -> Iterator[None]:
    """Route SIGINT to the cancellation token for the context body.

    Args:
        token: Token cancelled on SIGINT.

    Yields:
        None; the handler is installed for the context body.
    """
    previous = signal.signal(signal.SIGINT, lambda *_: token.cancel())
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


@app.command("run")
def run_command(  # noqa: PLR0913
    build_number: _BuildNumberOption,
    workspace: _WorkspaceOption = Path("."),
    rename: _ModeOption = None,
    pattern: Annotated[
        str | None,
        typer.Option(help="Artifact glob relative to the workspace."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            file_okay=True,
            dir_okay=False,
            help="Path to step config YAML/JSON file.",
        ),
    ] = None,
    fail_on_error: Annotated[
        bool,
        typer.Option(
            "--fail-on-error",
            help="Exit non-zero when aliasing hits an internal error.",
        ),
    ] = False,
) -> None:
    """Alias every workspace artifact for one build.

    Args:
        build_number: Build number to embed.
        workspace: Build workspace root.
        rename: Mode override; None keeps the configured mode.
        pattern: Glob override.
        config_file: Optional config file path override.
        fail_on_error: Opt in to reporting internal errors as failure.

    Raises:
        Exit: Raised with the step status for shell integration.
    """
    _configure_logging()
    config = _load_config_or_exit(config_file)
    updates: dict[str, object] = {"output_mode": _resolve_mode(rename, config)}
    if pattern is not None:
        updates["pattern"] = pattern
    if fail_on_error:
        updates["fail_on_error"] = True
    try:
        effective = WarNumberingConfig.model_validate(
            {**config.model_dump(), **updates}
        )
    except ValidationError as exc:
        _CONSOLE.print(str(exc), style="bold red", markup=False)
        raise typer.Exit(code=1) from exc
    step = WarNumberingStep(effective)

    token = CancellationToken()
    with _interrupt_to_cancel(token):
        result = step.perform(
            workspace,
            build_number,
            ConsoleSink(_CONSOLE),
            cancellation=token,
        )
    raise typer.Exit(code=0 if result.success else 1)


@app.command("alias")
def alias_command(
    files: Annotated[
        list[Path],
        typer.Argument(exists=True, dir_okay=False, help="Artifacts to alias."),
    ],
    build_number: _BuildNumberOption,
    rename: _ModeOption = None,
    config_file: Annotated[
        Path | None,
        typer.Option(file_okay=True, dir_okay=False, help="Step config file."),
    ] = None,
) -> None:
    """Alias explicit artifact files, bypassing workspace enumeration.

    Args:
        files: Artifact files in processing order.
        build_number: Build number to embed.
        rename: Mode override; None keeps the configured mode.
        config_file: Optional config file path override.

    Raises:
        Exit: With code 1 when an alias cannot be created.
    """
    _configure_logging()
    config = _load_config_or_exit(config_file)
    sink = ConsoleSink(_CONSOLE)
    try:
        alias_artifacts(files, build_number, _resolve_mode(rename, config), sink)
    except AliasError as exc:
        sink.println(format_io_error(exc))
        raise typer.Exit(code=1) from exc


@app.command("name")
def name_command(
    file: Annotated[Path, typer.Argument(help="Artifact path.")],
    build_number: _BuildNumberOption,
) -> None:
    """Print the alias path an artifact would receive.

    Args:
        file: Artifact path; need not exist.
        build_number: Build number to embed.
    """
    alias = derive_alias_path(file, build_number)
    _CONSOLE.print(printable_name(str(alias)), markup=False, soft_wrap=True)


@app.command("list")
def list_command(
    workspace: _WorkspaceOption = Path("."),
    pattern: Annotated[
        str | None,
        typer.Option(help="Artifact glob relative to the workspace."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(file_okay=True, dir_okay=False, help="Step config file."),
    ] = None,
) -> None:
    """List workspace artifacts and whether they would be aliased.

    Args:
        workspace: Build workspace root.
        pattern: Glob override.
        config_file: Optional config file path override.

    Raises:
        Exit: With code 1 when enumeration fails.
    """
    _configure_logging()
    config = _load_config_or_exit(config_file)
    effective_pattern = pattern or config.pattern
    try:
        artifacts = list_artifacts(workspace, effective_pattern)
    except AliasError as exc:
        _CONSOLE.print(format_io_error(exc), markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    table = Table(title=f"Artifacts ({effective_pattern})", header_style="bold cyan")
    table.add_column("Artifact", style="bold")
    table.add_column("Status", style="green")
    for artifact in artifacts:
        status = "already aliased" if has_alias_marker(artifact) else "pending"
        relative = printable_name(str(artifact.relative_to(workspace)))
        table.add_row(Text(relative), status)
    _CONSOLE.print(table)
