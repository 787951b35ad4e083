"""Progress sinks receiving human-readable aliasing lines."""

from __future__ import annotations

from typing import Protocol, TextIO

from rich.console import Console


class ProgressSink(Protocol):
    """Protocol for build-progress streams."""

    def println(self, line: str) -> None:
        """Write one progress line.

        Args:
            line: Line text without trailing newline.
        """


class StreamSink:
    """Progress sink writing to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        """Store target stream.

        Args:
            stream: Writable text stream.
        """
        self._stream = stream

    def println(self, line: str) -> None:
        """Write one line and flush."""
        self._stream.write(f"{line}\n")
        self._stream.flush()


class ConsoleSink:
    """Progress sink printing through a Rich console."""

    def __init__(self, console: Console) -> None:
        """Store target console."""
        self._console = console

    def println(self, line: str) -> None:
        """Print one line literally."""
        # File names may contain brackets; never interpret them as markup.
        self._console.print(line, markup=False, highlight=False, soft_wrap=True)


class ListSink:
    """Progress sink collecting lines in memory."""

    def __init__(self) -> None:
        """Start with no collected lines."""
        self.lines: list[str] = []

    def println(self, line: str) -> None:
        """Append one line."""
        self.lines.append(line)
