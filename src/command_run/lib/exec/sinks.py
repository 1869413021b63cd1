"""Destinations for command announcements and failure diagnostics."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable

import structlog


@runtime_checkable
class LogSink(Protocol):
    """Leveled logger capability; structlog bound loggers satisfy it."""

    def info(self, event: str) -> object: ...

    def error(self, event: str) -> object: ...


def default_log_sink() -> LogSink:
    return structlog.get_logger("command_run")


class StdoutLineSink:
    """Write whole lines to a text stream, ``sys.stdout`` by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write_line(self, line: str) -> None:
        # Resolved per call so pytest's capsys and redirect_stdout see it.
        stream = self._stream or sys.stdout
        stream.write(f"{line}\n")
        stream.flush()
