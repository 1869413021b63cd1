"""Structlog sinks for ``LogTo.LOG`` announcements."""

from __future__ import annotations

import logging as std_logging
import sys
from typing import TextIO

import structlog

from command_run.lib.exec.sinks import LogSink

LOGGER_NAME = "command_run"
_HANDLER_NAME = "command_run.announce"


def _install_handler(logger: std_logging.Logger, stream: TextIO, level: int) -> None:
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    handler = std_logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(std_logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    # Announcements are rendered here; the root logger would print them twice.
    logger.propagate = False


def configure_logging(
    *,
    json_mode: bool = False,
    level: int = std_logging.INFO,
    stream: TextIO | None = None,
) -> LogSink:
    """Route the ``command_run`` logger to ``stream`` and return a log sink.

    Only the ``command_run`` stdlib logger is touched; global structlog and
    root-logger configuration stay with the application. Announcements are
    logged at info level and failure diagnostics at error level, so the
    default ``level`` shows both. Calling again replaces the handler.

    Pass the result to ``CommandRunner(log_sink=...)`` and set
    ``Command.log_to = LogTo.LOG``.
    """

    std_logger = std_logging.getLogger(LOGGER_NAME)
    _install_handler(std_logger, stream or sys.stderr, level)

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer()
    )
    return structlog.wrap_logger(
        std_logger,
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
