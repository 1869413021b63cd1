"""Execution pipeline primitives."""

from command_run.lib.exec.errors import CommandError, ExitError, LaunchError
from command_run.lib.exec.runner import CommandRunner, Output, format_failure_diagnostic
from command_run.lib.exec.sinks import LogSink, StdoutLineSink, default_log_sink
from command_run.lib.exec.status import ExitStatus

__all__ = [
    "CommandError",
    "CommandRunner",
    "ExitError",
    "ExitStatus",
    "LaunchError",
    "LogSink",
    "Output",
    "StdoutLineSink",
    "default_log_sink",
    "format_failure_diagnostic",
]
