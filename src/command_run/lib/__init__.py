"""Core command-run library exports."""

from command_run.lib.command import Command, LogTo, OutputMode, SpawnSpec
from command_run.lib.exec import (
    CommandError,
    CommandRunner,
    ExitError,
    ExitStatus,
    LaunchError,
    Output,
)

__all__ = [
    "Command",
    "CommandError",
    "CommandRunner",
    "ExitError",
    "ExitStatus",
    "LaunchError",
    "LogTo",
    "Output",
    "OutputMode",
    "SpawnSpec",
]
