"""Run a command in a subprocess, printing or logging it first.

``Command`` wraps :mod:`subprocess` with a few conveniences: announce the
command line before running it, optionally capture (or combine) output, and
raise ``ExitError`` when the command does not exit successfully.
"""

from command_run.lib import (
    Command,
    CommandError,
    CommandRunner,
    ExitError,
    ExitStatus,
    LaunchError,
    LogTo,
    Output,
    OutputMode,
    SpawnSpec,
)
from command_run.lib.config import AnnounceConfig, load_config
from command_run.lib.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    "AnnounceConfig",
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
    "__version__",
    "configure_logging",
    "load_config",
]
