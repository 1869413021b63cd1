"""Errors raised when running a command."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from command_run.lib.command import Command
    from command_run.lib.exec.status import ExitStatus


class CommandError(Exception):
    """Base error for a failed run; ``command`` is a copy of what was run.

    Constructor arguments are kept in ``args`` so errors survive pickling.
    """

    def __init__(self, command: Command, *details: object) -> None:
        super().__init__(command, *details)
        self.command = command

    def __str__(self) -> str:
        return f"command '{self.command.command_line_lossy()}' failed"

    def is_launch_error(self) -> bool:
        return isinstance(self, LaunchError)

    def is_exit_error(self) -> bool:
        return isinstance(self, ExitError)


class LaunchError(CommandError):
    """The process could not be started (missing program, bad cwd, ...)."""

    def __init__(self, command: Command, os_error: OSError) -> None:
        super().__init__(command, os_error)
        self.os_error = os_error

    def __str__(self) -> str:
        return f"failed to launch '{self.command.command_line_lossy()}': {self.os_error}"


class ExitError(CommandError):
    """The process ran but exited non-zero or was killed by a signal."""

    def __init__(self, command: Command, status: ExitStatus) -> None:
        super().__init__(command, status)
        self.status = status

    def __str__(self) -> str:
        return f"{super().__str__()}: {self.status}"
