"""Subprocess invocation description with a fluent builder API."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING

from command_run.lib.formatting import command_line_lossy
from command_run.lib.types import CommandArg, PathArg

if TYPE_CHECKING:
    from command_run.lib.config.settings import AnnounceConfig
    from command_run.lib.exec.runner import CommandRunner, Output


class LogTo(StrEnum):
    """Where announcements and failure diagnostics are written."""

    STDOUT = "stdout"
    LOG = "log"


class OutputMode(StrEnum):
    """How the child's stdout and stderr are connected."""

    INHERIT = "inherit"
    CAPTURE = "capture"
    COMBINE = "combine"


def _to_arg(value: PathArg) -> CommandArg:
    return os.fspath(value)


@dataclass(frozen=True, slots=True)
class SpawnSpec:
    """Primitive arguments handed to ``subprocess.Popen``."""

    argv: tuple[CommandArg, ...]
    cwd: CommandArg | None
    env: dict[str, str] | None


@dataclass(slots=True)
class Command:
    """A command to run in a subprocess and options for how it is run.

    ``program`` may be a bare file name, in which case ``PATH`` is searched.
    Mutators return the same instance so calls can be chained::

        Command("git").add_arg_pair("-C", repo).add_args(["status", "-s"]).run()
    """

    program: CommandArg
    args: list[CommandArg] = field(default_factory=list)
    # None runs the child in the caller's working directory.
    dir: CommandArg | None = None
    log_to: LogTo = LogTo.STDOUT
    log_command: bool = True
    log_output_on_error: bool = False
    check: bool = True
    capture: bool = False
    combine_output: bool = False
    clear_env: bool = False
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.program = _to_arg(self.program)
        self.args = [_to_arg(arg) for arg in self.args]
        if self.dir is not None:
            self.dir = _to_arg(self.dir)
        self.log_to = LogTo(self.log_to)
        self.env = {os.fsdecode(key): os.fsdecode(value) for key, value in self.env.items()}

    @classmethod
    def with_args(cls, program: PathArg, args: Iterable[PathArg]) -> Command:
        """Make a command from a program and its arguments; other fields default."""

        return cls(program=_to_arg(program), args=[_to_arg(arg) for arg in args])

    def add_arg(self, arg: PathArg) -> Command:
        self.args.append(_to_arg(arg))
        return self

    def add_arg_pair(self, arg1: PathArg, arg2: PathArg) -> Command:
        """Append two arguments, e.g. a flag and a path value."""

        return self.add_arg(arg1).add_arg(arg2)

    def add_args(self, args: Iterable[PathArg]) -> Command:
        for arg in args:
            self.add_arg(arg)
        return self

    def enable_capture(self) -> Command:
        self.capture = True
        return self

    def enable_combine_output(self) -> Command:
        """Capture stdout and stderr through one pipe, preserving interleaving.

        Only has an effect when capture is also enabled.
        """

        self.combine_output = True
        return self

    def set_dir(self, path: PathArg) -> Command:
        self.dir = _to_arg(path)
        return self

    def disable_check(self) -> Command:
        self.check = False
        return self

    def set_env(self, key: PathArg, value: PathArg) -> Command:
        self.env[os.fsdecode(key)] = os.fsdecode(value)
        return self

    def clear_environment(self) -> Command:
        """Start the child with an empty environment plus ``env`` overrides."""

        self.clear_env = True
        return self

    def apply_config(self, config: AnnounceConfig) -> Command:
        """Copy a loaded announcement policy onto this command."""

        self.log_command = config.log_command
        self.log_to = config.log_to
        self.log_output_on_error = config.log_output_on_error
        return self

    def copy(self) -> Command:
        """Return an independent copy; list and dict fields are not shared."""

        return replace(self, args=list(self.args), env=dict(self.env))

    @property
    def output_mode(self) -> OutputMode:
        if not self.capture:
            return OutputMode.INHERIT
        if self.combine_output:
            return OutputMode.COMBINE
        return OutputMode.CAPTURE

    def command_line_lossy(self) -> str:
        return command_line_lossy(self.program, self.args)

    def build_env(self) -> dict[str, str] | None:
        """Resolve the child environment, or None to inherit it untouched."""

        if not self.clear_env and not self.env:
            return None
        base: dict[str, str] = {} if self.clear_env else dict(os.environ)
        base.update(self.env)
        return base

    def to_spawn_spec(self) -> SpawnSpec:
        return SpawnSpec(
            argv=(self.program, *self.args),
            cwd=self.dir,
            env=self.build_env(),
        )

    def run(self, runner: CommandRunner | None = None) -> Output:
        """Run the command; see :meth:`CommandRunner.run`."""

        from command_run.lib.exec.runner import CommandRunner

        return (runner or CommandRunner()).run(self)
