"""Blocking subprocess execution with announcement and check policies."""

from __future__ import annotations

import errno
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from command_run.lib.command import LogTo, OutputMode
from command_run.lib.exec.errors import ExitError, LaunchError
from command_run.lib.exec.sinks import LogSink, StdoutLineSink, default_log_sink
from command_run.lib.exec.status import ExitStatus

if TYPE_CHECKING:
    from command_run.lib.command import Command, SpawnSpec

_STDERR_TARGETS: dict[OutputMode, int | None] = {
    OutputMode.INHERIT: None,
    OutputMode.CAPTURE: subprocess.PIPE,
    # Both child descriptors share the stdout pipe, so ordering is kept.
    OutputMode.COMBINE: subprocess.STDOUT,
}


@dataclass(frozen=True, slots=True)
class Output:
    """Status and captured output of a finished process.

    ``stdout`` and ``stderr`` are empty when output was not captured;
    ``stderr`` is also empty in combined mode.
    """

    status: ExitStatus
    stdout: bytes = b""
    stderr: bytes = b""

    def stdout_string_lossy(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_string_lossy(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def format_failure_diagnostic(error: ExitError, output: Output, mode: OutputMode) -> str:
    if mode is OutputMode.COMBINE:
        return f"{error}\noutput:\n{output.stdout_string_lossy()}"
    return (
        f"{error}\n"
        f"stdout:\n{output.stdout_string_lossy()}\n"
        f"stderr:\n{output.stderr_string_lossy()}"
    )


class CommandRunner:
    """Run commands, routing announcements to stdout or a log sink.

    The log sink defaults to the ``command_run`` structlog logger; tests and
    applications can pass any object with ``info`` and ``error`` methods.
    """

    def __init__(
        self,
        *,
        log_sink: LogSink | None = None,
        stdout: StdoutLineSink | None = None,
    ) -> None:
        self._log_sink = log_sink
        self._stdout = stdout or StdoutLineSink()

    @property
    def log_sink(self) -> LogSink:
        if self._log_sink is None:
            self._log_sink = default_log_sink()
        return self._log_sink

    def run(self, command: Command) -> Output:
        """Run ``command`` to completion and return its output.

        Raises ``LaunchError`` if the process cannot be started. When
        ``command.check`` is set, raises ``ExitError`` for a non-zero exit or
        a signal; with capture and ``log_output_on_error`` also enabled, the
        captured output is reported first.
        """

        command_line = command.command_line_lossy()
        if command.log_command:
            self._announce(command.log_to, command_line)

        mode = command.output_mode
        try:
            process = _start(command.to_spawn_spec(), mode)
        except OSError as error:
            raise LaunchError(command.copy(), error) from error
        except ValueError as error:
            # Popen rejects embedded NUL bytes before any system call is made.
            raise LaunchError(command.copy(), OSError(errno.EINVAL, str(error))) from error

        with process:
            stdout, stderr = process.communicate()
        output = Output(
            status=ExitStatus.from_returncode(process.returncode),
            stdout=stdout or b"",
            stderr=stderr or b"",
        )

        if command.check and not output.status.success():
            error = ExitError(command.copy(), output.status)
            if command.capture and command.log_output_on_error:
                self._report_failure(
                    command.log_to,
                    format_failure_diagnostic(error, output, mode),
                )
            raise error
        return output

    def _announce(self, log_to: LogTo, message: str) -> None:
        if log_to == LogTo.LOG:
            self.log_sink.info(message)
        else:
            self._stdout.write_line(message)

    def _report_failure(self, log_to: LogTo, message: str) -> None:
        if log_to == LogTo.LOG:
            self.log_sink.error(message)
        else:
            self._stdout.write_line(message)


def _start(spec: SpawnSpec, mode: OutputMode) -> subprocess.Popen[bytes]:
    return subprocess.Popen(
        list(spec.argv),
        cwd=spec.cwd,
        env=spec.env,
        stdout=None if mode is OutputMode.INHERIT else subprocess.PIPE,
        stderr=_STDERR_TARGETS[mode],
    )
