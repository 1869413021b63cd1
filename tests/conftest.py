"""Shared pytest fixtures for command execution checks."""

from __future__ import annotations

import io
import logging
import sys
import textwrap
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from command_run.lib.command import Command
from command_run.lib.exec.runner import CommandRunner
from command_run.lib.exec.sinks import StdoutLineSink
from command_run.lib.logging import LOGGER_NAME

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

_TESTPROG_SOURCE = textwrap.dedent(
    """
    import sys

    sys.stdout.write("test-stdout\\n")
    sys.stdout.flush()
    sys.stderr.write("test-stderr\\n")
    sys.stderr.flush()
    sys.exit(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
    """
)


@dataclass
class RecordingLogSink:
    """Log sink that keeps (level, message) pairs in call order."""

    records: list[tuple[str, str]] = field(default_factory=list)

    def info(self, event: str) -> None:
        self.records.append(("info", event))

    def error(self, event: str) -> None:
        self.records.append(("error", event))


@dataclass(frozen=True, slots=True)
class TestProg:
    """A helper program that writes one line to each stream, then exits."""

    path: Path

    def command(self, exit_code: int = 1) -> Command:
        return Command.with_args(sys.executable, [self.path, str(exit_code)])


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def testprog(tmp_path: Path) -> TestProg:
    path = tmp_path / "testprog.py"
    path.write_text(_TESTPROG_SOURCE, encoding="utf-8")
    return TestProg(path=path)


@pytest.fixture
def log_sink() -> RecordingLogSink:
    return RecordingLogSink()


@pytest.fixture
def stdout_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def runner(log_sink: RecordingLogSink, stdout_buffer: io.StringIO) -> CommandRunner:
    return CommandRunner(log_sink=log_sink, stdout=StdoutLineSink(stdout_buffer))


@pytest.fixture
def reset_command_run_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
