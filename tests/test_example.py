"""Example shown in the README."""

from __future__ import annotations

from command_run import Command


def test_example() -> None:
    # Begin readme example
    # This raises ExitError if the command does not exit successfully
    # (controlled with the `check` field).
    output = Command.with_args("echo", ["hello", "world"]).enable_capture().run()
    assert output.stdout_string_lossy() == "hello world\n"
    # End readme example
