"""Token-efficient pytest wrapper for agent runs."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from command_run.lib.command import Command

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_ARGS: tuple[str, ...] = (
    "-q",
    "--tb=line",
    "--show-capture=no",
    "--disable-warnings",
    "--maxfail=1",
    "-r",
    "fE",
    "--no-header",
)
LAST_FAILED_ARGS: tuple[str, ...] = ("--lf", "--lfnf=all")


def _is_truthy_env(name: str) -> bool:
    value = os.getenv(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_pytest_command(
    argv: Sequence[str],
    *,
    include_last_failed: bool,
) -> Command:
    command = Command.with_args(sys.executable, ["-m", "pytest", *DEFAULT_ARGS])
    if include_last_failed:
        command.add_args(LAST_FAILED_ARGS)
    command.add_args(argv)
    # pytest's exit code is the result, not an error.
    return command.disable_check()


def main(argv: Sequence[str] | None = None) -> int:
    user_args = list(sys.argv[1:] if argv is None else argv)
    command = build_pytest_command(
        user_args, include_last_failed=_is_truthy_env("PYTESTS_LAST_FAILED")
    )
    output = command.run()
    if output.status.code is None:
        return 1
    return output.status.code


if __name__ == "__main__":
    raise SystemExit(main())
