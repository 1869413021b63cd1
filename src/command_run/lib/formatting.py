"""Human-readable command-line rendering shared by logging and errors."""

from __future__ import annotations

import os
import string
from collections.abc import Iterable

from command_run.lib.types import CommandArg

# Components made only of these characters are left unquoted.
UNQUOTED_CHARS = frozenset(string.ascii_letters + string.digits + "-_/,:.=")


def decode_lossy(value: CommandArg) -> str:
    """Decode one program/argument component as UTF-8, replacing bad bytes."""

    return os.fsencode(value).decode("utf-8", errors="replace")


def _requires_quoting(word: str) -> bool:
    return any(char not in UNQUOTED_CHARS for char in word)


def quote_word(value: CommandArg) -> str:
    word = decode_lossy(value)
    if _requires_quoting(word):
        return f"'{word}'"
    return word


def command_line_lossy(program: CommandArg, args: Iterable[CommandArg]) -> str:
    """Format a program and its arguments as a space-separated command line.

    Components containing anything other than ASCII letters, digits or
    ``-_/,:.=`` are wrapped in single quotes. This quotes more than a shell
    needs and does not escape embedded quotes, so the result is meant for
    logs and error messages, not for re-parsing.
    """

    return " ".join([quote_word(program), *(quote_word(arg) for arg in args)])
