"""Exit status of a finished child process."""

from __future__ import annotations

import signal as signal_module
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExitStatus:
    """Exit code or terminating signal, never both."""

    code: int | None = None
    signal: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> ExitStatus:
        """Build from ``Popen.returncode`` (negative values are signals)."""

        if returncode < 0:
            return cls(signal=-returncode)
        return cls(code=returncode)

    def success(self) -> bool:
        return self.code == 0

    def __str__(self) -> str:
        if self.signal is not None:
            try:
                name = signal_module.Signals(self.signal).name
            except ValueError:
                return f"signal: {self.signal}"
            return f"signal: {self.signal} ({name})"
        return f"exit status: {self.code}"
