"""Shared type aliases."""

import os
from typing import TypeAlias

CommandArg: TypeAlias = str | bytes
PathArg: TypeAlias = str | bytes | os.PathLike[str] | os.PathLike[bytes]
