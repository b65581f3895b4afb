from __future__ import annotations

import os
from pathlib import Path


class CompanionReadError(OSError):
    pass


class CompanionWriteError(OSError):
    pass


def read_companion_text(path: os.PathLike[str] | str) -> str:
    """Return the whole companion file. No check is made that it is really text."""

    p = Path(path)
    try:
        return p.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise CompanionReadError(f"Unable to read {p}: {exc}") from exc


def write_companion_text(path: os.PathLike[str] | str, text: str) -> None:
    p = Path(path)
    try:
        p.write_text(text)
    except (OSError, UnicodeEncodeError) as exc:
        raise CompanionWriteError(f"Unable to save {p}: {exc}") from exc
