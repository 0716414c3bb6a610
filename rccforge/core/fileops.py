"""File primitives used by the regeneration cycle.

Thin wrappers over ``pathlib``/``os`` that translate ``OSError`` into
``BuildIOError`` with a message naming the operation.  ``read_text`` is the
exception: it returns ``None`` so callers can treat unreadable files as
"absent" where that is the correct semantics (settings record, wrapper).
"""

from __future__ import annotations

import os
from pathlib import Path

from rccforge.core.errors import BuildIOError


def read_text(path: str | Path) -> str | None:
    """Return the file content, or ``None`` if it cannot be read."""
    try:
        return Path(path).read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError:
        return None


def make_parent_directory(path: str | Path) -> None:
    """Create the parent directory of *path* (and its ancestors)."""
    parent = Path(path).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildIOError(str(path), f"Could not create parent directory. {exc}") from exc


def write_text(path: str | Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories as needed."""
    make_parent_directory(path)
    try:
        Path(path).write_bytes(content.encode("utf-8", errors="surrogateescape"))
    except OSError as exc:
        raise BuildIOError(str(path), f"Writing file failed. {exc}") from exc


def touch(path: str | Path, create: bool) -> None:
    """Set the modification time of *path* to now.

    With ``create=True`` a missing file (and its parent directories) is
    created empty; otherwise a missing file is an error.
    """
    p = Path(path)
    try:
        if create:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.touch(exist_ok=True)
        else:
            os.utime(p)
    except OSError as exc:
        raise BuildIOError(str(path), f"Touching file failed. {exc}") from exc


def remove_file(path: str | Path) -> bool:
    """Remove *path* if it exists.  Returns True if a file was removed."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise BuildIOError(str(path), f"Removing file failed. {exc}") from exc
    return True
