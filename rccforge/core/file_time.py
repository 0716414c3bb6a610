"""Comparable file modification times.

A ``FileTime`` is either loaded (holds ``st_mtime_ns``) or absent.  Only a
strict "older" relation is exposed to the staleness rules: equal times are
never stale, so coarse-resolution filesystems do not cause rebuild storms.
"""

from __future__ import annotations

import os
from pathlib import Path


class FileTime:
    """Last-modification instant of a file, or absent."""

    __slots__ = ("_ns",)

    def __init__(self) -> None:
        self._ns: int | None = None

    @classmethod
    def of(cls, path: str | Path) -> FileTime:
        """Convenience constructor: a FileTime loaded from *path*."""
        ft = cls()
        ft.load(path)
        return ft

    def load(self, path: str | Path) -> bool:
        """Load the mtime of *path*.  Returns False if it is absent or unreadable."""
        try:
            self._ns = os.stat(path).st_mtime_ns
        except OSError:
            self._ns = None
            return False
        return True

    @property
    def is_loaded(self) -> bool:
        return self._ns is not None

    @property
    def nanoseconds(self) -> int | None:
        return self._ns

    def older(self, other: FileTime) -> bool:
        """True if this time strictly precedes *other*.

        An absent time is older than any present one.  Comparing two absent
        times is a caller error; it returns False.
        """
        if other._ns is None:
            return False
        if self._ns is None:
            return True
        return self._ns < other._ns

    def newer(self, other: FileTime) -> bool:
        return other.older(self)

    def __repr__(self) -> str:
        return f"FileTime({self._ns!r})"
