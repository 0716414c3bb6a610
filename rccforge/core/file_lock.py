"""Exclusive inter-process lock on a dedicated lock file.

The lock serializes concurrent invocations (parallel build jobs) that share
one settings record.  Acquisition blocks without a timeout.  Use it as a
context manager so every exit path releases it::

    with FileLock(lock_path):
        ...
"""

from __future__ import annotations

import logging
from pathlib import Path

import fasteners

from rccforge.core.errors import LockError

logger = logging.getLogger(__name__)


class FileLock:
    """``fasteners.InterProcessLock`` with rccforge error reporting.

    Parameters
    ----------
    path:
        The lock file.  It is opened (and created if missing) on ``lock()``;
        its content is never read or written.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = fasteners.InterProcessLock(str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_locked(self) -> bool:
        return self._lock.acquired

    def lock(self) -> None:
        """Block until the exclusive lock is held.

        Raises
        ------
        LockError
            If the lock file cannot be opened or locked.
        """
        if self._lock.acquired:
            return
        try:
            acquired = self._lock.acquire(blocking=True)
        except (OSError, RuntimeError) as exc:
            raise LockError(f"{self._path}: File lock failed: {exc}") from exc
        if not acquired:
            raise LockError(f"{self._path}: File lock failed.")
        logger.debug("Locked %s", self._path)

    def release(self) -> None:
        """Release the lock.  Safe to call when not locked."""
        if not self._lock.acquired:
            return
        self._lock.release()
        logger.debug("Released %s", self._path)

    def __enter__(self) -> FileLock:
        self.lock()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
