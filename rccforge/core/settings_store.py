"""Settings record — makes option changes observable as staleness.

The record holds the digest of the options used by the last successful
build, as a single ``rcc:<hexdigest>`` line.  Reading, comparing, clearing
and rewriting it all happen while holding an exclusive lock on a separate
lock file, so parallel build jobs sharing a record cannot interleave.

Lifecycle of one run::

    store = SettingsStore(job)
    store.open()           # lock, read, compare, clear if changed
    ...                    # evaluate staleness, rebuild
    store.close(write=True)

or, equivalently, ``with SettingsStore(job) as store: ...``.
"""

from __future__ import annotations

import logging

from rccforge.core._formatting import quoted
from rccforge.core.errors import BuildIOError
from rccforge.core.file_lock import FileLock
from rccforge.core.fileops import read_text, remove_file, touch, write_text
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)

SETTINGS_KEY = "rcc"


def settings_find(content: str, key: str) -> str:
    """Return the value stored under *key* in a settings record.

    The value is the text between ``<key>:`` and the next newline.  A
    missing key, a missing newline or an empty value yields ``""``, which
    never matches a digest.
    """
    prefix = f"{key}:"
    pos = content.find(prefix)
    if pos == -1:
        return ""
    pos += len(prefix)
    end = content.find("\n", pos)
    if end == -1 or end == pos:
        return ""
    return content[pos:end]


def format_record(digest: str, key: str = SETTINGS_KEY) -> str:
    return f"{key}:{digest}\n"


class SettingsStore:
    """Persisted settings digest guarded by an exclusive file lock.

    Parameters
    ----------
    job:
        The job whose ``settings_file``, ``lock_file`` and options are used.
    """

    def __init__(self, job: RccJob) -> None:
        self._job = job
        self._lock = FileLock(job.lock_file)
        self._digest = ""
        self._changed = False
        self._opened = False

    @property
    def digest(self) -> str:
        """The digest of the current job's settings (after ``open()``)."""
        return self._digest

    @property
    def changed(self) -> bool:
        """True if the stored digest differs from the current one."""
        return self._changed

    @property
    def is_locked(self) -> bool:
        return self._lock.is_locked

    def open(self) -> bool:
        """Lock the record, compare it and clear it if the settings changed.

        Returns the ``changed`` flag.

        Raises
        ------
        BuildIOError
            If the settings or lock file cannot be created, or a stale record
            cannot be cleared.
        LockError
            If the lock cannot be acquired.
        """
        job = self._job
        self._digest = job.settings_digest()

        if not job.settings_file.is_file():
            try:
                touch(job.settings_file, create=True)
            except BuildIOError as exc:
                raise BuildIOError(
                    str(job.settings_file), f"Settings file creation failed. {exc.detail}"
                ) from exc

        if not job.lock_file.is_file():
            try:
                touch(job.lock_file, create=True)
            except BuildIOError as exc:
                raise BuildIOError(
                    str(job.lock_file), f"Lock file creation failed. {exc.detail}"
                ) from exc

        self._lock.lock()
        try:
            self._changed = self._read_and_compare()
        except BaseException:
            self._lock.release()
            raise
        self._opened = True
        return self._changed

    def _read_and_compare(self) -> bool:
        settings_file = self._job.settings_file
        content = read_text(settings_file)
        if content is None:
            return True
        if settings_find(content, SETTINGS_KEY) == self._digest:
            return False
        # Cleared now so an interrupted build forces a rebuild next run.
        try:
            write_text(settings_file, "")
        except BuildIOError as exc:
            self._discard_record()
            raise BuildIOError(
                str(settings_file), f"Settings file clearing failed. {exc.detail}"
            ) from exc
        return True

    def _discard_record(self) -> None:
        try:
            remove_file(self._job.settings_file)
        except BuildIOError:
            logger.error("Could not remove settings file %s", self._job.settings_file)

    def close(self, write: bool = True) -> None:
        """Write the new digest back if it changed, then release the lock.

        On write failure the settings file is removed so the next run does a
        full rebuild, and ``BuildIOError`` is raised.  The lock is released
        in every case.
        """
        try:
            if write and self._opened and self._changed:
                self._write_record()
        finally:
            self._opened = False
            self._lock.release()

    def _write_record(self) -> None:
        settings_file = self._job.settings_file
        if self._job.is_verbose:
            logger.info("Writing settings file %s", quoted(str(settings_file)))
        try:
            write_text(settings_file, format_record(self._digest))
        except BuildIOError as exc:
            self._discard_record()
            raise BuildIOError(
                str(settings_file), f"Settings file writing failed. {exc.detail}"
            ) from exc

    def __enter__(self) -> SettingsStore:
        self.open()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *exc_info: object) -> None:
        self.close(write=exc_type is None)
