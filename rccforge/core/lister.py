"""Resource lister — enumerates the files a ``.qrc`` file depends on.

With a usable rcc executable and list options the list comes from rcc's own
list mode, which knows about aliases, prefixes and directory entries.
Otherwise the ``<file>`` entries of the ``.qrc`` XML are read directly.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path

from rccforge.core._formatting import quoted, quoted_command
from rccforge.core.errors import BuildIOError, ToolInvocationError
from rccforge.core.fileops import read_text

logger = logging.getLogger(__name__)

_RCC_ERROR_PREFIX = "RCC: Error in"
_CANNOT_FIND = "Cannot find file '"
_QRC_FILE_RE = re.compile(r"<file[^>]*>([^<]+)</file>")


class ResourceLister:
    """Lists the resource files referenced by a ``.qrc`` file.

    Parameters
    ----------
    executable:
        The rcc executable.  May be empty, in which case the ``.qrc`` XML is
        parsed instead.
    list_options:
        Flags that put rcc into list mode (e.g. ``--list``).  Without them
        rcc would compile instead of list, so the ``.qrc`` XML is parsed.
    """

    def __init__(self, executable: str = "", list_options: list[str] | None = None) -> None:
        self._executable = executable
        self._list_options = list(list_options or [])

    def list(self, qrc_file: str, verbose: bool = False) -> list[str]:
        """Return the dependent files of *qrc_file*, in rcc's order."""
        if self._executable and self._list_options and os.path.isfile(self._executable):
            return self._list_with_rcc(qrc_file, verbose)
        return self._list_from_xml(qrc_file)

    def _list_with_rcc(self, qrc_file: str, verbose: bool) -> list[str]:
        qrc_path = os.path.abspath(qrc_file)
        qrc_dir = os.path.dirname(qrc_path)
        command = [os.path.abspath(self._executable), *self._list_options, os.path.basename(qrc_path)]
        if verbose:
            logger.info("Running command:\n%s", quoted_command(command))
        try:
            result = subprocess.run(
                command,
                cwd=qrc_dir,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except (subprocess.SubprocessError, OSError) as exc:
            raise ToolInvocationError(
                f"The rcc list process failed for {quoted(qrc_file)}: {exc}", command
            ) from exc
        if result.returncode != 0:
            raise ToolInvocationError(
                f"The rcc list process failed for {quoted(qrc_file)}",
                command,
                result.stdout + result.stderr,
            )

        files = [
            line.rstrip("\r").strip()
            for line in result.stdout.splitlines()
            if line.rstrip("\r").strip()
        ]

        # rcc reports missing files on stderr but still exits 0; keep them so
        # the staleness check can report which one is missing.
        for line in result.stderr.splitlines():
            line = line.rstrip("\r")
            if not line.startswith(_RCC_ERROR_PREFIX):
                continue
            pos = line.find(_CANNOT_FIND)
            if pos == -1:
                raise ToolInvocationError(
                    f"rcc lists unparsable output:\n{quoted(line)}",
                    command,
                    result.stdout + result.stderr,
                )
            files.append(line[pos + len(_CANNOT_FIND):].rstrip().removesuffix("'"))

        return [os.path.join(qrc_dir, f) if not os.path.isabs(f) else f for f in files]

    def _list_from_xml(self, qrc_file: str) -> list[str]:
        content = read_text(qrc_file)
        if content is None:
            raise BuildIOError(qrc_file, "Could not read the resources file.")
        qrc_dir = Path(qrc_file).parent
        return [
            os.path.normpath(qrc_dir / match.strip())
            for match in _QRC_FILE_RE.findall(content)
        ]
