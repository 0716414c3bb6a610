"""Artifact builder — runs the generator and keeps the output consistent.

A failed generator run never leaves an output file behind, so a later run
cannot mistake a partial or stale leftover for a valid artifact.
"""

from __future__ import annotations

import logging
import os
import subprocess

from rccforge.core._formatting import quoted, quoted_command, with_newline
from rccforge.core.errors import ToolInvocationError
from rccforge.core.fileops import make_parent_directory, remove_file, touch
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)


class ArtifactBuilder:
    """Produces (or touches) the job's physical output file.

    After ``build()`` or ``touch_output()`` succeeds, ``output_changed`` is
    True; the wrapper publisher uses it to decide whether to advance the
    wrapper's timestamp.
    """

    def __init__(self, job: RccJob) -> None:
        self._job = job
        self.output_changed = False

    def command(self) -> list[str]:
        """``<exe> <options...> -o <output> <input>``.

        Paths are made absolute because the generator runs in the build
        directory.
        """
        job = self._job
        return [
            os.path.abspath(job.rcc_executable),
            *job.options,
            "-o",
            os.path.abspath(job.output_path),
            os.path.abspath(job.source),
        ]

    def build(self, reason: str = "") -> None:
        """Run the generator.

        Raises
        ------
        BuildIOError
            If the output directory cannot be created.
        ToolInvocationError
            If the generator fails to launch or exits non-zero.  Any output
            file is removed first.
        """
        job = self._job
        output = job.output_path
        make_parent_directory(output)

        cmd = self.command()
        if job.is_verbose:
            logger.info("%s%s", with_newline(reason), quoted_command(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=job.build_dir if job.build_dir.is_dir() else None,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except (subprocess.SubprocessError, OSError) as exc:
            remove_file(output)
            raise ToolInvocationError(
                f"The rcc process failed to start\n  {quoted(job.source)}\n"
                f"into\n  {quoted(str(output))}\n{exc}",
                cmd,
            ) from exc

        if result.returncode != 0:
            remove_file(output)
            raise ToolInvocationError(
                f"The rcc process failed to compile\n  {quoted(job.source)}\n"
                f"into\n  {quoted(str(output))}",
                cmd,
                result.stdout + result.stderr,
            )

        if result.stdout:
            logger.info("%s", result.stdout)
        self.output_changed = True

    def touch_output(self, reason: str = "") -> None:
        """Advance the output's mtime without regenerating it."""
        if self._job.is_verbose and reason:
            logger.info("%s", reason)
        touch(self._job.output_path, create=False)
        self.output_changed = True
