"""Configuration wrapper file for multi-configuration builds.

In a multi-configuration build each configuration writes its own physical
output under its include directory.  Downstream consumers reference one
stable path instead: a small wrapper that includes the per-configuration
file through the include path.
"""

from __future__ import annotations

import logging

from rccforge.core.fileops import read_text, touch, write_text
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)

WRAPPER_BANNER = (
    "// This is an autogenerated configuration wrapper file.\n"
    "// Changes will be overwritten.\n"
)


def wrapper_content(reference: str) -> str:
    """The exact wrapper text for a relative output *reference*."""
    return f"{WRAPPER_BANNER}#include <{reference}>\n"


class WrapperPublisher:
    """Writes or refreshes the wrapper at the job's public output path."""

    def __init__(self, job: RccJob) -> None:
        self._job = job

    @property
    def active(self) -> bool:
        return self._job.multi_config

    def publish(self, rebuilt: bool) -> None:
        """Bring the wrapper in line with the physical output.

        Content is rewritten only when it differs.  When it is identical but
        the physical output was rebuilt, only the mtime is advanced.  A no-op
        for single-configuration builds, where the wrapper is the output.

        Raises
        ------
        BuildIOError
            If writing or touching the wrapper fails.
        """
        if not self.active:
            return
        job = self._job
        path = job.public_output
        content = wrapper_content(job.multi_config_output)

        if read_text(path) != content:
            if job.is_verbose:
                logger.info("Generating RCC wrapper file %s", path)
            write_text(path, content)
        elif rebuilt:
            if job.is_verbose:
                logger.info("Touching RCC wrapper file %s", path)
            touch(path, create=False)
