"""Staleness evaluation — decides between rebuilding and skipping.

The rules are ordered and short-circuit: the first one that matches decides.
In particular the dependent-input list, which may require running the lister
subprocess, is only resolved when no cheaper rule already forced a rebuild.

Only a strictly older output is stale.  Equal timestamps count as up to date.
"""

from __future__ import annotations

import logging

from rccforge.core._formatting import quoted
from rccforge.core.errors import BuildIOError
from rccforge.core.file_time import FileTime
from rccforge.core.lister import ResourceLister
from rccforge.models.decision import BuildDecision, Decision
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)


class StalenessEvaluator:
    """Evaluates whether the job's output artifact must be regenerated.

    Parameters
    ----------
    job:
        The job to evaluate.
    lister:
        Used to resolve the dependent inputs when the manifest supplies none.
        Defaults to a ``ResourceLister`` over the job's executable.
    """

    def __init__(self, job: RccJob, lister: ResourceLister | None = None) -> None:
        self._job = job
        self._lister = lister or ResourceLister(job.rcc_executable, job.rcc_list_options)
        self._inputs: list[str] | None = list(job.inputs) if job.inputs else None
        self.output_time = FileTime()

    @property
    def inputs(self) -> list[str] | None:
        """The resolved dependent inputs, or None if not resolved yet."""
        return self._inputs

    def resolve_inputs(self) -> list[str]:
        """Return the dependent inputs, running the lister at most once."""
        if self._inputs is None:
            self._inputs = self._lister.list(self._job.source, self._job.is_verbose)
            logger.debug("Lister found %d resource files", len(self._inputs))
        return self._inputs

    def _generate(self, because: str) -> Decision:
        job = self._job
        reason = (
            f"Generating {quoted(str(job.output_path))}, because {because}, "
            f"from {quoted(job.source)}"
        )
        return Decision(action=BuildDecision.REBUILD, reason=reason)

    def evaluate(self, changed: bool) -> Decision:
        """Apply the staleness rules in order.

        Parameters
        ----------
        changed:
            The settings-record change flag from ``SettingsStore``.

        Raises
        ------
        BuildIOError
            If the ``.qrc`` file or one of its resource files does not exist.
        """
        job = self._job

        source_time = FileTime()
        if not source_time.load(job.source):
            raise BuildIOError(
                job.source, f"The resources file {quoted(job.source)} does not exist"
            )

        if not self.output_time.load(job.output_path):
            return self._generate("it doesn't exist")

        if changed:
            return self._generate("the rcc settings changed")

        if self.output_time.older(source_time):
            return self._generate(f"it is older than {quoted(job.source)}")

        if self.output_time.older(FileTime.of(job.rcc_executable)):
            return self._generate("it is older than the rcc executable")

        for resource in self.resolve_inputs():
            resource_time = FileTime()
            if not resource_time.load(resource):
                raise BuildIOError(
                    job.source,
                    f"Could not find the resource file\n  {quoted(resource)}\n",
                )
            if self.output_time.older(resource_time):
                return self._generate(f"it is older than {quoted(resource)}")

        return Decision(action=BuildDecision.UP_TO_DATE)

    def check_manifest(self, decision: Decision) -> Decision:
        """Turn ``UP_TO_DATE`` into ``TOUCH_ONLY`` if the manifest is newer.

        Downstream consumers compare the output's mtime with the manifest's,
        so the output is bumped even though its content is still valid.
        """
        if decision.action is not BuildDecision.UP_TO_DATE:
            return decision
        job = self._job
        if self.output_time.older(FileTime.of(job.manifest_path)):
            return Decision(
                action=BuildDecision.TOUCH_ONLY,
                reason=(
                    f"Touching {quoted(str(job.output_path))} because it is older "
                    f"than {quoted(str(job.manifest_path))}"
                ),
            )
        return decision
