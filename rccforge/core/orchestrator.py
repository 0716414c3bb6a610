"""Regeneration orchestrator — one full evaluate-and-build cycle.

The ``AutoRcc`` orchestrator wires together the SettingsStore,
StalenessEvaluator, ArtifactBuilder and WrapperPublisher.  The settings lock
is held from the first read of the settings record until it is written back,
and is released on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rccforge.config import RccforgeConfig
from rccforge.core.builder import ArtifactBuilder
from rccforge.core.lister import ResourceLister
from rccforge.core.manifest import load_job
from rccforge.core.settings_store import SettingsStore
from rccforge.core.staleness import StalenessEvaluator
from rccforge.core.wrapper import WrapperPublisher
from rccforge.models.decision import BuildDecision, Decision, RunReport
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)


class AutoRcc:
    """Keeps one rcc output artifact up to date.

    Parameters
    ----------
    job:
        The validated job description.
    lister:
        Resolves dependent inputs when the job has none.  Defaults to a
        ``ResourceLister`` over the job's executable.
    """

    def __init__(self, job: RccJob, lister: ResourceLister | None = None) -> None:
        self.job = job
        self._lister = lister
        self._handlers: dict[BuildDecision, Callable[[ArtifactBuilder, Decision], None]] = {
            BuildDecision.REBUILD: self._handle_rebuild,
            BuildDecision.TOUCH_ONLY: self._handle_touch,
            BuildDecision.UP_TO_DATE: self._handle_up_to_date,
        }

    @classmethod
    def from_manifest(
        cls,
        manifest_path: str | Path,
        config: str | None = None,
        *,
        settings: RccforgeConfig | None = None,
    ) -> AutoRcc:
        """Build an orchestrator from a manifest file."""
        return cls(load_job(manifest_path, config, settings=settings))

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def process(self) -> RunReport:
        """Run the cycle: lock, evaluate, build or touch, wrap, write back.

        Raises
        ------
        RccError
            Any failure of the cycle.  The settings record is not rewritten,
            so the next run re-evaluates from scratch.
        """
        job = self.job
        with SettingsStore(job) as store:
            evaluator = StalenessEvaluator(job, self._lister)
            decision = evaluator.evaluate(store.changed)
            if not decision.needs_rebuild:
                decision = evaluator.check_manifest(decision)

            builder = ArtifactBuilder(job)
            self._handlers[decision.action](builder, decision)

            WrapperPublisher(job).publish(builder.output_changed)

        logger.debug("%s: %s", job.output_path, decision.action.value)
        return RunReport(
            decision=decision,
            settings_changed=store.changed,
            output_changed=builder.output_changed,
            output_path=str(job.output_path),
            wrapper_path=str(job.public_output) if job.multi_config else None,
        )

    # ------------------------------------------------------------------
    # Decision handlers
    # ------------------------------------------------------------------

    def _handle_rebuild(self, builder: ArtifactBuilder, decision: Decision) -> None:
        builder.build(decision.reason)

    def _handle_touch(self, builder: ArtifactBuilder, decision: Decision) -> None:
        builder.touch_output(decision.reason)

    def _handle_up_to_date(self, builder: ArtifactBuilder, decision: Decision) -> None:
        logger.debug("%s is up to date", self.job.output_path)
