"""rccforge data models — Pydantic v2, frozen (immutable)."""

from rccforge.models.decision import BuildDecision, Decision, RunReport
from rccforge.models.job import MULTI_CONFIG_SUFFIX, RccJob, append_filename_suffix

__all__ = [
    # decision
    "BuildDecision",
    "Decision",
    "RunReport",
    # job
    "RccJob",
    "MULTI_CONFIG_SUFFIX",
    "append_filename_suffix",
]
