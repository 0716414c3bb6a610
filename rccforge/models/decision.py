"""Build decision model — the outcome of a staleness evaluation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BuildDecision(str, Enum):
    """What the run has to do with the output artifact."""

    UP_TO_DATE = "up_to_date"
    REBUILD = "rebuild"
    TOUCH_ONLY = "touch_only"  # bump mtime, content is still valid


class Decision(BaseModel):
    """A decision plus the human-readable reason it was reached."""

    model_config = ConfigDict(frozen=True)

    action: BuildDecision
    reason: str = ""

    @property
    def needs_rebuild(self) -> bool:
        return self.action is BuildDecision.REBUILD


class RunReport(BaseModel):
    """Summary of one completed regeneration cycle."""

    model_config = ConfigDict(frozen=True)

    decision: Decision
    settings_changed: bool
    output_changed: bool
    output_path: str
    wrapper_path: str | None = None  # set only for multi-configuration builds
