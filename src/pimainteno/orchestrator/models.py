"""Data models for the Orchestrator module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from enum import StrEnum


class RunStatus(StrEnum):
    """Whether a maintenance pass is in flight."""

    IDLE = "idle"
    RUNNING = "running"


class ProjectOutcome(StrEnum):
    """Where a project's pipeline stopped during a pass."""

    SKIPPED_MISSING = "skipped_missing"
    SKIPPED_UNCHANGED = "skipped_unchanged"
    SUMMARIZE_FAILED = "summarize_failed"
    PATCH_FAILED = "patch_failed"
    NO_CHANGES = "no_changes"
    APPLY_FAILED = "apply_failed"
    STAGE_FAILED = "stage_failed"
    COMMIT_FAILED = "commit_failed"
    PUSH_FAILED = "push_failed"
    RESTART_FAILED = "restart_failed"
    PUSHED = "pushed"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass
class RunRecord:
    """State of the current pass.

    Attributes:
        started_at: When the pass began.
        finished_at: When the pass ended; None while running.
        current_project: Project being maintained, if any.
        status: idle or running.
    """

    started_at: datetime
    finished_at: datetime | None = None
    current_project: str | None = None
    status: RunStatus = RunStatus.RUNNING


@dataclass
class PassReport:
    """Per-project outcomes of one completed pass, in configuration order."""

    started_at: datetime
    finished_at: datetime | None = None
    outcomes: dict[str, ProjectOutcome] = field(default_factory=dict)

    @property
    def pushed(self) -> list[str]:
        return [
            key
            for key, outcome in self.outcomes.items()
            if outcome in (ProjectOutcome.PUSHED, ProjectOutcome.RESTART_FAILED)
        ]
