"""Pydantic models for REST API."""

from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel

from pimainteno.status_store import StoredValueError, keys

if TYPE_CHECKING:
    from pimainteno.projects import Project
    from pimainteno.status_store import StatusStore

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Run models


class RunStatusResponse(BaseModel):
    """Response model for the run record."""

    status: str
    current_project: str | None
    last_start: str | None
    last_end: str | None
    enabled: bool
    running: bool
    manual_run_pending: bool


class RunTriggerResponse(BaseModel):
    """Acknowledgement of a manual run request."""

    queued: bool
    message: str


def run_status_to_response(
    store: "StatusStore", enabled: bool, running: bool, pending: bool
) -> RunStatusResponse:
    """Build the run record from the status store."""
    return RunStatusResponse(
        status=store.get(keys.RUN_STATUS) or "idle",
        current_project=store.get(keys.RUN_CURRENT_PROJECT) or None,
        last_start=store.get(keys.RUN_LAST_START),
        last_end=store.get(keys.RUN_LAST_END),
        enabled=enabled,
        running=running,
        manual_run_pending=pending,
    )


# Project models


class ProjectStatusResponse(BaseModel):
    """Response model for one project's recorded artifacts."""

    path: str
    name: str
    service_unit: str
    exists: bool
    fingerprint: str | None
    outcome: str | None
    summary: str | None
    patch: str | None
    commits: list[str]


def project_status_to_response(
    store: "StatusStore", project: "Project", service_unit: str
) -> ProjectStatusResponse:
    """Build a project's artifacts from the status store."""
    try:
        commits = store.get_json(keys.commits(project.key), default=[])
    except StoredValueError:
        commits = []
    return ProjectStatusResponse(
        path=project.key,
        name=project.name,
        service_unit=service_unit,
        exists=project.exists(),
        fingerprint=store.get(keys.summary_hash(project.key)),
        outcome=store.get(keys.outcome(project.key)),
        summary=store.get(keys.summary(project.key)),
        patch=store.get(keys.patch(project.key)),
        commits=[str(c) for c in commits] if isinstance(commits, list) else [],
    )


# Health


class HealthResponse(BaseModel):
    status: str
