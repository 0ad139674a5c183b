"""Run status endpoints."""

from fastapi import APIRouter

from pimainteno.api.dependencies import OrchestratorDep, RunQueueDep, StatusStoreDep
from pimainteno.api.models import (
    APIResponse,
    HealthResponse,
    RunStatusResponse,
    run_status_to_response,
)

router = APIRouter(tags=["status"])


@router.get("/status", response_model=APIResponse[RunStatusResponse])
def get_status(
    store: StatusStoreDep, orchestrator: OrchestratorDep, run_queue: RunQueueDep
) -> APIResponse[RunStatusResponse]:
    """Get the current run record."""
    return APIResponse(
        data=run_status_to_response(
            store,
            enabled=orchestrator.is_enabled(),
            running=orchestrator.is_running(),
            pending=run_queue.pending,
        )
    )


@router.get("/health", response_model=APIResponse[HealthResponse])
def health() -> APIResponse[HealthResponse]:
    """Liveness check."""
    return APIResponse(data=HealthResponse(status="ok"))
