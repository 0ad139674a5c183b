"""Manual maintenance trigger."""

from fastapi import APIRouter, status

from pimainteno.api.dependencies import RunQueueDep
from pimainteno.api.models import APIResponse, RunTriggerResponse

router = APIRouter(tags=["run"])


@router.post(
    "/run",
    response_model=APIResponse[RunTriggerResponse],
    status_code=status.HTTP_202_ACCEPTED,
)
def trigger_run(run_queue: RunQueueDep) -> APIResponse[RunTriggerResponse]:
    """Queue one maintenance pass and return without waiting for it."""
    queued = run_queue.submit("api")
    if queued:
        message = "Maintenance pass queued"
    else:
        message = "A maintenance pass is already queued"
    return APIResponse(data=RunTriggerResponse(queued=queued, message=message))
