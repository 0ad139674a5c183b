"""Per-project artifact endpoints."""

from fastapi import APIRouter

from pimainteno.api.dependencies import OrchestratorDep, StatusStoreDep, UnitNamerDep
from pimainteno.api.models import (
    APIResponse,
    ProjectStatusResponse,
    project_status_to_response,
)
from pimainteno.projects import find_project

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=APIResponse[list[ProjectStatusResponse]])
def list_projects(
    store: StatusStoreDep, orchestrator: OrchestratorDep, unit_namer: UnitNamerDep
) -> APIResponse[list[ProjectStatusResponse]]:
    """List configured projects with their recorded artifacts."""
    return APIResponse(
        data=[
            project_status_to_response(store, p, unit_namer.unit_name(p))
            for p in orchestrator.projects
        ]
    )


@router.get("/{name}", response_model=APIResponse[ProjectStatusResponse])
def get_project(
    name: str, store: StatusStoreDep, orchestrator: OrchestratorDep, unit_namer: UnitNamerDep
) -> APIResponse[ProjectStatusResponse]:
    """Get one project's artifacts by directory name."""
    project = find_project(orchestrator.projects, name)
    unit = unit_namer.unit_name(project)
    return APIResponse(data=project_status_to_response(store, project, unit))
