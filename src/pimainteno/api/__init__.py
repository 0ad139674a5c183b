"""REST API for PiMainteno."""

from pimainteno.api.app import create_app
from pimainteno.api.models import (
    APIResponse,
    ProjectStatusResponse,
    RunStatusResponse,
    RunTriggerResponse,
)

__all__ = [
    "APIResponse",
    "ProjectStatusResponse",
    "RunStatusResponse",
    "RunTriggerResponse",
    "create_app",
]
