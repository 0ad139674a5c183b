"""Orchestrator package - Per-project maintenance pipeline."""

from pimainteno.orchestrator.exceptions import OrchestratorError, PipelineError
from pimainteno.orchestrator.models import PassReport, ProjectOutcome, RunRecord, RunStatus
from pimainteno.orchestrator.orchestrator import DEFAULT_COMMIT_MESSAGE, MaintenanceOrchestrator

__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "MaintenanceOrchestrator",
    "OrchestratorError",
    "PassReport",
    "PipelineError",
    "ProjectOutcome",
    "RunRecord",
    "RunStatus",
]
