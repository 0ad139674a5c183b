"""Exceptions for the Orchestrator module."""


class OrchestratorError(Exception):
    """Base exception for orchestrator errors."""

    pass


class PipelineError(OrchestratorError):
    """A whole maintenance pass had to be abandoned (clock or status store failure)."""

    pass
