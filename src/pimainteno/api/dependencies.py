"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends

from pimainteno.status_store import StatusStore

if TYPE_CHECKING:
    from pimainteno.projects import Project


class Orchestrator(Protocol):
    """The parts of the orchestrator the API reads."""

    projects: list[Project]

    def is_enabled(self) -> bool: ...

    def is_running(self) -> bool: ...


class RunQueue(Protocol):
    """Accepts manual run requests."""

    @property
    def pending(self) -> bool: ...

    def submit(self, source: str = ...) -> bool: ...


class UnitNamer(Protocol):
    """Derives service unit names for projects."""

    def unit_name(self, project: Project) -> str: ...


# Global instances (initialized by the app lifespan)
_status_store: StatusStore | None = None
_orchestrator: Orchestrator | None = None
_run_queue: RunQueue | None = None
_unit_namer: UnitNamer | None = None


def init_dependencies(
    status_store: StatusStore,
    orchestrator: Orchestrator,
    run_queue: RunQueue,
    unit_namer: UnitNamer,
) -> None:
    """Initialize the global component instances."""
    global _status_store, _orchestrator, _run_queue, _unit_namer  # noqa: PLW0603
    _status_store = status_store
    _orchestrator = orchestrator
    _run_queue = run_queue
    _unit_namer = unit_namer


def close_dependencies() -> None:
    """Forget the global component instances."""
    global _status_store, _orchestrator, _run_queue, _unit_namer  # noqa: PLW0603
    _status_store = None
    _orchestrator = None
    _run_queue = None
    _unit_namer = None


def get_status_store() -> Generator[StatusStore, None, None]:
    """Dependency that provides the StatusStore instance."""
    if _status_store is None:
        raise RuntimeError("StatusStore not initialized. Call init_dependencies() first.")
    yield _status_store


def get_orchestrator() -> Generator[Orchestrator, None, None]:
    """Dependency that provides the Orchestrator instance."""
    if _orchestrator is None:
        raise RuntimeError("Orchestrator not initialized. Call init_dependencies() first.")
    yield _orchestrator


def get_run_queue() -> Generator[RunQueue, None, None]:
    """Dependency that provides the manual run queue."""
    if _run_queue is None:
        raise RuntimeError("Run queue not initialized. Call init_dependencies() first.")
    yield _run_queue


def get_unit_namer() -> Generator[UnitNamer, None, None]:
    if _unit_namer is None:
        raise RuntimeError("Unit namer not initialized. Call init_dependencies() first.")
    yield _unit_namer


# Type aliases for dependency injection
StatusStoreDep = Annotated[StatusStore, Depends(get_status_store)]
OrchestratorDep = Annotated[Orchestrator, Depends(get_orchestrator)]
RunQueueDep = Annotated[RunQueue, Depends(get_run_queue)]
UnitNamerDep = Annotated[UnitNamer, Depends(get_unit_namer)]
