"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pimainteno.api.dependencies import close_dependencies, init_dependencies
from pimainteno.api.models import APIResponse
from pimainteno.api.routes import projects, run
from pimainteno.api.routes import status as status_routes
from pimainteno.projects import ProjectNotFoundError
from pimainteno.status_store import StatusStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from pimainteno.api.dependencies import Orchestrator, RunQueue, UnitNamer
    from pimainteno.status_store import StatusStore


def create_app(
    status_store: StatusStore,
    orchestrator: Orchestrator,
    run_queue: RunQueue,
    unit_namer: UnitNamer,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The components are wired into the dependency layer when the app starts
    and released when it shuts down.
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        init_dependencies(status_store, orchestrator, run_queue, unit_namer)
        yield
        close_dependencies()

    app = FastAPI(
        title="PiMainteno API",
        description="Status and manual trigger API for the PiMainteno maintainer daemon",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found_handler(
        _request: Request, _exc: ProjectNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Project not found").model_dump(),
        )

    @app.exception_handler(StatusStoreError)
    async def status_store_error_handler(
        _request: Request, _exc: StatusStoreError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=APIResponse[None](data=None, error="Status store unavailable").model_dump(),
        )

    app.include_router(status_routes.router, prefix="/api/v1")
    app.include_router(projects.router, prefix="/api/v1")
    app.include_router(run.router, prefix="/api/v1")

    return app
