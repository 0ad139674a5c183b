"""Daemon wiring: builds every component from the configuration and runs them."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import uvicorn

from pimainteno.api import create_app
from pimainteno.change_oracle import ChangeOracle
from pimainteno.generation import GenerationClient
from pimainteno.orchestrator import MaintenanceOrchestrator
from pimainteno.patcher import PatchApplier
from pimainteno.scheduler import ManualRunQueue, PeriodicRunner
from pimainteno.services import ServiceRestarter, SystemdMonitor
from pimainteno.status_store import StatusStore

if TYPE_CHECKING:
    from fastapi import FastAPI

    from pimainteno.config import Config
    from pimainteno.orchestrator import PassReport

logger = logging.getLogger("pimainteno.daemon")

THREAD_JOIN_TIMEOUT = 10.0


@dataclass
class Daemon:
    """All long-lived components of a running daemon."""

    config: Config
    status_store: StatusStore
    orchestrator: MaintenanceOrchestrator
    service_restarter: ServiceRestarter
    periodic_runner: PeriodicRunner
    run_queue: ManualRunQueue
    systemd_monitor: SystemdMonitor
    stop_event: threading.Event
    _threads: list[threading.Thread] = field(default_factory=list)

    def build_app(self) -> FastAPI:
        return create_app(
            self.status_store, self.orchestrator, self.run_queue, self.service_restarter
        )

    def run_one_shot(self) -> PassReport:
        """Run a single maintenance pass in the calling thread."""
        logger.info("Running one-shot maintenance pass")
        return self.orchestrator.run_once(self.stop_event)

    def start_background(self) -> None:
        """Start the timer loop, the manual run worker and the systemd monitor."""
        if self.orchestrator.is_enabled():
            self._threads.append(self.periodic_runner.start())
        else:
            logger.info("Scheduled maintenance disabled; only manual runs will happen")
        self._threads.append(self.run_queue.start())
        monitor = threading.Thread(
            target=self.systemd_monitor.listen,
            args=(self.stop_event,),
            name="pimainteno-systemd",
            daemon=True,
        )
        monitor.start()
        self._threads.append(monitor)

    def shutdown(self) -> None:
        """Stop background work at the next project boundary and close the store."""
        logger.info("Shutting down; waiting for the current project to finish")
        self.stop_event.set()
        for thread in self._threads:
            thread.join(THREAD_JOIN_TIMEOUT)
            if thread.is_alive():
                logger.warning("Thread %s still busy at shutdown", thread.name)
        self._threads.clear()
        self.status_store.close()

    def serve(self) -> None:
        """Run background work and serve the API until interrupted."""
        self.start_background()
        server = uvicorn.Server(
            uvicorn.Config(
                self.build_app(),
                host=self.config.web.host,
                port=self.config.web.port,
                log_config=None,
            )
        )
        logger.info("Serving API on %s:%d", self.config.web.host, self.config.web.port)
        try:
            server.run()
        finally:
            self.shutdown()


def build_daemon(config: Config) -> Daemon:
    """Construct every component, handing each only its slice of configuration."""
    status_store = StatusStore(config.cache.path)
    stop_event = threading.Event()

    service_restarter = ServiceRestarter(config.services)
    orchestrator = MaintenanceOrchestrator(
        projects=config.scheduler.projects,
        status_store=status_store,
        change_oracle=ChangeOracle(status_store, git_timeout=config.git.timeout_seconds),
        generation_client=GenerationClient(config.llm),
        patch_applier=PatchApplier(
            timeout=config.git.timeout_seconds,
            remote=config.scheduler.remote,
            branch=config.scheduler.branch,
        ),
        service_restarter=service_restarter,
        enabled=config.scheduler.enabled,
    )

    return Daemon(
        config=config,
        status_store=status_store,
        orchestrator=orchestrator,
        service_restarter=service_restarter,
        periodic_runner=PeriodicRunner(
            orchestrator, config.scheduler.interval_seconds, stop_event
        ),
        run_queue=ManualRunQueue(orchestrator, stop_event),
        systemd_monitor=SystemdMonitor(config.systemd_monitor, status_store),
        stop_event=stop_event,
    )
