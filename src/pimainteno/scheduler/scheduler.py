"""Background threads that start maintenance passes."""

from __future__ import annotations

import logging
import queue
import threading
from typing import TYPE_CHECKING

from pimainteno.orchestrator import PipelineError

if TYPE_CHECKING:
    from pimainteno.orchestrator import MaintenanceOrchestrator

logger = logging.getLogger("pimainteno.scheduler")


class PeriodicRunner:
    """Runs a pass immediately and then once per interval while enabled.

    The loop ends when the orchestrator is disabled or the stop event is set.
    A failed pass is logged and the loop waits for its next tick.
    """

    def __init__(
        self,
        orchestrator: MaintenanceOrchestrator,
        interval_seconds: float,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the Periodic Runner.

        Args:
            orchestrator: Orchestrator whose passes are scheduled.
            interval_seconds: Pause between the end of one pass and the next.
            stop_event: Shared shutdown signal; a private one is created if omitted.
        """
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self.stop_event = stop_event or threading.Event()
        self._thread: threading.Thread | None = None
        self.passes = 0

    def run(self) -> None:
        """Loop in the calling thread until stopped or disabled."""
        logger.info("Periodic maintenance every %s seconds", self.interval_seconds)
        while not self.stop_event.is_set():
            if not self.orchestrator.is_enabled():
                break
            try:
                report = self.orchestrator.run_once_if_enabled(self.stop_event)
            except PipelineError as e:
                logger.error("Scheduled maintenance pass failed: %s", e)
            else:
                if report is None:
                    break
                self.passes += 1
            self.stop_event.wait(self.interval_seconds)
        logger.info("Periodic maintenance stopped")

    def start(self) -> threading.Thread:
        """Run the loop in a daemon thread."""
        thread = threading.Thread(target=self.run, name="pimainteno-timer", daemon=True)
        thread.start()
        self._thread = thread
        return thread

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to stop and wait for it."""
        self.stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


class ManualRunQueue:
    """Accepts manual run requests and executes them one at a time.

    Requests are acknowledged immediately. At most one request waits behind
    the pass in flight; further requests join the waiting one.
    """

    def __init__(
        self,
        orchestrator: MaintenanceOrchestrator,
        stop_event: threading.Event | None = None,
        poll_seconds: float = 0.5,
    ) -> None:
        self.orchestrator = orchestrator
        self.stop_event = stop_event or threading.Event()
        self.poll_seconds = poll_seconds
        self._requests: queue.Queue[str] = queue.Queue(maxsize=1)
        self._thread: threading.Thread | None = None
        self.completed = 0

    @property
    def pending(self) -> bool:
        """Whether a request is waiting to run."""
        return not self._requests.empty()

    def submit(self, source: str = "api") -> bool:
        """Request one maintenance pass.

        Returns:
            True if a new request was queued, False if it joined a waiting one.
        """
        try:
            self._requests.put_nowait(source)
        except queue.Full:
            logger.info("Manual run requested by %s joins the pending request", source)
            return False
        logger.info("Manual run requested by %s", source)
        return True

    def process_next(self, timeout: float | None = None) -> bool:
        """Run the next waiting request, if one arrives within ``timeout``.

        Returns:
            Whether a request was taken off the queue.
        """
        try:
            source = self._requests.get(timeout=timeout)
        except queue.Empty:
            return False
        try:
            logger.info("Starting manual maintenance pass (requested by %s)", source)
            self.orchestrator.run_once(self.stop_event)
            self.completed += 1
        except PipelineError as e:
            logger.error("Manual maintenance pass failed: %s", e)
        finally:
            self._requests.task_done()
        return True

    def run(self) -> None:
        """Serve requests in the calling thread until stopped."""
        while not self.stop_event.is_set():
            self.process_next(timeout=self.poll_seconds)

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="pimainteno-manual", daemon=True)
        thread.start()
        self._thread = thread
        return thread

    def stop(self, timeout: float | None = None) -> None:
        self.stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
