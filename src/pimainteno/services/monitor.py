"""SystemdMonitor - Placeholder listener for unit failures.

Only publishes its own liveness to the status store; detecting failed units
and reacting to them is not implemented.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from pimainteno.status_store import StatusStoreError, keys

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from pimainteno.config import SystemdMonitorConfig
    from pimainteno.status_store import StatusStore

logger = logging.getLogger("pimainteno.services.monitor")


class SystemdMonitor:
    """Publishes ``systemd.*`` status keys on a fixed poll interval."""

    def __init__(
        self,
        config: SystemdMonitorConfig,
        status_store: StatusStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.status_store = status_store
        self._clock = clock

    def listen(self, stop_event: threading.Event) -> None:
        """Run until ``stop_event`` is set, or return at once when disabled."""
        if not self.config.enabled:
            self.status_store.insert(keys.SYSTEMD_STATUS, "disabled")
            return

        self.status_store.insert(keys.SYSTEMD_STATUS, "listening")
        self.status_store.insert(keys.SYSTEMD_FAILURES, "[]")
        logger.info("SystemdMonitor listening for failures of %s", list(self.config.units))

        while not stop_event.is_set():
            try:
                self.status_store.insert(keys.SYSTEMD_LAST_CHECKED, str(int(self._clock())))
            except StatusStoreError as e:
                logger.error("SystemdMonitor could not record heartbeat: %s", e)
            stop_event.wait(self.config.poll_seconds)

        self.status_store.insert(keys.SYSTEMD_STATUS, "stopped")
        logger.info("SystemdMonitor stopped")
