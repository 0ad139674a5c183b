"""Services - systemd units backing the maintained projects."""

from pimainteno.services.monitor import SystemdMonitor
from pimainteno.services.restarter import ServiceRestarter

__all__ = [
    "ServiceRestarter",
    "SystemdMonitor",
]
