"""ServiceRestarter - Restarts a project's systemd unit after a push."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pimainteno.process import run_command

if TYPE_CHECKING:
    from pimainteno.config import ServicesConfig
    from pimainteno.projects import Project

logger = logging.getLogger("pimainteno.services.restarter")


class ServiceRestarter:
    """Restarts the service unit named after a project's directory.

    Failures are logged and reported as False; they never propagate.
    """

    def __init__(self, config: ServicesConfig) -> None:
        self.config = config

    def unit_name(self, project: Project) -> str:
        """Derive the unit name, e.g. ``/srv/weather-bot`` -> ``weather-bot.service``."""
        return f"{project.name}{self.config.unit_suffix}"

    def build_command(self, unit: str) -> list[str]:
        cmd = ["systemctl"]
        if self.config.user:
            cmd.append("--user")
        cmd.extend(["restart", unit])
        if self.config.use_sudo:
            cmd = ["sudo", "-n", *cmd]
        return cmd

    def restart(self, project: Project) -> bool:
        """Restart the project's unit.

        Returns:
            Whether the service manager reported success.
        """
        unit = self.unit_name(project)
        logger.info("Restarting %s for %s", unit, project)
        result = run_command(self.build_command(unit), timeout=self.config.timeout_seconds)
        if not result.ok:
            logger.error("Failed to restart %s: %s", unit, result.describe())
            return False
        logger.info("Restarted %s", unit)
        return True
