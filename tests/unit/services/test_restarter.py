"""Unit tests for ServiceRestarter."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pimainteno.config import ServicesConfig
from pimainteno.process import CommandResult
from pimainteno.projects import Project
from pimainteno.services import ServiceRestarter

PROJECT = Project(Path("/srv/weather-bot"))


@pytest.mark.unit
class TestUnitName:
    """Tests for unit name derivation."""

    def test_default_suffix(self) -> None:
        assert ServiceRestarter(ServicesConfig()).unit_name(PROJECT) == "weather-bot.service"

    def test_custom_suffix(self) -> None:
        restarter = ServiceRestarter(ServicesConfig(unit_suffix="@pi.service"))

        assert restarter.unit_name(PROJECT) == "weather-bot@pi.service"


@pytest.mark.unit
class TestBuildCommand:
    """Tests for the systemctl command line."""

    def test_system_unit(self) -> None:
        cmd = ServiceRestarter(ServicesConfig()).build_command("weather-bot.service")

        assert cmd == ["systemctl", "restart", "weather-bot.service"]

    def test_user_unit_with_sudo(self) -> None:
        restarter = ServiceRestarter(ServicesConfig(user=True, use_sudo=True))

        assert restarter.build_command("x.service") == [
            "sudo",
            "-n",
            "systemctl",
            "--user",
            "restart",
            "x.service",
        ]


@pytest.mark.unit
class TestRestart:
    """Tests for restart."""

    def test_success(self) -> None:
        restarter = ServiceRestarter(ServicesConfig(timeout_seconds=5))

        with patch(
            "pimainteno.services.restarter.run_command",
            return_value=CommandResult(args=("systemctl",), returncode=0),
        ) as mock_run:
            assert restarter.restart(PROJECT) is True

        mock_run.assert_called_once_with(
            ["systemctl", "restart", "weather-bot.service"], timeout=5
        )

    def test_failure_returns_false(self) -> None:
        restarter = ServiceRestarter(ServicesConfig())

        with patch(
            "pimainteno.services.restarter.run_command",
            return_value=CommandResult(
                args=("systemctl",),
                returncode=5,
                stderr_bytes=b"Unit weather-bot.service not found.",
            ),
        ):
            assert restarter.restart(PROJECT) is False

    def test_missing_systemctl_returns_false(self) -> None:
        restarter = ServiceRestarter(ServicesConfig())

        with patch(
            "pimainteno.services.restarter.run_command",
            return_value=CommandResult(args=("systemctl",), returncode=127),
        ):
            assert restarter.restart(PROJECT) is False
