"""Unit tests for subprocess execution."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pimainteno.process import EXIT_NOT_FOUND, EXIT_TIMEOUT, CommandResult, run_command


@pytest.mark.unit
class TestRunCommand:
    """Tests for run_command."""

    def test_passes_arguments(self) -> None:
        completed = MagicMock(returncode=0, stdout=b"out", stderr=b"")

        with patch("pimainteno.process.subprocess.run", return_value=completed) as mock_run:
            result = run_command(["git", "status"], cwd="/srv/app", input_text="diff", timeout=5)

        mock_run.assert_called_once_with(
            ("git", "status"),
            cwd="/srv/app",
            input=b"diff",
            capture_output=True,
            timeout=5,
            check=False,
        )
        assert result.ok
        assert result.stdout == "out"

    def test_non_zero_exit_is_returned(self) -> None:
        completed = MagicMock(returncode=3, stdout=b"", stderr=b"boom")

        with patch("pimainteno.process.subprocess.run", return_value=completed):
            result = run_command(["false"])

        assert not result.ok
        assert result.returncode == 3
        assert result.stderr == "boom"

    def test_timeout_becomes_result(self) -> None:
        with patch(
            "pimainteno.process.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="codex", timeout=1, output=b"partial"),
        ):
            result = run_command(["codex"], timeout=1)

        assert result.timed_out
        assert result.returncode == EXIT_TIMEOUT
        assert result.stdout == "partial"
        assert "timed out" in result.stderr

    def test_missing_executable_becomes_result(self) -> None:
        with patch(
            "pimainteno.process.subprocess.run",
            side_effect=FileNotFoundError("No such file or directory: 'codex'"),
        ):
            result = run_command(["codex"])

        assert result.returncode == EXIT_NOT_FOUND
        assert "codex" in result.stderr

    def test_os_error_becomes_result(self) -> None:
        with patch(
            "pimainteno.process.subprocess.run", side_effect=PermissionError("Permission denied")
        ):
            result = run_command(["systemctl"])

        assert not result.ok
        assert "Permission denied" in result.stderr


@pytest.mark.unit
class TestCommandResult:
    """Tests for CommandResult."""

    def test_invalid_utf8_is_replaced_in_text_view(self) -> None:
        result = CommandResult(args=("codex",), returncode=0, stdout_bytes=b"ok \xff")

        assert result.stdout == "ok �"

    def test_describe_includes_streams(self) -> None:
        result = CommandResult(
            args=("git", "apply", "-"), returncode=1, stdout_bytes=b"o", stderr_bytes=b"e"
        )

        description = result.describe()

        assert "status 1" in description
        assert "'o'" in description
        assert "'e'" in description
