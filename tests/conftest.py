"""Shared pytest fixtures and configuration."""

import logging
import shutil
import subprocess
from pathlib import Path

import pytest

from pimainteno.logging import ATTACHED_LOGGERS
from pimainteno.status_store import StatusStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers a test installed on the daemon loggers."""
    yield
    for name in ATTACHED_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


@pytest.fixture
def store():
    """Create an in-memory StatusStore."""
    s = StatusStore(":memory:")
    yield s
    s.close()


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A working tree with one commit, pushing to a local bare remote."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    remote = tmp_path / "remote.git"
    _git(tmp_path, "init", "--bare", "-b", "main", str(remote))

    repo = tmp_path / "weather-bot"
    repo.mkdir()
    _git(repo, "init", "-b", "main")
    _git(repo, "config", "user.email", "maintainer@example.com")
    _git(repo, "config", "user.name", "Maintainer")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "app.py").write_text("def main():\n    print('hello')\n")
    _git(repo, "add", "-A")
    _git(repo, "commit", "-m", "Initial commit")
    _git(repo, "remote", "add", "origin", str(remote))
    _git(repo, "push", "-u", "origin", "main")
    return repo
