"""Integration tests: cleaned agent diffs apply with real git."""

import subprocess
from pathlib import Path

import pytest

from pimainteno.git_manager import GitManager
from pimainteno.patcher import clean


def _git(cwd: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    ).stdout.strip()


def _commit_file(repo: Path, name: str, content: bytes) -> None:
    (repo / name).write_bytes(content)
    _git(repo, "add", name)
    _git(repo, "commit", "-m", f"Add {name}")


def _apply_check(repo: Path, patch: str) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(
        ["git", "apply", "--check", "-"],
        cwd=repo,
        input=patch.encode("utf-8"),
        capture_output=True,
        check=False,
    )


@pytest.mark.integration
class TestCleanedDiffApplies:
    """clean() output is accepted by git apply as-is."""

    def test_empty_last_context_line(self, git_repo: Path) -> None:
        _commit_file(git_repo, "cfg.txt", b"a\nb\n\n")
        raw = (
            "Here is the fix:\n"
            "```diff\n"
            "--- a/cfg.txt\n"
            "+++ b/cfg.txt\n"
            "@@ -1,3 +1,3 @@\n"
            "-a\n"
            "+A\n"
            " b\n"
            "\n"
            "```\n"
        )

        patch = clean(raw)
        result = _apply_check(git_repo, patch)

        assert result.returncode == 0, result.stderr.decode()
        GitManager(git_repo).apply(patch)
        assert (git_repo / "cfg.txt").read_bytes() == b"A\nb\n\n"

    def test_crlf_file(self, git_repo: Path) -> None:
        _commit_file(git_repo, "cfg.txt", b"a\r\nb\r\n\r\n")
        raw = (
            "```diff\n"
            "--- a/cfg.txt\n"
            "+++ b/cfg.txt\n"
            "@@ -1,3 +1,3 @@\n"
            "-a\r\n"
            "+A\r\n"
            " b\r\n"
            " \r\n"
            "```\n"
        )

        patch = clean(raw)
        result = _apply_check(git_repo, patch)

        assert result.returncode == 0, result.stderr.decode()
        GitManager(git_repo).apply(patch)
        assert (git_repo / "cfg.txt").read_bytes() == b"A\r\nb\r\n\r\n"
