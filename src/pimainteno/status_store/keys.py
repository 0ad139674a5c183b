"""Key namespace used in the Status Store.

Run-level keys are fixed strings; per-project keys are ``<prefix>.<project path>``.
"""

from __future__ import annotations

RUN_STATUS = "run.status"
RUN_LAST_START = "run.last_start"
RUN_LAST_END = "run.last_end"
RUN_CURRENT_PROJECT = "run.current_project"

SYSTEMD_STATUS = "systemd.status"
SYSTEMD_LAST_CHECKED = "systemd.last_checked"
SYSTEMD_FAILURES = "systemd.failures"

COMMIT_LOG_LIMIT = 50


def summary_hash(project_path: str) -> str:
    """Fingerprint recorded after the last successful summarization."""
    return f"summary_hash.{project_path}"


def summary(project_path: str) -> str:
    return f"summary.{project_path}"


def patch(project_path: str) -> str:
    """Last sanitized patch generated for the project."""
    return f"patch.{project_path}"


def commits(project_path: str) -> str:
    """JSON array of commit messages, newest last."""
    return f"commits.{project_path}"


def outcome(project_path: str) -> str:
    return f"outcome.{project_path}"
