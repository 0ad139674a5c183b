"""PatchApplier - Lands a sanitized diff in a project's repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pimainteno.git_manager import ApplyError, GitManager
from pimainteno.patcher.exceptions import PatchApplyError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pimainteno.projects import Project

logger = logging.getLogger("pimainteno.patcher")


class PatchApplier:
    """Applies patches and publishes them with git.

    No rollback is attempted: ``git apply`` either applies the whole diff or
    leaves the working tree as it was.
    """

    def __init__(
        self,
        timeout: float | None = 120.0,
        remote: str | None = None,
        branch: str | None = None,
        git_manager_factory: Callable[..., GitManager] = GitManager,
    ) -> None:
        """Initialize the Patch Applier.

        Args:
            timeout: Seconds allowed per git command.
            remote: Remote to push to; git's default when None.
            branch: Branch to push; git's default when None.
            git_manager_factory: Builds the GitManager for a working tree.
        """
        self.timeout = timeout
        self.remote = remote
        self.branch = branch
        self._git_manager_factory = git_manager_factory

    def _git(self, path: Path) -> GitManager:
        return self._git_manager_factory(
            path, timeout=self.timeout, remote=self.remote, branch=self.branch
        )

    def apply(self, project: Project, patch: str) -> None:
        """Apply a sanitized diff to the project's working tree.

        Args:
            project: Target project.
            patch: Non-empty unified diff.

        Raises:
            PatchApplyError: If the patch is empty or git rejects it.
        """
        if not patch.strip():
            raise PatchApplyError(f"Refusing to apply an empty patch to {project}")
        try:
            self._git(project.path).apply(patch)
        except ApplyError as e:
            raise PatchApplyError(str(e)) from e

    def commit_and_push(self, project: Project, message: str) -> None:
        """Stage everything, commit with ``message`` and push.

        Raises:
            StageError: If staging fails.
            CommitError: If committing fails.
            PushError: If pushing fails.
        """
        git = self._git(project.path)
        git.stage_all()
        git.commit(message)
        git.push()
        logger.info("Committed and pushed %s", project)
