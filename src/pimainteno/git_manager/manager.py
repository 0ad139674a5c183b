"""GitManager - Runs git in a project's working tree."""

from __future__ import annotations

import logging
from pathlib import Path

from pimainteno.git_manager.exceptions import (
    ApplyError,
    CommitError,
    PushError,
    RevParseError,
    StageError,
)
from pimainteno.logging import sanitize_for_log
from pimainteno.process import CommandResult, run_command

logger = logging.getLogger("pimainteno.git_manager")


class GitManager:
    """Manages git operations for one project's working tree.

    Every call runs ``git`` in the project directory with a timeout. A non-zero
    exit status is turned into the matching GitManagerError subclass.
    """

    def __init__(
        self,
        repo_path: str | Path,
        timeout: float | None = 120.0,
        remote: str | None = None,
        branch: str | None = None,
    ) -> None:
        """Initialize Git Manager.

        Args:
            repo_path: Path to the local working tree
            timeout: Seconds allowed per git command
            remote: Remote to push to (git's default when None)
            branch: Branch to push (git's default when None; requires remote)
        """
        self.repo_path = Path(repo_path)
        self.timeout = timeout
        self.remote = remote
        self.branch = branch

    def _run_git(self, *args: str, input_text: str | None = None) -> CommandResult:
        """Run a git command in the repo directory.

        Args:
            *args: Git command arguments
            input_text: Text piped to git's standard input

        Returns:
            The command result; callers check ``ok``
        """
        return run_command(
            ["git", *args],
            cwd=self.repo_path,
            input_text=input_text,
            timeout=self.timeout,
        )

    def apply(self, patch: str) -> None:
        """Apply a unified diff to the working tree, fixing whitespace errors.

        git either applies the whole diff or leaves the tree untouched.

        Args:
            patch: Unified diff text, fed via stdin

        Raises:
            ApplyError: If git rejects the patch
        """
        logger.info("Applying patch to %s (%d bytes)", self.repo_path, len(patch))
        # A trailing CR is a line ending, not whitespace to fix
        result = self._run_git(
            "-c", "core.whitespace=cr-at-eol", "apply", "--whitespace=fix", "-", input_text=patch
        )
        if not result.ok:
            logger.error("git apply failed in %s: %s", self.repo_path, result.stderr.strip())
            raise ApplyError(
                f"Failed to apply patch in '{self.repo_path}': "
                f"stdout: {result.stdout.strip()} stderr: {result.stderr.strip()}",
                result,
            )
        logger.info("Applied patch to %s", self.repo_path)

    def stage_all(self) -> None:
        """Stage every change in the working tree.

        Raises:
            StageError: If git add fails
        """
        result = self._run_git("add", "-A")
        if not result.ok:
            logger.error("git add failed in %s: %s", self.repo_path, result.stderr.strip())
            raise StageError(f"Failed to stage changes: {result.stderr.strip()}", result)

    def commit(self, message: str) -> None:
        """Commit staged changes.

        Raises:
            CommitError: If git commit fails
        """
        subject = message.splitlines()[0] if message else ""
        logger.info("Committing in %s: %s", self.repo_path, subject)
        result = self._run_git("commit", "-m", message)
        if not result.ok:
            detail = result.stderr.strip() or result.stdout.strip()
            logger.error("git commit failed in %s: %s", self.repo_path, detail)
            raise CommitError(f"Failed to commit: {detail}", result)

    def push(self) -> None:
        """Push the current branch.

        Raises:
            PushError: If push fails
        """
        args = ["push"]
        if self.remote:
            args.append(self.remote)
            if self.branch:
                args.append(self.branch)
        logger.info("Pushing %s (%s)", self.repo_path, " ".join(args[1:]) or "default remote")
        result = self._run_git(*args)
        if not result.ok:
            detail = sanitize_for_log(result.stderr.strip())
            logger.error("git push failed in %s: %s", self.repo_path, detail)
            raise PushError(f"Failed to push: {detail}", result)
        logger.info("Pushed %s", self.repo_path)

    def rev_parse_head(self) -> str:
        """Resolve HEAD to a revision id.

        Raises:
            RevParseError: If HEAD cannot be resolved
        """
        result = self._run_git("rev-parse", "HEAD")
        revision = result.stdout.strip()
        if not result.ok or not revision:
            raise RevParseError(
                f"Failed to resolve HEAD in '{self.repo_path}': {result.stderr.strip()}",
                result,
            )
        return revision
