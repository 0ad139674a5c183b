"""Custom exceptions for Git Manager."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pimainteno.process import CommandResult


class GitManagerError(Exception):
    """Base exception for Git Manager errors.

    Carries the failed command's result, when there is one, for diagnosis.
    """

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class ApplyError(GitManagerError):
    """Patch could not be applied to the working tree."""


class StageError(GitManagerError):
    """Changes could not be staged."""


class CommitError(GitManagerError):
    """Commit failed (including 'nothing to commit')."""


class PushError(GitManagerError):
    """Error pushing to remote."""


class RevParseError(GitManagerError):
    """HEAD could not be resolved."""
