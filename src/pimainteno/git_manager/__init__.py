"""Git Manager - Runs the git operations the maintenance pipeline needs."""

from pimainteno.git_manager.exceptions import (
    ApplyError,
    CommitError,
    GitManagerError,
    PushError,
    RevParseError,
    StageError,
)
from pimainteno.git_manager.manager import GitManager

__all__ = [
    "ApplyError",
    "CommitError",
    "GitManager",
    "GitManagerError",
    "PushError",
    "RevParseError",
    "StageError",
]
