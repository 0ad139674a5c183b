"""Maintained projects as supplied by configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Project:
    """A project working tree the daemon maintains.

    Attributes:
        path: Filesystem path of the working tree.
    """

    path: Path

    @classmethod
    def from_config(cls, path: str) -> Project:
        return cls(path=Path(path))

    @property
    def key(self) -> str:
        """Identifier used in status store keys and logs."""
        return str(self.path)

    @property
    def name(self) -> str:
        """Last path segment; also the base of the service unit name."""
        return self.path.name

    def exists(self) -> bool:
        return self.path.exists()

    def __str__(self) -> str:
        return self.key


class ProjectNotFoundError(LookupError):
    """No configured project matches the given name or path."""


def find_project(projects: list[Project], name: str) -> Project:
    """Find a configured project by directory name or full path.

    Raises:
        ProjectNotFoundError: If nothing matches.
    """
    for project in projects:
        if name in (project.name, project.key):
            return project
    raise ProjectNotFoundError(f"Project '{name}' is not configured")
