"""ChangeOracle - Fingerprints projects by their git HEAD revision."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pimainteno.git_manager import GitManager, RevParseError
from pimainteno.status_store import keys

if TYPE_CHECKING:
    from pimainteno.projects import Project
    from pimainteno.status_store import StatusStore

logger = logging.getLogger("pimainteno.change_oracle")

_SYMBOLIC_PREFIX = "ref: "


def _read_packed_ref(git_dir: Path, ref_name: str) -> str | None:
    """Look a ref up in ``packed-refs``, which git uses once loose refs are packed."""
    packed = git_dir / "packed-refs"
    try:
        lines = packed.read_text(encoding="utf-8").splitlines()
    except OSError:
        return None
    for line in lines:
        if not line or line.startswith(("#", "^")):
            continue
        revision, _, name = line.partition(" ")
        if name.strip() == ref_name:
            return revision.strip()
    return None


def resolve_head(repo_path: Path) -> str | None:
    """Resolve ``.git/HEAD`` to a revision id by reading git's files directly.

    A symbolic HEAD (``ref: refs/heads/main``) is followed exactly one level.

    Returns:
        The revision id, or None if it cannot be determined from the files.
    """
    git_dir = repo_path / ".git"
    try:
        head = (git_dir / "HEAD").read_text(encoding="utf-8").strip()
    except OSError:
        return None

    if not head.startswith(_SYMBOLIC_PREFIX):
        return head or None

    ref_name = head[len(_SYMBOLIC_PREFIX) :].strip()
    try:
        revision = (git_dir / ref_name).read_text(encoding="utf-8").strip()
    except OSError:
        revision = _read_packed_ref(git_dir, ref_name) or ""
    return revision or None


class ChangeOracle:
    """Decides whether a project needs maintenance.

    A project needs work when its current fingerprint differs from the one
    recorded after its last successful summarization. When no fingerprint can
    be computed the project is never skipped.
    """

    def __init__(self, status_store: StatusStore, git_timeout: float | None = 30.0) -> None:
        """Initialize the Change Oracle.

        Args:
            status_store: Store holding the recorded fingerprints.
            git_timeout: Timeout for the ``git rev-parse`` fallback.
        """
        self.status_store = status_store
        self.git_timeout = git_timeout

    def fingerprint(self, project: Project) -> str | None:
        """Compute the project's current fingerprint.

        Returns:
            The HEAD revision id, or None when it is not available.
        """
        revision = resolve_head(project.path)
        if revision is not None:
            return revision

        # Worktrees and gitfile checkouts keep HEAD elsewhere; let git find it
        try:
            return GitManager(project.path, timeout=self.git_timeout).rev_parse_head()
        except RevParseError as e:
            logger.warning("No fingerprint for %s: %s", project, e)
            return None

    def should_skip(self, project: Project) -> bool:
        """Whether the project is unchanged since its last successful summary.

        Never writes to the store.
        """
        return self.is_unchanged(project, self.fingerprint(project))

    def is_unchanged(self, project: Project, fingerprint: str | None) -> bool:
        """Compare an already computed fingerprint with the recorded one."""
        if fingerprint is None:
            return False
        recorded = self.status_store.get(keys.summary_hash(project.key))
        return recorded == fingerprint

    def record(self, project: Project, fingerprint: str) -> None:
        """Persist the fingerprint the project was just summarized at."""
        self.status_store.insert(keys.summary_hash(project.key), fingerprint)
