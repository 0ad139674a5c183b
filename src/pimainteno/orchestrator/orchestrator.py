"""MaintenanceOrchestrator - Drives every project through the maintenance pipeline."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pimainteno.generation import GenerationError
from pimainteno.git_manager import CommitError, PushError, StageError
from pimainteno.orchestrator.exceptions import PipelineError
from pimainteno.orchestrator.models import PassReport, ProjectOutcome, RunRecord, RunStatus
from pimainteno.patcher import PatchApplyError, clean
from pimainteno.projects import Project
from pimainteno.status_store import StatusStoreError, keys

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from pimainteno.change_oracle import ChangeOracle
    from pimainteno.generation import GenerationClient
    from pimainteno.patcher import PatchApplier
    from pimainteno.services import ServiceRestarter
    from pimainteno.status_store import StatusStore

logger = logging.getLogger("pimainteno.orchestrator")

DEFAULT_COMMIT_MESSAGE = "Automated code quality improvements"
SUMMARY_FILE = "codex.md"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def tidy_commit_message(text: str) -> str:
    """Strip code fences and surrounding quotes the agent may wrap a message in."""
    lines = [line for line in text.strip().splitlines() if not line.startswith("```")]
    message = "\n".join(lines).strip()
    if len(message) >= 2 and message[0] == message[-1] and message[0] in "\"'":
        message = message[1:-1].strip()
    return message


class MaintenanceOrchestrator:
    """Runs maintenance passes over the configured projects.

    A pass visits projects strictly in order. Whatever goes wrong inside one
    project is logged and recorded as that project's outcome; only clock or
    status store failures abandon the pass. One exclusive lock wraps every
    pass, so the timer loop and manual triggers can never interleave.
    """

    def __init__(
        self,
        projects: Iterable[str],
        status_store: StatusStore,
        change_oracle: ChangeOracle,
        generation_client: GenerationClient,
        patch_applier: PatchApplier,
        service_restarter: ServiceRestarter,
        enabled: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the Orchestrator.

        Args:
            projects: Project paths in the order they are maintained.
            status_store: Store for all observable state.
            change_oracle: Decides whether a project changed.
            generation_client: Talks to the code-generation agent.
            patch_applier: Applies, commits and pushes patches.
            service_restarter: Restarts project services after a push.
            enabled: Whether periodic passes are turned on.
            clock: Source of timestamps.
        """
        self.projects = [Project.from_config(p) for p in projects]
        self.status_store = status_store
        self.change_oracle = change_oracle
        self.generation_client = generation_client
        self.patch_applier = patch_applier
        self.service_restarter = service_restarter
        self._enabled = enabled
        self._clock = clock
        self._lock = threading.Lock()
        self._record: RunRecord | None = None

    # --- Control ---

    def is_enabled(self) -> bool:
        """Whether the periodic trigger should run passes."""
        return self._enabled

    def is_running(self) -> bool:
        """Whether a pass currently holds the lock."""
        return self._lock.locked()

    @property
    def run_record(self) -> RunRecord | None:
        """The in-flight pass, if any."""
        return self._record

    # --- Passes ---

    def run_once(self, stop_event: threading.Event | None = None) -> PassReport:
        """Run one maintenance pass over all projects, waiting for the lock.

        Args:
            stop_event: Checked between projects; once set, the remaining
                        projects are marked cancelled.

        Returns:
            The outcome of every project.

        Raises:
            PipelineError: If the clock or the status store fails.
        """
        with self._lock:
            return self._run_locked(stop_event)

    def run_once_if_enabled(self, stop_event: threading.Event | None = None) -> PassReport | None:
        """Run a pass unless scheduling was disabled while waiting for the lock.

        Returns:
            The pass report, or None if no pass was started.
        """
        with self._lock:
            if not self._enabled:
                logger.info("Scheduled maintenance disabled; not starting a pass")
                return None
            return self._run_locked(stop_event)

    def _now(self) -> datetime:
        try:
            return self._clock()
        except (OSError, OverflowError, ValueError) as e:
            raise PipelineError(f"Cannot read the clock: {e}") from e

    def _run_locked(self, stop_event: threading.Event | None) -> PassReport:
        started_at = self._now()
        self._record = RunRecord(started_at=started_at)
        report = PassReport(started_at=started_at)
        logger.info("Maintenance pass started for %d projects", len(self.projects))

        failed = False
        try:
            self.status_store.insert(keys.RUN_STATUS, RunStatus.RUNNING.value)
            self.status_store.insert(keys.RUN_LAST_START, started_at.isoformat())

            for index, project in enumerate(self.projects):
                if stop_event is not None and stop_event.is_set():
                    for remaining in self.projects[index:]:
                        report.outcomes[remaining.key] = ProjectOutcome.CANCELLED
                    logger.warning(
                        "Maintenance pass cancelled; %d projects not visited",
                        len(self.projects) - index,
                    )
                    break
                outcome = self._run_project(project)
                report.outcomes[project.key] = outcome
                self.status_store.insert(keys.outcome(project.key), outcome.value)
        except StatusStoreError as e:
            failed = True
            logger.error("Maintenance pass aborted: status store failure: %s", e)
            raise PipelineError(f"Status store failure: {e}") from e
        except PipelineError:
            failed = True
            raise
        finally:
            self._finish(report, failed)

        summary = ", ".join(f"{key}={outcome}" for key, outcome in report.outcomes.items())
        logger.info("Maintenance pass finished: %s", summary or "no projects")
        return report

    def _finish(self, report: PassReport, failed: bool) -> None:
        """Clear the run record, also when the pass is being abandoned."""
        record = self._record
        self._record = None
        try:
            finished_at = self._now()
            report.finished_at = finished_at
            if record is not None:
                record.finished_at = finished_at
                record.current_project = None
                record.status = RunStatus.IDLE
            self.status_store.insert(keys.RUN_CURRENT_PROJECT, "")
            self.status_store.insert(keys.RUN_STATUS, RunStatus.IDLE.value)
            self.status_store.insert(keys.RUN_LAST_END, finished_at.isoformat())
            self.status_store.flush()
        except (StatusStoreError, PipelineError) as e:
            if failed:
                # The pass is already propagating the original failure
                logger.error("Could not record end of maintenance pass: %s", e)
                return
            if isinstance(e, PipelineError):
                raise
            raise PipelineError(f"Status store failure: {e}") from e

    def _run_project(self, project: Project) -> ProjectOutcome:
        """Run one project's pipeline, containing any per-project failure."""
        if self._record is not None:
            self._record.current_project = project.key
        try:
            return self._maintain(project)
        except (StatusStoreError, PipelineError):
            raise
        except Exception:
            logger.exception("Unexpected error maintaining project %s", project)
            return ProjectOutcome.ERROR

    def _maintain(self, project: Project) -> ProjectOutcome:
        """The per-project pipeline; each early return ends only this project."""
        store = self.status_store
        store.insert(keys.RUN_CURRENT_PROJECT, project.key)
        logger.info("Maintaining project %s", project)

        if not project.exists():
            logger.warning("Project path %s does not exist; skipping", project)
            return ProjectOutcome.SKIPPED_MISSING

        fingerprint = self.change_oracle.fingerprint(project)
        if self.change_oracle.is_unchanged(project, fingerprint):
            logger.info("Project %s unchanged since %s; skipping", project, fingerprint)
            return ProjectOutcome.SKIPPED_UNCHANGED

        try:
            summary = self.generation_client.summarize(project)
        except GenerationError as e:
            logger.error("Summarization failed for %s: %s", project, e)
            return ProjectOutcome.SUMMARIZE_FAILED
        try:
            (project.path / SUMMARY_FILE).write_text(summary.text, encoding="utf-8")
        except OSError as e:
            logger.error("Could not write %s for %s: %s", SUMMARY_FILE, project, e)
            return ProjectOutcome.SUMMARIZE_FAILED
        store.insert(keys.summary(project.key), summary.text)
        if fingerprint is not None:
            self.change_oracle.record(project, fingerprint)

        try:
            generated = self.generation_client.generate_patch(project)
        except GenerationError as e:
            logger.error("Patch generation failed for %s: %s", project, e)
            return ProjectOutcome.PATCH_FAILED
        patch = clean(generated.text)
        if not patch:
            logger.info("No diff in agent output for %s; nothing to change", project)
            return ProjectOutcome.NO_CHANGES
        store.insert(keys.patch(project.key), patch)

        try:
            self.patch_applier.apply(project, patch)
        except PatchApplyError as e:
            logger.error("Patch did not apply to %s: %s", project, e)
            return ProjectOutcome.APPLY_FAILED

        message = self._commit_message(project, patch)

        try:
            self.patch_applier.commit_and_push(project, message)
        except StageError as e:
            logger.error("Staging failed for %s: %s", project, e)
            return ProjectOutcome.STAGE_FAILED
        except CommitError as e:
            logger.error("Commit failed for %s: %s", project, e)
            return ProjectOutcome.COMMIT_FAILED
        except PushError as e:
            logger.error("Push failed for %s: %s", project, e)
            return ProjectOutcome.PUSH_FAILED

        history = store.append_bounded(keys.commits(project.key), message, keys.COMMIT_LOG_LIMIT)
        logger.info("Pushed %s (%d commits recorded)", project, len(history))

        if not self.service_restarter.restart(project):
            return ProjectOutcome.RESTART_FAILED
        return ProjectOutcome.PUSHED

    def _commit_message(self, project: Project, patch: str) -> str:
        """Generate a commit message, falling back to a fixed one."""
        try:
            result = self.generation_client.generate_commit_message(project, patch)
        except GenerationError as e:
            logger.warning("Commit message generation failed for %s: %s", project, e)
            return DEFAULT_COMMIT_MESSAGE
        message = tidy_commit_message(result.text)
        if not message:
            logger.warning("Agent returned an empty commit message for %s", project)
            return DEFAULT_COMMIT_MESSAGE
        return message
