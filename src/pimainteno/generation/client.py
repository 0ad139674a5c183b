"""GenerationClient - codex CLI integration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pimainteno.generation.exceptions import GenerationError
from pimainteno.generation.transcript import parse_output
from pimainteno.logging import sanitize_for_log, truncate_output
from pimainteno.process import run_command

if TYPE_CHECKING:
    from pimainteno.config import LLMConfig
    from pimainteno.generation.models import GenerationResult
    from pimainteno.projects import Project

logger = logging.getLogger("pimainteno.generation")

SUMMARIZE_INSTRUCTION = (
    "Summarise this project. Search all files, find every entry point, feature, "
    "and important detail, then return a comprehensive summary."
)

PATCH_INSTRUCTION = (
    "Based on the current code in this directory, generate a minimal patch in "
    "unified diff format to improve code quality. Only output the diff."
)

COMMIT_MESSAGE_INSTRUCTION = (
    "Write a concise git commit message for the following diff. Use a short "
    "imperative subject line, optionally followed by a blank line and a brief "
    "body. Only output the commit message."
)


class GenerationClient:
    """Invokes the code-generation agent as a subprocess.

    Each operation runs the agent once in the project directory with a fixed
    instruction and returns the assistant's answer extracted from its JSON
    transcript. Retrying is left to the caller.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the Generation Client.

        Args:
            config: Agent command, provider and timeout settings.
        """
        self.config = config

    def build_command(self, instruction: str, *flags: str) -> list[str]:
        """Build the agent command line for an instruction."""
        return [
            self.config.command,
            *self.config.extra_args,
            *flags,
            "--provider",
            self.config.provider,
            instruction,
        ]

    def summarize(self, project: Project) -> GenerationResult:
        """Ask the agent for a comprehensive summary of the project.

        The previous summary file is not fed back to the agent.
        """
        logger.info("Summarizing project %s", project)
        return self._run(project, self.build_command(SUMMARIZE_INSTRUCTION, "--no-project-doc"))

    def generate_patch(self, project: Project) -> GenerationResult:
        """Ask the agent for a quality-improvement patch as a unified diff."""
        logger.info("Generating patch for project %s", project)
        return self._run(project, self.build_command(PATCH_INSTRUCTION))

    def generate_commit_message(self, project: Project, diff: str) -> GenerationResult:
        """Ask the agent to describe a diff as a commit message."""
        logger.info("Generating commit message for project %s", project)
        instruction = f"{COMMIT_MESSAGE_INSTRUCTION}\n\n{diff}"
        return self._run(project, self.build_command(instruction))

    def _run(self, project: Project, cmd: list[str]) -> GenerationResult:
        """Run the agent and extract its answer.

        Raises:
            GenerationError: On non-zero exit, timeout, or non-UTF-8 output.
        """
        result = run_command(cmd, cwd=project.path, timeout=self.config.timeout_seconds)
        if not result.ok:
            stderr = sanitize_for_log(truncate_output(result.stderr.strip()))
            logger.error(
                "%s exited with status %d for %s: %s",
                self.config.command,
                result.returncode,
                project,
                stderr,
            )
            raise GenerationError(
                f"{self.config.command} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        try:
            raw = result.stdout_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error("%s produced non-UTF-8 output for %s", self.config.command, project)
            raise GenerationError(
                f"{self.config.command} output is not valid UTF-8: {e}",
                returncode=result.returncode,
                stderr=result.stderr,
            ) from e

        parsed = parse_output(raw)
        if parsed.degraded:
            logger.warning(
                "No assistant text in %s transcript for %s; using raw output",
                self.config.command,
                project,
            )
        logger.debug(
            "Agent answer (%d chars): %s", len(parsed.text), truncate_output(parsed.text, 500)
        )
        return parsed
