"""Subprocess execution with explicit timeouts and structured results.

Every external tool the daemon drives (the generation agent, git, systemctl)
goes through :func:`run_command`. Failures are reported in the returned
:class:`CommandResult` rather than raised, so callers decide what a non-zero
exit status means for them.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger("pimainteno.process")

# Conventional shell exit statuses for the two ways a command can fail to finish
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command.

    Attributes:
        args: The command line that was run.
        returncode: Process exit status (124 on timeout, 127 if it could not start).
        stdout_bytes: Raw captured standard output.
        stderr_bytes: Raw captured standard error.
        timed_out: Whether the command was killed for exceeding its timeout.
    """

    args: tuple[str, ...]
    returncode: int
    stdout_bytes: bytes = b""
    stderr_bytes: bytes = b""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stdout(self) -> str:
        return self.stdout_bytes.decode("utf-8", errors="replace")

    @property
    def stderr(self) -> str:
        return self.stderr_bytes.decode("utf-8", errors="replace")

    def describe(self) -> str:
        """One-line diagnostic including both output streams."""
        return (
            f"'{' '.join(self.args[:2])}' exited with status {self.returncode}; "
            f"stdout: {self.stdout.strip()!r}; stderr: {self.stderr.strip()!r}"
        )


def _as_bytes(value: bytes | str | None) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def run_command(
    args: Sequence[str],
    cwd: str | Path | None = None,
    input_text: str | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run a command to completion, capturing its output.

    Args:
        args: Command and arguments.
        cwd: Working directory.
        input_text: Text fed to the command's standard input.
        timeout: Seconds before the command is killed; None waits forever.

    Returns:
        CommandResult describing how the command finished.
    """
    argv = tuple(str(a) for a in args)
    logger.debug("Running %s (cwd=%s, timeout=%s)", argv[0], cwd, timeout)
    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            input=input_text.encode("utf-8") if input_text is not None else None,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.error("%s timed out after %s seconds", argv[0], timeout)
        return CommandResult(
            args=argv,
            returncode=EXIT_TIMEOUT,
            stdout_bytes=_as_bytes(e.stdout),
            stderr_bytes=_as_bytes(e.stderr) or f"timed out after {timeout} seconds".encode(),
            timed_out=True,
        )
    except FileNotFoundError as e:
        logger.error("%s could not be started: %s", argv[0], e)
        return CommandResult(
            args=argv,
            returncode=EXIT_NOT_FOUND,
            stderr_bytes=f"{argv[0]}: not found ({e})".encode(),
        )
    except OSError as e:
        logger.error("Failed to execute %s: %s", argv[0], e)
        return CommandResult(
            args=argv,
            returncode=EXIT_NOT_FOUND,
            stderr_bytes=f"{argv[0]}: {e}".encode(),
        )

    return CommandResult(
        args=argv,
        returncode=completed.returncode,
        stdout_bytes=completed.stdout or b"",
        stderr_bytes=completed.stderr or b"",
    )
