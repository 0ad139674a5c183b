"""Exceptions for the Generation Client."""


class GenerationError(Exception):
    """The agent could not produce a usable answer.

    Attributes:
        returncode: Agent exit status, or None if it exited cleanly with unusable output.
        stderr: Captured standard error.
    """

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
