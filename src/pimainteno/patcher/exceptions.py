"""Exceptions for the Patcher module."""


class PatcherError(Exception):
    """Base exception for patcher errors."""

    pass


class PatchApplyError(PatcherError):
    """Patch was empty or rejected by git."""

    pass
