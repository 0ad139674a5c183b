"""Patcher - Cleans agent output into a diff and lands it in the repository."""

from pimainteno.patcher.applier import PatchApplier
from pimainteno.patcher.exceptions import PatchApplyError, PatcherError
from pimainteno.patcher.sanitizer import clean

__all__ = [
    "PatchApplier",
    "PatchApplyError",
    "PatcherError",
    "clean",
]
