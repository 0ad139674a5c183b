"""Scheduler - Timer-driven and manually requested maintenance passes."""

from pimainteno.scheduler.scheduler import ManualRunQueue, PeriodicRunner

__all__ = [
    "ManualRunQueue",
    "PeriodicRunner",
]
