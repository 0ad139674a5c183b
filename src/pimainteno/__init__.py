"""PiMainteno - Self-healing code maintainer daemon."""

__version__ = "0.1.0"
