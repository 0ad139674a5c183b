"""Allow ``python -m pimainteno``."""

from pimainteno.cli import app

app()
