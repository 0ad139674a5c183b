"""Generation Client - Drives the external code-generation agent."""

from pimainteno.generation.client import GenerationClient
from pimainteno.generation.exceptions import GenerationError
from pimainteno.generation.models import GenerationResult, ResultKind
from pimainteno.generation.transcript import extract_assistant_text, parse_output

__all__ = [
    "GenerationClient",
    "GenerationError",
    "GenerationResult",
    "ResultKind",
    "extract_assistant_text",
    "parse_output",
]
