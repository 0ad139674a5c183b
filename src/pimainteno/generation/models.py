"""Data models for the Generation Client."""

from dataclasses import dataclass
from enum import StrEnum


class ResultKind(StrEnum):
    """How the agent's answer was obtained."""

    STRUCTURED = "structured"
    RAW_FALLBACK = "raw_fallback"


@dataclass(frozen=True)
class GenerationResult:
    """The agent's textual answer.

    Attributes:
        text: Assistant text, or the raw output when the transcript was unusable.
        kind: Whether ``text`` came from the parsed transcript or the raw fallback.
    """

    text: str
    kind: ResultKind

    @property
    def degraded(self) -> bool:
        return self.kind is ResultKind.RAW_FALLBACK
