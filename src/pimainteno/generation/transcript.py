"""Parsing of the agent's line-oriented JSON transcript."""

from __future__ import annotations

import json
from typing import Any

from pimainteno.generation.models import GenerationResult, ResultKind

ASSISTANT_ROLE = "assistant"
OUTPUT_TEXT_TYPE = "output_text"


def _assistant_fragments(message: Any) -> list[str]:
    if not isinstance(message, dict) or message.get("role") != ASSISTANT_ROLE:
        return []
    content = message.get("content")
    if not isinstance(content, list):
        return []
    fragments = []
    for item in content:
        if not isinstance(item, dict) or item.get("type") != OUTPUT_TEXT_TYPE:
            continue
        text = item.get("text")
        if isinstance(text, str):
            fragments.append(text)
    return fragments


def extract_assistant_text(raw: str) -> str | None:
    """Concatenate assistant ``output_text`` fragments in transcript order.

    Lines that are not JSON objects are ignored.

    Returns:
        The stripped assistant text, or None if the transcript contains none.
    """
    collected: list[str] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            continue
        collected.extend(_assistant_fragments(message))

    if not collected:
        return None
    return "".join(collected).strip()


def parse_output(raw: str) -> GenerationResult:
    """Turn agent stdout into a tagged result, falling back to the raw text."""
    text = extract_assistant_text(raw)
    if text is None:
        return GenerationResult(text=raw, kind=ResultKind.RAW_FALLBACK)
    return GenerationResult(text=text, kind=ResultKind.STRUCTURED)
