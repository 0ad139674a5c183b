"""Extraction of a unified diff from noisy agent output."""

from __future__ import annotations

import re

# CSI sequences (colors, cursor movement), OSC sequences (titles, hyperlinks)
# and the remaining two-character ESC sequences
_ANSI_ESCAPE = re.compile(
    r"""
    \x1b\[[0-?]*[ -/]*[@-~]
    | \x1b\][^\x07\x1b]*(?:\x07|\x1b\\)
    | \x1b[@-Z\\-_]
    """,
    re.VERBOSE,
)

DIFF_START_PREFIXES = ("diff ", "--- ", "+++ ", "@@", "index ")
FENCE = "```"
_HUNK_HEADER = re.compile(r"@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@")


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences."""
    return _ANSI_ESCAPE.sub("", text)


def is_diff_start(line: str) -> bool:
    """Whether a line can open a unified diff."""
    return line.startswith(DIFF_START_PREFIXES)


def _diff_end(lines: list[str]) -> int:
    """Index just past the last line that belongs to the diff.

    Lines inside a hunk are counted against the header's line counts, so a
    blank context line whose leading space was dropped still counts as content.
    Blank lines after the last hunk is complete do not.
    """
    end = 0
    old_left = new_left = 0
    for index, line in enumerate(lines):
        header = _HUNK_HEADER.match(line)
        if header:
            old_left = int(header.group(1) or 1)
            new_left = int(header.group(2) or 1)
            end = index + 1
        elif old_left > 0 or new_left > 0:
            if line.startswith("-"):
                old_left -= 1
            elif line.startswith("+"):
                new_left -= 1
            elif not line.startswith("\\"):
                old_left -= 1
                new_left -= 1
            end = index + 1
        elif line.strip():
            end = index + 1
    return end


def clean(raw_text: str) -> str:
    """Reduce agent output to a directly appliable unified diff.

    Commentary before the first diff line is dropped, as is everything from the
    first code fence after the diff has started. Line endings are kept, so diffs
    against CRLF files still apply.

    Args:
        raw_text: Agent output, possibly fenced and colored.

    Returns:
        The diff ending in exactly one line terminator, or "" if no diff was found.
    """
    lines = strip_ansi(raw_text).split("\n")

    kept: list[str] = []
    started = False
    for line in lines:
        if not started:
            if not is_diff_start(line):
                continue
            started = True
        elif line.startswith(FENCE):
            break
        kept.append(line)

    kept = kept[: _diff_end(kept)]
    if not kept:
        return ""
    return "\n".join(kept) + "\n"
