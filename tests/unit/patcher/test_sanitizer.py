"""Unit tests for diff sanitization."""

import pytest

from pimainteno.patcher import clean
from pimainteno.patcher.sanitizer import is_diff_start, strip_ansi

DIFF = (
    "diff --git a/app.py b/app.py\n"
    "--- a/app.py\n"
    "+++ b/app.py\n"
    "@@ -1,2 +1,2 @@\n"
    " def main():\n"
    "-    print('hello')\n"
    "+    print(\"hello\")\n"
)


@pytest.mark.unit
class TestClean:
    """Tests for clean."""

    def test_plain_diff_unchanged(self) -> None:
        assert clean(DIFF) == DIFF

    def test_fenced_diff_with_commentary(self) -> None:
        raw = f"Here is the patch you asked for:\n\n```diff\n{DIFF}```\nLet me know!\n"

        assert clean(raw) == DIFF

    def test_ansi_colored_diff(self) -> None:
        colored = DIFF.replace("-    print", "\x1b[31m-    print").replace(
            "+    print", "\x1b[32m+    print"
        )
        colored = colored.replace("')\n", "')\x1b[0m\n")

        assert clean(colored) == DIFF

    def test_crlf_line_endings_kept(self) -> None:
        crlf = DIFF.replace("\n", "\r\n")

        assert clean(crlf) == crlf

    def test_trailing_blank_lines_trimmed(self) -> None:
        assert clean(DIFF + "\n\n\n") == DIFF

    def test_whitespace_context_line_kept(self) -> None:
        """A context line consisting of one space is diff content."""
        diff = "--- a/x\n+++ b/x\n@@ -1,3 +1,3 @@\n \n-a\n+b\n "

        assert clean(diff) == "--- a/x\n+++ b/x\n@@ -1,3 +1,3 @@\n \n-a\n+b\n \n"

    def test_empty_last_context_line_kept(self) -> None:
        """A blank context line that lost its space still closes the hunk."""
        raw = "```diff\n--- a/cfg.txt\n+++ b/cfg.txt\n@@ -1,3 +1,3 @@\n-a\n+A\n b\n\n```\n"

        assert clean(raw) == "--- a/cfg.txt\n+++ b/cfg.txt\n@@ -1,3 +1,3 @@\n-a\n+A\n b\n\n"

    def test_blank_lines_after_complete_hunk_trimmed(self) -> None:
        raw = "--- a/cfg.txt\n+++ b/cfg.txt\n@@ -1 +1 @@\n-a\n+A\n\n\n"

        assert clean(raw) == "--- a/cfg.txt\n+++ b/cfg.txt\n@@ -1 +1 @@\n-a\n+A\n"

    def test_indented_fence_is_content(self) -> None:
        diff = "--- a/README.md\n+++ b/README.md\n@@ -1 +1 @@\n-```py\n+```python\n"

        assert clean(diff) == diff

    def test_starts_at_hunk_header(self) -> None:
        raw = "Change:\n@@ -1 +1 @@\n-a\n+b\n"

        assert clean(raw) == "@@ -1 +1 @@\n-a\n+b\n"

    def test_no_diff(self) -> None:
        assert clean("I could not find anything to improve.") == ""

    def test_empty(self) -> None:
        assert clean("") == ""

    def test_fence_only(self) -> None:
        assert clean("```diff\n```\n") == ""


@pytest.mark.unit
class TestHelpers:
    """Tests for sanitizer helpers."""

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[1;32mok\x1b[0m \x1b]0;title\x07done") == "ok done"

    def test_is_diff_start(self) -> None:
        assert is_diff_start("diff --git a/x b/x")
        assert is_diff_start("index 83db48f..bf269f4 100644")
        assert not is_diff_start("Here is a diff")
        assert not is_diff_start("---")
