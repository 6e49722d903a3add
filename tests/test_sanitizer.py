"""Tests for response sanitizing."""

import pytest

from nutriscan_api.services.gemini.sanitizer import sanitize

SAMPLES = [
    "",
    "plain text",
    "**Bold** and *italic* and ***both***",
    "__underlined__ but snake_case stays",
    "```json\n{\"a\": 1}\n```",
    "line one\\nline two\\n\\n\\n\\nline three",
    "trailing   \nspaces\t\n\n\n\n\nend   ",
    "*_*_*_ mixed markers _*_*",
    "\\*n tricky escape",
    "   \n\n  padded  \n\n   ",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = sanitize(text)
    assert sanitize(once) == once


def test_removes_emphasis_markers():
    assert sanitize("**Gula** tinggi, *hati-hati*") == "Gula tinggi, hati-hati"


def test_keeps_single_underscores():
    assert sanitize("nilai_gizi and __bold__") == "nilai_gizi and bold"


def test_removes_code_fences():
    assert sanitize("```markdown\nIsi\n```") == "Isi"


def test_unescapes_literal_newlines():
    assert sanitize("Baris 1\\nBaris 2") == "Baris 1\nBaris 2"


def test_trims_trailing_whitespace_per_line():
    assert sanitize("a   \nb\t\nc") == "a\nb\nc"


def test_collapses_blank_line_runs():
    assert sanitize("a\n\n\n\n\nb\n\n\nc\n\nd") == "a\n\nb\n\nc\n\nd"


def test_whitespace_only_lines_count_as_blank():
    assert sanitize("a\n   \n\t\n  \nb") == "a\n\nb"


def test_trims_whole_text():
    assert sanitize("\n\n  hasil  \n\n") == "hasil"


def test_empty_input():
    assert sanitize("") == ""
    assert sanitize("** __ **") == ""
