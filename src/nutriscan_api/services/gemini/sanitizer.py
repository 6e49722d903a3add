"""Normalization of raw model text before it is shown or stored."""

import re

# Markdown emphasis the mobile client renders as literal characters
ASTERISK_PATTERN = re.compile(r"\*+")
UNDERSCORE_RUN_PATTERN = re.compile(r"_{2,}")
CODE_FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+-]*")

BLANK_LINE_RUN_PATTERN = re.compile(r"\n{3,}")


def _strip_markers(text: str) -> str:
    # Removing one marker kind can join leftovers of another into a new
    # marker, so repeat until nothing changes.
    while True:
        stripped = ASTERISK_PATTERN.sub("", text)
        stripped = UNDERSCORE_RUN_PATTERN.sub("", stripped)
        stripped = CODE_FENCE_PATTERN.sub("", stripped)
        if stripped == text:
            return text
        text = stripped


def sanitize(text: str) -> str:
    """
    Clean model output for display.

    Removes bold/italic/code-fence markers, turns literal "\\n" sequences
    into newlines, trims trailing whitespace on every line, collapses runs
    of blank lines into a single blank line and trims the whole text.

    The transform is idempotent: sanitize(sanitize(x)) == sanitize(x).
    """
    if not text:
        return ""

    text = _strip_markers(text)
    text = text.replace("\\n", "\n")
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = BLANK_LINE_RUN_PATTERN.sub("\n\n", text)
    return text.strip()
