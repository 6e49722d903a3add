"""Read product name and preview text back out of an analysis."""

import re

PLACEHOLDER_PRODUCT_NAME = "Produk Scan"
PLACEHOLDER_PREVIEW = "Tap untuk melihat detail analisis"

# Tried in order: the emoji section header, then a plain label
PRODUCT_NAME_PATTERNS = (
    re.compile(r"📦\s*(?:NAMA PRODUK|PRODUCT NAME)[ \t:]*\n\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"(?:NAMA PRODUK|PRODUCT NAME)[ \t]*:?\s*([^\n]+)", re.IGNORECASE),
)
DECORATION_PATTERN = re.compile(r"[*\[\]\"#_📦]")
NEGATIVE_MARKERS = ("tidak teridentifikasi", "not identified")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50

PREVIEW_LENGTH = 100
CONCLUSION_MARKERS = ("KESIMPULAN", "CONCLUSION", "✅")
HEADER_PREFIXES = ("📦", "📊", "⚠️", "📅", "💡", "🏷️")
HEADER_WORDS = ("NAMA PRODUK", "NILAI GIZI")
MARKDOWN_PATTERN = re.compile(r"[*_#]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _accept_name(candidate: str) -> str | None:
    cleaned = DECORATION_PATTERN.sub("", candidate).strip()
    if not MIN_NAME_LENGTH <= len(cleaned) <= MAX_NAME_LENGTH:
        return None
    lowered = cleaned.lower()
    if any(marker in lowered for marker in NEGATIVE_MARKERS):
        return None
    return cleaned


def extract_product_name(analysis: str) -> str:
    """
    Find the product name in an analysis text.

    The first pattern whose captured line survives cleaning wins. A name
    must be 2-50 characters and must not say the product was not
    identified; otherwise the placeholder is returned.
    """
    for pattern in PRODUCT_NAME_PATTERNS:
        match = pattern.search(analysis or "")
        if match is None:
            continue
        name = _accept_name(match.group(1))
        if name is not None:
            return name
    return PLACEHOLDER_PRODUCT_NAME


def build_preview(analysis: str | None) -> str:
    """Short one-line summary for history lists, preferring the conclusion."""
    if not analysis or not analysis.strip():
        return PLACEHOLDER_PREVIEW

    lines = analysis.splitlines()
    conclusion_index = next(
        (
            i for i, line in enumerate(lines)
            if any(marker.lower() in line.lower() for marker in CONCLUSION_MARKERS)
        ),
        -1,
    )

    if 0 <= conclusion_index < len(lines) - 1:
        picked = lines[conclusion_index + 1:conclusion_index + 3]
    else:
        picked = [
            line for line in lines
            if line.strip()
            and not line.startswith(HEADER_PREFIXES)
            and not any(word in line.upper() for word in HEADER_WORDS)
        ][:2]

    preview = MARKDOWN_PATTERN.sub("", " ".join(picked))
    preview = WHITESPACE_PATTERN.sub(" ", preview).strip()
    if not preview:
        return PLACEHOLDER_PREVIEW
    if len(preview) >= PREVIEW_LENGTH:
        return preview[:PREVIEW_LENGTH] + "..."
    return preview
