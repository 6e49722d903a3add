"""Pull the answer text out of a generateContent response body."""

import json
import logging
from dataclasses import dataclass
from enum import Enum

from nutriscan_api.utils import dig, dig_list, dig_str

logger = logging.getLogger(__name__)

SAFETY_BLOCKED_NOTICE = "Maaf, konten tidak dapat ditampilkan karena filter keamanan."


class AbsenceReason(str, Enum):
    """Why a response body carried no usable text."""

    PROVIDER_ERROR = "provider_error"
    NO_CANDIDATES = "no_candidates"
    NO_PARTS = "no_parts"
    MALFORMED = "malformed"
    BLANK = "blank"


@dataclass(frozen=True)
class Extraction:
    """Either extracted text or the reason there is none."""

    text: str | None = None
    absence: AbsenceReason | None = None
    provider_message: str | None = None
    finish_reason: str | None = None

    @property
    def found(self) -> bool:
        return self.text is not None


def extract_text(raw: bytes | str | None) -> Extraction:
    """
    Extract the first candidate's text from a raw response body.

    Every non-blank text part of the first candidate is concatenated.
    Never raises: undecodable bodies, provider error objects, missing
    candidates and broken nesting at any depth all degrade to an
    `Extraction` with `absence` set.
    """
    if raw is None:
        return Extraction(absence=AbsenceReason.MALFORMED)

    try:
        payload = json.loads(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Response is not valid JSON: {e}")
        return Extraction(absence=AbsenceReason.MALFORMED)

    if not isinstance(payload, dict):
        logger.warning(f"Unexpected response root type: {type(payload).__name__}")
        return Extraction(absence=AbsenceReason.MALFORMED)

    if "error" in payload:
        message = dig_str(payload, "error", "message")
        logger.error(f"Provider returned an error object: {message}")
        return Extraction(absence=AbsenceReason.PROVIDER_ERROR, provider_message=message)

    candidates = dig_list(payload, "candidates")
    if not candidates:
        logger.error("No candidates in response")
        return Extraction(absence=AbsenceReason.NO_CANDIDATES)

    finish_reason = dig_str(candidates, 0, "finishReason")
    if finish_reason == "SAFETY":
        logger.warning("Response blocked by safety filter")
        return Extraction(text=SAFETY_BLOCKED_NOTICE, finish_reason=finish_reason)

    parts = dig_list(candidates, 0, "content", "parts")
    if not parts:
        logger.error(f"No parts in first candidate (finish reason: {finish_reason})")
        return Extraction(absence=AbsenceReason.NO_PARTS, finish_reason=finish_reason)

    texts = [dig(part, "text") for part in parts]
    text = "".join(t for t in texts if isinstance(t, str) and t.strip())
    if not text:
        return Extraction(absence=AbsenceReason.BLANK, finish_reason=finish_reason)

    logger.debug(f"Extracted {len(text)} chars (finish reason: {finish_reason})")
    return Extraction(text=text, finish_reason=finish_reason)
