"""
Gemini provider access.

Request execution with ordered model fallback, response text extraction
and output sanitizing.
"""

from .base import (
    DEFAULT_STATUS_RULES,
    AttemptOutcome,
    ModelAttempt,
    Retryable,
    StatusRule,
    Succeeded,
    Terminal,
    classify_status,
)
from .client import GenerationResult, ModelFallbackClient, get_model_client
from .extractor import AbsenceReason, Extraction, extract_text
from .sanitizer import sanitize

__all__ = [
    "DEFAULT_STATUS_RULES",
    "AbsenceReason",
    "AttemptOutcome",
    "Extraction",
    "GenerationResult",
    "ModelAttempt",
    "ModelFallbackClient",
    "Retryable",
    "StatusRule",
    "Succeeded",
    "Terminal",
    "classify_status",
    "extract_text",
    "get_model_client",
    "sanitize",
]
