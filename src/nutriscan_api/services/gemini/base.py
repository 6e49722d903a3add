"""
Attempt outcomes and status classification for the model fallback loop.

Each call against one model ends in exactly one outcome:
- Succeeded: usable text, the loop stops
- Retryable: this model failed, the next one may still work
- Terminal: the failure applies provider-wide, the loop stops
"""

from dataclasses import dataclass
from typing import Union

from nutriscan_api.core.exceptions import ErrorKind


@dataclass(frozen=True)
class Succeeded:
    text: str


@dataclass(frozen=True)
class Retryable:
    kind: ErrorKind
    reason: str


@dataclass(frozen=True)
class Terminal:
    kind: ErrorKind
    reason: str


AttemptOutcome = Union[Succeeded, Retryable, Terminal]


@dataclass(frozen=True)
class ModelAttempt:
    """One call against one model id. Lives only inside the fallback loop."""

    model_id: str
    outcome: AttemptOutcome
    status_code: int | None = None


@dataclass(frozen=True)
class StatusRule:
    """How a non-200 HTTP status is classified."""

    kind: ErrorKind
    terminal: bool
    reason: str


EMPTY_RESPONSE_REASON = "Response kosong"
EXHAUSTED_HINT = "Silakan coba lagi."

# 404 means this model id is gone or renamed, so move on. 403 and 429 are
# about the credential, which every remaining model shares.
DEFAULT_STATUS_RULES: dict[int, StatusRule] = {
    404: StatusRule(
        kind=ErrorKind.PROVIDER_UNAVAILABLE,
        terminal=False,
        reason="Model tidak ditemukan",
    ),
    403: StatusRule(
        kind=ErrorKind.UNAUTHORIZED,
        terminal=True,
        reason="API Key tidak valid. Silakan periksa API Key Anda.",
    ),
    429: StatusRule(
        kind=ErrorKind.QUOTA_EXCEEDED,
        terminal=True,
        reason="Terlalu banyak request.\n\nTunggu 2 menit lalu coba lagi.",
    ),
}


def classify_status(
    status_code: int,
    rules: dict[int, StatusRule] = DEFAULT_STATUS_RULES,
) -> Retryable | Terminal:
    """Classify a non-200 status; unknown codes are retryable."""
    rule = rules.get(status_code)
    if rule is None:
        return Retryable(ErrorKind.PROVIDER_UNAVAILABLE, f"Error {status_code}")
    if rule.terminal:
        return Terminal(rule.kind, rule.reason)
    return Retryable(rule.kind, rule.reason)
