"""
Gemini generateContent client with ordered model fallback.

Tries each configured model id in turn against one provider endpoint and
returns the first usable answer. Failures that only concern one model
(network trouble, unknown model, empty answer) move on to the next id;
failures that concern the credential (403, 429) stop the loop at once.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import httpx

from nutriscan_api.core.config import get_settings
from nutriscan_api.core.exceptions import ErrorKind, ModelFallbackError

from .base import (
    DEFAULT_STATUS_RULES,
    EMPTY_RESPONSE_REASON,
    EXHAUSTED_HINT,
    ModelAttempt,
    Retryable,
    StatusRule,
    Succeeded,
    Terminal,
    classify_status,
)
from .extractor import AbsenceReason, Extraction, extract_text
from .sanitizer import sanitize

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Sanitized answer plus the attempts it took to get it."""

    text: str
    model_id: str
    attempts: list[ModelAttempt] = field(default_factory=list)


class ModelFallbackClient:
    """Client for the Gemini REST API that falls back across model ids."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        models: Sequence[str],
        *,
        status_rules: dict[int, StatusRule] | None = None,
        connect_timeout: float = 30.0,
        request_timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Provider credential, sent as the `key` query parameter
            base_url: Models endpoint, e.g. ".../v1beta/models"
            models: Model ids in the order they should be tried
            status_rules: Overrides for the HTTP status classification table
            connect_timeout: Seconds allowed to establish a connection
            request_timeout: Seconds allowed for a whole request
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.models = list(models)
        self.status_rules = status_rules if status_rules is not None else DEFAULT_STATUS_RULES
        self.connect_timeout = connect_timeout
        self.request_timeout = request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.request_timeout, connect=self.connect_timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def generate(
        self,
        payload: dict[str, Any],
        models: Sequence[str] | None = None,
    ) -> GenerationResult:
        """
        Send one request body to each model in order until one answers.

        Args:
            payload: generateContent body (contents, generationConfig, ...)
            models: Override for the configured model order

        Returns:
            GenerationResult with sanitized, non-empty text

        Raises:
            ModelFallbackError: On a terminal status, or once every model
                has failed (kind MODELS_EXHAUSTED, carrying the last error)
        """
        model_ids = list(models) if models is not None else self.models
        if not model_ids:
            raise ModelFallbackError(
                message="Tidak ada model yang dikonfigurasi.",
                kind=ErrorKind.CONFIGURATION,
            )
        if not self.api_key:
            raise ModelFallbackError(
                message="API Key belum dikonfigurasi.",
                kind=ErrorKind.UNAUTHORIZED,
            )

        client = await self._get_client()
        attempts: list[ModelAttempt] = []
        last_error = "Unknown error"

        for model_id in model_ids:
            attempt = await self._attempt(client, model_id, payload)
            attempts.append(attempt)

            match attempt.outcome:
                case Succeeded(text=text):
                    logger.info(f"Model {model_id} answered ({len(text)} chars)")
                    return GenerationResult(text=text, model_id=model_id, attempts=attempts)
                case Terminal(kind=kind, reason=reason):
                    logger.error(f"Model {model_id}: {kind.value}, stopping fallback")
                    raise ModelFallbackError(message=reason, kind=kind, attempts=attempts)
                case Retryable(kind=kind, reason=reason):
                    logger.warning(f"Model {model_id}: {kind.value} ({reason}), trying next")
                    last_error = reason

        logger.error(f"All {len(model_ids)} models failed, last error: {last_error}")
        raise ModelFallbackError(
            message=f"Gagal analisis: {last_error}\n\n{EXHAUSTED_HINT}",
            kind=ErrorKind.MODELS_EXHAUSTED,
            attempts=attempts,
        )

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        model_id: str,
        payload: dict[str, Any],
    ) -> ModelAttempt:
        """Run and classify a single call."""
        url = f"{self.base_url}/{model_id}:generateContent"
        logger.debug(f"POST {url}")

        try:
            response = await asyncio.wait_for(
                client.post(url, params={"key": self.api_key}, json=payload),
                timeout=self.request_timeout,
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            return ModelAttempt(model_id, Retryable(ErrorKind.TRANSPORT, reason))

        status = response.status_code
        logger.debug(f"Model {model_id} returned status {status}")

        if status != 200:
            return ModelAttempt(
                model_id,
                classify_status(status, self.status_rules),
                status_code=status,
            )

        extraction = extract_text(response.content)
        text = sanitize(extraction.text) if extraction.found else ""
        if not text:
            return ModelAttempt(model_id, _empty_outcome(extraction), status_code=status)

        return ModelAttempt(model_id, Succeeded(text), status_code=status)


def _empty_outcome(extraction: Extraction) -> Retryable:
    """Classify a 200 without usable text; a provider error message wins over the generic reason."""
    if extraction.absence is AbsenceReason.MALFORMED:
        return Retryable(ErrorKind.STRUCTURAL_PARSE_FAILURE, EMPTY_RESPONSE_REASON)
    if extraction.provider_message:
        return Retryable(ErrorKind.EMPTY_RESULT, extraction.provider_message)
    return Retryable(ErrorKind.EMPTY_RESULT, EMPTY_RESPONSE_REASON)


@lru_cache
def get_model_client() -> ModelFallbackClient:
    """
    Get a cached client configured from settings.

    Returns:
        ModelFallbackClient for the configured provider and model order
    """
    settings = get_settings()
    return ModelFallbackClient(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        models=settings.gemini_models,
        connect_timeout=settings.gemini_connect_timeout,
        request_timeout=settings.gemini_request_timeout,
    )
