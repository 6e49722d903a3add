"""Custom exception classes for the API."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories surfaced by the scan and chat flows."""

    TRANSPORT = "transport"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    UNAUTHORIZED = "unauthorized"
    QUOTA_EXCEEDED = "quota_exceeded"
    EMPTY_RESULT = "empty_result"
    STRUCTURAL_PARSE_FAILURE = "structural_parse_failure"
    UPSTREAM_DEPENDENCY_FAILURE = "upstream_dependency_failure"
    AUTHENTICATION_REQUIRED = "authentication_required"
    INVALID_IMAGE = "invalid_image"
    MODELS_EXHAUSTED = "models_exhausted"
    CONFIGURATION = "configuration"


# Kinds where asking the user to simply try again cannot help
NON_RETRYABLE_KINDS = frozenset({
    ErrorKind.UNAUTHORIZED,
    ErrorKind.AUTHENTICATION_REQUIRED,
    ErrorKind.INVALID_IMAGE,
    ErrorKind.CONFIGURATION,
})

KIND_STATUS_CODES = {
    ErrorKind.AUTHENTICATION_REQUIRED: 401,
    ErrorKind.INVALID_IMAGE: 422,
    ErrorKind.UPSTREAM_DEPENDENCY_FAILURE: 502,
    ErrorKind.QUOTA_EXCEEDED: 503,
    ErrorKind.UNAUTHORIZED: 503,
    ErrorKind.CONFIGURATION: 503,
}


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} with id '{resource_id}' not found",
            status_code=404,
            details={"resource": resource, "id": resource_id},
        )


class ValidationError(APIError):
    """Validation error."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=422, details=details)


class NutriScanError(APIError):
    """
    A scan or chat failure with a kind the caller can act on.

    `retryable` tells the client whether offering a "try again" action
    makes sense.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        details: dict[str, Any] | None = None,
    ):
        self.kind = kind
        self.retryable = kind not in NON_RETRYABLE_KINDS
        super().__init__(
            message=message,
            status_code=KIND_STATUS_CODES.get(kind, 503),
            details={"kind": kind.value, "retryable": self.retryable, **(details or {})},
        )


class ModelFallbackError(NutriScanError):
    """The provider produced no usable answer across the configured models."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        attempts: list[Any] | None = None,
    ):
        self.attempts = attempts or []
        super().__init__(
            message=message,
            kind=kind,
            details={"models_tried": [a.model_id for a in self.attempts]},
        )
