"""Progress states reported while a scan runs."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from nutriscan_api.core.exceptions import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    """Nothing started yet."""


@dataclass(frozen=True)
class Loading:
    """A step is in progress; `progress` is a user-facing label."""

    progress: str = ""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Error:
    """A failed run; `details` keeps the structured context of the failure."""

    message: str
    kind: ErrorKind
    retryable: bool
    details: dict[str, Any] = field(default_factory=dict)


PipelineState = Union[Idle, Loading, Success[T], Error]
