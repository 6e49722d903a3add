"""Pydantic models for API schemas."""

from .chat import (
    ChatMessageRecord,
    ChatReply,
    ChatRequest,
    ConversationTurn,
    Role,
    normalize_role,
)
from .profile import HealthProfileSummary, ProfileRecord
from .scan import (
    ProductRenameRequest,
    ScanCreated,
    ScanHistoryResponse,
    ScanResult,
    ScanSessionDetail,
    ScanSessionRecord,
    ScanSessionSummary,
)
from .state import Error, Idle, Loading, PipelineState, Success

__all__ = [
    # Chat
    "ChatMessageRecord",
    "ChatReply",
    "ChatRequest",
    "ConversationTurn",
    "Role",
    "normalize_role",
    # Profile
    "HealthProfileSummary",
    "ProfileRecord",
    # Scan
    "ProductRenameRequest",
    "ScanCreated",
    "ScanHistoryResponse",
    "ScanResult",
    "ScanSessionDetail",
    "ScanSessionRecord",
    "ScanSessionSummary",
    # Pipeline state
    "Error",
    "Idle",
    "Loading",
    "PipelineState",
    "Success",
]
