"""Pydantic models for chat-related API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]

# Older clients stored the model's messages with sender "ai"
LEGACY_ROLES = {"ai": "assistant", "model": "assistant", "human": "user"}


def normalize_role(value: str | None) -> Role:
    """Map stored sender values onto the two conversation roles."""
    role = LEGACY_ROLES.get((value or "").lower(), (value or "").lower())
    return "assistant" if role == "assistant" else "user"


class ConversationTurn(BaseModel):
    """One message in a conversation, replayed verbatim into prompts."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str


class ChatMessageRecord(BaseModel):
    """A persisted chat message."""

    message_id: str
    session_id: str
    role: Role
    text: str
    created_at: datetime | None = None

    @classmethod
    def from_mongo(cls, doc: dict) -> "ChatMessageRecord":
        """Create from MongoDB document."""
        return cls(
            message_id=str(doc.get("_id", doc.get("message_id", ""))),
            session_id=doc.get("session_id", ""),
            role=normalize_role(doc.get("role") or doc.get("sender")),
            text=doc.get("text") or doc.get("message") or "",
            created_at=doc.get("created_at"),
        )

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, text=self.text)


class ChatRequest(BaseModel):
    """Request model for sending a chat message."""

    message: str = Field(..., min_length=1, max_length=4000, description="User's message")


class ChatReply(BaseModel):
    """Response model for one chat exchange."""

    session_id: str
    message: str
    message_id: str | None = None
    is_error: bool = False
