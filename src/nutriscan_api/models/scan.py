"""Pydantic models for scan sessions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .chat import ChatMessageRecord


class ScanResult(BaseModel):
    """Outcome of one successful analysis call."""

    model_config = ConfigDict(frozen=True)

    product_name: str
    analysis_text: str


class ScanSessionRecord(BaseModel):
    """A persisted scan session."""

    session_id: str
    user_id: str
    image_url: str
    product_name: str | None = None
    initial_analysis: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_mongo(cls, doc: dict) -> "ScanSessionRecord":
        """Create from MongoDB document."""
        return cls(
            session_id=str(doc.get("_id", doc.get("session_id", ""))),
            user_id=doc.get("user_id", ""),
            image_url=doc.get("image_url", ""),
            product_name=doc.get("product_name"),
            initial_analysis=doc.get("initial_analysis"),
            created_at=doc.get("created_at"),
        )


class ScanCreated(BaseModel):
    """Response model for a completed scan."""

    session_id: str
    image_url: str
    product_name: str
    analysis: str


class ScanSessionSummary(BaseModel):
    """One row of the scan history list."""

    session_id: str
    product_name: str
    image_url: str
    preview: str
    created_at: datetime | None = None


class ScanHistoryResponse(BaseModel):
    """Response model for listing scan sessions."""

    sessions: list[ScanSessionSummary]
    total: int


class ScanSessionDetail(BaseModel):
    """A scan session with its chat messages."""

    session: ScanSessionRecord
    messages: list[ChatMessageRecord] = Field(default_factory=list)


class ProductRenameRequest(BaseModel):
    """Request model for renaming the scanned product."""

    product_name: str = Field(..., min_length=1, max_length=100)
