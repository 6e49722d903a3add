"""Repository classes for database access."""

from .chat_messages import ChatMessageRepository
from .profiles import ProfileRepository
from .scan_sessions import ScanSessionRepository

__all__ = ["ChatMessageRepository", "ProfileRepository", "ScanSessionRepository"]
