"""
Interfaces for the collaborators the scan and chat flows depend on.

Identity, profile lookup, image storage and persistence live outside the
core; the default implementations are the Mongo repositories, the GridFS
image store and the header-based identity resolver.
"""

from abc import ABC, abstractmethod

from nutriscan_api.models.chat import ChatMessageRecord, Role
from nutriscan_api.models.profile import ProfileRecord
from nutriscan_api.models.scan import ScanSessionRecord


class IdentityProvider(ABC):
    """Resolves the authenticated caller."""

    @abstractmethod
    async def get_current_user_id(self) -> str | None:
        ...


class ProfileSource(ABC):
    """Loads stored health profiles."""

    @abstractmethod
    async def get_health_profile(self, user_id: str) -> ProfileRecord | None:
        ...


class ImageStorage(ABC):
    """Stores uploaded label images."""

    @abstractmethod
    async def upload_image(self, user_id: str, data: bytes, filename: str) -> str:
        """Store the image and return a URL it can be fetched from."""
        ...


class ScanPersistence(ABC):
    """Stores scan sessions and their chat messages."""

    @abstractmethod
    async def persist_session(
        self,
        user_id: str,
        image_url: str,
        product_name: str,
        analysis_text: str,
    ) -> str:
        """Create a scan session and return its id."""
        ...

    @abstractmethod
    async def persist_message(self, session_id: str, role: Role, text: str) -> str:
        """Append a chat message and return its id."""
        ...

    @abstractmethod
    async def get_session(self, session_id: str) -> ScanSessionRecord | None:
        ...

    @abstractmethod
    async def get_messages(self, session_id: str) -> list[ChatMessageRecord]:
        """Messages of a session, oldest first."""
        ...
