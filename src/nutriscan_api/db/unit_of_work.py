"""Unit of Work pattern for managing repository access."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from nutriscan_api.models.chat import ChatMessageRecord, Role
from nutriscan_api.models.profile import ProfileRecord
from nutriscan_api.models.scan import ScanSessionRecord
from nutriscan_api.services.collaborators import ProfileSource, ScanPersistence

from .repositories.chat_messages import ChatMessageRepository
from .repositories.profiles import ProfileRepository
from .repositories.scan_sessions import ScanSessionRepository

PROFILES_COLLECTION = "Profiles"
SCAN_SESSIONS_COLLECTION = "ScanSessions"
CHAT_MESSAGES_COLLECTION = "ChatMessages"


class UnitOfWork(ScanPersistence, ProfileSource):
    """
    Unit of Work pattern implementation.

    Groups repository access and provides a single injection point for
    services. It is also the Mongo-backed persistence and profile source
    the scan pipeline and chat service talk to.

    Usage:
        uow = UnitOfWork(db)
        session = await uow.scan_sessions.get(session_id)
        messages = await uow.chat_messages.list_for_session(session_id)
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize Unit of Work with database instance.

        Args:
            db: Motor database instance
        """
        self._db = db
        self._profiles: ProfileRepository | None = None
        self._scan_sessions: ScanSessionRepository | None = None
        self._chat_messages: ChatMessageRepository | None = None

    @property
    def profiles(self) -> ProfileRepository:
        """Get Profiles repository (lazy loaded)."""
        if self._profiles is None:
            self._profiles = ProfileRepository(self._db[PROFILES_COLLECTION])
        return self._profiles

    @property
    def scan_sessions(self) -> ScanSessionRepository:
        """Get ScanSessions repository (lazy loaded)."""
        if self._scan_sessions is None:
            self._scan_sessions = ScanSessionRepository(self._db[SCAN_SESSIONS_COLLECTION])
        return self._scan_sessions

    @property
    def chat_messages(self) -> ChatMessageRepository:
        """Get ChatMessages repository (lazy loaded)."""
        if self._chat_messages is None:
            self._chat_messages = ChatMessageRepository(self._db[CHAT_MESSAGES_COLLECTION])
        return self._chat_messages

    # ProfileSource

    async def get_health_profile(self, user_id: str) -> ProfileRecord | None:
        return await self.profiles.get_by_user(user_id)

    # ScanPersistence

    async def persist_session(
        self,
        user_id: str,
        image_url: str,
        product_name: str,
        analysis_text: str,
    ) -> str:
        return await self.scan_sessions.create(
            user_id=user_id,
            image_url=image_url,
            product_name=product_name,
            initial_analysis=analysis_text,
        )

    async def persist_message(self, session_id: str, role: Role, text: str) -> str:
        return await self.chat_messages.add(session_id, role, text)

    async def get_session(self, session_id: str) -> ScanSessionRecord | None:
        return await self.scan_sessions.get(session_id)

    async def get_messages(self, session_id: str) -> list[ChatMessageRecord]:
        return await self.chat_messages.list_for_session(session_id)
