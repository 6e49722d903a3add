"""Repository for ChatMessages collection."""

from nutriscan_api.models.chat import ChatMessageRecord, Role

from .base import BaseRepository


class ChatMessageRepository(BaseRepository):
    """Repository for chat messages, one document per message."""

    async def add(self, session_id: str, role: Role, text: str) -> str:
        """
        Add a message to a session.

        Returns:
            Created message ID
        """
        return await self.insert_one({
            "session_id": session_id,
            "role": role,
            "text": text,
        })

    async def list_for_session(
        self,
        session_id: str,
        limit: int = 500,
    ) -> list[ChatMessageRecord]:
        """
        The latest `limit` messages of a session, in chronological order.

        Long sessions are cut from the oldest end, so the result is always
        the tail of the conversation.
        """
        docs = await self.find_many(
            {"session_id": session_id},
            sort=[("created_at", -1), ("_id", -1)],
            limit=limit,
        )
        return [ChatMessageRecord.from_mongo(doc) for doc in reversed(docs)]
