"""Repository for ScanSessions collection."""

from typing import Any

from nutriscan_api.models.scan import ScanSessionRecord

from .base import BaseRepository


class ScanSessionRepository(BaseRepository):
    """
    Repository for scan sessions.

    One document per scanned label: who scanned it, where the image lives,
    the product name and the first analysis.
    """

    async def create(
        self,
        user_id: str,
        image_url: str,
        product_name: str | None,
        initial_analysis: str | None,
    ) -> str:
        """
        Create a new scan session.

        Returns:
            Created session ID
        """
        return await self.insert_one({
            "user_id": user_id,
            "image_url": image_url,
            "product_name": product_name,
            "initial_analysis": initial_analysis,
        })

    async def get(self, session_id: str) -> ScanSessionRecord | None:
        doc = await self.find_by_id(session_id)
        return ScanSessionRecord.from_mongo(doc) if doc else None

    async def list_for_user(
        self,
        user_id: str,
        limit: int = 50,
        skip: int = 0,
    ) -> list[ScanSessionRecord]:
        """
        Get a user's scan sessions, newest first.

        Args:
            user_id: Owner of the sessions
            limit: Maximum sessions to return
            skip: Number to skip for pagination
        """
        docs = await self.find_many(
            {"user_id": user_id},
            sort=[("created_at", -1)],
            limit=limit,
            skip=skip,
        )
        return [ScanSessionRecord.from_mongo(doc) for doc in docs]

    async def count_for_user(self, user_id: str) -> int:
        return await self.count({"user_id": user_id})

    async def update_product_name(self, session_id: str, product_name: str) -> bool:
        update: dict[str, Any] = {"product_name": product_name}
        return await self.update_one(session_id, update)
