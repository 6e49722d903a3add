"""Base repository class with common database operations."""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection

from nutriscan_api.utils.dates import utc_now


def to_object_id(id: str) -> ObjectId | None:
    """Parse a string id, returning None for anything that is not an ObjectId."""
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


class BaseRepository:
    """Base repository providing the CRUD operations the services need."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    async def find_by_id(self, id: str) -> dict[str, Any] | None:
        """
        Find document by ID.

        Args:
            id: Document ObjectId as string

        Returns:
            Document, or None if not found or the id is malformed
        """
        object_id = to_object_id(id)
        if object_id is None:
            return None
        return await self.collection.find_one({"_id": object_id})

    async def find_many(
        self,
        filter: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        limit: int = 100,
        skip: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Find multiple documents matching filter.

        Args:
            filter: MongoDB query filter
            sort: List of (field, direction) tuples
            limit: Maximum documents to return
            skip: Number of documents to skip

        Returns:
            List of documents
        """
        cursor = self.collection.find(filter or {})

        if sort:
            cursor = cursor.sort(sort)

        cursor = cursor.skip(skip).limit(limit)
        return await cursor.to_list(length=limit)

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        """Find single document matching filter."""
        return await self.collection.find_one(filter)

    async def insert_one(self, document: dict[str, Any]) -> str:
        """
        Insert a single document.

        Args:
            document: Document to insert

        Returns:
            Inserted document ID as string
        """
        if "created_at" not in document:
            document["created_at"] = utc_now()

        result = await self.collection.insert_one(document)
        return str(result.inserted_id)

    async def update_one(self, id: str, update: dict[str, Any]) -> bool:
        """
        Update a single document by ID.

        Args:
            id: Document ObjectId as string
            update: Fields to set (wrapped in $set if not an operator)

        Returns:
            True if a document matched
        """
        object_id = to_object_id(id)
        if object_id is None:
            return False

        if not any(key.startswith("$") for key in update.keys()):
            update = {"$set": update}

        if "$set" in update:
            update["$set"]["updated_at"] = utc_now()

        result = await self.collection.update_one({"_id": object_id}, update)
        return result.matched_count > 0

    async def count(self, filter: dict[str, Any] | None = None) -> int:
        """Count documents matching filter."""
        return await self.collection.count_documents(filter or {})
