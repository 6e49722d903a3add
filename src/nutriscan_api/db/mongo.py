"""MongoDB connection management using Motor async driver."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# (collection, keys, index name)
INDEXES = (
    ("ScanSessions", [("user_id", ASCENDING), ("created_at", DESCENDING)], "user_recent_idx"),
    ("ChatMessages", [("session_id", ASCENDING), ("created_at", ASCENDING)], "session_order_idx"),
)


class MongoDB:
    """
    Process-wide Motor client holder.

    One client (and so one connection pool) is opened in the app lifespan
    and shared by every request through `get_database()`.
    """

    client: AsyncIOMotorClient | None = None
    _db_name: str = "nutriscan_db"

    @classmethod
    def connect(
        cls,
        uri: str,
        db_name: str = "nutriscan_db",
        server_selection_timeout_ms: int = 5000,
    ) -> None:
        """
        Open the client. Motor connects lazily, so this does no I/O.

        Args:
            uri: MongoDB connection URI
            db_name: Database holding profiles, scans and messages
            server_selection_timeout_ms: How long an operation waits for a
                reachable server before failing
        """
        cls.client = AsyncIOMotorClient(
            uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
        )
        cls._db_name = db_name

    @classmethod
    def close(cls) -> None:
        if cls.client is not None:
            cls.client.close()
            cls.client = None

    @classmethod
    def get_database(cls, name: str | None = None) -> AsyncIOMotorDatabase:
        """
        Get a database instance.

        Raises:
            RuntimeError: If `connect()` has not been called
        """
        if cls.client is None:
            raise RuntimeError("MongoDB not connected. Call MongoDB.connect() first.")
        return cls.client[name or cls._db_name]

    @classmethod
    async def ping(cls) -> bool:
        """Round-trip to the server; False when it cannot be reached."""
        if cls.client is None:
            return False
        try:
            await cls.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
        return True

    @classmethod
    async def ensure_indexes(cls) -> None:
        """
        Create the indexes history listing and chat replay rely on.

        Failures are logged, not raised, so the API can start while the
        database is still coming up.
        """
        db = cls.get_database()
        for collection, keys, name in INDEXES:
            try:
                await db[collection].create_index(keys, name=name)
            except PyMongoError as e:
                logger.error(f"Failed to create index {name} on {collection}: {e}")
        logger.info("MongoDB indexes ensured")
