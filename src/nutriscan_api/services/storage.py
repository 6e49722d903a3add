"""GridFS storage for uploaded label images."""

import logging
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from gridfs.errors import NoFile
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorGridFSBucket

from nutriscan_api.core.exceptions import APIError, NotFoundError
from nutriscan_api.utils.dates import utc_now

from .collaborators import ImageStorage

logger = logging.getLogger(__name__)

GRIDFS_BUCKET_NAME = "scan_images"
URI_SCHEME = "gridfs://"


class ImageStorageError(APIError):
    """Raised when an image cannot be written to or read from GridFS."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=502, details=details)


class GridFSImageStorage(ImageStorage):
    """
    Stores label photos in a MongoDB GridFS bucket.

    Images are addressed by URIs of the form gridfs://bucket/{file_id},
    which is what ends up in the scan session's image_url.

    Usage:
        storage = GridFSImageStorage(db)
        uri = await storage.upload_image(user_id, data, "scan_1700000000000.jpg")
        data, content_type = await storage.download_by_uri(uri)
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        bucket_name: str = GRIDFS_BUCKET_NAME,
    ):
        """
        Initialize GridFS image storage.

        Args:
            db: Motor database instance
            bucket_name: Name of the GridFS bucket
        """
        self._db = db
        self._bucket_name = bucket_name
        self._bucket: AsyncIOMotorGridFSBucket | None = None

    @property
    def bucket(self) -> AsyncIOMotorGridFSBucket:
        """Get or create the GridFS bucket (lazy initialization)."""
        if self._bucket is None:
            self._bucket = AsyncIOMotorGridFSBucket(
                self._db,
                bucket_name=self._bucket_name,
            )
        return self._bucket

    def generate_storage_uri(self, file_id: ObjectId | str) -> str:
        return f"{URI_SCHEME}{self._bucket_name}/{file_id}"

    @staticmethod
    def parse_storage_uri(uri: str) -> tuple[str, str] | None:
        """
        Parse a GridFS storage URI.

        Returns:
            Tuple of (bucket_name, file_id) or None if invalid
        """
        if not uri.startswith(URI_SCHEME):
            return None

        parts = uri[len(URI_SCHEME):].split("/", 1)
        if len(parts) != 2 or not all(parts):
            return None

        return parts[0], parts[1]

    async def upload_image(self, user_id: str, data: bytes, filename: str) -> str:
        """
        Upload an image to GridFS.

        The file is stored under "{user_id}/{filename}" so one user's
        uploads can be listed together.

        Returns:
            GridFS storage URI

        Raises:
            ImageStorageError: If the upload fails
        """
        path = f"{user_id}/{filename}"
        try:
            file_id = await self.bucket.upload_from_stream(
                path,
                data,
                metadata={
                    "user_id": user_id,
                    "content_type": "image/jpeg",
                    "uploaded_at": utc_now(),
                },
            )
        except Exception as e:
            logger.error(f"GridFS upload failed for {path}: {e}")
            raise ImageStorageError(
                message=f"Failed to upload image: {e}",
                details={"filename": path, "size": len(data)},
            ) from e

        storage_uri = self.generate_storage_uri(file_id)
        logger.info(f"Uploaded {path}: {len(data)} bytes -> {storage_uri}")
        return storage_uri

    async def download_by_uri(self, uri: str) -> tuple[bytes, str]:
        """
        Read an image back by its storage URI.

        Returns:
            Tuple of (data, content_type)

        Raises:
            NotFoundError: If the URI is not one of ours or the file is gone
        """
        parsed = self.parse_storage_uri(uri)
        if parsed is None or parsed[0] != self._bucket_name:
            raise NotFoundError("Image", uri)

        try:
            file_id = ObjectId(parsed[1])
        except InvalidId:
            raise NotFoundError("Image", uri) from None

        try:
            grid_out = await self.bucket.open_download_stream(file_id)
        except NoFile:
            raise NotFoundError("Image", uri) from None

        data = await grid_out.read()
        metadata = grid_out.metadata or {}
        logger.debug(f"Downloaded GridFS file {file_id}: {len(data)} bytes")
        return data, metadata.get("content_type", "image/jpeg")
