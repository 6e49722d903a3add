"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase

from nutriscan_api.core.config import Settings, get_settings
from nutriscan_api.core.exceptions import ErrorKind, NutriScanError
from nutriscan_api.db.mongo import MongoDB
from nutriscan_api.db.unit_of_work import UnitOfWork
from nutriscan_api.services.chat import ChatService
from nutriscan_api.services.collaborators import IdentityProvider
from nutriscan_api.services.gemini.client import ModelFallbackClient, get_model_client
from nutriscan_api.services.prompt_composer import PromptComposer
from nutriscan_api.services.scan_pipeline import ScanPipelineCoordinator
from nutriscan_api.services.storage import GridFSImageStorage


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


class HeaderIdentityProvider(IdentityProvider):
    """Identity taken from the X-User-Id header set by the auth gateway."""

    def __init__(self, user_id: str | None):
        self._user_id = (user_id or "").strip() or None

    async def get_current_user_id(self) -> str | None:
        return self._user_id


def get_identity(
    x_user_id: Annotated[str | None, Header()] = None,
) -> IdentityProvider:
    return HeaderIdentityProvider(x_user_id)


IdentityDep = Annotated[IdentityProvider, Depends(get_identity)]


async def get_current_user_id(identity: IdentityDep) -> str:
    """
    Resolve the caller or reject the request.

    Raises:
        NutriScanError: AUTHENTICATION_REQUIRED (401) without an identity
    """
    user_id = await identity.get_current_user_id()
    if not user_id:
        raise NutriScanError(
            "Silakan login terlebih dahulu",
            kind=ErrorKind.AUTHENTICATION_REQUIRED,
        )
    return user_id


CurrentUserDep = Annotated[str, Depends(get_current_user_id)]


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the MongoDB database instance.

    Returns:
        Motor database instance
    """
    settings = get_settings()
    return MongoDB.get_database(settings.db_name)


def get_uow(db: AsyncIOMotorDatabase = Depends(get_database)) -> UnitOfWork:
    """Get Unit of Work instance."""
    return UnitOfWork(db)


# Type alias for UoW dependency
UoWDep = Annotated[UnitOfWork, Depends(get_uow)]


def get_storage(
    settings: SettingsDep,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> GridFSImageStorage:
    return GridFSImageStorage(db, bucket_name=settings.image_bucket)


StorageDep = Annotated[GridFSImageStorage, Depends(get_storage)]

ModelClientDep = Annotated[ModelFallbackClient, Depends(get_model_client)]


def get_composer(settings: SettingsDep) -> PromptComposer:
    return PromptComposer.from_settings(settings)


ComposerDep = Annotated[PromptComposer, Depends(get_composer)]


def get_scan_pipeline(
    settings: SettingsDep,
    identity: IdentityDep,
    uow: UoWDep,
    storage: StorageDep,
    model_client: ModelClientDep,
    composer: ComposerDep,
) -> ScanPipelineCoordinator:
    """
    Get a ScanPipelineCoordinator wired to Mongo, GridFS and Gemini.

    The Unit of Work serves as both the profile source and the persistence.
    """
    return ScanPipelineCoordinator(
        identity=identity,
        profiles=uow,
        storage=storage,
        persistence=uow,
        model_client=model_client,
        composer=composer,
        image_max_edge=settings.image_max_edge,
        image_quality=settings.image_jpeg_quality,
    )


def get_chat_service(
    uow: UoWDep,
    model_client: ModelClientDep,
    composer: ComposerDep,
) -> ChatService:
    """Get ChatService instance."""
    return ChatService(
        persistence=uow,
        profiles=uow,
        model_client=model_client,
        composer=composer,
    )


# Type aliases for service dependencies
ScanPipelineDep = Annotated[ScanPipelineCoordinator, Depends(get_scan_pipeline)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
