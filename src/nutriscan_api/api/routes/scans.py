"""Scan API routes.

Upload a nutrition label photo, browse past scans and rename products.
"""

import logging
from typing import Annotated, assert_never

from fastapi import APIRouter, File, Query, Response, UploadFile, status

from nutriscan_api.api.dependencies import (
    CurrentUserDep,
    ScanPipelineDep,
    StorageDep,
    UoWDep,
)
from nutriscan_api.core.exceptions import NotFoundError, NutriScanError, ValidationError
from nutriscan_api.db.unit_of_work import UnitOfWork
from nutriscan_api.models.scan import (
    ProductRenameRequest,
    ScanCreated,
    ScanHistoryResponse,
    ScanSessionDetail,
    ScanSessionRecord,
    ScanSessionSummary,
)
from nutriscan_api.models.state import Error, Success
from nutriscan_api.services.analysis_text import PLACEHOLDER_PRODUCT_NAME, build_preview

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB


async def _owned_session(uow: UnitOfWork, session_id: str, user_id: str) -> ScanSessionRecord:
    """Fetch a session, hiding other users' sessions behind a 404."""
    session = await uow.scan_sessions.get(session_id)
    if session is None or session.user_id != user_id:
        raise NotFoundError("Scan session", session_id)
    return session


@router.post("", response_model=ScanCreated, status_code=status.HTTP_201_CREATED)
async def create_scan(
    pipeline: ScanPipelineDep,
    image: UploadFile = File(..., description="Photo of a nutrition label"),
):
    """
    Analyze a nutrition label photo.

    Runs the full pipeline (profile lookup, upload, analysis, persistence)
    and returns the stored session.

    Errors carry `kind` and `retryable` in `details`:
    - **401**: no caller identity
    - **422**: the upload is not a readable image
    - **502**: image storage or database failure
    - **503**: the AI provider gave no usable answer
    """
    data = await image.read()
    if len(data) > MAX_IMAGE_SIZE:
        raise ValidationError(
            f"Image exceeds maximum size of {MAX_IMAGE_SIZE // (1024 * 1024)} MB",
            details={"size": len(data), "max_size": MAX_IMAGE_SIZE},
        )

    state = await pipeline.process(data)

    match state:
        case Success(value=outcome):
            return ScanCreated(
                session_id=outcome.session_id,
                image_url=outcome.image_url,
                product_name=outcome.result.product_name,
                analysis=outcome.result.analysis_text,
            )
        case Error(message=message, kind=kind, details=details):
            raise NutriScanError(message, kind=kind, details=details)
        case _:
            assert_never(state)


@router.get("", response_model=ScanHistoryResponse)
async def list_scans(
    user_id: CurrentUserDep,
    uow: UoWDep,
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of sessions to return"),
    ] = 50,
    skip: Annotated[
        int,
        Query(ge=0, description="Number of sessions to skip for pagination"),
    ] = 0,
):
    """
    Get the caller's scans, newest first.

    - **limit**: Maximum number of sessions to return (1-100, default: 50)
    - **skip**: Number of sessions to skip for pagination
    """
    sessions = await uow.scan_sessions.list_for_user(user_id, limit=limit, skip=skip)
    total = await uow.scan_sessions.count_for_user(user_id)

    return ScanHistoryResponse(
        sessions=[
            ScanSessionSummary(
                session_id=s.session_id,
                product_name=s.product_name or PLACEHOLDER_PRODUCT_NAME,
                image_url=s.image_url,
                preview=build_preview(s.initial_analysis),
                created_at=s.created_at,
            )
            for s in sessions
        ],
        total=total,
    )


@router.get("/{session_id}", response_model=ScanSessionDetail)
async def get_scan(
    session_id: str,
    user_id: CurrentUserDep,
    uow: UoWDep,
):
    """Get one scan with its full chat history."""
    session = await _owned_session(uow, session_id, user_id)
    messages = await uow.chat_messages.list_for_session(session_id)
    return ScanSessionDetail(session=session, messages=messages)


@router.patch("/{session_id}", response_model=ScanSessionRecord)
async def rename_product(
    session_id: str,
    request: ProductRenameRequest,
    user_id: CurrentUserDep,
    uow: UoWDep,
):
    """
    Rename the scanned product.

    - **product_name**: New name, 1-100 characters
    """
    product_name = request.product_name.strip()
    if not product_name:
        raise ValidationError("Nama produk tidak boleh kosong")

    await _owned_session(uow, session_id, user_id)
    await uow.scan_sessions.update_product_name(session_id, product_name)
    logger.info(f"Renamed product of session {session_id}")

    return await _owned_session(uow, session_id, user_id)


@router.get("/{session_id}/image")
async def get_scan_image(
    session_id: str,
    user_id: CurrentUserDep,
    uow: UoWDep,
    storage: StorageDep,
):
    """Download the original label photo of a scan."""
    session = await _owned_session(uow, session_id, user_id)
    data, content_type = await storage.download_by_uri(session.image_url)
    return Response(content=data, media_type=content_type)
