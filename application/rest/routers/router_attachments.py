import logging
from typing import List, Optional

from application.converters.attachment_converter import AttachmentConverter
from application.rest.responses import UNAUTHORIZED_RESPONSE, parse_uuid
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.upload_output import (
    AttachmentResponse,
    SignedUrlResponse,
)
from domain.services.upload_service import (
    AttachmentNotFoundError,
    StorageWriteError,
    UploadService,
)
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from utils.config import Settings
from utils.dependencies import get_db, get_settings, get_upload_service
from utils.security import get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    path="/attachments",
    description="List the caller's uploaded files, newest first.",
    response_model=List[AttachmentResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": List[AttachmentResponse],
            "description": "The caller's attachment rows.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid note ID format.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database query failed.",
        },
    },
)
async def list_attachments(
    note_id: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    upload_service: UploadService = Depends(get_upload_service),
) -> List[AttachmentResponse]:
    """List the caller's attachments, optionally only those of one note.

    Args:
        note_id (str, optional): Only attachments referencing this note.
        user_id (str): Identity resolved from the bearer token.
        db (Session): Database session dependency injected by FastAPI.
        upload_service (UploadService): Upload gateway with its repositories.
    """
    note_uuid = parse_uuid(note_id, "note ID") if note_id else None
    try:
        attachments = await upload_service.list_attachments(db, user_id, note_uuid)
    except Exception as e:
        logger.error(f"Failed to list attachments for user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve attachments",
        ) from e

    return [AttachmentConverter.entity_to_response(a) for a in attachments]


@router.post(
    path="/attachments/{attachment_id}/signed-url",
    description="Create a time-limited download link for one of the caller's files.",
    response_model=SignedUrlResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Attachment not found or not owned by the caller.",
        },
        status.HTTP_502_BAD_GATEWAY: {
            "model": ErrorResponse,
            "description": "The object store could not sign the URL.",
        },
    },
)
async def create_signed_url(
    attachment_id: str,
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
    upload_service: UploadService = Depends(get_upload_service),
) -> SignedUrlResponse:
    attachment_uuid = parse_uuid(attachment_id, "attachment ID")
    try:
        attachment, url = await upload_service.create_download_url(
            db, attachment_uuid, user_id
        )
    except AttachmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StorageWriteError as e:
        logger.error(f"Signing {attachment_id} failed: {e.details}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message
        ) from e

    return SignedUrlResponse(
        attachment_id=str(attachment.id),
        url=url,
        expires_in=settings.signed_url_expires,
    )
