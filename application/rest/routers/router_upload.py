"""Upload function endpoints.

Both transports, multipart form data and base64 JSON, are converted into the
same ``UploadRequest`` and handed to the upload gateway. Errors are answered
as ``{"error": ..., "details": ...}`` bodies instead of the ``detail`` shape
used by the REST routers.
"""

import logging
from typing import Optional
from uuid import UUID

from application.converters.attachment_converter import AttachmentConverter
from application.rest.schemas.input.upload_input import Base64UploadRequest
from application.rest.schemas.output.common_output import UploadErrorResponse
from application.rest.schemas.output.upload_output import UploadResponse
from domain.entities.attachment import UploadRequest
from domain.services.file_validator import (
    FileTooLargeError,
    FileValidationError,
    check_size,
)
from domain.services.note_service import NoteNotFoundError
from domain.services.session_guard import AuthenticationRequiredError
from domain.services.upload_service import (
    MetadataWriteError,
    StorageWriteError,
    UploadService,
)
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from utils.config import Settings
from utils.dependencies import get_db, get_settings, get_upload_service
from utils.security import resolve_user_id, security

logger = logging.getLogger(__name__)
router = APIRouter()

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

UPLOAD_RESPONSES = {
    status.HTTP_200_OK: {
        "model": UploadResponse,
        "description": "File stored and metadata row recorded.",
    },
    status.HTTP_400_BAD_REQUEST: {
        "model": UploadErrorResponse,
        "description": "Missing file, unsupported type or size above the limit.",
        "content": {
            "application/json": {
                "example": {"error": "File size must be less than 50MB"}
            }
        },
    },
    status.HTTP_401_UNAUTHORIZED: {
        "model": UploadErrorResponse,
        "description": "No valid session.",
        "content": {"application/json": {"example": {"error": "Please sign in"}}},
    },
    status.HTTP_403_FORBIDDEN: {
        "model": UploadErrorResponse,
        "description": "The userId field does not match the session.",
    },
    status.HTTP_404_NOT_FOUND: {
        "model": UploadErrorResponse,
        "description": "The referenced note does not exist or is not the caller's.",
    },
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": UploadErrorResponse,
        "description": "Storage write, metadata write or unexpected failure.",
        "content": {
            "application/json": {
                "example": {
                    "error": "Failed to save file metadata",
                    "details": "connection refused",
                }
            }
        },
    },
}


class UploadRejected(Exception):
    """Raised by the endpoints for request-level rejections."""

    def __init__(self, status_code: int, error: str, details: Optional[object] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


def error_response(
    status_code: int, error: str, details: Optional[object] = None
) -> JSONResponse:
    body = UploadErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def _authorize(
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: Settings,
    claimed_user_id: Optional[str],
) -> str:
    try:
        user_id = resolve_user_id(credentials, settings)
    except AuthenticationRequiredError as e:
        raise UploadRejected(status.HTTP_401_UNAUTHORIZED, e.message) from e

    if claimed_user_id and claimed_user_id != user_id:
        logger.warning(
            f"Upload rejected: userId {claimed_user_id} does not match session {user_id}"
        )
        raise UploadRejected(
            status.HTTP_403_FORBIDDEN, "User ID does not match the signed-in user"
        )
    return user_id


def _parse_note_id(note_id: Optional[str]) -> Optional[UUID]:
    if not note_id:
        return None
    try:
        return UUID(note_id)
    except ValueError as e:
        raise UploadRejected(
            status.HTTP_400_BAD_REQUEST, f"Invalid note ID format: {note_id}"
        ) from e


async def _store(
    db: Session, upload_service: UploadService, request: UploadRequest
):
    try:
        attachment = await upload_service.upload(db, request)
    except FileValidationError as e:
        logger.info(f"Upload rejected: {e.message}")
        return error_response(status.HTTP_400_BAD_REQUEST, e.message, e.details)
    except NoteNotFoundError as e:
        return error_response(status.HTTP_404_NOT_FOUND, str(e))
    except MetadataWriteError as e:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details
        )
    except StorageWriteError as e:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details
        )

    return AttachmentConverter.entity_to_upload_response(attachment)


@router.post(
    path="/functions/upload-file",
    description="Upload a file as multipart form data and record its metadata.",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    responses=UPLOAD_RESPONSES,
)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    user_id: Optional[str] = Form(None, alias="userId"),
    note_id: Optional[str] = Form(None, alias="noteId"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Store a multipart upload.

    Args:
        file (UploadFile): The ``file`` form part.
        user_id (str, optional): ``userId`` form field; must match the session.
        note_id (str, optional): ``noteId`` form field of a note to attach to.

    Returns:
        UploadResponse: ``{message, filePath, fileName}`` on success, otherwise
        an ``{error, details}`` body with the matching status code.
    """
    try:
        owner_id = _authorize(credentials, settings, user_id)
        if file is None or not file.filename:
            raise UploadRejected(status.HTTP_400_BAD_REQUEST, "No file uploaded")

        logger.info(
            f"File received: {file.filename}, type: {file.content_type}, user: {owner_id}"
        )
        # the part is spooled by the form parser; refuse it before reading it into memory
        if file.size is not None:
            try:
                check_size(file.size, settings.max_upload_size)
            except FileTooLargeError as e:
                raise UploadRejected(
                    status.HTTP_400_BAD_REQUEST, e.message, e.details
                ) from e

        request = AttachmentConverter.multipart_to_request(
            file_name=file.filename,
            content_type=file.content_type,
            content=await file.read(),
            owner_id=owner_id,
            note_id=_parse_note_id(note_id),
        )
        return await _store(db, upload_service, request)
    except UploadRejected as e:
        return error_response(e.status_code, e.error, e.details)
    except Exception as e:
        logger.exception(f"Unexpected error in multipart upload: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE, str(e)
        )
    finally:
        if file is not None:
            await file.close()


@router.post(
    path="/functions/upload-file/json",
    description="Upload a base64 encoded file in a JSON body and record its metadata.",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    responses=UPLOAD_RESPONSES,
)
async def upload_file_json(
    body: Base64UploadRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Store a base64 upload.

    ``content`` may be plain base64 or a ``data:<type>;base64,`` URL. The
    declared ``size`` is checked against the decoded byte length.
    """
    try:
        owner_id = _authorize(credentials, settings, body.user_id)
        logger.info(
            f"File received: {body.name}, type: {body.type}, size: {body.size}, user: {owner_id}"
        )
        try:
            request = AttachmentConverter.base64_to_request(body, owner_id)
        except FileValidationError as e:
            raise UploadRejected(status.HTTP_400_BAD_REQUEST, e.message, e.details) from e
        return await _store(db, upload_service, request)
    except UploadRejected as e:
        return error_response(e.status_code, e.error, e.details)
    except Exception as e:
        logger.exception(f"Unexpected error in base64 upload: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE, str(e)
        )
