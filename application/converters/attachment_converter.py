"""Attachment converters for the upload function and attachment endpoints."""

from typing import Optional
from uuid import UUID

from domain.entities.attachment import Attachment, UploadRequest
from domain.services.file_encoder import decode_payload

from application.rest.schemas.input.upload_input import Base64UploadRequest
from application.rest.schemas.output.upload_output import (
    AttachmentResponse,
    UploadResponse,
)

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"


class AttachmentConverter:
    """Converter class turning both upload transports into one UploadRequest.

    Example:
        >>> request = AttachmentConverter.base64_to_request(body, "u1")
        >>> request.transport
        'base64'
    """

    @staticmethod
    def multipart_to_request(
        file_name: str,
        content_type: Optional[str],
        content: bytes,
        owner_id: str,
        note_id: Optional[UUID] = None,
    ) -> UploadRequest:
        return UploadRequest(
            file_name=file_name or "",
            content_type=content_type or "",
            content=content,
            owner_id=owner_id,
            note_id=note_id,
            transport="multipart",
        )

    @staticmethod
    def base64_to_request(body: Base64UploadRequest, owner_id: str) -> UploadRequest:
        """Decode the JSON transport into raw bytes.

        Raises:
            FileValidationError: If ``content`` is not valid base64.
        """
        return UploadRequest(
            file_name=body.name,
            content_type=body.type,
            content=decode_payload(body.content),
            owner_id=owner_id,
            declared_size=body.size,
            note_id=body.note_id,
            transport="base64",
        )

    @staticmethod
    def entity_to_upload_response(attachment: Attachment) -> UploadResponse:
        return UploadResponse(
            message=UPLOAD_SUCCESS_MESSAGE,
            filePath=attachment.file_path,
            fileName=attachment.stored_name,
        )

    @staticmethod
    def entity_to_response(attachment: Attachment) -> AttachmentResponse:
        return AttachmentResponse(
            id=str(attachment.id),
            file_name=attachment.file_name,
            file_path=attachment.file_path,
            file_size=attachment.file_size,
            file_type=attachment.file_type.value,
            owner_id=attachment.owner_id,
            note_id=str(attachment.note_id) if attachment.note_id else None,
            metadata=attachment.metadata,
            created_at=attachment.created_at,
        )
