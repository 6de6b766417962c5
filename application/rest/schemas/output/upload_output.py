"""Upload and attachment output schemas for API responses."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Success body of the upload function.

    Attributes:
        message (str): Always ``File uploaded successfully``.
        filePath (str): Storage key ``{owner}/{uuid}.{ext}``.
        fileName (str): Stored object name ``{uuid}.{ext}``.

    Example:
        >>> UploadResponse(
        ...     message="File uploaded successfully",
        ...     filePath="u1/0b6f6c6e-3f0a-4d8c-9d0e-7a1c2b3d4e5f.pdf",
        ...     fileName="0b6f6c6e-3f0a-4d8c-9d0e-7a1c2b3d4e5f.pdf",
        ... )
    """

    message: str
    filePath: str
    fileName: str


class AttachmentResponse(BaseModel):
    """Schema for an attachment metadata row."""

    id: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str
    owner_id: str
    note_id: Optional[str] = None
    metadata: Dict[str, Any]
    created_at: Optional[datetime] = None


class SignedUrlResponse(BaseModel):
    """Schema for a time-limited download link."""

    attachment_id: str
    url: str
    expires_in: int
