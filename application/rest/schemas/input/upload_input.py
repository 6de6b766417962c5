"""Upload input schemas for the JSON transport of the upload function."""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Base64UploadRequest(BaseModel):
    """JSON body of ``POST /functions/upload-file/json``.

    Attributes:
        encoding (str): Always ``base64``; tags the payload shape.
        name (str): Declared file name.
        type (str): Declared media type.
        size (int, optional): Declared size in bytes.
        content (str): Base64 text or a base64 ``data:`` URL.
        user_id (str, optional): ``userId``; must match the session when sent.
        note_id (UUID, optional): ``noteId`` of a note to attach the file to.

    Example:
        >>> body = Base64UploadRequest(
        ...     name="notes.txt", type="text/plain", size=2, content="aGk="
        ... )
    """

    model_config = ConfigDict(populate_by_name=True)

    encoding: Literal["base64"] = "base64"
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    size: Optional[int] = Field(None, ge=0)
    content: str
    user_id: Optional[str] = Field(None, alias="userId")
    note_id: Optional[UUID] = Field(None, alias="noteId")
