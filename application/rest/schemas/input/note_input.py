"""Note input schemas for API requests.

This module contains Pydantic models for note-related API requests,
including note creation and update operations.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    """Schema for creating a new note.

    Attributes:
        title (str): The title of the note. Must not be blank.
        content (str, optional): Rich-text content serialized as markup.
        tags (List[UUID], optional): Identifiers of the caller's tags to attach.

    Example:
        >>> note_data = NoteCreate(
        ...     title="Meeting Notes",
        ...     content="<p>Important discussion points</p>",
        ...     tags=["0b6f6c6e-3f0a-4d8c-9d0e-7a1c2b3d4e5f"],
        ... )
    """

    title: str
    content: Optional[str] = ""
    tags: List[UUID] = Field(default_factory=list)


class NoteUpdate(BaseModel):
    """Schema for updating an existing note.

    All fields are optional for partial updates. Only provided fields will be updated.

    Example:
        >>> update_data = NoteUpdate(title="Updated Title", tags=[])
    """

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[UUID]] = None
