"""Note output schemas for API responses.

This module contains Pydantic models for note-related API responses,
including single notes, pagination info, and note lists.
"""

from datetime import datetime
from typing import List

from application.rest.schemas.output.tag_output import TagResponse
from pydantic import BaseModel


class NoteResponse(BaseModel):
    """Schema for note data in API responses.

    Attributes:
        id (str): UUID string identifier of the note.
        title (str): The title of the note.
        content (str): Rich-text content of the note.
        owner_id (str): Identity of the note owner.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last updated.
        is_archived (bool): Whether the note is archived.
        tags (List[TagResponse]): Tags attached to the note.

    Example:
        >>> note_response = NoteResponse(
        ...     id="note-uuid-123",
        ...     title="Meeting Notes",
        ...     content="<p>Important points</p>",
        ...     owner_id="user-uuid-456",
        ...     created_at=datetime.now(),
        ...     updated_at=datetime.now(),
        ...     is_archived=False,
        ...     tags=[TagResponse(id="tag-uuid", name="work")]
        ... )
    """

    id: str  # UUID as string
    title: str
    content: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    is_archived: bool = False
    tags: List[TagResponse]


class PaginationInfo(BaseModel):
    """Schema for pagination metadata in API responses.

    Attributes:
        current_page (int): Current page number (1-indexed).
        total_pages (int): Total number of pages available.
        total_notes (int): Total number of notes across all pages.
        notes_per_page (int): Number of notes per page.
        has_next (bool): Whether there is a next page available.
        has_previous (bool): Whether there is a previous page available.
    """

    current_page: int
    total_pages: int
    total_notes: int
    notes_per_page: int
    has_next: bool
    has_previous: bool


class NotesListResponse(BaseModel):
    """Schema for paginated notes list API responses.

    Attributes:
        notes (List[NoteResponse]): List of notes for the current page.
        pagination (PaginationInfo): Pagination metadata.
    """

    notes: List[NoteResponse]
    pagination: PaginationInfo
