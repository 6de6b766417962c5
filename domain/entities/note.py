"""Note domain entity for the IdeaBase notes application.

This module contains the core Note domain entity representing
a note in the system following Domain-Driven Design principles.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.tag import TagEntity

TITLE_MAX_LENGTH = 255


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Please add a title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Note title cannot exceed {TITLE_MAX_LENGTH} characters")
    return title


@dataclass
class Note:
    """Domain entity representing a note.

    This entity encapsulates the business rules related to notes: the title is
    required, the content is rich text serialized as markup and may be empty,
    and only the owner may change a note.

    Attributes:
        id (Optional[UUID]): Unique identifier, None until persisted.
        title (str): Title of the note.
        content (str): Rich-text content serialized as markup.
        owner_id (str): Identity of the user who owns the note.
        tags (List[TagEntity]): Tags associated with the note.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last updated.
        is_archived (bool): Whether the note is archived.
    """

    id: Optional[UUID]
    title: str
    content: str
    owner_id: str
    tags: List["TagEntity"]
    created_at: datetime
    updated_at: datetime
    is_archived: bool = False

    def __post_init__(self):
        """Validate note after initialization.

        Raises:
            ValueError: If the note title is empty or too long.
        """
        self.title = _clean_title(self.title)
        if self.content is None:
            self.content = ""

    @classmethod
    def create_new(
        cls,
        title: str,
        content: Optional[str],
        owner_id: str,
        tags: Optional[List["TagEntity"]] = None,
    ) -> "Note":
        """Factory method to create a new note with default values.

        Args:
            title (str): Title of the note.
            content (Optional[str]): Content of the note.
            owner_id (str): Identity of the note owner.
            tags (Optional[List[TagEntity]]): Optional list of tags.

        Returns:
            Note: New, not yet persisted, note instance.

        Raises:
            ValueError: If the title is empty.
        """
        now = datetime.utcnow()
        return cls(
            id=None,
            title=title,
            content=content or "",
            owner_id=owner_id,
            tags=tags or [],
            created_at=now,
            updated_at=now,
            is_archived=False,
        )

    def update_content(
        self, title: Optional[str] = None, content: Optional[str] = None
    ) -> None:
        """Update the note's title and/or content.

        Raises:
            ValueError: If the new title is empty.
        """
        if title is not None:
            self.title = _clean_title(title)
        if content is not None:
            self.content = content
        self.updated_at = datetime.utcnow()

    def replace_tags(self, tags: List["TagEntity"]) -> None:
        self.tags = list(tags)
        self.updated_at = datetime.utcnow()

    def archive(self) -> None:
        """Archive the note."""
        self.is_archived = True
        self.updated_at = datetime.utcnow()

    def restore(self) -> None:
        """Restore an archived note."""
        self.is_archived = False
        self.updated_at = datetime.utcnow()
