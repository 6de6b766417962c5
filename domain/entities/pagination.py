"""Pagination domain entities for note listings."""

from dataclasses import dataclass
from typing import Optional

MAX_PAGE_SIZE = 100


@dataclass
class PaginationMetadata:
    """Domain entity representing pagination information for a note listing.

    Attributes:
        current_page: Current page number
        total_pages: Total number of pages
        total_notes: Total number of notes found
        notes_per_page: Number of notes per page
        has_next: Whether there is a next page
        has_previous: Whether there is a previous page
    """

    current_page: int
    total_pages: int
    total_notes: int
    notes_per_page: int
    has_next: bool
    has_previous: bool

    @classmethod
    def calculate(
        cls, current_page: int, total_notes: int, notes_per_page: int
    ) -> "PaginationMetadata":
        """Calculate pagination metadata from the page request and total count.

        Args:
            current_page: Current page number (1-based)
            total_notes: Total number of notes matching the listing
            notes_per_page: Number of notes per page

        Returns:
            PaginationMetadata: Calculated pagination information
        """
        total_pages = (
            (total_notes + notes_per_page - 1) // notes_per_page
            if total_notes > 0
            else 1
        )
        return cls(
            current_page=current_page,
            total_pages=total_pages,
            total_notes=total_notes,
            notes_per_page=notes_per_page,
            has_next=current_page < total_pages,
            has_previous=current_page > 1,
        )


@dataclass(frozen=True)
class NoteListCriteria:
    """Filter and page parameters for listing a user's notes.

    Attributes:
        owner_id: Identity whose notes are listed
        page: Page number (1-based)
        limit: Number of notes per page
        tag_ids: Notes must carry all of these tags
        archived: Only archived (True) or active (False) notes, None for both
    """

    owner_id: str
    page: int = 1
    limit: int = 15
    tag_ids: Optional[tuple] = None
    archived: Optional[bool] = False

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("Page number must be at least 1")
        if self.limit < 1 or self.limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if self.tag_ids:
            # the all-tags filter counts distinct matches against this length
            object.__setattr__(self, "tag_ids", tuple(dict.fromkeys(self.tag_ids)))

    @property
    def offset(self) -> int:
        """Calculate the offset for database pagination."""
        return (self.page - 1) * self.limit
