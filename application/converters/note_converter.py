"""Note converters for transforming domain entities into API responses."""

from typing import List

from domain.entities.note import Note
from domain.entities.pagination import PaginationMetadata

from application.converters.tag_converter import TagConverter
from application.rest.schemas.output.note_output import (
    NoteResponse,
    NotesListResponse,
    PaginationInfo,
)


class NoteConverter:
    """Converter class for note transformations between layers.

    Example:
        >>> response = NoteConverter.entity_to_response(note)
        >>> listing = NoteConverter.to_list_response(notes, pagination)
    """

    @staticmethod
    def entity_to_response(note: Note) -> NoteResponse:
        """Convert a Note domain entity to a NoteResponse schema."""
        return NoteResponse(
            id=str(note.id),
            title=note.title,
            content=note.content,
            owner_id=note.owner_id,
            created_at=note.created_at,
            updated_at=note.updated_at,
            is_archived=note.is_archived,
            tags=TagConverter.entities_to_responses(note.tags),
        )

    @staticmethod
    def pagination_to_response(pagination: PaginationMetadata) -> PaginationInfo:
        return PaginationInfo(
            current_page=pagination.current_page,
            total_pages=pagination.total_pages,
            total_notes=pagination.total_notes,
            notes_per_page=pagination.notes_per_page,
            has_next=pagination.has_next,
            has_previous=pagination.has_previous,
        )

    @staticmethod
    def to_list_response(
        notes: List[Note], pagination: PaginationMetadata
    ) -> NotesListResponse:
        """Convert a page of notes and its metadata to a NotesListResponse."""
        return NotesListResponse(
            notes=[NoteConverter.entity_to_response(note) for note in notes],
            pagination=NoteConverter.pagination_to_response(pagination),
        )
