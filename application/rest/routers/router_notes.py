import logging
from typing import List, Literal, Optional
from uuid import UUID

from application.converters.note_converter import NoteConverter
from application.rest.responses import UNAUTHORIZED_RESPONSE, parse_uuid
from application.rest.schemas.input.note_input import NoteCreate, NoteUpdate
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.note_output import NoteResponse, NotesListResponse
from domain.entities.pagination import NoteListCriteria
from domain.services.note_service import (
    NoteError,
    NoteNotFoundError,
    NoteService,
)
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from utils.dependencies import get_db, get_note_service
from utils.security import get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter()

ARCHIVED_FILTERS = {"false": False, "true": True, "all": None}

NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Note not found or not owned by the caller.",
    "content": {
        "application/json": {
            "example": {"detail": "Note 123e4567-e89b-12d3-a456-426614174000 not found"}
        }
    },
}


def parse_tag_ids(tags: Optional[str]) -> List[UUID]:
    """Parse a comma-separated list of tag UUIDs from a query parameter."""
    if not tags:
        return []
    try:
        return [UUID(tag_id.strip()) for tag_id in tags.split(",") if tag_id.strip()]
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid UUID format for tag IDs",
        ) from e


def _translate_note_error(e: Exception, action: str) -> HTTPException:
    if isinstance(e, NoteNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, NoteError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )
    logger.exception(f"Unexpected error while trying to {action}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


@router.get(
    path="/notes",
    description="Retrieve the caller's notes with pagination and tag filtering.",
    response_model=NotesListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NotesListResponse,
            "description": "Paginated list of the caller's notes, most recently updated first.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid pagination parameters or tag IDs.",
            "content": {
                "application/json": {
                    "example": {"detail": "Limit must be between 1 and 100"}
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database query failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to retrieve notes"}}
            },
        },
    },
)
async def get_notes(
    page: int = 1,
    limit: int = 15,
    tags: Optional[str] = None,  # Comma-separated tag IDs, all must match
    archived: Literal["false", "true", "all"] = "false",
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NotesListResponse:
    """Get the caller's notes with pagination.

    Args:
        page (int, optional): Page number for pagination. Defaults to 1.
        limit (int, optional): Number of notes per page (1-100). Defaults to 15.
        tags (Optional[str], optional): Comma-separated tag UUIDs; notes must carry all of them.
        archived (str, optional): ``false`` for active notes, ``true`` for archived, ``all`` for both.
        user_id (str): Identity resolved from the bearer token.
        db (Session): Database session dependency injected by FastAPI.
        note_service (NoteService): Domain service with injected repositories.

    Returns:
        NotesListResponse: Paginated list of notes with pagination metadata.

    Raises:
        HTTPException: 400 if pagination or tag IDs are invalid.
        HTTPException: 500 for internal server errors.

    Example:
        >>> result = await get_notes(page=1, limit=10, tags="uuid1,uuid2")
        >>> print(f"Notes: {len(result.notes)}")
        Notes: 3
    """
    tag_ids = parse_tag_ids(tags)
    logger.info(f"Getting notes for user_id: {user_id}, page: {page}, limit: {limit}")

    try:
        criteria = NoteListCriteria(
            owner_id=user_id,
            page=page,
            limit=limit,
            tag_ids=tuple(tag_ids) or None,
            archived=ARCHIVED_FILTERS[archived],
        )
        notes, pagination = await note_service.list_notes(db, criteria)
    except Exception as e:
        raise _translate_note_error(e, "retrieve notes") from e

    return NoteConverter.to_list_response(notes, pagination)


@router.post(
    path="/notes",
    description="Create a new note owned by the caller.",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": NoteResponse,
            "description": "Note created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Missing title or unknown tags.",
            "content": {
                "application/json": {"example": {"detail": "Please add a title"}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - note creation failed.",
        },
    },
)
async def create_note(
    note: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Create a new note for the caller.

    The title is validated before anything is written; a failed insert
    surfaces the underlying error message.

    Raises:
        HTTPException: 400 if the title is empty or a tag is unknown.
        HTTPException: 500 if the insert fails.
    """
    try:
        created = await note_service.create_note(
            db,
            title=note.title,
            content=note.content,
            owner_id=user_id,
            tag_ids=note.tags,
        )
    except Exception as e:
        raise _translate_note_error(e, "create note") from e

    return NoteConverter.entity_to_response(created)


@router.get(
    path="/notes/{note_id}",
    description="Retrieve one of the caller's notes.",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {"model": NoteResponse, "description": "Note found."},
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid note ID format.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note_uuid = parse_uuid(note_id, "note ID")
    try:
        note = await note_service.get_note(db, note_uuid, user_id)
    except Exception as e:
        raise _translate_note_error(e, "retrieve note") from e

    return NoteConverter.entity_to_response(note)


@router.put(
    path="/notes/{note_id}",
    description="Update title, content or tags of one of the caller's notes.",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteResponse,
            "description": "Note updated successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid note ID, empty title or unknown tags.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - note update failed.",
        },
    },
)
async def update_note(
    note_id: str,
    note_update: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Update an existing note.

    Only the fields present in the body are changed; ``tags`` replaces the
    whole tag set when given.

    Raises:
        HTTPException: 400 if the ID or data is invalid.
        HTTPException: 404 if the note is not found.
        HTTPException: 500 if the update fails.
    """
    note_uuid = parse_uuid(note_id, "note ID")
    try:
        updated = await note_service.update_note(
            db,
            note_uuid,
            user_id,
            title=note_update.title,
            content=note_update.content,
            tag_ids=note_update.tags,
        )
    except Exception as e:
        raise _translate_note_error(e, "update note") from e

    return NoteConverter.entity_to_response(updated)


async def _set_archived(
    note_id: str, archived: bool, user_id: str, db: Session, note_service: NoteService
) -> NoteResponse:
    note_uuid = parse_uuid(note_id, "note ID")
    try:
        note = await note_service.set_archived(db, note_uuid, user_id, archived)
    except Exception as e:
        raise _translate_note_error(e, "update note") from e

    logger.info(f"Note {note_id} archived={archived} by user {user_id}")
    return NoteConverter.entity_to_response(note)


@router.post(
    path="/notes/{note_id}/archive",
    description="Archive one of the caller's notes.",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def archive_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await _set_archived(note_id, True, user_id, db, note_service)


@router.post(
    path="/notes/{note_id}/restore",
    description="Restore an archived note of the caller.",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def restore_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await _set_archived(note_id, False, user_id, db, note_service)
