import logging
from typing import List

from application.converters.tag_converter import TagConverter
from application.rest.responses import (
    INVALID_ID_RESPONSE,
    UNAUTHORIZED_RESPONSE,
    error_doc,
    parse_uuid,
)
from application.rest.schemas.input.tag_input import TagCreate, TagUpdate
from application.rest.schemas.output.tag_output import TagResponse
from domain.services.tag_service import (
    TagAlreadyExistsError,
    TagNotFoundError,
    TagService,
)
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from utils.dependencies import get_db, get_tag_service
from utils.security import get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter()

TAG_NOT_FOUND_RESPONSE = error_doc(
    "Tag not found or owned by another user.",
    "Tag with ID 123e4567-e89b-12d3-a456-426614174000 not found",
)
TAG_CONFLICT_RESPONSE = error_doc(
    "Invalid tag data or a tag with that name already exists.",
    "Tag with name 'work' already exists",
)


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


@router.get(
    path="/tags",
    description="Retrieve the caller's tags sorted by name.",
    response_model=List[TagResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: error_doc(
            "Internal server error - database query failed.", "Failed to retrieve tags"
        ),
    },
)
async def get_tags(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> List[TagResponse]:
    """Get the caller's tags.

    The router receives a fresh session per request and hands it to the
    domain service together with the caller's identity; entities coming back
    are converted to response schemas.

    Args:
        user_id (str): Identity resolved from the bearer token.
        db (Session): Fresh database session for this request.
        tag_service (TagService): Domain service with injected repository.

    Returns:
        List[TagResponse]: The caller's tags.

    Example:
        >>> tags = await get_tags("u1", db, tag_service)
        >>> print([tag.name for tag in tags])
        ['personal', 'work']
    """
    try:
        return TagConverter.entities_to_responses(
            await tag_service.get_all_tags(db, user_id)
        )
    except Exception as e:
        raise _server_error("retrieve tags", e) from e


@router.post(
    path="/tags",
    description="Create a tag; names are unique per user regardless of case.",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: TAG_CONFLICT_RESPONSE,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
    },
)
async def create_tag(
    tag_create: TagCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    """Create a tag owned by the caller.

    Raises:
        HTTPException: 400 if the name is taken or the data is invalid.
    """
    try:
        created = await tag_service.create_tag(
            db, user_id, tag_create.name, tag_create.color
        )
    except (TagAlreadyExistsError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        raise _server_error("create tag", e) from e

    return TagConverter.entity_to_response(created)


@router.get(
    path="/tags/{tag_id}",
    description="Retrieve one of the caller's tags.",
    response_model=TagResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: INVALID_ID_RESPONSE,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: TAG_NOT_FOUND_RESPONSE,
    },
)
async def get_tag_by_id(
    tag_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag_uuid = parse_uuid(tag_id)
    try:
        tag = await tag_service.get_tag_by_id(db, tag_uuid, user_id)
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise _server_error("retrieve tag", e) from e

    return TagConverter.entity_to_response(tag)


@router.put(
    path="/tags/{tag_id}",
    description="Rename or recolor one of the caller's tags.",
    response_model=TagResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: TAG_CONFLICT_RESPONSE,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: TAG_NOT_FOUND_RESPONSE,
    },
)
async def update_tag(
    tag_id: str,
    tag_update: TagUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    """Update name and/or color; omitted fields keep their value.

    Raises:
        HTTPException: 400 if the ID is malformed or the new name is taken.
        HTTPException: 404 if the tag is not the caller's.
    """
    tag_uuid = parse_uuid(tag_id)
    try:
        updated = await tag_service.update_tag(
            db, tag_uuid, user_id, name=tag_update.name, color=tag_update.color
        )
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (TagAlreadyExistsError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        raise _server_error("update tag", e) from e

    return TagConverter.entity_to_response(updated)


@router.delete(
    path="/tags/{tag_id}",
    description="Delete one of the caller's tags; tagged notes are kept.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_400_BAD_REQUEST: INVALID_ID_RESPONSE,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: error_doc("Tag not found.", "Tag not found"),
    },
)
async def delete_tag(
    tag_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> None:
    tag_uuid = parse_uuid(tag_id)
    try:
        deleted = await tag_service.delete_tag(db, tag_uuid, user_id)
    except Exception as e:
        raise _server_error("delete tag", e) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
