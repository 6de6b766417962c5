"""Response documentation and path helpers shared by the REST routers."""

from typing import Any, Dict
from uuid import UUID

from application.rest.schemas.output.common_output import ErrorResponse
from fastapi import HTTPException, status


def error_doc(description: str, example: str = None) -> Dict[str, Any]:
    """OpenAPI entry for an ``ErrorResponse`` with an optional example detail."""
    doc: Dict[str, Any] = {"model": ErrorResponse, "description": description}
    if example is not None:
        doc["content"] = {"application/json": {"example": {"detail": example}}}
    return doc


UNAUTHORIZED_RESPONSE = error_doc("User authentication required.", "Please sign in")
INVALID_ID_RESPONSE = error_doc("Invalid UUID format.", "Invalid UUID format: invalid-id")


def parse_uuid(value: str, label: str = "UUID") -> UUID:
    """Parse a path or query identifier or answer 400."""
    try:
        return UUID(value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} format: {value}",
        ) from e
