"""Tag output schemas for API responses.

This module contains Pydantic models for tag-related API responses.
"""

from typing import Optional

from pydantic import BaseModel


class TagResponse(BaseModel):
    """Schema for tag data in API responses.

    Attributes:
        id (str): UUID string identifier of the tag.
        name (str): The name of the tag.
        color (str, optional): Display color as ``#RRGGBB``.

    Example:
        >>> tag_response = TagResponse(id="tag-uuid-123", name="work", color="#FFAA00")
    """

    id: str  # UUID as string
    name: str
    color: Optional[str] = None
