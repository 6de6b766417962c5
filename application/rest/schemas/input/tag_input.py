"""Tag input schemas for API requests.

This module contains Pydantic models for tag-related API requests,
including tag creation and update operations.
"""

from typing import Optional

from pydantic import BaseModel, Field

COLOR_REGEX = r"^#[0-9a-fA-F]{6}$"


class TagCreate(BaseModel):
    """Schema for creating a new tag.

    Attributes:
        name (str): The name of the tag to create. Must be non-empty.
        color (str, optional): Display color as ``#RRGGBB``.

    Example:
        >>> tag_data = TagCreate(name="work", color="#FFAA00")
        >>> print(tag_data.name)
        "work"
    """

    name: str = Field(..., min_length=1, max_length=50, description="Tag name")
    color: Optional[str] = Field(None, pattern=COLOR_REGEX, description="Tag color")


class TagUpdate(BaseModel):
    """Schema for updating an existing tag.

    Example:
        >>> tag_update = TagUpdate(name="important")
    """

    name: Optional[str] = Field(
        None, min_length=1, max_length=50, description="New tag name"
    )
    color: Optional[str] = Field(None, pattern=COLOR_REGEX, description="New tag color")
