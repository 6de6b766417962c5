"""Tag domain entity.

This module contains the Tag domain entity that represents
a tag in the business domain with its rules and behaviors.
"""

import re
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

TAG_NAME_MAX_LENGTH = 50
COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class TagEntity:
    """Domain entity representing a tag owned by a user.

    This is an immutable domain object that represents a tag
    with its business rules and constraints.

    Attributes:
        id (Optional[UUID]): Unique identifier for the tag. None for new tags.
        name (str): The display name of the tag.
        owner_id (str): Identity of the user the tag belongs to.
        color (Optional[str]): Display color as ``#RRGGBB``.

    Example:
        >>> tag = TagEntity(id=None, name=" work ", owner_id="u1", color="#FFAA00")
        >>> print(tag.name)
        work

    Business Rules:
        - Tag name must be non-empty and stripped of whitespace
        - Tag names are unique per owner (enforced at service level)
        - Tags are immutable once created (value object characteristics)
    """

    id: Optional[UUID]
    name: str
    owner_id: str
    color: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate tag entity after initialization.

        Raises:
            ValueError: If the name is empty or too long, or the color is malformed.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Tag name cannot be empty or whitespace")
        if len(self.name.strip()) > TAG_NAME_MAX_LENGTH:
            raise ValueError(
                f"Tag name cannot exceed {TAG_NAME_MAX_LENGTH} characters"
            )
        if self.color is not None and not COLOR_PATTERN.match(self.color):
            raise ValueError(f"Invalid tag color: {self.color}")

        # Normalize the name by stripping whitespace
        object.__setattr__(self, "name", self.name.strip())

    def is_new(self) -> bool:
        """Check if this is a new tag (not yet persisted)."""
        return self.id is None

    def with_id(self, tag_id: UUID) -> "TagEntity":
        """Create a new TagEntity with the specified ID.

        This is useful when persisting a new tag and getting back the generated ID.
        """
        return TagEntity(
            id=tag_id, name=self.name, owner_id=self.owner_id, color=self.color
        )
