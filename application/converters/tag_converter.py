"""Tag converters for transforming between Pydantic schemas and domain entities.

This module contains converter functions for transforming tag objects
between the API layer (Pydantic) and the domain layer (entities).
"""

from typing import List

from domain.entities.tag import TagEntity

from application.rest.schemas.output.tag_output import TagResponse


class TagConverter:
    """Converter class for tag transformations between layers.

    Example:
        >>> tag_response = TagConverter.entity_to_response(tag_entity)
    """

    @staticmethod
    def entity_to_response(tag_entity: TagEntity) -> TagResponse:
        """Convert TagEntity domain object to TagResponse Pydantic schema.

        Args:
            tag_entity (TagEntity): Domain entity representing a tag.

        Returns:
            TagResponse: Pydantic schema for API response.

        Raises:
            ValueError: If the tag entity has no ID (not persisted).

        Example:
            >>> tag_entity = TagEntity(id=UUID("123e4567-e89b-12d3-a456-426614174000"), name="work", owner_id="u1")
            >>> tag_response = TagConverter.entity_to_response(tag_entity)
            >>> print(tag_response.id)
            "123e4567-e89b-12d3-a456-426614174000"
        """
        if tag_entity.is_new():
            raise ValueError("Cannot convert new tag entity to response (no ID)")

        return TagResponse(
            id=str(tag_entity.id), name=tag_entity.name, color=tag_entity.color
        )

    @staticmethod
    def entities_to_responses(tag_entities: List[TagEntity]) -> List[TagResponse]:
        """Convert list of TagEntity domain objects to list of TagResponse schemas."""
        return [TagConverter.entity_to_response(entity) for entity in tag_entities]
