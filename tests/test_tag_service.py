from uuid import uuid4

import pytest
from domain.entities.tag import TagEntity
from domain.services.tag_service import (
    TagAlreadyExistsError,
    TagNotFoundError,
    TagService,
)
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository


@pytest.fixture
def tag_service():
    return TagService(SqlAlchemyTagRepository())


async def test_tags_are_sorted_and_owner_scoped(db_session, tag_service):
    await tag_service.create_tag(db_session, "u1", "zeta")
    await tag_service.create_tag(db_session, "u1", "Alpha")
    await tag_service.create_tag(db_session, "u2", "beta")

    tags = await tag_service.get_all_tags(db_session, "u1")

    assert [tag.name for tag in tags] == ["Alpha", "zeta"]


async def test_names_are_unique_per_owner_ignoring_case(db_session, tag_service):
    await tag_service.create_tag(db_session, "u1", "Work")

    with pytest.raises(TagAlreadyExistsError):
        await tag_service.create_tag(db_session, "u1", "work")

    other = await tag_service.create_tag(db_session, "u2", "work")
    assert other.owner_id == "u2"


async def test_update_tag_name_and_color(db_session, tag_service):
    tag = await tag_service.create_tag(db_session, "u1", "todo")

    updated = await tag_service.update_tag(db_session, tag.id, "u1", name="done", color="#00FF00")

    assert updated.id == tag.id
    assert updated.name == "done"
    assert updated.color == "#00FF00"


async def test_rename_to_existing_name_is_rejected(db_session, tag_service):
    await tag_service.create_tag(db_session, "u1", "a")
    b = await tag_service.create_tag(db_session, "u1", "b")

    with pytest.raises(TagAlreadyExistsError):
        await tag_service.update_tag(db_session, b.id, "u1", name="A")


async def test_foreign_tag_is_not_found(db_session, tag_service):
    tag = await tag_service.create_tag(db_session, "u1", "mine")

    with pytest.raises(TagNotFoundError):
        await tag_service.get_tag_by_id(db_session, tag.id, "u2")
    assert not await tag_service.delete_tag(db_session, tag.id, "u2")
    assert await tag_service.delete_tag(db_session, tag.id, "u1")
    assert not await tag_service.delete_tag(db_session, uuid4(), "u1")


@pytest.mark.parametrize(
    "name,color",
    [("", None), ("x" * 51, None), ("ok", "red"), ("ok", "#12345")],
)
def test_invalid_tags_are_rejected(name, color):
    with pytest.raises(ValueError):
        TagEntity(id=None, name=name, owner_id="u1", color=color)
