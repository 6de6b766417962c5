from uuid import uuid4

import pytest
from domain.entities.pagination import NoteListCriteria
from domain.services.note_service import NoteNotFoundError, NoteService, UnknownTagError
from domain.services.tag_service import TagService
from infrastructure.repositories.sqlalchemy_note_repository import SQLAlchemyNoteRepository
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository


class RecordingNoteRepository:
    def __init__(self):
        self.calls = []

    async def create_note(self, db_session, note):
        self.calls.append(note)
        return note


@pytest.fixture
def note_service():
    return NoteService(SQLAlchemyNoteRepository(), SqlAlchemyTagRepository())


@pytest.fixture
def tag_service():
    return TagService(SqlAlchemyTagRepository())


@pytest.mark.parametrize("title", ["", "   ", None])
async def test_empty_title_is_rejected_before_persistence(title):
    repository = RecordingNoteRepository()
    service = NoteService(repository, SqlAlchemyTagRepository())

    with pytest.raises(ValueError, match="Please add a title"):
        await service.create_note(None, title, "<p>body</p>", "u1")

    assert repository.calls == []


async def test_create_note_with_tags(db_session, note_service, tag_service):
    work = await tag_service.create_tag(db_session, "u1", "work", "#112233")

    note = await note_service.create_note(
        db_session, "  Standup  ", "<p>notes</p>", "u1", [work.id]
    )

    assert note.id is not None
    assert note.title == "Standup"
    assert note.owner_id == "u1"
    assert [tag.name for tag in note.tags] == ["work"]


async def test_tags_of_another_owner_are_unknown(db_session, note_service, tag_service):
    foreign = await tag_service.create_tag(db_session, "u2", "private")

    with pytest.raises(UnknownTagError, match="Unknown tags"):
        await note_service.create_note(db_session, "Title", "", "u1", [foreign.id])


async def test_notes_of_another_owner_are_not_found(db_session, note_service):
    note = await note_service.create_note(db_session, "Mine", "", "u1")

    with pytest.raises(NoteNotFoundError):
        await note_service.get_note(db_session, note.id, "u2")

    with pytest.raises(NoteNotFoundError):
        await note_service.get_note(db_session, uuid4(), "u1")


async def test_update_note_replaces_fields(db_session, note_service, tag_service):
    tag = await tag_service.create_tag(db_session, "u1", "ideas")
    note = await note_service.create_note(db_session, "Draft", "<p>v1</p>", "u1")

    updated = await note_service.update_note(
        db_session, note.id, "u1", content="<p>v2</p>", tag_ids=[tag.id]
    )

    assert updated.title == "Draft"
    assert updated.content == "<p>v2</p>"
    assert [t.name for t in updated.tags] == ["ideas"]


async def test_update_rejects_blank_title(db_session, note_service):
    note = await note_service.create_note(db_session, "Draft", "", "u1")

    with pytest.raises(ValueError):
        await note_service.update_note(db_session, note.id, "u1", title=" ")


async def test_archive_and_restore(db_session, note_service):
    note = await note_service.create_note(db_session, "Old", "", "u1")

    archived = await note_service.set_archived(db_session, note.id, "u1", True)
    assert archived.is_archived

    active, _ = await note_service.list_notes(db_session, NoteListCriteria(owner_id="u1"))
    assert active == []

    only_archived, _ = await note_service.list_notes(
        db_session, NoteListCriteria(owner_id="u1", archived=True)
    )
    assert [n.id for n in only_archived] == [note.id]

    restored = await note_service.set_archived(db_session, note.id, "u1", False)
    assert not restored.is_archived


async def test_list_notes_paginates(db_session, note_service):
    for i in range(5):
        await note_service.create_note(db_session, f"Note {i}", "", "u1")
    await note_service.create_note(db_session, "Other", "", "u2")

    notes, pagination = await note_service.list_notes(
        db_session, NoteListCriteria(owner_id="u1", page=2, limit=2)
    )

    assert len(notes) == 2
    assert pagination.total_notes == 5
    assert pagination.total_pages == 3
    assert pagination.has_next and pagination.has_previous


async def test_tag_filter_requires_all_tags(db_session, note_service, tag_service):
    a = await tag_service.create_tag(db_session, "u1", "a")
    b = await tag_service.create_tag(db_session, "u1", "b")
    both = await note_service.create_note(db_session, "Both", "", "u1", [a.id, b.id])
    await note_service.create_note(db_session, "Only a", "", "u1", [a.id])

    notes, pagination = await note_service.list_notes(
        db_session, NoteListCriteria(owner_id="u1", tag_ids=(a.id, b.id))
    )

    assert [n.id for n in notes] == [both.id]
    assert pagination.total_notes == 1


async def test_repeated_tag_in_filter_still_matches(db_session, note_service, tag_service):
    a = await tag_service.create_tag(db_session, "u1", "a")
    note = await note_service.create_note(db_session, "Tagged", "", "u1", [a.id])

    notes, _ = await note_service.list_notes(
        db_session, NoteListCriteria(owner_id="u1", tag_ids=(a.id, a.id))
    )

    assert [n.id for n in notes] == [note.id]


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
def test_list_criteria_bounds(page, limit):
    with pytest.raises(ValueError):
        NoteListCriteria(owner_id="u1", page=page, limit=limit)
