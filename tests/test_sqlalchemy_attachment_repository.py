from uuid import uuid4

import pytest
from conftest import pdf_bytes
from domain.entities.attachment import Attachment, UploadRequest
from domain.entities.file_type import FileType
from domain.services.note_service import NoteService
from infrastructure.repositories.sqlalchemy_attachment_repository import (
    SqlAlchemyAttachmentRepository,
)
from infrastructure.repositories.sqlalchemy_note_repository import SQLAlchemyNoteRepository
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository
from sqlalchemy.exc import IntegrityError


@pytest.fixture
def repository():
    return SqlAlchemyAttachmentRepository()


def make_attachment(owner_id="u1", path=None, note_id=None) -> Attachment:
    request = UploadRequest(
        file_name="report.pdf",
        content_type="application/pdf",
        content=pdf_bytes(128),
        owner_id=owner_id,
        note_id=note_id,
    )
    return Attachment.from_upload(
        request, FileType.PDF, path or f"{owner_id}/{uuid4()}.pdf"
    )


async def test_row_round_trips(db_session, repository):
    stored = await repository.create_attachment(db_session, make_attachment())

    loaded = await repository.get_attachment(db_session, stored.id, "u1")

    assert loaded.file_type == FileType.PDF
    assert loaded.file_size == 128
    assert loaded.metadata["contentType"] == "application/pdf"
    assert await repository.get_attachment(db_session, stored.id, "u2") is None


async def test_storage_key_is_unique(db_session, repository):
    await repository.create_attachment(db_session, make_attachment(path="u1/same.pdf"))

    with pytest.raises(IntegrityError):
        await repository.create_attachment(db_session, make_attachment(path="u1/same.pdf"))


async def test_list_filters_by_owner_and_note(db_session, repository):
    notes = NoteService(SQLAlchemyNoteRepository(), SqlAlchemyTagRepository())
    note = await notes.create_note(db_session, "With files", "", "u1")
    await repository.create_attachment(db_session, make_attachment(note_id=note.id))
    await repository.create_attachment(db_session, make_attachment())
    await repository.create_attachment(db_session, make_attachment(owner_id="u2"))

    assert len(await repository.list_attachments(db_session, "u1")) == 2
    attached = await repository.list_attachments(db_session, "u1", note.id)
    assert [a.note_id for a in attached] == [note.id]
