import re
from uuid import uuid4

import pytest
from conftest import MIB, InMemoryAttachmentRepository, InMemoryStorage, pdf_bytes
from domain.entities.attachment import UploadRequest
from domain.entities.file_type import FileType
from domain.services.file_validator import (
    FileTooLargeError,
    FileValidationError,
    UnsupportedFileTypeError,
)
from domain.services.note_service import NoteNotFoundError
from domain.services.upload_service import (
    AttachmentNotFoundError,
    MetadataWriteError,
    StorageWriteError,
    UploadService,
)

KEY_PATTERN = re.compile(r"^u1/[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}\.pdf$")


class StubNoteRepository:
    def __init__(self, notes=None):
        self.notes = notes or {}

    async def get_note_by_id(self, db_session, note_id, owner_id):
        note = self.notes.get(note_id)
        if note is not None and note["owner_id"] == owner_id:
            return note
        return None


def make_request(**overrides) -> UploadRequest:
    values = dict(
        file_name="report.pdf",
        content_type="application/pdf",
        content=pdf_bytes(2 * MIB),
        owner_id="u1",
    )
    values.update(overrides)
    return UploadRequest(**values)


@pytest.fixture
def note_repository():
    return StubNoteRepository()


@pytest.fixture
def service(storage, attachment_repository, note_repository, settings):
    return UploadService(storage, attachment_repository, note_repository, settings)


async def test_report_pdf_creates_one_object_and_one_row(service, storage, attachment_repository):
    attachment = await service.upload(None, make_request())

    assert KEY_PATTERN.match(attachment.file_path)
    assert attachment.file_type == FileType.PDF
    assert attachment.file_size == 2097152
    assert attachment.file_name == "report.pdf"
    assert attachment.metadata["originalName"] == "report.pdf"
    assert attachment.metadata["uploadedBy"] == "u1"
    assert attachment.metadata["uploadedAt"].endswith("Z")
    assert list(storage.objects) == [attachment.file_path]
    assert storage.content_types[attachment.file_path] == "application/pdf"
    assert attachment_repository.rows == [attachment]


async def test_sixty_mebibytes_never_reach_storage(service, storage, attachment_repository):
    with pytest.raises(FileTooLargeError, match="File size must be less than 50MB"):
        await service.upload(None, make_request(content=pdf_bytes(60 * MIB)))

    assert storage.objects == {}
    assert attachment_repository.rows == []


async def test_declared_size_above_limit_is_rejected(service, storage):
    request = make_request(content=pdf_bytes(1024), declared_size=60 * MIB)

    with pytest.raises(FileTooLargeError):
        await service.upload(None, request)

    assert storage.objects == {}


async def test_declared_size_mismatch_is_rejected(service, storage):
    request = make_request(content=pdf_bytes(1024), declared_size=2048)

    with pytest.raises(FileValidationError) as exc_info:
        await service.upload(None, request)

    assert exc_info.value.details == {"declared": 2048, "received": 1024}
    assert storage.objects == {}


async def test_unsupported_type_is_rejected(service, storage):
    request = make_request(file_name="setup.exe", content_type="application/x-msdownload")

    with pytest.raises(UnsupportedFileTypeError):
        await service.upload(None, request)

    assert storage.objects == {}


async def test_content_must_match_declared_type(service, storage):
    request = make_request(content=b"MZ\x90\x00" + b"\x00" * 100)

    with pytest.raises(UnsupportedFileTypeError):
        await service.upload(None, request)

    assert storage.objects == {}


async def test_signature_check_can_be_disabled(storage, attachment_repository, note_repository, settings):
    from dataclasses import replace

    service = UploadService(
        storage, attachment_repository, note_repository, replace(settings, verify_signature=False)
    )

    attachment = await service.upload(None, make_request(content=b"not really a pdf"))

    assert attachment.file_type == FileType.PDF


async def test_empty_file_name_is_rejected(service):
    with pytest.raises(FileValidationError, match="No file uploaded"):
        await service.upload(None, make_request(file_name="  "))


async def test_overlong_file_name_is_rejected_before_storage(service, storage, attachment_repository):
    with pytest.raises(FileValidationError, match="at most 255 characters"):
        await service.upload(None, make_request(file_name="r" * 252 + ".pdf"))

    assert storage.objects == {}
    assert attachment_repository.rows == []


async def test_file_name_at_column_width_is_accepted(service):
    attachment = await service.upload(
        None, make_request(file_name="r" * 251 + ".pdf", content=pdf_bytes(1024))
    )

    assert len(attachment.file_name) == 255


async def test_two_uploads_get_distinct_keys(service, storage):
    first = await service.upload(None, make_request(content=pdf_bytes(1024)))
    second = await service.upload(None, make_request(content=pdf_bytes(1024)))

    assert first.file_path != second.file_path
    assert len(storage.objects) == 2


async def test_extension_is_lower_cased_in_key(service):
    attachment = await service.upload(
        None, make_request(file_name="Scan.PDF", content=pdf_bytes(64))
    )

    assert attachment.file_path.endswith(".pdf")
    assert attachment.stored_name == attachment.file_path.split("/")[1]


async def test_metadata_failure_leaves_exactly_one_orphan(storage, note_repository, settings):
    repository = InMemoryAttachmentRepository(fail_with=RuntimeError("insert failed"))
    service = UploadService(storage, repository, note_repository, settings)

    with pytest.raises(MetadataWriteError) as exc_info:
        await service.upload(None, make_request(content=pdf_bytes(1024)))

    assert exc_info.value.message == "Failed to save file metadata"
    assert exc_info.value.details == "insert failed"
    assert list(storage.objects) == [exc_info.value.orphaned_path]
    assert repository.rows == []


async def test_storage_failure_writes_no_row(attachment_repository, note_repository, settings):
    storage = InMemoryStorage(fail_with=ConnectionError("backend down"))
    service = UploadService(storage, attachment_repository, note_repository, settings)

    with pytest.raises(StorageWriteError) as exc_info:
        await service.upload(None, make_request(content=pdf_bytes(1024)))

    assert exc_info.value.message == "Failed to upload file to storage"
    assert exc_info.value.details == "backend down"
    assert attachment_repository.rows == []


async def test_note_reference_must_belong_to_owner(storage, attachment_repository, settings):
    note_id = uuid4()
    service = UploadService(
        storage,
        attachment_repository,
        StubNoteRepository({note_id: {"owner_id": "someone-else"}}),
        settings,
    )

    with pytest.raises(NoteNotFoundError):
        await service.upload(None, make_request(content=pdf_bytes(64), note_id=note_id))

    assert storage.objects == {}


async def test_note_reference_is_recorded(storage, attachment_repository, settings):
    note_id = uuid4()
    service = UploadService(
        storage,
        attachment_repository,
        StubNoteRepository({note_id: {"owner_id": "u1"}}),
        settings,
    )

    attachment = await service.upload(None, make_request(content=pdf_bytes(64), note_id=note_id))

    assert attachment.note_id == note_id


async def test_download_url_is_owner_scoped(service):
    attachment = await service.upload(None, make_request(content=pdf_bytes(64)))

    found, url = await service.create_download_url(None, attachment.id, "u1")
    assert found is attachment
    assert url.endswith("expires=600")

    with pytest.raises(AttachmentNotFoundError):
        await service.create_download_url(None, attachment.id, "u2")
