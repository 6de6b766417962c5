import pytest
from domain.entities.file_type import ACCEPTED_EXTENSIONS, FileType, normalize_media_type
from domain.services.file_validator import (
    FileDescriptor,
    FileTooLargeError,
    UnsupportedFileTypeError,
    check_size,
    resolve_file_type,
    validate_file,
)
from utils.config import MAX_UPLOAD_SIZE

MIB = 1024 * 1024


@pytest.mark.parametrize(
    "name,media_type,expected",
    [
        ("data.json", "application/json", FileType.JSON),
        ("notes.txt", "text/plain; charset=utf-8", FileType.TXT),
        ("letter.rtf", "text/rtf", FileType.RTF),
        ("report.pdf", "application/pdf", FileType.PDF),
        ("memo.m4a", "audio/x-m4a", FileType.M4A),
        ("sheet.xls", "application/vnd.ms-excel", FileType.XLS),
        ("photo.jpg", "image/jpeg", FileType.JPG),
        ("photo.JPEG", "IMAGE/JPEG", FileType.JPEG),
        ("page.html", "text/html", FileType.HTML),
    ],
)
def test_resolve_file_type_accepts_allow_list(name, media_type, expected):
    assert resolve_file_type(name, media_type) == expected


def test_unsupported_media_type_is_rejected():
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        resolve_file_type("setup.exe", "application/x-msdownload")

    assert exc_info.value.message == "Unsupported file type: application/x-msdownload"
    assert exc_info.value.details == {"accepted": ACCEPTED_EXTENSIONS}


def test_extension_must_match_media_type():
    with pytest.raises(UnsupportedFileTypeError, match="Unsupported file extension: .png"):
        resolve_file_type("report.png", "application/pdf")


def test_missing_extension_is_rejected():
    with pytest.raises(UnsupportedFileTypeError):
        resolve_file_type("README", "text/plain")


def test_size_ceiling_is_inclusive():
    check_size(MAX_UPLOAD_SIZE)

    with pytest.raises(FileTooLargeError) as exc_info:
        check_size(MAX_UPLOAD_SIZE + 1)

    assert exc_info.value.message == "File size must be less than 50MB"


def test_validate_file_reports_type_before_size():
    descriptor = FileDescriptor(name="big.exe", media_type="application/octet-stream", size=60 * MIB)

    with pytest.raises(UnsupportedFileTypeError):
        validate_file(descriptor)


def test_validate_file_rejects_sixty_mebibytes():
    descriptor = FileDescriptor(name="scan.pdf", media_type="application/pdf", size=60 * MIB)

    with pytest.raises(FileTooLargeError):
        validate_file(descriptor)


def test_accepted_extensions_string():
    assert ACCEPTED_EXTENSIONS == ".json,.txt,.rtf,.pdf,.m4a,.docx,.xls,.csv,.xlsx,.png,.jpg,.jpeg,.html"
    assert normalize_media_type(None) == ""
