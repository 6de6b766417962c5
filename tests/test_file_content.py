import base64

import pytest
from domain.entities.file_type import FileType
from domain.services.file_encoder import decode_payload, to_data_url
from domain.services.file_signature import matches_signature, verify_signature
from domain.services.file_validator import FileValidationError, UnsupportedFileTypeError


@pytest.mark.parametrize(
    "file_type,content",
    [
        (FileType.PDF, b"%PDF-1.4\n..."),
        (FileType.PNG, b"\x89PNG\r\n\x1a\n\x00\x00"),
        (FileType.JPG, b"\xff\xd8\xff\xe0\x00\x10JFIF"),
        (FileType.DOCX, b"PK\x03\x04\x14\x00"),
        (FileType.XLSX, b"PK\x03\x04\x14\x00"),
        (FileType.XLS, b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1\x00"),
        (FileType.RTF, b"{\\rtf1\\ansi hello}"),
        (FileType.M4A, b"\x00\x00\x00\x20ftypM4A "),
        (FileType.CSV, b"a,b\n1,2\n"),
        (FileType.JSON, b'{"a": 1}'),
    ],
)
def test_matching_signatures(file_type, content):
    assert matches_signature(file_type, content)


def test_executable_declared_as_pdf_is_rejected():
    with pytest.raises(UnsupportedFileTypeError, match="does not match declared type PDF"):
        verify_signature(FileType.PDF, b"MZ\x90\x00\x03\x00")


def test_binary_declared_as_text_is_rejected():
    assert not matches_signature(FileType.TXT, b"hello\x00world")


def test_data_url_round_trip():
    url = to_data_url(b"hi", "text/plain")

    assert url == "data:text/plain;base64,aGk="
    assert decode_payload(url) == b"hi"


def test_raw_base64_is_accepted():
    assert decode_payload(base64.b64encode(b"\x01\x02").decode()) == b"\x01\x02"


def test_invalid_base64_is_rejected():
    with pytest.raises(FileValidationError, match="not valid base64"):
        decode_payload("not base64!!")


def test_data_url_without_base64_marker_is_rejected():
    with pytest.raises(FileValidationError, match="base64 data URL"):
        decode_payload("data:text/plain,hello")
