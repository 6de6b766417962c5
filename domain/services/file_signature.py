"""Server-side content check of uploaded files.

The declared media type is supplied by the client, so the upload gateway
compares the leading bytes of the payload with the signature of the declared
kind before anything is written to storage.
"""

from typing import Callable, Dict

from domain.entities.file_type import TEXT_TYPES, FileType
from domain.services.file_validator import UnsupportedFileTypeError

ZIP_SIGNATURES = (b"PK\x03\x04", b"PK\x05\x06")
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
TEXT_PROBE_SIZE = 8192


def _looks_like_text(content: bytes) -> bool:
    # NUL bytes never appear in the supported text formats
    return b"\x00" not in content[:TEXT_PROBE_SIZE]


SIGNATURE_CHECKS: Dict[FileType, Callable[[bytes], bool]] = {
    FileType.PDF: lambda data: data.startswith(b"%PDF-"),
    FileType.PNG: lambda data: data.startswith(b"\x89PNG\r\n\x1a\n"),
    FileType.JPG: lambda data: data.startswith(b"\xff\xd8\xff"),
    FileType.JPEG: lambda data: data.startswith(b"\xff\xd8\xff"),
    FileType.DOCX: lambda data: data.startswith(ZIP_SIGNATURES),
    FileType.XLSX: lambda data: data.startswith(ZIP_SIGNATURES),
    FileType.XLS: lambda data: data.startswith(OLE_SIGNATURE),
    FileType.RTF: lambda data: data.startswith(b"{\\rtf"),
    FileType.M4A: lambda data: data[4:8] == b"ftyp",
}


def matches_signature(file_type: FileType, content: bytes) -> bool:
    """Check whether ``content`` starts like a file of kind ``file_type``.

    Example:
        >>> matches_signature(FileType.PDF, b"%PDF-1.7 ...")
        True
        >>> matches_signature(FileType.PNG, b"MZ\\x90\\x00")
        False
    """
    if file_type in TEXT_TYPES:
        return _looks_like_text(content)
    check = SIGNATURE_CHECKS.get(file_type)
    return bool(check and check(content))


def verify_signature(file_type: FileType, content: bytes) -> None:
    """Raise when the payload does not match its declared kind.

    Raises:
        UnsupportedFileTypeError: If the leading bytes contradict ``file_type``.
    """
    if not matches_signature(file_type, content):
        raise UnsupportedFileTypeError(
            f"File content does not match declared type {file_type.value}"
        )
