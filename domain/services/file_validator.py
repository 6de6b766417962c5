"""File validation rules shared by the client and the upload gateway.

This module checks a candidate file's declared media type, extension and size
against the allow-list before any network call or storage write happens.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from domain.entities.file_type import (
    ACCEPTED_EXTENSIONS,
    EXTENSIONS,
    MEDIA_TYPES,
    FileType,
    file_extension,
    normalize_media_type,
)
from utils.config import MAX_UPLOAD_SIZE

logger = logging.getLogger(__name__)

MAX_FILE_NAME_LENGTH = 255


class UploadError(Exception):
    """Base exception for upload-related errors."""

    def __init__(self, message: str, details: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class FileValidationError(UploadError):
    """Exception raised when a file fails user-correctable validation."""

    pass


class UnsupportedFileTypeError(FileValidationError):
    """Exception raised when the declared type or extension is not allowed."""

    pass


class FileTooLargeError(FileValidationError):
    """Exception raised when a file exceeds the size ceiling."""

    pass


@dataclass(frozen=True)
class FileDescriptor:
    """What is known about a file before its bytes are read.

    Attributes:
        name (str): Declared file name.
        media_type (str): Declared media type.
        size (int): Byte length.
    """

    name: str
    media_type: str
    size: int


def size_limit_message(max_size: int = MAX_UPLOAD_SIZE) -> str:
    return f"File size must be less than {max_size // (1024 * 1024)}MB"


def check_size(size: int, max_size: int = MAX_UPLOAD_SIZE) -> None:
    """Reject files above the size ceiling.

    Raises:
        FileTooLargeError: If ``size`` exceeds ``max_size``.
    """
    if size > max_size:
        raise FileTooLargeError(
            size_limit_message(max_size), {"size": size, "maxSize": max_size}
        )


def check_file_name(file_name: str) -> None:
    """Reject names longer than the metadata column allows.

    Raises:
        FileValidationError: If the name exceeds ``MAX_FILE_NAME_LENGTH``.
    """
    if len(file_name) > MAX_FILE_NAME_LENGTH:
        raise FileValidationError(
            f"File name must be at most {MAX_FILE_NAME_LENGTH} characters",
            {"length": len(file_name), "maxLength": MAX_FILE_NAME_LENGTH},
        )


def resolve_file_type(file_name: str, media_type: str) -> FileType:
    """Map a declared name and media type onto a supported kind.

    The media type must be in the allow-list and the extension must be one of
    the accepted extensions describing that media type.

    Args:
        file_name (str): Declared file name.
        media_type (str): Declared media type.

    Returns:
        FileType: The matching kind, e.g. ``FileType.PDF``.

    Raises:
        UnsupportedFileTypeError: If the type or extension is not supported.

    Example:
        >>> resolve_file_type("photo.jpg", "image/jpeg")
        <FileType.JPG: 'JPG'>
    """
    normalized = normalize_media_type(media_type)
    kinds = MEDIA_TYPES.get(normalized)
    if not kinds:
        raise UnsupportedFileTypeError(
            f"Unsupported file type: {media_type or 'unknown'}",
            {"accepted": ACCEPTED_EXTENSIONS},
        )

    extension = file_extension(file_name)
    kind = EXTENSIONS.get(extension)
    if kind is None or kind not in kinds:
        raise UnsupportedFileTypeError(
            f"Unsupported file extension: {'.' + extension if extension else file_name}",
            {"accepted": ACCEPTED_EXTENSIONS},
        )
    return kind


def validate_file(
    descriptor: FileDescriptor, max_size: int = MAX_UPLOAD_SIZE
) -> FileType:
    """Validate a file descriptor before any network call.

    Type is checked before size so an unsupported file is always reported as
    such, whatever its size.

    Raises:
        UnsupportedFileTypeError: If the type or extension is not supported.
        FileTooLargeError: If the file is larger than ``max_size``.
    """
    kind = resolve_file_type(descriptor.name, descriptor.media_type)
    check_size(descriptor.size, max_size)
    logger.debug(f"Validated {descriptor.name} as {kind.value} ({descriptor.size} bytes)")
    return kind
