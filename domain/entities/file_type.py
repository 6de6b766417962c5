"""Supported attachment kinds.

This module contains the closed set of file kinds an attachment may have,
together with the media types and extensions that map onto each kind.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class FileType(str, Enum):
    """Closed enumeration of attachment kinds stored in ``attachments.file_type``."""

    JSON = "JSON"
    TXT = "TXT"
    RTF = "RTF"
    PDF = "PDF"
    M4A = "M4A"
    DOCX = "DOCX"
    XLS = "XLS"
    CSV = "CSV"
    XLSX = "XLSX"
    PNG = "PNG"
    JPG = "JPG"
    JPEG = "JPEG"
    HTML = "HTML"


# Declared media type -> kinds it can describe
MEDIA_TYPES: Dict[str, Tuple[FileType, ...]] = {
    "application/json": (FileType.JSON,),
    "text/plain": (FileType.TXT,),
    "application/rtf": (FileType.RTF,),
    "text/rtf": (FileType.RTF,),
    "application/pdf": (FileType.PDF,),
    "audio/mp4": (FileType.M4A,),
    "audio/x-m4a": (FileType.M4A,),
    "audio/m4a": (FileType.M4A,),
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (
        FileType.DOCX,
    ),
    "application/vnd.ms-excel": (FileType.XLS,),
    "text/csv": (FileType.CSV,),
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (
        FileType.XLSX,
    ),
    "image/png": (FileType.PNG,),
    "image/jpeg": (FileType.JPG, FileType.JPEG),
    "text/html": (FileType.HTML,),
}

# Extension (lower-case, no dot) -> kind
EXTENSIONS: Dict[str, FileType] = {
    "json": FileType.JSON,
    "txt": FileType.TXT,
    "rtf": FileType.RTF,
    "pdf": FileType.PDF,
    "m4a": FileType.M4A,
    "docx": FileType.DOCX,
    "xls": FileType.XLS,
    "csv": FileType.CSV,
    "xlsx": FileType.XLSX,
    "png": FileType.PNG,
    "jpg": FileType.JPG,
    "jpeg": FileType.JPEG,
    "html": FileType.HTML,
}

# Value of the file picker ``accept`` attribute
ACCEPTED_EXTENSIONS = ",".join(f".{ext}" for ext in EXTENSIONS)

TEXT_TYPES: FrozenSet[FileType] = frozenset(
    {FileType.JSON, FileType.TXT, FileType.CSV, FileType.HTML}
)


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lower-case a media type and drop its parameters.

    Example:
        >>> normalize_media_type("Text/Plain; charset=UTF-8")
        'text/plain'
    """
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def file_extension(file_name: str) -> str:
    """Return the lower-cased extension of ``file_name`` without the dot, or ''."""
    base = (file_name or "").strip().rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[-1].lower()
