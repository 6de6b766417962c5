"""Transport encoding of file payloads.

The JSON upload transport carries file bytes as base64 text, optionally
wrapped in a ``data:`` URL; the multipart transport carries the raw bytes.
"""

import base64
import binascii

from domain.services.file_validator import FileValidationError

DATA_URL_PREFIX = "data:"


def encode_base64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def to_data_url(content: bytes, media_type: str) -> str:
    """Encode bytes as a ``data:<type>;base64,<payload>`` URL.

    Example:
        >>> to_data_url(b"hi", "text/plain")
        'data:text/plain;base64,aGk='
    """
    return f"{DATA_URL_PREFIX}{media_type};base64,{encode_base64(content)}"


def decode_payload(payload: str) -> bytes:
    """Decode base64 text or a base64 ``data:`` URL back to bytes.

    Raises:
        FileValidationError: If the payload is not valid base64.
    """
    text = (payload or "").strip()
    if text.startswith(DATA_URL_PREFIX):
        header, sep, text = text.partition(",")
        if not sep or not header.endswith(";base64"):
            raise FileValidationError("File content must be a base64 data URL")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FileValidationError("File content is not valid base64") from e
