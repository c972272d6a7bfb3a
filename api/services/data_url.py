"""
Conversion between data URLs / uploaded bytes and ImagePayload
"""
import base64
import binascii
import re
from typing import List, Optional

from core.exceptions import InvalidImageError
from services.response_normalizer import DEFAULT_IMAGE_MIME_TYPE, ImagePayload

_DATA_URL_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)


def _check_mime_type(mime_type: str, allowed_types: Optional[List[str]]):
    if allowed_types is not None and mime_type.lower() not in allowed_types:
        raise InvalidImageError(f"Unsupported image type: {mime_type}")


def parse_data_url(value: Optional[str], allowed_types: Optional[List[str]] = None) -> ImagePayload:
    """
    Parse 'data:<mime>;base64,<data>' into an ImagePayload.

    When allowed_types is given, the declared mime type must be one of them.
    """
    if not value:
        raise InvalidImageError("No image provided")

    match = _DATA_URL_PATTERN.match(value.strip())
    if not match:
        raise InvalidImageError("Invalid image format")

    mime_type, data = match.groups()
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidImageError("Invalid image format")

    _check_mime_type(mime_type, allowed_types)
    return ImagePayload(data=data, mime_type=mime_type)


def payload_from_bytes(
    image_bytes: bytes, mime_type: Optional[str], allowed_types: Optional[List[str]] = None
) -> ImagePayload:
    """Wrap uploaded file bytes; a missing content type is treated as PNG"""
    if not image_bytes:
        raise InvalidImageError("No image provided")

    mime_type = mime_type or DEFAULT_IMAGE_MIME_TYPE
    _check_mime_type(mime_type, allowed_types)
    return ImagePayload(
        data=base64.b64encode(image_bytes).decode("utf-8"),
        mime_type=mime_type,
    )
