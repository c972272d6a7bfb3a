"""
Normalization of Gemini responses into image payloads and text.

Responses are scanned part by part, in order. When a response carries more
than one image part the first one wins and the rest are ignored.
"""
import base64
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class ImagePayload:
    """A single image as base64 data plus its mime type"""

    data: str
    mime_type: str

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def _response_parts(response: Any) -> List[Any]:
    """Return the parts of the first candidate, or an empty list.

    Handles both shapes the SDK exposes: parts nested under
    candidates[0].content, and parts directly on the response.
    """
    if response is None:
        return []

    candidates = getattr(response, "candidates", None)
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) if content is not None else None
        return list(parts or [])

    parts = getattr(response, "parts", None)
    return list(parts or [])


def extract_image(response: Any) -> Optional[ImagePayload]:
    """Return the first inline image in the response, or None if there is none"""
    for part in _response_parts(response):
        inline_data = getattr(part, "inline_data", None)
        if inline_data is None or not getattr(inline_data, "data", None):
            continue

        image_data = inline_data.data
        mime_type = getattr(inline_data, "mime_type", None) or DEFAULT_IMAGE_MIME_TYPE

        if isinstance(image_data, bytes):
            # The SDK decodes inline data to raw bytes
            encoded = base64.b64encode(image_data).decode("utf-8")
        else:
            encoded = image_data

        logger.debug(f"Extracted {mime_type} image from response ({len(encoded)} base64 chars)")
        return ImagePayload(data=encoded, mime_type=mime_type)

    return None


def extract_text(response: Any) -> str:
    """Return the first text part in the response, or an empty string"""
    for part in _response_parts(response):
        text = getattr(part, "text", None)
        if text:
            return text
    return ""
