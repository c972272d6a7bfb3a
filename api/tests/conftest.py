"""
Pytest configuration and fixtures for Room Staging API tests.

Gemini is never called: the genai client is a MagicMock whose
aio.models.generate_content is an AsyncMock returning real
google.genai.types responses built by the helpers below.
"""
import base64
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors, types
from PIL import Image

from services.gemini_session import ModelSessionFactory
from services.response_normalizer import ImagePayload


def make_png_bytes(color: str = "beige", size=(64, 48)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    """Response with a single candidate holding the given parts"""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


def image_part(data: bytes, mime_type: str = "image/png") -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


def text_part(text: str) -> types.Part:
    return types.Part(text=text)


def image_response(data: bytes, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return make_response(image_part(data, mime_type))


def text_response(text: str) -> types.GenerateContentResponse:
    return make_response(text_part(text))


def overloaded_error() -> errors.ServerError:
    return errors.ServerError(
        503, {"error": {"code": 503, "message": "The model is overloaded. Please try again later.", "status": "UNAVAILABLE"}}
    )


def client_error(code: int = 400) -> errors.ClientError:
    return errors.ClientError(
        code, {"error": {"code": code, "message": "Request contains an invalid argument.", "status": "INVALID_ARGUMENT"}}
    )


@pytest.fixture
def png_bytes():
    """Raw PNG bytes for upload endpoints"""
    return make_png_bytes()


@pytest.fixture
def room_image(png_bytes):
    """Uploaded room as an ImagePayload"""
    return ImagePayload(data=base64.b64encode(png_bytes).decode(), mime_type="image/png")


@pytest.fixture
def room_data_url(room_image):
    return room_image.to_data_url()


@pytest.fixture
def generated_png():
    """Bytes the fake model returns as its generated image"""
    return make_png_bytes(color="lightblue")


@pytest.fixture
def mock_genai_client():
    """Stand-in for google.genai.Client; set generate_content.side_effect per test"""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def session_factory(mock_genai_client):
    return ModelSessionFactory(
        api_key="test-api-key-123456",
        text_model="text-model",
        image_models=["image-model-a", "image-model-b"],
        client=mock_genai_client,
    )
