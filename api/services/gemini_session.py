"""
Gemini model sessions and the factory that creates them.

A ModelSession is bound to one model and one response-modality config and
keeps its conversation as an explicit list of turns. Every send_message call
sends the whole history plus the new user turn, so a second message can rely
on the context (e.g. the image) of the first without resending it.
"""
import base64
import logging
from typing import Any, List, Optional, Sequence, Union

from google import genai
from google.genai import types

from core.exceptions import ConfigurationError
from services.response_normalizer import ImagePayload

logger = logging.getLogger(__name__)

TEXT_MODALITIES = ["TEXT"]
IMAGE_MODALITIES = ["TEXT", "IMAGE"]

MessagePart = Union[str, ImagePayload, types.Part]
Message = Union[MessagePart, Sequence[MessagePart]]


def _to_part(item: MessagePart) -> types.Part:
    if isinstance(item, types.Part):
        return item
    if isinstance(item, ImagePayload):
        return types.Part.from_bytes(data=base64.b64decode(item.data), mime_type=item.mime_type)
    if isinstance(item, str):
        return types.Part.from_text(text=item)
    raise TypeError(f"Unsupported message part: {type(item).__name__}")


def build_user_content(message: Message) -> types.Content:
    """Turn text / ImagePayload items into a single user turn"""
    if isinstance(message, (str, ImagePayload, types.Part)):
        items = [message]
    else:
        items = list(message)
    if not items:
        raise ValueError("Message must contain at least one part")
    return types.Content(role="user", parts=[_to_part(item) for item in items])


class ModelSession:
    """Stateful conversation with a single Gemini model"""

    def __init__(self, client: Any, model: str, config: types.GenerateContentConfig):
        self.client = client
        self.model = model
        self.config = config
        self.history: List[types.Content] = []

    async def send_message(self, message: Message) -> types.GenerateContentResponse:
        """
        Send one user turn and return the raw model response.

        History is only extended once the call succeeds, so a retried send
        does not duplicate the user turn.
        """
        user_content = build_user_content(message)
        contents = self.history + [user_content]

        logger.info(f"Sending message to {self.model} ({len(contents)} turns in context)")
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=self.config,
        )

        self.history.append(user_content)
        model_content = None
        if getattr(response, "candidates", None):
            model_content = getattr(response.candidates[0], "content", None)
        if model_content is not None:
            self.history.append(model_content)

        return response


class ModelSessionFactory:
    """Creates text and image sessions against a shared Gemini client"""

    def __init__(
        self,
        api_key: str,
        text_model: str,
        image_models: Sequence[str],
        client: Optional[Any] = None,
    ):
        if not api_key:
            raise ConfigurationError("Google AI API key is not configured (GOOGLE_AI_API_KEY)")
        if not image_models:
            raise ConfigurationError("At least one Gemini image model must be configured")

        self.text_model = text_model
        self.image_models = list(image_models)
        self.client = client if client is not None else genai.Client(api_key=api_key)

        masked_key = f"{api_key[:8]}...{api_key[-4:]}" if len(api_key) > 12 else "***"
        logger.info(
            f"Gemini session factory ready (key {masked_key}): text={self.text_model}, image={self.image_models}"
        )

    @classmethod
    def from_settings(cls, settings: Any, client: Optional[Any] = None) -> "ModelSessionFactory":
        return cls(
            api_key=settings.google_ai_api_key,
            text_model=settings.gemini_text_model,
            image_models=settings.gemini_image_models,
            client=client,
        )

    @property
    def default_image_model(self) -> str:
        return self.image_models[0]

    def create_text_session(self) -> ModelSession:
        """Session on the cheap text model; never returns images"""
        config = types.GenerateContentConfig(response_modalities=TEXT_MODALITIES)
        return ModelSession(self.client, self.text_model, config)

    def create_image_session(self, model_id: Optional[str] = None) -> ModelSession:
        """Session on an image-capable model that accepts and returns text and images"""
        config = types.GenerateContentConfig(response_modalities=IMAGE_MODALITIES)
        return ModelSession(self.client, model_id or self.default_image_model, config)
