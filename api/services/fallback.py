"""
Cross-model fallback for image generation.

Each candidate model gets its own bounded retry (see services.retry). Only
when a model is still overloaded after its retries do we move on to the next
one. Any other error stops the walk immediately.
"""
import logging
from typing import Optional, Sequence

from google.genai import types

from core.exceptions import ConfigurationError
from services.gemini_session import Message, ModelSessionFactory
from services.retry import RetryPolicy, is_overloaded, with_retry

logger = logging.getLogger(__name__)


class FallbackOrchestrator:
    """Sends image-generation messages across an ordered list of models"""

    def __init__(
        self,
        factory: ModelSessionFactory,
        candidates: Optional[Sequence[str]] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.factory = factory
        self.candidates = list(candidates) if candidates is not None else list(factory.image_models)
        self.retry_policy = retry_policy or RetryPolicy()

        if not self.candidates:
            raise ConfigurationError("Fallback orchestrator needs at least one image model")

    async def send_with_fallback(self, message: Message) -> types.GenerateContentResponse:
        last_index = len(self.candidates) - 1

        for index, model_id in enumerate(self.candidates):
            session = self.factory.create_image_session(model_id)
            try:
                response = await with_retry(lambda: session.send_message(message), self.retry_policy)
            except Exception as e:
                if is_overloaded(e) and index < last_index:
                    logger.warning(
                        f"{model_id} overloaded after retries, falling back to {self.candidates[index + 1]}"
                    )
                    continue
                if is_overloaded(e):
                    logger.error(f"All image models overloaded: {self.candidates}")
                else:
                    logger.error(f"Image generation with {model_id} failed: {e}")
                raise

            logger.info(f"Image generated with {model_id}")
            return response

        # Unreachable: the last candidate either returns or raises
        raise RuntimeError("Fallback walk exited without a result")
