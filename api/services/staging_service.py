"""
Room staging flows: analyze, furnish, clear region, edit and refine.

Each flow composes model sessions (text) or the fallback orchestrator
(image generation) with the response normalizer and item parser.
"""
import asyncio
import time
from dataclasses import dataclass, field
from typing import List, Optional

from core.exceptions import ImageGenerationError
from middleware.logging_middleware import get_logger
from services.fallback import FallbackOrchestrator
from services.gemini_session import Message, ModelSessionFactory
from services.item_parser import parse_item_list
from services.prompts import Region, StagingPrompts
from services.response_normalizer import ImagePayload, extract_image, extract_text
from services.retry import RetryPolicy

logger = get_logger(__name__)

MIN_VARIANTS = 1
MAX_VARIANTS = 5


def clamp_variant_count(count: Optional[int], max_variants: int = MAX_VARIANTS) -> int:
    """Clamp the requested number of furnish variants to [1, max_variants]"""
    if count is None:
        return MIN_VARIANTS
    return max(MIN_VARIANTS, min(int(count), max_variants))


@dataclass
class AnalyzeResult:
    """Items found in the uploaded room and the room with them removed"""

    removed_items: List[str]
    cleared_image: ImagePayload


@dataclass
class FurnishVariant:
    furnished_image: ImagePayload
    added_items: List[str] = field(default_factory=list)


@dataclass
class FurnishResult:
    """Successful variants, in request order"""

    variants: List[FurnishVariant]
    requested: int

    @property
    def failed(self) -> int:
        return self.requested - len(self.variants)


class StagingService:
    """Runs the staging flows against Gemini"""

    def __init__(
        self,
        factory: ModelSessionFactory,
        orchestrator: Optional[FallbackOrchestrator] = None,
        max_variants: int = MAX_VARIANTS,
    ):
        self.factory = factory
        self.orchestrator = orchestrator or FallbackOrchestrator(factory)
        self.max_variants = max_variants

    @classmethod
    def from_settings(cls, settings, client=None) -> "StagingService":
        factory = ModelSessionFactory.from_settings(settings, client=client)
        policy = RetryPolicy(
            max_retries=settings.retry_max_retries,
            initial_delay_ms=settings.retry_initial_delay_ms,
        )
        orchestrator = FallbackOrchestrator(factory, settings.gemini_image_models, policy)
        return cls(factory, orchestrator, max_variants=min(settings.furnish_max_variants, MAX_VARIANTS))

    async def _list_items(self, image: ImagePayload, instruction: str) -> List[str]:
        session = self.factory.create_text_session()
        response = await session.send_message([image, instruction])
        return parse_item_list(extract_text(response))

    async def _generate_image(self, message: Message, operation: str) -> ImagePayload:
        response = await self.orchestrator.send_with_fallback(message)
        image = extract_image(response)
        if image is None:
            text = extract_text(response)
            logger.warning(f"{operation}: model returned no image. Text: {text[:200]}")
            raise ImageGenerationError(f"Failed to generate {operation} image")
        return image

    async def analyze(self, image: ImagePayload) -> AnalyzeResult:
        """List the items in the room, then generate the room with all of them removed"""
        start_time = time.time()

        removed_items = await self._list_items(image, StagingPrompts.LIST_VISIBLE_ITEMS)
        logger.info(f"Analyze: detected {len(removed_items)} items")

        cleared_image = await self._generate_image(
            [image, StagingPrompts.get_clear_room_prompt(removed_items)], "cleared"
        )

        logger.info(f"Analyze completed in {time.time() - start_time:.2f}s")
        return AnalyzeResult(removed_items=removed_items, cleared_image=cleared_image)

    async def _furnish_variant(self, image: ImagePayload, style: str, index: int) -> FurnishVariant:
        furnished_image = await self._generate_image([image, StagingPrompts.get_furnish_prompt(style)], "furnished")
        # Items are listed from the generated image, not the empty one
        added_items = await self._list_items(furnished_image, StagingPrompts.LIST_FURNISHED_ITEMS)
        logger.info(f"Furnish variant {index + 1}: {len(added_items)} items")
        return FurnishVariant(furnished_image=furnished_image, added_items=added_items)

    async def furnish(self, image: ImagePayload, style: str, count: Optional[int] = 1) -> FurnishResult:
        """
        Furnish an empty room in the given style.

        Runs `count` independent variants concurrently (clamped to 1..max_variants).
        Failed variants are dropped; the call only fails if every variant fails.
        """
        start_time = time.time()
        requested = clamp_variant_count(count, self.max_variants)

        results = await asyncio.gather(
            *(self._furnish_variant(image, style, i) for i in range(requested)),
            return_exceptions=True,
        )

        variants = []
        last_error = None
        for i, result in enumerate(results):
            if isinstance(result, BaseException):
                last_error = result
                logger.error(f"Furnish variant {i + 1}/{requested} failed: {result}", exc_info=result)
            else:
                variants.append(result)

        if not variants:
            raise ImageGenerationError(f"All {requested} furnish variants failed") from last_error

        logger.info(f"Furnish: {len(variants)}/{requested} variants in {time.time() - start_time:.2f}s")
        return FurnishResult(variants=variants, requested=requested)

    async def clear_region(self, image: ImagePayload, region: Region) -> ImagePayload:
        """Remove everything inside the region, leaving the rest of the image unchanged"""
        return await self._generate_image([image, StagingPrompts.get_clear_region_prompt(region)], "cleared region")

    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        """Apply a free-text edit to the whole image"""
        return await self._generate_image([image, StagingPrompts.get_edit_prompt(instruction)], "edited")

    async def refine(self, image: ImagePayload, region: Region, replacement: str) -> ImagePayload:
        """Replace the item inside the region with the described one"""
        return await self._generate_image(
            [image, StagingPrompts.get_refine_prompt(region, replacement)], "refined"
        )
