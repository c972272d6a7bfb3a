"""
Room staging API routes: analyze, furnish, clear region, edit, refine
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from core.config import settings
from core.exceptions import InvalidImageError
from middleware.logging_middleware import get_logger
from schemas.staging import (
    AnalyzeResponse,
    ClearRegionRequest,
    ClearRegionResponse,
    EditRequest,
    EditResponse,
    FurnishRequest,
    FurnishResponse,
    FurnishVariantSchema,
    RefineRequest,
    RefineResponse,
)
from services.data_url import parse_data_url, payload_from_bytes
from services.staging_service import StagingService

logger = get_logger(__name__)
router = APIRouter(tags=["staging"])


def get_staging_service(request: Request) -> StagingService:
    """Service built at startup (see main.lifespan)"""
    return request.app.state.staging_service


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_room(
    image: Optional[UploadFile] = File(None),
    image_data: Optional[str] = Form(None),
    service: StagingService = Depends(get_staging_service),
):
    """List the items in an uploaded room photo and return the room cleared of them"""
    try:
        if image is not None:
            contents = await image.read()
            if len(contents) > settings.max_file_size:
                raise InvalidImageError("Image is too large")
            payload = payload_from_bytes(contents, image.content_type, settings.allowed_image_types)
        else:
            payload = parse_data_url(image_data, settings.allowed_image_types)
    except InvalidImageError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)

    try:
        result = await service.analyze(payload)
    except Exception as e:
        logger.error(f"Analyze error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Analysis failed")

    return AnalyzeResponse(
        removed_items=result.removed_items,
        cleared_image=result.cleared_image.to_data_url(),
    )


@router.post("/furnish", response_model=FurnishResponse)
async def furnish_room(request: FurnishRequest, service: StagingService = Depends(get_staging_service)):
    """Furnish an empty room in the requested style, optionally as several variants"""
    try:
        payload = parse_data_url(request.cleared_image, settings.allowed_image_types)
    except InvalidImageError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)

    try:
        result = await service.furnish(payload, request.prompt, request.count)
    except Exception as e:
        logger.error(f"Furnish error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Furnishing failed")

    variants = [
        FurnishVariantSchema(furnished_image=v.furnished_image.to_data_url(), added_items=v.added_items)
        for v in result.variants
    ]
    return FurnishResponse(
        variants=variants,
        furnished_image=variants[0].furnished_image,
        added_items=variants[0].added_items,
        failed_variants=result.failed,
    )


@router.post("/clear-region", response_model=ClearRegionResponse)
async def clear_region(request: ClearRegionRequest, service: StagingService = Depends(get_staging_service)):
    """Remove everything inside the selected rectangle"""
    try:
        payload = parse_data_url(request.image, settings.allowed_image_types)
    except InvalidImageError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)

    try:
        cleared = await service.clear_region(payload, request.crop.to_region())
    except Exception as e:
        logger.error(f"Clear region error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Clearing region failed")

    return ClearRegionResponse(cleared_image=cleared.to_data_url())


@router.post("/edit", response_model=EditResponse)
async def edit_room(request: EditRequest, service: StagingService = Depends(get_staging_service)):
    """Apply a free-text edit to the room image"""
    try:
        payload = parse_data_url(request.image, settings.allowed_image_types)
    except InvalidImageError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)

    try:
        edited = await service.edit(payload, request.prompt)
    except Exception as e:
        logger.error(f"Edit error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Edit failed")

    return EditResponse(edited_image=edited.to_data_url())


@router.post("/refine", response_model=RefineResponse)
async def refine_room(request: RefineRequest, service: StagingService = Depends(get_staging_service)):
    """Replace the item inside the selected rectangle with the described one"""
    try:
        payload = parse_data_url(request.furnished_image, settings.allowed_image_types)
    except InvalidImageError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)

    try:
        refined = await service.refine(payload, request.crop.to_region(), request.prompt)
    except Exception as e:
        logger.error(f"Refine error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Refinement failed")

    return RefineResponse(refined_image=refined.to_data_url())
