"""
Pydantic schemas for room staging endpoints
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.prompts import Region


class CropArea(BaseModel):
    """Rectangular region in absolute pixel coordinates"""

    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    model_config = ConfigDict(json_schema_extra={"example": {"x": 120, "y": 340, "width": 400, "height": 260}})

    def to_region(self) -> Region:
        return Region(x=self.x, y=self.y, width=self.width, height=self.height)


class FurnishRequest(BaseModel):
    cleared_image: str = Field(..., min_length=1, description="Empty room as a data URL")
    prompt: str = Field(..., min_length=1, description="Style description, e.g. 'cozy scandinavian'")
    count: int = Field(default=1, description="Number of variants; clamped to 1..5")


class ClearRegionRequest(BaseModel):
    image: str = Field(..., min_length=1)
    crop: CropArea


class EditRequest(BaseModel):
    image: str = Field(..., min_length=1)
    prompt: str = Field(..., min_length=1)


class RefineRequest(BaseModel):
    furnished_image: str = Field(..., min_length=1)
    crop: CropArea
    prompt: str = Field(..., min_length=1, description="What to put in the region")


class AnalyzeResponse(BaseModel):
    removed_items: List[str]
    cleared_image: str


class FurnishVariantSchema(BaseModel):
    furnished_image: str
    added_items: List[str] = Field(default_factory=list)


class FurnishResponse(BaseModel):
    variants: List[FurnishVariantSchema]
    # First variant, for clients that only show one result
    furnished_image: str
    added_items: List[str] = Field(default_factory=list)
    failed_variants: int = 0


class ClearRegionResponse(BaseModel):
    cleared_image: str


class EditResponse(BaseModel):
    edited_image: str


class RefineResponse(BaseModel):
    refined_image: str
