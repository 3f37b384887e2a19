"""
Generation Schemas

Request/response models for generation, regeneration and variations.

SAMPLE RESPONSE (POST /projects/{id}/generate):
===============================================
{
    "successful": [
        {"platform": "linkedin", "series_index": 1, "success": true,
         "content": "Why do 80% of launches...", "output_id": "6f1c...",
         "metadata": {"model": "gpt-4o-mini", "source": "api", ...}}
    ],
    "failed": [
        {"platform": "tiktok", "series_index": 1, "success": false,
         "error": "Unsupported platform: tiktok", "error_code": "UNSUPPORTED_PLATFORM"}
    ],
    "total_requested": 2
}
"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.schemas.common import BaseSchema


class GenerationOptionsSchema(BaseModel):
    """Overrides of the plan's generation parameters."""

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, ge=1, le=4000)


class GenerateRequest(BaseModel):
    """
    Schema for POST /projects/{id}/generate.

    Fields left out fall back to the project's stored values.
    """

    platforms: Optional[list[str]] = Field(default=None, description="Target platforms")
    source_content: Optional[str] = None
    posts_per_platform: Optional[int] = Field(default=None, ge=1, le=10)
    brand_voice_id: Optional[UUID] = None
    options: Optional[GenerationOptionsSchema] = None


class RegenerateRequest(BaseModel):
    """Schema for POST /projects/{id}/regenerate."""

    platform: str
    series_index: int = Field(default=1, ge=1)
    brand_voice_id: Optional[UUID] = None
    options: Optional[GenerationOptionsSchema] = None


class VariationsRequest(BaseModel):
    """Schema for POST /projects/{id}/variations."""

    platform: str
    count: int = Field(default=3, ge=1, le=5)
    brand_voice_id: Optional[UUID] = None
    options: Optional[GenerationOptionsSchema] = None


class GenerationResultResponse(BaseSchema):
    """Outcome of one platform slot."""

    platform: str
    series_index: int
    success: bool
    content: str = ""
    output_id: Optional[UUID] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    error_code: Optional[str] = None


class BulkGenerationResponse(BaseSchema):
    """Outcome of a multi-platform request."""

    successful: list[GenerationResultResponse]
    failed: list[GenerationResultResponse]
    total_requested: int


class VariationsResponse(BaseModel):
    """Unsaved variations for one platform."""

    platform: str
    variations: list[GenerationResultResponse]
