"""
Generation Handler

Handles generation, regeneration and variation endpoints.

Unknown platform values in the request body are rejected here with
UNSUPPORTED_PLATFORM (400); the orchestrator itself reports them as
per-platform failures.
"""

from dataclasses import asdict
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from src.shared.schemas.generation import (
    BulkGenerationResponse,
    GenerateRequest,
    GenerationOptionsSchema,
    GenerationResultResponse,
    RegenerateRequest,
    VariationsRequest,
    VariationsResponse,
)
from src.shared.services.generation_service import GenerationOverrides, GenerationService
from src.shared.services.project_service import normalize_platforms
from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_generation_service


router = APIRouter()


def _overrides(options: Optional[GenerationOptionsSchema]) -> Optional[GenerationOverrides]:
    if options is None:
        return None
    return GenerationOverrides(temperature=options.temperature, max_tokens=options.max_tokens)


@router.post("/{project_id}/generate", response_model=BulkGenerationResponse)
async def generate(
    project_id: UUID,
    request: GenerateRequest,
    current_user: CurrentUser,
    generation_service: GenerationService = Depends(get_generation_service),
):
    """
    Generate posts for the requested platforms.

    Fields left out of the body fall back to the project's stored values.
    Partial success is a 200 with entries in `failed`.
    """
    platforms = normalize_platforms(request.platforms) if request.platforms is not None else None
    result = await generation_service.generate_for_platforms(
        project_id=project_id,
        user_id=UUID(current_user["user_id"]),
        source_content=request.source_content,
        platforms=platforms,
        options=_overrides(request.options),
        brand_voice_id=request.brand_voice_id,
        posts_per_platform=request.posts_per_platform,
    )
    return BulkGenerationResponse(
        successful=[GenerationResultResponse(**asdict(r)) for r in result.successful],
        failed=[GenerationResultResponse(**asdict(r)) for r in result.failed],
        total_requested=result.total_requested,
    )


@router.post("/{project_id}/regenerate", response_model=GenerationResultResponse)
async def regenerate(
    project_id: UUID,
    request: RegenerateRequest,
    current_user: CurrentUser,
    generation_service: GenerationService = Depends(get_generation_service),
):
    """Regenerate one platform slot, bypassing the cache."""
    result = await generation_service.regenerate_for_platform(
        project_id=project_id,
        user_id=UUID(current_user["user_id"]),
        platform=request.platform,
        series_index=request.series_index,
        options=_overrides(request.options),
        brand_voice_id=request.brand_voice_id,
    )
    return GenerationResultResponse(**asdict(result))


@router.post("/{project_id}/variations", response_model=VariationsResponse)
async def variations(
    project_id: UUID,
    request: VariationsRequest,
    current_user: CurrentUser,
    generation_service: GenerationService = Depends(get_generation_service),
):
    """Alternative drafts in different styles. Nothing is saved."""
    results = await generation_service.generate_content_variations(
        project_id=project_id,
        user_id=UUID(current_user["user_id"]),
        platform=request.platform,
        count=request.count,
        options=_overrides(request.options),
        brand_voice_id=request.brand_voice_id,
    )
    return VariationsResponse(
        platform=request.platform.strip().lower(),
        variations=[GenerationResultResponse(**asdict(r)) for r in results],
    )
