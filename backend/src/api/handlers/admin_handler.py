"""
Admin Handler

Generation cache maintenance. Every endpoint requires the admin role.

Clearing the whole cache also requires the configured confirmation token
in the body: {"confirm": "DELETE_ALL_CACHE"}.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.config.settings import settings
from src.shared.core.exceptions import ValidationError
from src.shared.core.logging import get_logger
from src.shared.schemas.admin import CacheCleanRequest, CacheCleanResponse, CacheStatsResponse
from src.shared.services.cache_service import CacheService
from src.api.dependencies import AdminUser
from src.api.dependencies.services import get_cache_service


logger = get_logger(__name__)

router = APIRouter()


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(
    admin: AdminUser,
    cache_service: CacheService = Depends(get_cache_service),
):
    """Total, expired and approximate size of the generation cache."""
    stats = await cache_service.get_cache_stats()
    return CacheStatsResponse(total=stats.total, expired=stats.expired, size_estimate=stats.size_estimate)


@router.post("/cache/clean-expired", response_model=CacheCleanResponse)
async def clean_expired(
    admin: AdminUser,
    cache_service: CacheService = Depends(get_cache_service),
):
    """Delete expired cache entries."""
    return CacheCleanResponse(removed=await cache_service.clean_expired_cache())


@router.post("/cache/clean-all", response_model=CacheCleanResponse)
async def clean_all(
    request: CacheCleanRequest,
    admin: AdminUser,
    cache_service: CacheService = Depends(get_cache_service),
):
    """Delete every cache entry. Requires the confirmation token."""
    if request.confirm != settings.CACHE_CLEAR_CONFIRMATION:
        raise ValidationError(
            message="Confirmation token does not match",
            details={"expected": "CACHE_CLEAR_CONFIRMATION"},
        )
    logger.warning("Cache clear requested", admin_user_id=admin["user_id"])
    return CacheCleanResponse(removed=await cache_service.clean_all_cache())


@router.delete("/cache/projects/{project_id}", response_model=CacheCleanResponse)
async def invalidate_project_cache(
    project_id: UUID,
    admin: AdminUser,
    cache_service: CacheService = Depends(get_cache_service),
):
    """Delete the cache entries of one project."""
    return CacheCleanResponse(removed=await cache_service.invalidate_project_generation_cache(project_id))
