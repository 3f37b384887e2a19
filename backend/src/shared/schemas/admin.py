"""
Admin and Quota Schemas

Response models for cache maintenance and the caller's quota.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Generation cache statistics."""

    total: int
    expired: int
    size_estimate: int = Field(description="Approximate stored bytes")


class CacheCleanRequest(BaseModel):
    """Body of POST /admin/cache/clean-all."""

    confirm: str = Field(description="Must equal the configured confirmation token")


class CacheCleanResponse(BaseModel):
    """Number of removed cache entries."""

    removed: int


class QuotaResponse(BaseModel):
    """Plan and usage of the caller."""

    plan: str
    plan_type: str
    projects_used: int
    projects_limit: int
    can_create_project: bool
    can_use_audio: bool
    audio_minutes_used: Optional[float] = None
    audio_minutes_limit: Optional[int] = None
