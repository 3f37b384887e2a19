"""
Project Schemas

Request/response models for project endpoints.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import PostTone
from src.shared.schemas.common import BaseSchema, IDMixin, TimestampMixin


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=255)
    source_content: str = Field(default="", description="Text to repurpose")
    platforms: list[str] = Field(default_factory=list, description="Target platforms")
    posts_per_platform: int = Field(default=1, ge=1, le=10)
    tone: Optional[PostTone] = None


class ProjectUpdate(BaseModel):
    """Schema for a partial project update; omitted fields are unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    source_content: Optional[str] = None
    platforms: Optional[list[str]] = None
    posts_per_platform: Optional[int] = Field(default=None, ge=1, le=10)
    tone: Optional[PostTone] = None


class ProjectResponse(BaseSchema, IDMixin, TimestampMixin):
    """Schema for project response."""

    user_id: UUID
    title: str
    source_content: str
    platforms: list[str]
    posts_per_platform: int
    tone: Optional[str] = None


class ProjectListResponse(BaseModel):
    """Paginated projects of the caller."""

    items: list[ProjectResponse]
    total: int
    page: int
    page_size: int
    has_next: bool
    has_prev: bool


class ProjectHistoryResponse(BaseSchema, IDMixin):
    """One project history entry."""

    project_id: UUID
    user_id: UUID
    action: str
    changes: dict[str, Any]
    created_at: datetime


class AudioIngestResponse(BaseModel):
    """Response after transcribing audio into a project."""

    project_id: UUID
    text: str
    language: Optional[str] = None
    duration_seconds: Optional[float] = None
    minutes: float
    cost_estimate: Optional[float] = None
