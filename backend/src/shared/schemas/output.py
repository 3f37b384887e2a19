"""
Output Schemas

Request/response models for generated outputs and their versions.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.schemas.common import BaseSchema, IDMixin, TimestampMixin


class OutputUpdate(BaseModel):
    """Schema for a manual edit."""

    content: str = Field(min_length=1, description="Edited text")


class OutputResponse(BaseSchema, IDMixin, TimestampMixin):
    """Schema for output response."""

    project_id: UUID
    platform: str
    series_index: int
    content: str
    original_content: Optional[str] = None
    is_edited: bool
    generation_metadata: Optional[dict[str, Any]] = None


class OutputVersionResponse(BaseSchema, IDMixin):
    """One stored version of an output."""

    output_id: UUID
    version_number: int
    content: str
    generation_metadata: Optional[dict[str, Any]] = None
    created_at: datetime


class OutputVersionListResponse(BaseModel):
    """Versions of an output, newest first."""

    output_id: UUID
    versions: list[OutputVersionResponse]
