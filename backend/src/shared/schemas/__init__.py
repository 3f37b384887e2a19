"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, error responses
- project: Project CRUD, history and audio ingestion
- generation: Generate, regenerate and variation requests/results
- output: Outputs, edits and versions
- content_pack: Content Pack structure
- admin: Cache maintenance and quota

Usage:
======
    from src.shared.schemas.project import ProjectCreate, ProjectResponse
    from src.shared.schemas.common import ErrorResponse
"""

from src.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    TimestampMixin,
    IDMixin,
)
from src.shared.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
    ProjectHistoryResponse,
    AudioIngestResponse,
)
from src.shared.schemas.generation import (
    GenerationOptionsSchema,
    GenerateRequest,
    RegenerateRequest,
    VariationsRequest,
    GenerationResultResponse,
    BulkGenerationResponse,
    VariationsResponse,
)
from src.shared.schemas.output import (
    OutputUpdate,
    OutputResponse,
    OutputVersionResponse,
    OutputVersionListResponse,
)
from src.shared.schemas.content_pack import ContentPack, ContentPackResponse
from src.shared.schemas.admin import (
    CacheStatsResponse,
    CacheCleanRequest,
    CacheCleanResponse,
    QuotaResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "TimestampMixin",
    "IDMixin",
    # Project
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectListResponse",
    "ProjectHistoryResponse",
    "AudioIngestResponse",
    # Generation
    "GenerationOptionsSchema",
    "GenerateRequest",
    "RegenerateRequest",
    "VariationsRequest",
    "GenerationResultResponse",
    "BulkGenerationResponse",
    "VariationsResponse",
    # Output
    "OutputUpdate",
    "OutputResponse",
    "OutputVersionResponse",
    "OutputVersionListResponse",
    # Content Pack
    "ContentPack",
    "ContentPackResponse",
    # Admin
    "CacheStatsResponse",
    "CacheCleanRequest",
    "CacheCleanResponse",
    "QuotaResponse",
]
