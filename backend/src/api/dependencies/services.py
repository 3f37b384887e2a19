"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services are stateless (only hold db session reference)
- Each request gets its own db session
- No shared state between requests

The OpenAI adapter is the process-wide singleton; tests replace it with
app.dependency_overrides[get_openai].

Usage:
======
    from src.api.dependencies.services import get_generation_service

    @router.post("/{project_id}/generate")
    async def generate(
        project_id: UUID,
        generation_service: GenerationService = Depends(get_generation_service),
    ):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.shared.adapters.openai_adapter import OpenAIAdapter, get_openai_adapter
from src.shared.services.cache_service import CacheService
from src.shared.services.content_pack_service import ContentPackService
from src.shared.services.editor_service import EditorService
from src.shared.services.generation_service import GenerationService
from src.shared.services.project_service import ProjectService
from src.shared.services.quota_service import QuotaService
from src.shared.services.transcription_service import TranscriptionService


async def get_openai() -> OpenAIAdapter:
    """Shared OpenAI adapter."""
    return get_openai_adapter()


async def get_project_service(
    db: AsyncSession = Depends(get_db),
) -> ProjectService:
    """
    Dependency to get ProjectService instance.

    Creates a new service instance per request with the request's db session.
    """
    return ProjectService(db)


async def get_generation_service(
    db: AsyncSession = Depends(get_db),
    openai: OpenAIAdapter = Depends(get_openai),
) -> GenerationService:
    """
    Dependency to get GenerationService instance.
    """
    return GenerationService(db, openai=openai)


async def get_content_pack_service(
    db: AsyncSession = Depends(get_db),
    openai: OpenAIAdapter = Depends(get_openai),
) -> ContentPackService:
    """
    Dependency to get ContentPackService instance.
    """
    return ContentPackService(db, openai=openai)


async def get_editor_service(
    db: AsyncSession = Depends(get_db),
) -> EditorService:
    """
    Dependency to get EditorService instance.
    """
    return EditorService(db)


async def get_quota_service(
    db: AsyncSession = Depends(get_db),
) -> QuotaService:
    """
    Dependency to get QuotaService instance.
    """
    return QuotaService(db)


async def get_cache_service(
    db: AsyncSession = Depends(get_db),
) -> CacheService:
    """
    Dependency to get CacheService instance.
    """
    return CacheService(db)


async def get_transcription_service(
    db: AsyncSession = Depends(get_db),
    openai: OpenAIAdapter = Depends(get_openai),
) -> TranscriptionService:
    """
    Dependency to get TranscriptionService instance.
    """
    return TranscriptionService(db, openai=openai)
