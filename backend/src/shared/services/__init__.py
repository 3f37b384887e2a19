"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ External APIs (OpenAI)

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Share the caller's session (one transaction per request)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- GenerationService: Multi-platform generation, regeneration, variations
- ContentPackService: Content Pack builds for long sources
- EditorService: Output edits, reverts and version history
- ProjectService: Project CRUD behind the project quota
- QuotaService: Effective plan and quota checks
- CacheService: Generation cache and its maintenance
- HistoryService: Best-effort project audit log
- TranscriptionService: Audio to source content

Usage:
======
    from src.shared.services import GenerationService

    service = GenerationService(db)
    result = await service.generate_for_platforms(project_id, user_id, text, ["linkedin"])
"""

from src.shared.services.cache_service import CacheService
from src.shared.services.content_pack_service import ContentPackService
from src.shared.services.editor_service import EditorService
from src.shared.services.generation_service import GenerationService
from src.shared.services.history_service import HistoryService
from src.shared.services.project_service import ProjectService
from src.shared.services.quota_service import QuotaService
from src.shared.services.transcription_service import TranscriptionService

__all__ = [
    "CacheService",
    "ContentPackService",
    "EditorService",
    "GenerationService",
    "HistoryService",
    "ProjectService",
    "QuotaService",
    "TranscriptionService",
]
