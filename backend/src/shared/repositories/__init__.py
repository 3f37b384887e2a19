"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data
access. They flush but never commit.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]            ← Generic CRUD operations
         │
         ├── UserRepository              ← Users
         ├── SubscriptionRepository      ← Plan lookup, audio counters
         ├── ProjectRepository           ← Owner-scoped projects
         ├── BrandVoiceRepository        ← Owner-scoped brand voices
         ├── ProjectHistoryRepository    ← Audit log
         ├── OutputRepository            ← Slots, owner checks via project
         ├── OutputVersionRepository     ← Append-only snapshots
         └── ContentPackRepository       ← Stored packs

    CacheRepository                      ← String-keyed, dialect upsert

Usage Example:
==============
    from src.shared.repositories import OutputRepository, OutputVersionRepository

    output = await OutputRepository(db).get_owned(output_id, user_id)
    versions = await OutputVersionRepository(db).list_for_output(output.id)
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.user_repository import UserRepository, SubscriptionRepository
from src.shared.repositories.project_repository import (
    ProjectRepository,
    BrandVoiceRepository,
    ProjectHistoryRepository,
)
from src.shared.repositories.output_repository import OutputRepository, OutputVersionRepository
from src.shared.repositories.cache_repository import CacheRepository, ContentPackRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SubscriptionRepository",
    "ProjectRepository",
    "BrandVoiceRepository",
    "ProjectHistoryRepository",
    "OutputRepository",
    "OutputVersionRepository",
    "CacheRepository",
    "ContentPackRepository",
]
