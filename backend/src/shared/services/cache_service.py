"""
Cache Service

Fingerprint-keyed result cache stored in the database.

Cache Keys:
===========
Keys are sha256 fingerprints of everything that influences a result:

    build_generation_cache_key(
        user_id, project_id, step="generate", model="gpt-4o-mini",
        platform="linkedin", input_hash=sha256(source),
        options_hash=sha256(options), brand_voice_id, brand_voice_updated_at,
        series_index=1, series_total=1,
    )
    → "9f2c...e1"   (64 hex chars)

Editing a brand voice changes its updated_at and therefore every key that
used it; old entries simply stop being hit and expire.

Lifecycle:
==========
    set()      → atomic upsert with expires_at = now + ttl
    get()      → value only while expires_at > now
    clean_*()  → admin maintenance
"""

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.logging import get_logger
from src.shared.repositories.cache_repository import CacheRepository
from src.shared.utils.time import isoformat, utcnow

logger = get_logger(__name__)


@dataclass
class CacheStats:
    """Snapshot of the cache table."""

    total: int
    expired: int
    size_estimate: int


def generate_cache_key(text: str) -> str:
    """sha256 hex digest of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def build_generation_cache_key(
    *,
    user_id: UUID,
    project_id: UUID,
    step: str,
    model: str,
    platform: str,
    input_hash: str,
    options_hash: str,
    brand_voice_id: Optional[UUID] = None,
    brand_voice_updated_at: Optional[datetime] = None,
    series_index: Optional[int] = None,
    series_total: Optional[int] = None,
) -> str:
    """
    Deterministic key for one generation step.

    Contains no timestamps other than the brand voice's updated_at, so the
    same inputs always produce the same key.
    """
    fingerprint = {
        "user_id": str(user_id),
        "project_id": str(project_id),
        "step": step,
        "model": model,
        "platform": platform,
        "input_hash": input_hash,
        "options_hash": options_hash,
        "brand_voice_id": str(brand_voice_id) if brand_voice_id else None,
        "brand_voice_updated_at": isoformat(brand_voice_updated_at),
        "series_index": series_index,
        "series_total": series_total,
    }
    return generate_cache_key(json.dumps(fingerprint, sort_keys=True))


def hash_options(options: Optional[dict[str, Any]]) -> str:
    """Fingerprint of caller-supplied generation options."""
    return generate_cache_key(json.dumps(options or {}, sort_keys=True, default=str))


class CacheService:
    """
    Service for the result cache.

    Handles:
    - Reads that ignore expired entries
    - Atomic upserts
    - Statistics and cleanup for administrators
    - Per-project invalidation
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize CacheService.

        Args:
            session: Async database session
        """
        self.session = session
        self.repo = CacheRepository(session)

    async def get(self, key: str) -> Optional[str]:
        """Cached value, or None when missing or expired."""
        entry = await self.repo.get_valid(key, utcnow())
        return entry.value if entry else None

    async def set(
        self,
        key: str,
        value: str,
        ttl_seconds: int,
        project_id: Optional[UUID] = None,
    ) -> bool:
        """
        Store a value for ttl_seconds.

        Runs in a SAVEPOINT; a failed write is logged and reported as False
        without disturbing the caller's transaction.
        """
        expires_at = utcnow() + timedelta(seconds=ttl_seconds)
        try:
            async with self.session.begin_nested():
                await self.repo.upsert(key, value, expires_at, project_id)
        except SQLAlchemyError as e:
            logger.warning("Cache write failed", key=key, error=str(e))
            return False
        return True

    async def delete(self, key: str) -> bool:
        return await self.repo.delete_key(key) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # MAINTENANCE
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_cache_stats(self) -> CacheStats:
        """Total entries, expired entries and summed value length."""
        now = utcnow()
        return CacheStats(
            total=await self.repo.count_all(),
            expired=await self.repo.count_expired(now),
            size_estimate=await self.repo.total_value_length(),
        )

    async def clean_expired_cache(self) -> int:
        """Delete expired entries. Returns the number removed."""
        removed = await self.repo.delete_expired(utcnow())
        logger.info("Expired cache entries removed", count=removed)
        return removed

    async def clean_all_cache(self) -> int:
        """
        Delete every entry. Returns the number removed.

        The confirmation token is checked at the HTTP boundary.
        """
        removed = await self.repo.delete_all()
        logger.warning("Cache cleared", count=removed)
        return removed

    async def invalidate_project_generation_cache(self, project_id: UUID) -> int:
        """Delete the entries written for one project."""
        removed = await self.repo.delete_for_project(project_id)
        logger.info("Project cache invalidated", project_id=str(project_id), count=removed)
        return removed
