"""
Cache Repository

Database operations for the fingerprint-keyed cache and stored Content Packs.

Atomic Upsert:
==============
Concurrent requests may compute the same key. Writes use the dialect's
INSERT ... ON CONFLICT (key) DO UPDATE, so the last writer wins without a
read-then-write race:

    INSERT INTO cache_entries (key, value, project_id, expires_at, ...)
    VALUES (...)
    ON CONFLICT (key) DO UPDATE
    SET value = excluded.value, expires_at = excluded.expires_at, ...
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.repositories.base import BaseRepository
from src.shared.models.cache_entry import CacheEntry
from src.shared.models.content_pack import ContentPackRecord
from src.shared.utils.time import utcnow


class CacheRepository:
    """
    Repository for CacheEntry rows.

    Not a BaseRepository: entries are addressed by a string key, not a UUID.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _insert(self):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(CacheEntry)
        if dialect == "sqlite":
            return sqlite.insert(CacheEntry)
        raise NotImplementedError(f"Cache upsert not supported for dialect '{dialect}'")

    # ═══════════════════════════════════════════════════════════════════════════
    # READ / WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_valid(self, key: str, now: datetime) -> Optional[CacheEntry]:
        """Entry for key if it has not expired."""
        result = await self.session.execute(
            select(CacheEntry)
            .where(CacheEntry.key == key, CacheEntry.expires_at > now)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        key: str,
        value: str,
        expires_at: datetime,
        project_id: Optional[UUID] = None,
    ) -> None:
        """Insert or replace an entry atomically."""
        now = utcnow()
        stmt = self._insert().values(
            key=key,
            value=value,
            project_id=project_id,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[CacheEntry.key],
            set_={
                "value": stmt.excluded.value,
                "project_id": stmt.excluded.project_id,
                "expires_at": stmt.excluded.expires_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def count_all(self) -> int:
        result = await self.session.execute(select(sql_count()).select_from(CacheEntry))
        return result.scalar() or 0

    async def count_expired(self, now: datetime) -> int:
        result = await self.session.execute(
            select(sql_count()).select_from(CacheEntry).where(CacheEntry.expires_at <= now)
        )
        return result.scalar() or 0

    async def total_value_length(self) -> int:
        """Sum of stored value lengths (characters)."""
        result = await self.session.execute(select(func.coalesce(func.sum(func.length(CacheEntry.value)), 0)))
        return int(result.scalar() or 0)

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETION
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_key(self, key: str) -> int:
        result = await self.session.execute(delete(CacheEntry).where(CacheEntry.key == key))
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(delete(CacheEntry).where(CacheEntry.expires_at <= now))
        return result.rowcount or 0

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(CacheEntry))
        return result.rowcount or 0

    async def delete_for_project(self, project_id: UUID) -> int:
        result = await self.session.execute(delete(CacheEntry).where(CacheEntry.project_id == project_id))
        return result.rowcount or 0


class ContentPackRepository(BaseRepository[ContentPackRecord]):
    """Repository for stored Content Packs."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ContentPackRecord, session)

    async def get_by_key(self, pack_key: str) -> Optional[ContentPackRecord]:
        result = await self.session.execute(
            select(ContentPackRecord).where(ContentPackRecord.pack_key == pack_key)
        )
        return result.scalar_one_or_none()
