"""
Project Repository

Database operations for projects, brand voices and project history.

Ownership is always checked in SQL (WHERE user_id = ...), so a project that
belongs to someone else looks exactly like a missing one.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.brand_voice import BrandVoice
from src.shared.models.project import Project
from src.shared.models.project_history import ProjectHistory


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Project, session)

    async def get_owned(self, project_id: UUID, user_id: UUID) -> Optional[Project]:
        """
        Get a project only if it belongs to the user.

        SQL Generated:
            SELECT * FROM projects WHERE id = '...' AND user_id = '...'
        """
        result = await self.session.execute(
            select(Project).where(Project.id == project_id, Project.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID, *, offset: int = 0, limit: int = 20) -> list[Project]:
        """Projects of a user, newest first."""
        return await self.list(
            offset=offset,
            limit=limit,
            filters={"user_id": user_id},
            order_by="created_at",
        )

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of projects a user owns (the project quota counter)."""
        return await self.count(filters={"user_id": user_id})


class BrandVoiceRepository(BaseRepository[BrandVoice]):
    """Repository for BrandVoice rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(BrandVoice, session)

    async def get_owned(self, brand_voice_id: UUID, user_id: UUID) -> Optional[BrandVoice]:
        """Brand voice by id, only if it belongs to the user."""
        result = await self.session.execute(
            select(BrandVoice).where(
                BrandVoice.id == brand_voice_id,
                BrandVoice.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_active(self, user_id: UUID) -> Optional[BrandVoice]:
        """The user's active brand voice, most recently updated wins."""
        result = await self.session.execute(
            select(BrandVoice)
            .where(BrandVoice.user_id == user_id, BrandVoice.is_active.is_(True))
            .order_by(BrandVoice.updated_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()


class ProjectHistoryRepository(BaseRepository[ProjectHistory]):
    """Repository for the project audit log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ProjectHistory, session)

    async def list_for_project(self, project_id: UUID, *, limit: int = 100) -> list[ProjectHistory]:
        """History entries of a project, newest first."""
        result = await self.session.execute(
            select(ProjectHistory)
            .where(ProjectHistory.project_id == project_id)
            .order_by(ProjectHistory.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
