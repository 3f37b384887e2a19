"""
Project Service

Business logic for repurposing projects.

A project holds the source content, the platforms to target and the series
length. Creating one counts against the plan's project quota.

Usage:
======
    from src.shared.services.project_service import ProjectService

    service = ProjectService(db)
    project = await service.create_project(user_id, title="Launch post", ...)
"""

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.platforms import Platform
from src.config.settings import settings
from src.shared.core.exceptions import (
    ProjectNotFoundError,
    QuotaExceededError,
    UnsupportedPlatformError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.enums import ProjectAction
from src.shared.models.project import Project
from src.shared.models.project_history import ProjectHistory
from src.shared.repositories.project_repository import ProjectRepository
from src.shared.services.cache_service import CacheService
from src.shared.services.history_service import HistoryService
from src.shared.services.quota_service import QuotaService

logger = get_logger(__name__)

# Fields a PATCH may change
UPDATABLE_FIELDS = ("title", "source_content", "platforms", "posts_per_platform", "tone")


@dataclass
class PaginatedProjects:
    """Paginated list of a user's projects."""

    items: list[Project]
    total: int
    page: int
    page_size: int
    has_next: bool
    has_prev: bool


def normalize_platforms(platforms: list[str]) -> list[str]:
    """
    Lower-case, de-duplicated platform values in request order.

    Raises:
        UnsupportedPlatformError: A value is not a known platform
    """
    normalized: list[str] = []
    for value in platforms:
        try:
            platform = Platform(str(value).strip().lower()).value
        except ValueError:
            raise UnsupportedPlatformError(value) from None
        if platform not in normalized:
            normalized.append(platform)
    return normalized


def _check_source_length(source_content: str) -> None:
    if len(source_content) > settings.SOURCE_CONTENT_MAX_LENGTH:
        raise ValidationError(
            message=f"Source content exceeds {settings.SOURCE_CONTENT_MAX_LENGTH} characters",
            details={"length": len(source_content), "max_length": settings.SOURCE_CONTENT_MAX_LENGTH},
        )


class ProjectService:
    """
    Service for projects.

    Handles:
    - Quota-gated creation
    - Owner-scoped reads, updates and deletes
    - History of project changes
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize ProjectService.

        Args:
            session: Async database session
        """
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.quota = QuotaService(session)
        self.cache = CacheService(session)
        self.history = HistoryService(session)

    async def create_project(
        self,
        user_id: UUID,
        title: str,
        source_content: str = "",
        platforms: Optional[list[str]] = None,
        posts_per_platform: int = 1,
        tone: Optional[str] = None,
    ) -> Project:
        """
        Create a project.

        Raises:
            QuotaExceededError: Plan's project limit reached
            UnsupportedPlatformError: Unknown platform value
            ValidationError: Source content too long
        """
        quota = await self.quota.check_project_quota(user_id)
        if not quota.can_create:
            raise QuotaExceededError(current=quota.current, limit=quota.limit, plan=quota.plan.value)

        _check_source_length(source_content)
        project = await self.project_repo.create(
            user_id=user_id,
            title=title,
            source_content=source_content,
            platforms=normalize_platforms(platforms or []),
            posts_per_platform=max(1, posts_per_platform),
            tone=tone,
        )

        await self.history.log_project_change(
            project.id,
            user_id,
            ProjectAction.CREATE,
            {"title": title, "platforms": project.platforms},
        )
        logger.info("Project created", project_id=str(project.id), user_id=str(user_id))
        return project

    async def get_project(self, project_id: UUID, user_id: UUID) -> Project:
        """
        Get a project owned by the user.

        Raises:
            ProjectNotFoundError: Missing or not owned
        """
        project = await self.project_repo.get_owned(project_id, user_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_projects(self, user_id: UUID, page: int = 1, page_size: int = 20) -> PaginatedProjects:
        """Projects of a user, newest first."""
        offset = (page - 1) * page_size
        items = await self.project_repo.list_for_user(user_id, offset=offset, limit=page_size)
        total = await self.project_repo.count_for_user(user_id)
        return PaginatedProjects(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_next=offset + len(items) < total,
            has_prev=page > 1,
        )

    async def update_project(self, project_id: UUID, user_id: UUID, **fields: Any) -> Project:
        """
        Partially update a project.

        Changing the source content drops the project's cached generations.

        Raises:
            ProjectNotFoundError: Missing or not owned
            UnsupportedPlatformError: Unknown platform value
            ValidationError: Source content too long
        """
        project = await self.get_project(project_id, user_id)

        changes: dict[str, Any] = {}
        for name in UPDATABLE_FIELDS:
            value = fields.get(name)
            if value is None:
                continue
            if name == "platforms":
                value = normalize_platforms(value)
            elif name == "source_content":
                _check_source_length(value)
            elif name == "posts_per_platform":
                value = max(1, value)
            if getattr(project, name) != value:
                setattr(project, name, value)
                changes[name] = value if name != "source_content" else {"length": len(value)}

        if not changes:
            return project

        await self.session.flush()
        if "source_content" in changes:
            await self.cache.invalidate_project_generation_cache(project.id)

        await self.history.log_project_change(project.id, user_id, ProjectAction.UPDATE, changes)
        logger.info("Project updated", project_id=str(project.id), fields=sorted(changes))
        return project

    async def delete_project(self, project_id: UUID, user_id: UUID) -> None:
        """
        Delete a project with its outputs and versions.

        Raises:
            ProjectNotFoundError: Missing or not owned
        """
        project = await self.get_project(project_id, user_id)
        await self.cache.invalidate_project_generation_cache(project.id)
        await self.project_repo.delete(project.id)
        await self.history.log_project_change(project_id, user_id, ProjectAction.DELETE, {"title": project.title})
        logger.info("Project deleted", project_id=str(project_id), user_id=str(user_id))

    async def get_project_history(self, project_id: UUID, user_id: UUID, limit: int = 100) -> list[ProjectHistory]:
        """
        History entries of a project, newest first.

        Raises:
            ProjectNotFoundError: Missing or not owned
        """
        project = await self.get_project(project_id, user_id)
        return await self.history.list_project_history(project.id, limit=limit)
