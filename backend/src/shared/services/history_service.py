"""
History Service

Append-only audit log of project changes.

Logging is best-effort: an entry is written inside a SAVEPOINT, and a
failure is logged and swallowed so the operation being audited still
succeeds.

SAMPLE RECORD:
==============
┌──────────────┬────────────────────────────────────────────────────────────┐
│ Field        │ Value                                                      │
├──────────────┼────────────────────────────────────────────────────────────┤
│ project_id   │ 7c1e...                                                    │
│ user_id      │ 0b6f...                                                    │
│ action       │ "generate"                                                 │
│ changes      │ {"platforms": ["linkedin"], "successful": 1, "failed": 0}  │
└──────────────┴────────────────────────────────────────────────────────────┘
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.logging import get_logger
from src.shared.models.enums import ProjectAction
from src.shared.models.project_history import ProjectHistory
from src.shared.repositories.project_repository import ProjectHistoryRepository

logger = get_logger(__name__)


class HistoryService:
    """Service for the project audit log."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ProjectHistoryRepository(session)

    async def log_project_change(
        self,
        project_id: UUID,
        user_id: UUID,
        action: ProjectAction,
        changes: Optional[dict[str, Any]] = None,
    ) -> Optional[ProjectHistory]:
        """
        Record a change. Never raises for storage errors.

        Returns:
            The entry, or None if it could not be written
        """
        try:
            async with self.session.begin_nested():
                return await self.repo.create(
                    project_id=project_id,
                    user_id=user_id,
                    action=action.value,
                    changes=changes or {},
                )
        except SQLAlchemyError as e:
            logger.warning(
                "Project history entry not written",
                project_id=str(project_id),
                action=action.value,
                error=str(e),
            )
            return None

    async def list_project_history(self, project_id: UUID, limit: int = 100) -> list[ProjectHistory]:
        """Entries for a project, newest first. Ownership is checked by the caller."""
        return await self.repo.list_for_project(project_id, limit=limit)
