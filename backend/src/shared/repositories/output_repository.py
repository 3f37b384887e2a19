"""
Output Repository

Database operations for outputs and their version history.

Common Operations:
==================
- OutputRepository
    - get_owned()            → Output only if its project belongs to the user
    - get_slot()             → Output for (project, platform, series_index)
    - insert_slot()          → Insert in a SAVEPOINT; None if the slot exists
    - list_previous_in_series()
- OutputVersionRepository
    - add_snapshot()         → Append the next version number
    - list_for_output()      → Newest first
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.output import Output
from src.shared.models.output_version import OutputVersion
from src.shared.models.project import Project


class OutputRepository(BaseRepository[Output]):
    """Repository for Output database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Output, session)

    async def get_owned(self, output_id: UUID, user_id: UUID) -> Optional[Output]:
        """
        Get an output only if its project belongs to the user.

        SQL Generated:
            SELECT outputs.* FROM outputs
            JOIN projects ON projects.id = outputs.project_id
            WHERE outputs.id = '...' AND projects.user_id = '...'
        """
        result = await self.session.execute(
            select(Output)
            .join(Project, Project.id == Output.project_id)
            .where(Output.id == output_id, Project.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_slot(self, project_id: UUID, platform: str, series_index: int = 1) -> Optional[Output]:
        """Output occupying a (project, platform, series_index) slot."""
        result = await self.session.execute(
            select(Output).where(
                Output.project_id == project_id,
                Output.platform == platform,
                Output.series_index == series_index,
            )
        )
        return result.scalar_one_or_none()

    async def insert_slot(self, **kwargs: Any) -> Optional[Output]:
        """
        Insert a new output inside a SAVEPOINT.

        Returns None when the unique (project, platform, series_index)
        constraint fires because another request created the row first.
        Only the savepoint is rolled back; the outer transaction stays usable.
        """
        instance = Output(**kwargs)
        try:
            async with self.session.begin_nested():
                self.session.add(instance)
        except IntegrityError:
            return None
        await self.session.refresh(instance)
        return instance

    async def list_for_project(self, project_id: UUID) -> list[Output]:
        """All outputs of a project, by platform then series index."""
        result = await self.session.execute(
            select(Output)
            .where(Output.project_id == project_id)
            .order_by(Output.platform, Output.series_index)
        )
        return list(result.scalars().all())

    async def list_previous_in_series(
        self,
        project_id: UUID,
        platform: str,
        before_index: int,
    ) -> list[Output]:
        """Earlier posts of a series on one platform, in series order."""
        result = await self.session.execute(
            select(Output)
            .where(
                Output.project_id == project_id,
                Output.platform == platform,
                Output.series_index < before_index,
            )
            .order_by(Output.series_index)
        )
        return list(result.scalars().all())


class OutputVersionRepository(BaseRepository[OutputVersion]):
    """Repository for OutputVersion rows (append-only)."""

    # History display cap
    DEFAULT_LIMIT = 50

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(OutputVersion, session)

    async def add_snapshot(
        self,
        output_id: UUID,
        content: str,
        generation_metadata: Optional[dict[str, Any]] = None,
    ) -> OutputVersion:
        """
        Append a snapshot with the next version number.

        SQL Generated:
            SELECT max(version_number) FROM output_versions WHERE output_id = '...'
            INSERT INTO output_versions (..., version_number) VALUES (..., max + 1)
        """
        result = await self.session.execute(
            select(func.max(OutputVersion.version_number)).where(OutputVersion.output_id == output_id)
        )
        next_number = (result.scalar() or 0) + 1
        return await self.create(
            output_id=output_id,
            version_number=next_number,
            content=content,
            generation_metadata=generation_metadata,
        )

    async def list_for_output(self, output_id: UUID, *, limit: int = DEFAULT_LIMIT) -> list[OutputVersion]:
        """Versions of an output, newest first."""
        result = await self.session.execute(
            select(OutputVersion)
            .where(OutputVersion.output_id == output_id)
            .order_by(OutputVersion.version_number.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_for_output(self, output_id: UUID) -> int:
        """Number of versions of an output."""
        return await self.count(filters={"output_id": output_id})
