"""
Base Repository

Generic CRUD operations shared by all entity repositories.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- list()         → List records with pagination and equality filters
- count()        → Count records with equality filters
- create()       → Insert and return the refreshed record
- update()       → Apply non-None fields and return the refreshed record
- delete()       → Hard delete by UUID

Generic Type Pattern:
=====================
    class ProjectRepository(BaseRepository[Project]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(Project, session)

    repo = ProjectRepository(db)
    project = await repo.get(project_id)  # typed as Optional[Project]

flush() vs commit():
====================
Repositories only flush. The transaction belongs to the caller: get_db()
commits after the request handler returns, tests commit or roll back
explicitly. A service can therefore combine several repository calls into
one atomic unit.

Ownership:
==========
get() does not check ownership. Entity repositories expose get_owned()
variants that filter by user in SQL; services use those for anything a
user asked for by id.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        SQL Generated:
            SELECT * FROM projects WHERE id = '3fa85f64-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with pagination and optional equality filters.

        Example:
            projects = await repo.list(
                filters={"user_id": user_id},
                order_by="created_at",
                offset=20,
                limit=20,
            )
        """
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Count records with optional equality filters.

        SQL Generated:
            SELECT COUNT(*) FROM projects WHERE user_id = '...'
        """
        query = select(sql_count()).select_from(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        add → flush (INSERT) → refresh (load DB defaults) → return
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, record_id: UUID, **kwargs: Any) -> Optional[ModelType]:
        """
        Update a record by ID.

        Fields passed as None are skipped, which allows partial updates.

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: UUID) -> bool:
        """
        Hard delete a record by ID.

        Child rows declared with ondelete="CASCADE" are removed by the
        database.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
