"""
Database Dependency

FastAPI dependency for database sessions.

This module provides the get_db dependency that yields async database sessions
to route handlers. One session spans the whole request, so every service in
a handler shares one transaction: committed on success, rolled back on error.

Usage:
======
    from fastapi import Depends
    from sqlalchemy.ext.asyncio import AsyncSession
    from src.api.dependencies.database import get_db, DbSession

    # Using type alias (recommended)
    @router.get("/quota")
    async def get_quota(db: DbSession, current_user: CurrentUser):
        return await QuotaService(db).check_project_quota(...)

    # Using explicit Depends
    @router.get("/projects/{project_id}")
    async def get_project(project_id: UUID, db: AsyncSession = Depends(get_db)):
        return await ProjectRepository(db).get(project_id)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields an async database session for the duration of the request.
    The session is automatically:
    - Committed on success
    - Rolled back on exception
    - Closed after the request

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
