"""
Database Module

This module provides database connectivity and session management for Repurpose.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   FastAPI Route                                                             │
│       │                                                                     │
│       │  Dependency Injection: get_db()                                     │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (from session.py)                 │          │
│   │  - One session per request                                  │          │
│   │  - Auto-commit on success, auto-rollback on exception       │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  Passed to the Service constructor                                  │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Repository (from repositories/)                │          │
│   │  - ProjectRepository, OutputRepository, CacheRepository ... │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       ▼                                                                     │
│   PostgreSQL (asyncpg) in production, SQLite (aiosqlite) in tests           │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Usage in FastAPI:
=================
    from fastapi import Depends
    from src.shared.db import get_db
    from src.shared.services import ProjectService

    @router.get("/projects/{project_id}")
    async def get_project(project_id: UUID, db: AsyncSession = Depends(get_db)):
        return await ProjectService(db).get_project(project_id, user_id)
"""

from src.shared.db.session import (
    get_db,
    init_db,
    close_db,
    check_db,
    create_engine,
    get_session_factory,
)

__all__ = [
    "get_db",  # FastAPI dependency for getting a database session
    "init_db",  # Build engine + session factory on app startup
    "close_db",  # Dispose engine on app shutdown
    "check_db",  # Readiness probe
    "create_engine",
    "get_session_factory",
]
