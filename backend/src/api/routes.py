"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live   → Health check endpoints
    /projects                → Projects, generation, Content Pack, ingestion
    /outputs                 → Output edits and versions
    /quota                   → Caller's plan and usage
    /admin                   → Cache maintenance (admin role)

Usage:
======
    from src.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from src.shared.schemas.common import ErrorResponse
from src.api.handlers import (
    admin_handler,
    generation_handler,
    health_handler,
    output_handler,
    project_handler,
    quota_handler,
)


# Error envelope documented on every authenticated router
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 409, 429, 502, 503)
}


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Project endpoints
    app.include_router(
        project_handler.router,
        prefix="/projects",
        responses=ERROR_RESPONSES,
        tags=["Projects"],
    )

    # Generation endpoints (nested under projects)
    app.include_router(
        generation_handler.router,
        prefix="/projects",
        responses=ERROR_RESPONSES,
        tags=["Generation"],
    )

    # Output endpoints
    app.include_router(
        output_handler.router,
        prefix="/outputs",
        responses=ERROR_RESPONSES,
        tags=["Outputs"],
    )

    # Quota endpoint
    app.include_router(
        quota_handler.router,
        prefix="/quota",
        responses=ERROR_RESPONSES,
        tags=["Quota"],
    )

    # Admin endpoints
    app.include_router(
        admin_handler.router,
        prefix="/admin",
        responses=ERROR_RESPONSES,
        tags=["Admin"],
    )
