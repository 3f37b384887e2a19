"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling
- request_context: Request id and user bound into log context

Usage:
======
    from src.api.middleware import setup_exception_handlers, RequestContextMiddleware

    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)
"""

from src.api.middleware.error_handler import setup_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "setup_exception_handlers",
    "RequestContextMiddleware",
]
