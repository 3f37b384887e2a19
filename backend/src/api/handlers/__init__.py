"""
API Handlers

Route handlers for the Repurpose API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer; errors propagate as
RepurposeException subclasses and are rendered by the error handler.
"""

from src.api.handlers import (
    admin_handler,
    generation_handler,
    health_handler,
    output_handler,
    project_handler,
    quota_handler,
)

__all__ = [
    "admin_handler",
    "generation_handler",
    "health_handler",
    "output_handler",
    "project_handler",
    "quota_handler",
]
