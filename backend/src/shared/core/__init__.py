"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from src.shared.core.logging import logger, get_logger
    from src.shared.core.exceptions import RepurposeException, ProjectNotFoundError

    logger.info("Starting generation", project_id=project_id)
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
    new_request_id,
)
from src.shared.core.exceptions import (
    RepurposeException,
    AuthenticationError,
    AuthorizationError,
    QuotaExceededError,
    NotFoundError,
    ProjectNotFoundError,
    OutputNotFoundError,
    BrandVoiceNotFoundError,
    ValidationError,
    UnsupportedPlatformError,
    ConflictError,
    NoOriginalContentError,
    VersionMismatchError,
    RateLimitError,
    GenerationFailedError,
    InvalidContentPackError,
    ServiceUnavailableError,
    ExternalServiceError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    "new_request_id",
    # Exceptions
    "RepurposeException",
    "AuthenticationError",
    "AuthorizationError",
    "QuotaExceededError",
    "NotFoundError",
    "ProjectNotFoundError",
    "OutputNotFoundError",
    "BrandVoiceNotFoundError",
    "ValidationError",
    "UnsupportedPlatformError",
    "ConflictError",
    "NoOriginalContentError",
    "VersionMismatchError",
    "RateLimitError",
    "GenerationFailedError",
    "InvalidContentPackError",
    "ServiceUnavailableError",
    "ExternalServiceError",
]
