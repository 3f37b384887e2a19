"""
Logging Configuration

Structured logging setup using structlog.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Generation complete   project_id=550e8400-... successful=2 failed=0

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "info", "event": "Generation complete",
     "project_id": "550e8400-...", "successful": 2, "failed": 0, "request_id": "gen_3f2a..."}

Request Context:
================
Generation fans out into several concurrent platform tasks. Each task runs in
a copy of the caller's contextvars, so a request id bound once with
log_context() shows up on every platform line:

    request_id = new_request_id("gen")
    log_context(request_id=request_id, project_id=str(project_id))
    logger.info("Generation started", platforms=platforms)
    ...
    clear_log_context()

Usage:
======
    from src.shared.core.logging import logger, get_logger, log_context

    logger.info("Project created", project_id=project_id, user_id=user_id)
    logger.error("Platform generation failed", platform=platform, error=str(e))
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.typing import Processor

from src.config.settings import settings


# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "aiosqlite")


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    - Development: colored console output
    - Production: JSON lines for log aggregation

    Called automatically when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, defaults to module name if not specified

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def new_request_id(prefix: str = "req") -> str:
    """
    Build a short correlation id.

    Example:
        new_request_id("gen")  # "gen_3f2a9c1d7e4b"
    """
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Args:
        **kwargs: Key-value pairs to add to log context
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Clear all context variables bound with log_context()."""
    structlog.contextvars.clear_contextvars()


# Initialize logging on module import
setup_logging()

# Default logger instance for convenient import
logger = get_logger("repurpose")
