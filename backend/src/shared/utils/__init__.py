"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: JWT verification
- content: Sanitization and advisory platform validation
- time: UTC helpers

Usage:
======
    from src.shared.utils.security import SecurityUtils
    from src.shared.utils.content import sanitize_content
"""

from src.shared.utils.security import SecurityUtils
from src.shared.utils.content import (
    ContentValidation,
    sanitize_content,
    validate_platform_content,
)
from src.shared.utils.time import utcnow, ensure_utc, isoformat

__all__ = [
    "SecurityUtils",
    "ContentValidation",
    "sanitize_content",
    "validate_platform_content",
    "utcnow",
    "ensure_utc",
    "isoformat",
]
