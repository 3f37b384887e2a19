"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

`error_code` is the stable, machine-readable kind of an error. Callers branch
on it (or on the class), never on the message text.

Exception Hierarchy:
====================
    RepurposeException (base)
       │
       ├── AuthenticationError (401)      ← Missing/invalid token
       ├── AuthorizationError (403)       ← Authenticated but not allowed
       ├── QuotaExceededError (403)       ← Plan limit reached, nothing generated
       ├── NotFoundError (404)            ← Missing, or not owned by caller
       │      ├── ProjectNotFoundError
       │      ├── OutputNotFoundError
       │      └── BrandVoiceNotFoundError
       ├── ValidationError (400)          ← Invalid input data
       │      └── UnsupportedPlatformError
       ├── ConflictError (409)            ← Business precondition violated
       │      ├── NoOriginalContentError
       │      └── VersionMismatchError
       ├── RateLimitError (429)           ← Too many requests
       ├── GenerationFailedError (502)    ← Provider failed after retries
       │      └── InvalidContentPackError
       └── ServiceUnavailableError (503)  ← External service down
              └── ExternalServiceError

Usage:
======
    from src.shared.core.exceptions import ProjectNotFoundError, QuotaExceededError

    raise ProjectNotFoundError(project_id)
    # {"error": {"code": "NOT_FOUND", "message": "Project with id 'abc' not found"}}

    raise QuotaExceededError(current=3, limit=3, plan="free")

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "QUOTA_EXCEEDED",
            "message": "Project limit reached for plan 'free' (3/3)",
            "details": {"current": 3, "limit": 3, "plan": "free"}
        }
    }
"""

from typing import Any, Optional


class RepurposeException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error kind
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        """Alias of error_code."""
        return self.error_code

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION, AUTHORIZATION & QUOTA (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(RepurposeException):
    """Authentication failed error (401 Unauthorized)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(RepurposeException):
    """
    Authorization failed error (403 Forbidden).

    Raised when user is authenticated but lacks permission
    (e.g. a non-admin calling cache maintenance).
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


class QuotaExceededError(RepurposeException):
    """
    Plan quota exhausted (403).

    Raised before any costed work starts, so a rejected request never
    produces partial output.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        current: Optional[float] = None,
        limit: Optional[float] = None,
        plan: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"Project limit reached for plan '{plan}' ({current}/{limit})"
        details: dict[str, Any] = {}
        if current is not None:
            details["current"] = current
        if limit is not None:
            details["limit"] = limit
        if plan is not None:
            details["plan"] = plan
        super().__init__(
            message=message,
            status_code=403,
            error_code="QUOTA_EXCEEDED",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(RepurposeException):
    """
    Resource not found error (404 Not Found).

    Also used when the resource exists but belongs to another user, so the
    response never reveals whether it exists.

    Example:
        raise NotFoundError("Project", project_id)
        # Message: "Project with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class ProjectNotFoundError(NotFoundError):
    """Project missing or not owned by the caller."""

    def __init__(self, project_id: Any) -> None:
        super().__init__(resource="Project", resource_id=str(project_id))


class OutputNotFoundError(NotFoundError):
    """Output missing or not owned by the caller (not found or access denied)."""

    def __init__(self, output_id: Any) -> None:
        super().__init__(resource="Output", resource_id=str(output_id))


class BrandVoiceNotFoundError(NotFoundError):
    """Brand voice missing or not owned by the caller."""

    def __init__(self, brand_voice_id: Any) -> None:
        super().__init__(resource="Brand voice", resource_id=str(brand_voice_id))


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(RepurposeException):
    """Validation error (400 Bad Request)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class UnsupportedPlatformError(ValidationError):
    """No prompt template exists for the requested platform."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(
            message=f"Unsupported platform: {platform}",
            details={"platform": platform},
            error_code="UNSUPPORTED_PLATFORM",
        )


class ConflictError(RepurposeException):
    """Resource conflict error (409 Conflict)."""

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "CONFLICT",
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            details=details,
        )


class NoOriginalContentError(ConflictError):
    """Revert requested but no original content was ever recorded."""

    def __init__(self, output_id: Any) -> None:
        super().__init__(
            message="No original content to revert to",
            details={"output_id": str(output_id)},
            error_code="NO_ORIGINAL_CONTENT",
        )


class VersionMismatchError(ConflictError):
    """The version does not belong to the output it was restored into."""

    def __init__(self, output_id: Any, version_id: Any) -> None:
        super().__init__(
            message="Version does not belong to this output",
            details={"output_id": str(output_id), "version_id": str(version_id)},
            error_code="VERSION_MISMATCH",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITING & GENERATION ERRORS (429, 502)
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimitError(RepurposeException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Includes retry_after hint for clients.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if retry_after:
            extra_details["retry_after_seconds"] = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=extra_details,
        )


class GenerationFailedError(RepurposeException):
    """Generative provider failed after retries and fallback (502)."""

    def __init__(
        self,
        message: str = "Content generation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "GENERATION_FAILED",
    ) -> None:
        super().__init__(
            message=message,
            status_code=502,
            error_code=error_code,
            details=details,
        )


class InvalidContentPackError(GenerationFailedError):
    """Model output could not be turned into a complete Content Pack."""

    def __init__(
        self,
        message: str = "Invalid Content Pack: missing required fields",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            details=details,
            error_code="INVALID_CONTENT_PACK",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE ERRORS (503)
# ═══════════════════════════════════════════════════════════════════════════════


class ServiceUnavailableError(RepurposeException):
    """Service temporarily unavailable error (503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )


class ExternalServiceError(ServiceUnavailableError):
    """External API failure (e.g. speech-to-text)."""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        msg = message or f"{service_name} service error"
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(message=msg, details=extra_details)
