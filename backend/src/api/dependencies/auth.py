"""
Authentication Dependencies

FastAPI dependencies for user authentication and authorization.

Identity comes from a signed JWT issued elsewhere; this service only
verifies it.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_user()        ← {"user_id", "email", "role"}
           │
           ▼
    require_admin()           ← role == "admin"

Type Aliases:
=============
    CurrentUser - Authenticated user from JWT
    AdminUser   - Authenticated admin

Usage:
======
    from src.api.dependencies.auth import CurrentUser, AdminUser

    @router.get("/quota")
    async def get_quota(current_user: CurrentUser):
        ...

    @router.get("/admin/cache/stats")
    async def stats(admin: AdminUser):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ...config.settings import settings
from ...shared.core.exceptions import AuthenticationError, AuthorizationError
from ...shared.models.enums import UserRole
from ...shared.utils.security import SecurityUtils


# Security scheme for Bearer tokens; a missing header is reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
) -> dict:
    """
    Get current authenticated user from token.

    Returns:
        User data dict with user_id, email and role

    Raises:
        AuthenticationError: If user_id not in token
    """
    user_id = token.get("user_id") or token.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    return {
        "user_id": str(user_id),
        "email": token.get("email"),
        "role": token.get("role") or UserRole.USER.value,
    }


async def require_admin(
    current_user: Annotated[dict, Depends(get_current_user)],
) -> dict:
    """
    Allow only admins.

    Raises:
        AuthorizationError: Authenticated but not an admin
    """
    if current_user["role"] != UserRole.ADMIN.value:
        raise AuthorizationError("Admin access required")
    return current_user


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

# Authenticated user (most common dependency)
CurrentUser = Annotated[dict, Depends(get_current_user)]

# Authenticated admin
AdminUser = Annotated[dict, Depends(require_admin)]
