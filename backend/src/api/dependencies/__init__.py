"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, require_admin(), AdminUser
- Pagination: get_pagination(), Pagination
- Rate limiting: rate_limit(action)
- Services: get_*_service() functions

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: dict = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):

Usage:
======
    from src.api.dependencies import DbSession, CurrentUser

    @router.get("/quota")
    async def get_quota(db: DbSession, user: CurrentUser):
        return await QuotaService(db).check_project_quota(UUID(user["user_id"]))
"""

from src.api.dependencies.database import (
    get_db,
    DbSession,
)
from src.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    require_admin,
    CurrentUser,
    AdminUser,
)
from src.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)
from src.api.dependencies.rate_limit import rate_limit

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "require_admin",
    "CurrentUser",
    "AdminUser",
    # Pagination
    "get_pagination",
    "Pagination",
    # Rate limiting
    "rate_limit",
]
