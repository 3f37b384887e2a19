"""
Rate Limit Dependency

Per-user, per-action request limits backed by a Redis fixed window.

Limits depend on the caller's effective plan (RATE_LIMITS in
config/plans.py). The gate is a yes/no decision: a request over the limit
gets RATE_LIMIT_EXCEEDED (429) before any work starts. When Redis is down
the request is allowed.

Usage:
======
    from src.api.dependencies.rate_limit import rate_limit

    @router.post(
        "/{project_id}/ingest-audio",
        dependencies=[Depends(rate_limit("transcribe"))],
    )
    async def ingest_audio(...):
        ...
"""

from typing import Awaitable, Callable
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.auth import get_current_user
from src.api.dependencies.database import get_db
from src.config.plans import RATE_LIMIT_ACTIONS, RATE_LIMITS
from src.config.settings import settings
from src.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from src.shared.core.exceptions import RateLimitError
from src.shared.core.logging import get_logger
from src.shared.services.quota_service import QuotaService

logger = get_logger(__name__)


async def get_redis() -> RedisAdapter:
    """Shared Redis adapter."""
    return get_redis_adapter()


def rate_limit(action: str) -> Callable[..., Awaitable[None]]:
    """
    Build a dependency enforcing the plan's limit for an action.

    Args:
        action: One of RATE_LIMIT_ACTIONS

    Raises:
        ValueError: Unknown action (at import time)
    """
    if action not in RATE_LIMIT_ACTIONS:
        raise ValueError(f"Unknown rate limit action: {action}")

    async def check(
        current_user: dict = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        redis: RedisAdapter = Depends(get_redis),
    ) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return

        user_id = current_user["user_id"]
        plan = await QuotaService(db).get_effective_plan(UUID(user_id))
        limit = RATE_LIMITS[plan][action]

        allowed, count = await redis.check_rate_limit(
            f"rate:{action}:{user_id}",
            limit.points,
            limit.duration_seconds,
        )
        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                user_id=user_id,
                action=action,
                plan=plan.value,
                count=count,
                limit=limit.points,
            )
            raise RateLimitError(
                message=f"Too many {action} requests. Try again later.",
                retry_after=limit.duration_seconds,
                details={"action": action, "limit": limit.points},
            )

    return check
