"""
Quota Service

Plan resolution and quota checks.

Checks are read-only: they never create, reset or increment anything.
Only increment_audio_minutes_used() writes, after a successful
transcription.

Audio Period:
=============
    reset_at = audio_minutes_reset_at or current_period_end

    now <= reset_at   →  used = audio_minutes_used
    now >  reset_at   →  used = 0 (check)   /  counter reset (increment)

Usage:
======
    quota = await QuotaService(db).check_project_quota(user_id)
    if not quota.can_create:
        raise QuotaExceededError(current=quota.current, limit=quota.limit, plan=quota.plan.value)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.plans import Plan, PlanType, get_plan_limits
from src.config.settings import settings
from src.shared.core.logging import get_logger
from src.shared.models.enums import SubscriptionStatus
from src.shared.models.subscription import Subscription
from src.shared.models.user import User
from src.shared.repositories.project_repository import ProjectRepository
from src.shared.repositories.user_repository import SubscriptionRepository, UserRepository
from src.shared.utils.time import ensure_utc, utcnow

logger = get_logger(__name__)

AUDIO_PERIOD = timedelta(days=30)


@dataclass
class ProjectQuota:
    """Project quota for a user."""

    can_create: bool
    current: int
    limit: int
    plan: Plan
    plan_type: PlanType
    can_use_audio: bool


@dataclass
class AudioQuota:
    """Audio minutes quota for a user."""

    allowed: bool
    plan_type: PlanType
    used_minutes: float
    limit_minutes: Optional[int]

    def can_add_minutes(self, minutes: float) -> bool:
        """True if minutes more would stay within the limit."""
        if not self.allowed or self.limit_minutes is None:
            return False
        return self.used_minutes + minutes <= self.limit_minutes


def resolve_effective_plan(
    subscription: Optional[Subscription],
    user_created_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> Plan:
    """
    Plan that currently applies to a user.

    A live (active/trialing) subscription wins; otherwise accounts younger
    than TRIAL_DURATION_DAYS are on trial; everyone else is free.
    """
    now = now or utcnow()
    if subscription is not None and subscription.is_live:
        try:
            return Plan(subscription.plan)
        except ValueError:
            logger.warning("Unknown subscription plan", plan=subscription.plan)
            return Plan.FREE

    created_at = ensure_utc(user_created_at)
    if created_at is not None and now - created_at < timedelta(days=settings.TRIAL_DURATION_DAYS):
        return Plan.TRIAL
    return Plan.FREE


def _audio_period_ended(subscription: Subscription, now: datetime) -> bool:
    reset_at = ensure_utc(subscription.audio_minutes_reset_at or subscription.current_period_end)
    return reset_at is not None and now > reset_at


class QuotaService:
    """
    Service for plan limits.

    Handles:
    - Effective plan resolution (subscription, trial window, free)
    - Project and audio quota checks
    - Audio minute accounting
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize QuotaService.

        Args:
            session: Async database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.subscription_repo = SubscriptionRepository(session)
        self.project_repo = ProjectRepository(session)

    async def _load(self, user_id: UUID) -> tuple[Optional[User], Optional[Subscription]]:
        user = await self.user_repo.get(user_id)
        subscription = await self.subscription_repo.get_by_user(user_id)
        return user, subscription

    async def get_effective_plan(self, user_id: UUID) -> Plan:
        """Plan that currently applies to the user."""
        user, subscription = await self._load(user_id)
        return resolve_effective_plan(subscription, user.created_at if user else None)

    async def check_project_quota(self, user_id: UUID) -> ProjectQuota:
        """
        Project quota: can the user create (or generate for) projects.

        Returns:
            ProjectQuota with current count, limit and plan
        """
        user, subscription = await self._load(user_id)
        plan = resolve_effective_plan(subscription, user.created_at if user else None)
        limits = get_plan_limits(plan)
        current = await self.project_repo.count_for_user(user_id)

        quota = ProjectQuota(
            can_create=current < limits.max_projects,
            current=current,
            limit=limits.max_projects,
            plan=plan,
            plan_type=limits.plan_type,
            can_use_audio=limits.plan_type == PlanType.TEXT_AUDIO,
        )
        logger.info(
            "Quota check result",
            user_id=str(user_id),
            plan=plan.value,
            current=current,
            limit=limits.max_projects,
            can_create=quota.can_create,
        )
        return quota

    async def check_audio_quota(self, user_id: UUID) -> AudioQuota:
        """
        Audio quota for text_audio plans.

        A period that has ended counts as zero used minutes; nothing is
        written here.
        """
        user, subscription = await self._load(user_id)
        plan = resolve_effective_plan(subscription, user.created_at if user else None)
        limits = get_plan_limits(plan)

        if limits.plan_type != PlanType.TEXT_AUDIO:
            return AudioQuota(allowed=False, plan_type=limits.plan_type, used_minutes=0.0, limit_minutes=None)

        if subscription is None:
            # Trial without a subscription row has used nothing yet
            return AudioQuota(
                allowed=True,
                plan_type=limits.plan_type,
                used_minutes=0.0,
                limit_minutes=limits.audio_minutes_per_month,
            )

        limit_minutes = subscription.audio_minutes_limit or limits.audio_minutes_per_month
        used = 0.0 if _audio_period_ended(subscription, utcnow()) else subscription.audio_minutes_used
        return AudioQuota(
            allowed=used < limit_minutes,
            plan_type=limits.plan_type,
            used_minutes=used,
            limit_minutes=limit_minutes,
        )

    async def increment_audio_minutes_used(self, user_id: UUID, minutes: float) -> None:
        """
        Record minutes transcribed.

        Creates a trial subscription row for trial users without one, resets
        an ended period, then increments in SQL.
        """
        user, subscription = await self._load(user_id)
        plan = resolve_effective_plan(subscription, user.created_at if user else None)
        limits = get_plan_limits(plan)
        if limits.audio_minutes_per_month is None:
            logger.info("Audio minutes not tracked for plan", user_id=str(user_id), plan=plan.value)
            return

        now = utcnow()
        if subscription is None:
            created_at = ensure_utc(user.created_at) if user else now
            trial_end = created_at + timedelta(days=settings.TRIAL_DURATION_DAYS)
            subscription = await self.subscription_repo.create(
                user_id=user_id,
                plan=Plan.TRIAL.value,
                status=SubscriptionStatus.TRIALING.value,
                current_period_end=trial_end,
                audio_minutes_limit=limits.audio_minutes_per_month,
                audio_minutes_used=0.0,
                audio_minutes_reset_at=trial_end,
            )
        elif _audio_period_ended(subscription, now):
            await self.subscription_repo.reset_audio_period(subscription, now + AUDIO_PERIOD)

        await self.subscription_repo.add_audio_minutes(user_id, minutes)
        logger.info("Audio minutes recorded", user_id=str(user_id), minutes=round(minutes, 2))
