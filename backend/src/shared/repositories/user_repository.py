"""
User Repository

Database operations for users and their subscriptions.

Common Operations:
==================
- get_by_email()                → Find user by email address
- SubscriptionRepository
    - get_by_user()             → Current subscription row (0..1)
    - add_audio_minutes()       → Atomic SQL-side increment
    - reset_audio_period()      → Zero the counter, move the reset date
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.user import User
from src.shared.models.subscription import Subscription


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        SQL Generated:
            SELECT * FROM users WHERE email = 'user@example.com'
        """
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for Subscription rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Subscription, session)

    async def get_by_user(self, user_id: UUID) -> Optional[Subscription]:
        """Subscription for a user, if any."""
        result = await self.session.execute(
            select(Subscription).where(Subscription.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def add_audio_minutes(self, user_id: UUID, minutes: float) -> None:
        """
        Add minutes to the period counter.

        The increment happens in SQL, so concurrent uploads never lose an
        update:

            UPDATE subscriptions
            SET audio_minutes_used = audio_minutes_used + 3.5
            WHERE user_id = '...'
        """
        await self.session.execute(
            update(Subscription)
            .where(Subscription.user_id == user_id)
            .values(audio_minutes_used=Subscription.audio_minutes_used + minutes)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()

    async def reset_audio_period(self, subscription: Subscription, next_reset_at: datetime) -> Subscription:
        """Zero the audio counter and schedule the next rollover."""
        subscription.audio_minutes_used = 0.0
        subscription.audio_minutes_reset_at = next_reset_at
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
