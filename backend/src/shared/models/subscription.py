"""
Subscription Entity Model

A user's billing plan plus the audio-minute counter for the current period.
Billing itself happens elsewhere; this row is the "current plan" lookup.

SAMPLE SUBSCRIPTION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                     │ 7c9e6679-7425-40de-944b-e07fc1f90ae7                │
│ user_id                │ 550e8400-e29b-41d4-a716-446655440000                │
│ plan                   │ "enterprise"                                        │
│ status                 │ "active"                                            │
│ current_period_end     │ 2024-02-01T00:00:00Z                                │
│ audio_minutes_limit    │ 300                                                 │
│ audio_minutes_used     │ 42.5                                                │
│ audio_minutes_reset_at │ 2024-02-01T00:00:00Z                                │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import SubscriptionStatus


class Subscription(Base, TimestampMixin):
    """
    Subscription record (at most one per user).

    Attributes:
        plan: Plan value ("free", "pro", "enterprise", "trial")
        status: Billing status; only active/trialing subscriptions count
        audio_minutes_limit: Minutes allowed per period (None = no audio)
        audio_minutes_used: Minutes consumed in the current period
        audio_minutes_reset_at: When the audio counter rolls over
    """

    __tablename__ = "subscriptions"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PLAN
    # ═══════════════════════════════════════════════════════════════════════════

    plan: Mapped[str] = mapped_column(String(20), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SubscriptionStatus.ACTIVE.value,
    )

    current_period_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUDIO QUOTA
    # ═══════════════════════════════════════════════════════════════════════════

    audio_minutes_limit: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    audio_minutes_used: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
    )

    audio_minutes_reset_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_live(self) -> bool:
        """True if the subscription's plan currently applies."""
        return self.status in {s.value for s in SubscriptionStatus.live()}

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Subscription(user_id={self.user_id}, plan={self.plan}, status={self.status})>"
