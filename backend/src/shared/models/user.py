"""
User Entity Model

Local record of a user known to the identity provider. Only what the quota
gate needs is kept here: the account creation time drives the trial window.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "user@example.com"                                        │
│ role             │ "user"                                                    │
│ created_at       │ 2024-01-01T00:00:00Z     ← trial ends 3 days later        │
│ updated_at       │ 2024-01-15T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import UserRole


class User(Base, TimestampMixin):
    """
    Application user.

    Attributes:
        id: Unique identifier (matches the identity provider's user id)
        email: User's email address (unique, indexed)
        role: "user" or "admin"
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.USER.value,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
