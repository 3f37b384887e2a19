"""
Brand Voice Entity Model

A user's writing style profile, injected into generation prompts.

Its id and updated_at are part of every generation and Content Pack cache
key, so editing a brand voice makes earlier cached results unreachable.

SAMPLE BRAND VOICE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                 │ 9b2d7f0e-1c3a-4b5d-8e6f-7a8b9c0d1e2f                    │
│ user_id            │ 550e8400-e29b-41d4-a716-446655440000                    │
│ name               │ "Founder voice"                                         │
│ tone               │ "confident, warm"                                       │
│ style              │ "short paragraphs, concrete examples"                   │
│ personality        │ "pragmatic optimist"                                    │
│ sentence_structure │ "mostly short sentences"                                │
│ vocabulary         │ ["ship", "iterate", "customers"]                        │
│ avoid_vocabulary   │ ["synergy", "leverage"]                                 │
│ examples           │ ["We shipped v2 today...", ...]                         │
│ is_active          │ true                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, JSONType, TimestampMixin


class BrandVoice(Base, TimestampMixin):
    """Brand voice profile owned by a user. At most one is active."""

    __tablename__ = "brand_voices"

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
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # VOICE PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    tone: Mapped[str] = mapped_column(Text, nullable=False, default="")
    style: Mapped[str] = mapped_column(Text, nullable=False, default="")
    personality: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sentence_structure: Mapped[str] = mapped_column(Text, nullable=False, default="")

    vocabulary: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    avoid_vocabulary: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    examples: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<BrandVoice(id={self.id}, name={self.name}, active={self.is_active})>"
