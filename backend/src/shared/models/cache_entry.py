"""
CacheEntry Entity Model

Fingerprint-keyed store for generated posts and Content Packs.

Expiry Rules:
=============
- An entry is a hit only while expires_at is in the future.
- Expired rows stay inert until cleaned; readers filter them out.
- project_id ties generation entries to a project so editing the project's
  source can drop them all at once.

SAMPLE CACHE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ key         │ "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"│
│ value       │ "Why do 80% of launches miss their goals? ..."                 │
│ project_id  │ 3fa85f64-5717-4562-b3fc-2c963f66afa6                           │
│ expires_at  │ 2024-01-22T10:30:00Z                                           │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, TimestampMixin


class CacheEntry(Base, TimestampMixin):
    """Cached value addressed by a sha256 fingerprint."""

    __tablename__ = "cache_entries"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    key: Mapped[str] = mapped_column(String(64), primary_key=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # PAYLOAD
    # ═══════════════════════════════════════════════════════════════════════════

    value: Mapped[str] = mapped_column(Text, nullable=False)

    # Not a foreign key: entries may outlive their project until swept
    project_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        index=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<CacheEntry(key={self.key[:12]}..., expires_at={self.expires_at})>"
