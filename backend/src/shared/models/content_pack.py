"""
ContentPack Entity Model

Durable copy of a validated Content Pack. Only packs that passed validation
are written; the pack body is stored as JSON.

SAMPLE CONTENT PACK RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id          │ 1a2b3c4d-5e6f-7081-92a3-b4c5d6e7f809                           │
│ project_id  │ 3fa85f64-5717-4562-b3fc-2c963f66afa6                           │
│ user_id     │ 550e8400-e29b-41d4-a716-446655440000                           │
│ pack_key    │ "c1d2e3..."   ← project + source + brand voice + plan          │
│ input_hash  │ "a9b8c7..."   ← sha256 of the source text                      │
│ model       │ "gpt-4o-mini"                                                  │
│ plan        │ "pro"                                                          │
│ pack        │ {"summary_short": "...", "key_points": [...], ...}             │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Any
import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, CreatedAtMixin, JSONType


class ContentPackRecord(Base, CreatedAtMixin):
    """Stored Content Pack, addressed by its fingerprint."""

    __tablename__ = "content_packs"

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

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # PACK
    # ═══════════════════════════════════════════════════════════════════════════

    pack_key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    input_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    model: Mapped[str] = mapped_column(String(50), nullable=False)

    plan: Mapped[str] = mapped_column(String(20), nullable=False)

    pack: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ContentPackRecord(project_id={self.project_id}, pack_key={self.pack_key[:12]}...)>"
