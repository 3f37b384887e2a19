"""
Project Entity Model

A unit of source content that the user repurposes into platform posts.

Model Hierarchy:
================
    Project
       └── outputs (Output[])        - One per (platform, series index)
              └── versions (OutputVersion[])

SAMPLE PROJECT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                 │ 3fa85f64-5717-4562-b3fc-2c963f66afa6                    │
│ user_id            │ 550e8400-e29b-41d4-a716-446655440000                    │
│ title              │ "Q3 product launch recap"                               │
│ source_content     │ "We launched three features this quarter..."            │
│ platforms          │ ["linkedin", "twitter"]                                 │
│ posts_per_platform │ 1                                                       │
│ tone               │ "professional"                                          │
│ created_at         │ 2024-01-15T10:30:00Z                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, JSONType, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.output import Output


class Project(Base, TimestampMixin):
    """
    Project owned by exactly one user.

    Attributes:
        source_content: Raw text (typed, or a normalized audio transcript)
        platforms: Selected platform identifiers
        posts_per_platform: Series length per platform (1-3)
        tone: Tone preference

    Relationships:
        outputs: Generated outputs; never lazy loaded, query through
            OutputRepository. Rows are removed by the database cascade.
    """

    __tablename__ = "projects"

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
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    source_content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    platforms: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)

    posts_per_platform: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    tone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    outputs: Mapped[list["Output"]] = relationship(
        "Output",
        back_populates="project",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Project(id={self.id}, title={self.title!r})>"
