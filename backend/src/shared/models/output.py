"""
Output Entity Model

The generated post for one (project, platform, series index) slot.

Generating again for the same slot updates this row in place; the previous
content is appended to OutputVersion first. The unique constraint is what
keeps concurrent first-time generations from creating two rows.

SAMPLE OUTPUT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 6f1c2a3b-4d5e-6f70-8192-a3b4c5d6e7f8                   │
│ project_id          │ 3fa85f64-5717-4562-b3fc-2c963f66afa6                   │
│ platform            │ "linkedin"                                             │
│ series_index        │ 1                                                      │
│ content             │ "Why do 80% of launches miss their goals? ..."         │
│ original_content    │ "Why do 80% of launches miss their goals? ..."         │
│ is_edited           │ false                                                  │
│ generation_metadata │ {"model": "gpt-4o-mini", "temperature": 0.7,           │
│                     │  "max_tokens": 900, "source": "api", "success": true,  │
│                     │  "latency_ms": 2140, "timestamp": "2024-01-15T..."}    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, JSONType, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.project import Project
    from src.shared.models.output_version import OutputVersion


class Output(Base, TimestampMixin):
    """
    Generated output for a project slot.

    Attributes:
        content: Current text (generated or user-edited)
        original_content: AI text kept for "revert to original"; None for
            outputs that never had generated content
        is_edited: True once the user changed the generated text
        generation_metadata: Parameters and provenance of the last generation
    """

    __tablename__ = "outputs"
    __table_args__ = (
        UniqueConstraint(
            "project_id",
            "platform",
            "series_index",
            name="uq_outputs_project_platform_series",
        ),
    )

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

    # ═══════════════════════════════════════════════════════════════════════════
    # SLOT
    # ═══════════════════════════════════════════════════════════════════════════

    platform: Mapped[str] = mapped_column(String(30), nullable=False)

    series_index: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    original_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    generation_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="outputs",
        lazy="raise",
    )

    versions: Mapped[list["OutputVersion"]] = relationship(
        "OutputVersion",
        back_populates="output",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Output(id={self.id}, project_id={self.project_id}, "
            f"platform={self.platform}, series_index={self.series_index})>"
        )
