"""
OutputVersion Entity Model

Append-only history of an Output's content. A row is written with the
content as it was *before* each overwrite (regeneration, edit, revert).

version_number increases by one per output and gives a total order even when
two snapshots share a timestamp.

SAMPLE VERSION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 0d8f7e6c-5b4a-3928-1706-f5e4d3c2b1a0                   │
│ output_id           │ 6f1c2a3b-4d5e-6f70-8192-a3b4c5d6e7f8                   │
│ version_number      │ 3                                                      │
│ content             │ "Why do 80% of launches miss their goals? ..."         │
│ generation_metadata │ {"model": "gpt-4o-mini", "source": "api", ...}         │
│ created_at          │ 2024-01-16T09:12:44Z                                   │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, CreatedAtMixin, JSONType


if TYPE_CHECKING:
    from src.shared.models.output import Output


class OutputVersion(Base, CreatedAtMixin):
    """Immutable content snapshot of an Output."""

    __tablename__ = "output_versions"
    __table_args__ = (
        UniqueConstraint("output_id", "version_number", name="uq_output_versions_number"),
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

    output_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("outputs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # SNAPSHOT
    # ═══════════════════════════════════════════════════════════════════════════

    version_number: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    generation_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    output: Mapped["Output"] = relationship(
        "Output",
        back_populates="versions",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<OutputVersion(output_id={self.output_id}, version={self.version_number})>"
