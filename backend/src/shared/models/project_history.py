"""
ProjectHistory Entity Model

Audit trail of what happened to a project. Written best-effort after the
main operation; a missing entry never means the operation failed.

SAMPLE HISTORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id          │ 5e4d3c2b-1a09-8f7e-6d5c-4b3a29180706                           │
│ project_id  │ 3fa85f64-5717-4562-b3fc-2c963f66afa6                           │
│ user_id     │ 550e8400-e29b-41d4-a716-446655440000                           │
│ action      │ "generate"                                                     │
│ changes     │ {"platforms": ["linkedin", "twitter"],                         │
│             │  "successful": 2, "failed": 0}                                 │
│ created_at  │ 2024-01-15T10:31:02Z                                           │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Any
import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, CreatedAtMixin, JSONType


class ProjectHistory(Base, CreatedAtMixin):
    """One audit entry for a project."""

    __tablename__ = "project_history"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Plain column: history survives project deletion
    project_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    action: Mapped[str] = mapped_column(String(30), nullable=False)

    changes: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ProjectHistory(project_id={self.project_id}, action={self.action})>"
