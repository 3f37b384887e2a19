"""
Base Model Classes

Declarative base and the timestamp mixin shared by every model.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Portable Types:
===============
Models use the generic `Uuid` type and a `JSON` type that becomes JSONB on
PostgreSQL, so the same metadata creates tables on PostgreSQL (production)
and SQLite (tests).

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    changes: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)

Usage:
======
    from src.shared.models.base import Base, TimestampMixin, JSONType

    class Project(Base, TimestampMixin):
        __tablename__ = "projects"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.shared.utils.time import utcnow


# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps `dict[str, Any]` and `list[str]` annotations to the portable JSON
    type, so columns can be declared with just `Mapped[dict[str, Any]]`.
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
        list[str]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Both columns get a Python-side default as well as the server default:
    CURRENT_TIMESTAMP has one-second resolution on SQLite, and ordering by
    creation time within a request needs finer stamps.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )


class CreatedAtMixin:
    """Creation timestamp only, for append-only tables."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )
