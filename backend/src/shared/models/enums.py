"""
Enums used across the application.

Stored as plain strings in the database (`.value`), so adding a member never
needs a schema change.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role claimed by the identity provider."""

    USER = "user"
    ADMIN = "admin"


class SubscriptionStatus(str, Enum):
    """Billing state of a subscription."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"

    @classmethod
    def live(cls) -> tuple["SubscriptionStatus", ...]:
        """Statuses under which the subscription's plan applies."""
        return (cls.ACTIVE, cls.TRIALING)


class ProjectAction(str, Enum):
    """Kinds of entries in the project history log."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    GENERATE = "generate"
    EDIT_OUTPUT = "edit_output"
    REVERT_OUTPUT = "revert_output"
    REVERT_TO_VERSION = "revert_to_version"


class GenerationSource(str, Enum):
    """Where a generated text came from."""

    API = "api"
    CACHE = "cache"


class PostTone(str, Enum):
    """Tone preference stored on a project."""

    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    SASSY = "sassy"
    POLITE = "polite"
    AUTHORITATIVE = "authoritative"
    WITTY = "witty"
    INSPIRATIONAL = "inspirational"
    CASUAL = "casual"
    URGENT = "urgent"
