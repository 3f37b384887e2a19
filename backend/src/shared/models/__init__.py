"""
Repurpose SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── Subscription (0..1)
       ├── BrandVoice[]
       └── Project[]
              ├── Output[]                 unique (project, platform, series_index)
              │      └── OutputVersion[]   append-only snapshots
              └── ContentPackRecord[]

    CacheEntry       fingerprint-keyed, expiring, optionally tagged by project
    ProjectHistory   audit log, survives project deletion

Usage:
======
    from src.shared.models import Project, Output, OutputVersion

    output = await output_repo.get_owned(output_id, user_id)
"""

from src.shared.models.base import Base, TimestampMixin, CreatedAtMixin, JSONType
from src.shared.models.enums import (
    UserRole,
    SubscriptionStatus,
    ProjectAction,
    GenerationSource,
    PostTone,
)
from src.shared.models.user import User
from src.shared.models.subscription import Subscription
from src.shared.models.brand_voice import BrandVoice
from src.shared.models.project import Project
from src.shared.models.output import Output
from src.shared.models.output_version import OutputVersion
from src.shared.models.content_pack import ContentPackRecord
from src.shared.models.cache_entry import CacheEntry
from src.shared.models.project_history import ProjectHistory

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "CreatedAtMixin",
    "JSONType",
    # Enums
    "UserRole",
    "SubscriptionStatus",
    "ProjectAction",
    "GenerationSource",
    "PostTone",
    # Models
    "User",
    "Subscription",
    "BrandVoice",
    "Project",
    "Output",
    "OutputVersion",
    "ContentPackRecord",
    "CacheEntry",
    "ProjectHistory",
]
