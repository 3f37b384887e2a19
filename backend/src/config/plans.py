"""
Plan Configuration

Subscription tiers and the limits attached to each one.

Plan Resolution:
================
    Active subscription?  ──yes──▶  subscription.plan
           │ no
           ▼
    Account younger than TRIAL_DURATION_DAYS?  ──yes──▶  trial
           │ no
           ▼
         free

Plan Types:
===========
- text:        Text input only
- text_audio:  Text input plus audio transcription (monthly minutes)

All tables are read-only mappings. Adding a plan is a data change here,
nothing else needs to branch on plan names.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Plan(str, Enum):
    """Subscription tier."""

    TRIAL = "trial"
    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class PlanType(str, Enum):
    """Input capabilities of a plan."""

    TEXT = "text"
    TEXT_AUDIO = "text_audio"


@dataclass(frozen=True)
class PlanLimits:
    """Quota limits for one plan."""

    max_projects: int
    max_outputs_per_project: int
    max_characters_per_content: int
    audio_minutes_per_month: Optional[int] = None

    @property
    def plan_type(self) -> PlanType:
        return PlanType.TEXT_AUDIO if self.audio_minutes_per_month else PlanType.TEXT


@dataclass(frozen=True)
class RateLimit:
    """Fixed-window request allowance."""

    points: int
    duration_seconds: int


PLAN_LIMITS: Mapping[Plan, PlanLimits] = MappingProxyType({
    Plan.TRIAL: PlanLimits(
        max_projects=10,
        max_outputs_per_project=5,
        max_characters_per_content=5000,
        audio_minutes_per_month=60,
    ),
    Plan.FREE: PlanLimits(
        max_projects=3,
        max_outputs_per_project=1,
        max_characters_per_content=1000,
    ),
    Plan.PRO: PlanLimits(
        max_projects=50,
        max_outputs_per_project=5,
        max_characters_per_content=5000,
    ),
    Plan.ENTERPRISE: PlanLimits(
        max_projects=500,
        max_outputs_per_project=10,
        max_characters_per_content=10000,
        audio_minutes_per_month=300,
    ),
})

# Actions guarded by the Redis rate limiter
RATE_LIMIT_ACTIONS = ("transcribe", "content_pack")

RATE_LIMITS: Mapping[Plan, Mapping[str, RateLimit]] = MappingProxyType({
    Plan.TRIAL: MappingProxyType({
        "transcribe": RateLimit(points=10, duration_seconds=3600),
        "content_pack": RateLimit(points=50, duration_seconds=60),
    }),
    Plan.FREE: MappingProxyType({
        "transcribe": RateLimit(points=2, duration_seconds=3600),
        "content_pack": RateLimit(points=10, duration_seconds=60),
    }),
    Plan.PRO: MappingProxyType({
        "transcribe": RateLimit(points=10, duration_seconds=3600),
        "content_pack": RateLimit(points=50, duration_seconds=60),
    }),
    Plan.ENTERPRISE: MappingProxyType({
        "transcribe": RateLimit(points=50, duration_seconds=3600),
        "content_pack": RateLimit(points=200, duration_seconds=60),
    }),
})

# Series generation (more than one post per platform) is an enterprise feature
MAX_POSTS_PER_PLATFORM: Mapping[Plan, int] = MappingProxyType({
    Plan.TRIAL: 1,
    Plan.FREE: 1,
    Plan.PRO: 1,
    Plan.ENTERPRISE: 3,
})


def get_plan_limits(plan: Plan) -> PlanLimits:
    """Limits for a plan."""
    return PLAN_LIMITS[plan]
