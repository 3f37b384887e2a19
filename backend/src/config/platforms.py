"""
Platform Configuration

Target content surfaces and their character limits.

Limits are advisory: generated text outside them is still stored, the
validation messages end up in the output's generation metadata.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Platform(str, Enum):
    """Supported target platform."""

    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    EMAIL = "email"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"


@dataclass(frozen=True)
class PlatformSpec:
    """Display name and length window for a platform."""

    name: str
    max_length: int
    min_length: Optional[int] = None


PLATFORM_SPECS: Mapping[Platform, PlatformSpec] = MappingProxyType({
    Platform.LINKEDIN: PlatformSpec(name="LinkedIn", max_length=3000, min_length=1200),
    Platform.TWITTER: PlatformSpec(name="Twitter", max_length=280, min_length=50),
    Platform.EMAIL: PlatformSpec(name="Email", max_length=10000, min_length=500),
    Platform.INSTAGRAM: PlatformSpec(name="Instagram", max_length=2200, min_length=500),
    Platform.FACEBOOK: PlatformSpec(name="Facebook", max_length=5000, min_length=50),
    Platform.TIKTOK: PlatformSpec(name="TikTok", max_length=150, min_length=10),
    Platform.YOUTUBE: PlatformSpec(name="YouTube", max_length=5000, min_length=100),
})

SUPPORTED_PLATFORMS = tuple(p.value for p in Platform)
