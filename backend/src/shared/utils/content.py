"""
Content Sanitization and Validation

sanitize_content() runs on every generated or edited text before storage.
validate_platform_content() is advisory: its messages end up in the
output's generation metadata and never block a save.

Checks:
=======
    length    → PLATFORM_SPECS min/max window
    quality   → spam phrases, excessive exclamation marks or capitals
    safety    → script/iframe/object/embed tags, script URLs, event handlers
"""

import re
from dataclasses import dataclass, field

from src.config.platforms import PLATFORM_SPECS, Platform


_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_SCRIPT_HREF = re.compile(r"href\s*=\s*([\"'])\s*(?:javascript|vbscript):[^\"']*\1", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\s+on\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)

_SPAM_PATTERNS = (
    re.compile(r"free\s+money", re.IGNORECASE),
    re.compile(r"click\s+here\s+now", re.IGNORECASE),
    re.compile(r"urgent\s+action\s+required", re.IGNORECASE),
    re.compile(r"congratulations,\s+you\s+won", re.IGNORECASE),
    re.compile(r"viagra|casino|lottery", re.IGNORECASE),
)

_PROHIBITED_PATTERNS = (
    re.compile(r"<script\b", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=", re.IGNORECASE),
)

# Max exclamation marks per platform
_EXCLAMATION_LIMITS = {
    Platform.LINKEDIN: 3,
    Platform.TWITTER: 2,
}


@dataclass
class ContentValidation:
    """Outcome of validate_platform_content()."""

    is_valid: bool = True
    messages: list[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        self.is_valid = False
        self.messages.append(message)


def sanitize_content(content: str) -> str:
    """
    Strip script tags, script URLs and inline event handlers.

    Example:
        '<a href="javascript:x()" onclick="y()">hi</a>'
        → '<a href="#">hi</a>'
    """
    sanitized = _SCRIPT_TAG.sub("", content)
    sanitized = _SCRIPT_HREF.sub('href="#"', sanitized)
    return _EVENT_HANDLER.sub("", sanitized)


def _check_length(content: str, platform: Platform, result: ContentValidation) -> None:
    spec = PLATFORM_SPECS[platform]
    length = len(content)
    if spec.min_length is not None and length < spec.min_length:
        result.add(
            f"Content too short for {platform.value}. "
            f"Minimum {spec.min_length} characters required."
        )
    elif length > spec.max_length:
        result.add(
            f"Content too long for {platform.value}. "
            f"Maximum {spec.max_length} characters allowed."
        )


def _check_quality(content: str, platform: Platform, result: ContentValidation) -> None:
    if any(pattern.search(content) for pattern in _SPAM_PATTERNS):
        result.add("Content contains potential spam indicators.")

    limit = _EXCLAMATION_LIMITS.get(platform)
    if limit is not None and content.count("!") > limit:
        result.add(f"{PLATFORM_SPECS[platform].name} content should use at most {limit} exclamation marks.")

    words = content.split()
    if words:
        shouting = [w for w in words if len(w) > 3 and w.isupper()]
        if len(shouting) / len(words) > 0.3:
            result.add("Content contains excessive capitalization.")


def _check_safety(content: str, result: ContentValidation) -> None:
    if any(pattern.search(content) for pattern in _PROHIBITED_PATTERNS):
        result.add("Content contains prohibited elements for security reasons.")


def validate_platform_content(content: str, platform: str) -> ContentValidation:
    """
    Advisory checks of a post against its platform.

    Unknown platforms only get the safety check.
    """
    result = ContentValidation()
    try:
        target = Platform(platform)
    except ValueError:
        target = None

    if target is not None:
        _check_length(content, target, result)
        _check_quality(content, target, result)
    _check_safety(content, result)
    return result
