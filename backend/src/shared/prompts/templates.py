"""
Platform Prompt Templates

One system prompt and two user templates per platform:

    ┌──────────────┬──────────────────────────────────────────────────────────┐
    │ Template     │ Placeholders                                             │
    ├──────────────┼──────────────────────────────────────────────────────────┤
    │ user         │ {brand_voice}, {source_content}                          │
    │ pack         │ {brand_voice}, {content_pack}                            │
    └──────────────┴──────────────────────────────────────────────────────────┘

The system prompt is short (role + output rule); the task, requirements and
material go in the user message.

Usage:
======
    template = get_platform_prompt_template("LinkedIn")
    prompt = format_prompt(template, {"source_content": text, "brand_voice": ""})
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from src.config.platforms import Platform
from src.shared.core.exceptions import UnsupportedPlatformError


@dataclass(frozen=True)
class PlatformPrompt:
    """Prompt building blocks for one platform."""

    role: str
    task: str
    requirements: tuple[str, ...]
    closing: str


_PLATFORM_PROMPTS: Mapping[Platform, PlatformPrompt] = MappingProxyType({
    Platform.LINKEDIN: PlatformPrompt(
        role="an expert content creator for LinkedIn",
        task="Repurpose the source material into a LinkedIn post.",
        requirements=(
            "Length: 1200-2500 characters",
            "Start with a hook (question or provocation)",
            "Structure: Hook → Problem → Solution → CTA",
            "Style: Professional but lively",
            "Use emojis moderately (2-3 per post)",
            "Add relevant hashtags (3-5)",
        ),
        closing="Output only the finished post, without explanations.",
    ),
    Platform.TWITTER: PlatformPrompt(
        role="an expert content creator for Twitter/X",
        task="Repurpose the source material into a tweet.",
        requirements=(
            "Length: strictly up to 280 characters",
            "Main thought at the beginning",
            "Style: Informal, engaging",
            "Use emojis if appropriate",
            "Add relevant hashtags (1-3)",
        ),
        closing="Output only the finished tweet, without explanations.",
    ),
    Platform.EMAIL: PlatformPrompt(
        role="an expert email marketer",
        task="Repurpose the source material into an email message.",
        requirements=(
            "Length: 300-800 words",
            "Begin with a subject line, then greeting, main message and call to action",
            "Style: Friendly, professional",
            "Use paragraphs and lists for readability",
        ),
        closing="Output only the finished email (subject line first), without explanations.",
    ),
    Platform.INSTAGRAM: PlatformPrompt(
        role="an expert content creator for Instagram",
        task="Repurpose the source material into an Instagram caption.",
        requirements=(
            "Length: 500-2200 characters",
            "Structure: Hook → Value → CTA",
            "Style: Casual, visual-focused, community-oriented",
            "Use 3-5 relevant emojis",
            "Add 15-25 hashtags, mixing popular and niche",
            "Assume the caption accompanies an image or video",
        ),
        closing="Output only the finished caption, without explanations.",
    ),
    Platform.FACEBOOK: PlatformPrompt(
        role="an expert content creator for Facebook",
        task="Repurpose the source material into a Facebook post.",
        requirements=(
            "Length: 50-5000 characters (100-250 performs best)",
            "Structure: Opener → Main content → Engagement prompt",
            "Style: Conversational, informative, community-focused",
            "Use 1-3 relevant emojis",
            "Include 1-5 hashtags",
            "Invite comments and shares",
        ),
        closing="Output only the finished post, without explanations.",
    ),
    Platform.TIKTOK: PlatformPrompt(
        role="an expert content creator for TikTok",
        task="Repurpose the source material into a TikTok caption.",
        requirements=(
            "Length: 10-150 characters",
            "Structure: Attention grabber → Brief context → Engagement prompt",
            "Style: Trendy, casual, youth-oriented",
            "Use 1-3 emojis",
            "Include 3-5 trending hashtags",
        ),
        closing="Output only the finished caption, without explanations.",
    ),
    Platform.YOUTUBE: PlatformPrompt(
        role="an expert content creator for YouTube",
        task="Repurpose the source material into a YouTube video title and description.",
        requirements=(
            "Title: 50-100 characters, keyword-rich",
            "Description: 100-5000 characters, SEO-conscious",
            "Structure: Hook → Overview → Timestamps (if applicable) → CTA",
            "Include 2-5 hashtags",
            "Ask viewers to subscribe, like or comment",
        ),
        closing="Output the title on the first line, then the description, without explanations.",
    ),
})


_USER_TEMPLATE = """Task: {task}

Requirements:
{requirements}
{{brand_voice}}
Source content:
{{source_content}}

Important: Preserve key ideas and facts from the original. {closing}"""

_PACK_TEMPLATE = """Task: {task}

Requirements:
{requirements}
{{brand_voice}}
Content Pack (a structured summary of the source):
{{content_pack}}

Important: Use only facts from the Content Pack. {closing}"""


def _resolve(platform: str) -> PlatformPrompt:
    try:
        return _PLATFORM_PROMPTS[Platform(str(platform).strip().lower())]
    except ValueError:
        raise UnsupportedPlatformError(platform) from None


def _render(template: str, prompt: PlatformPrompt) -> str:
    requirements = "\n".join(f"- {line}" for line in prompt.requirements)
    return template.format(task=prompt.task, requirements=requirements, closing=prompt.closing)


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════════


def get_platform_prompt_template(platform: str) -> str:
    """
    User template for generating from raw source text.

    Args:
        platform: Platform identifier, case-insensitive

    Returns:
        Template with {brand_voice} and {source_content} placeholders

    Raises:
        UnsupportedPlatformError: Unknown platform
    """
    return _render(_USER_TEMPLATE, _resolve(platform))


def get_platform_pack_template(platform: str) -> str:
    """User template for generating from a Content Pack ({content_pack} slot)."""
    return _render(_PACK_TEMPLATE, _resolve(platform))


def get_platform_system_prompt(platform: str) -> str:
    """Short system instruction for a platform."""
    prompt = _resolve(platform)
    return f"You are {prompt.role}. {prompt.closing}"


def format_prompt(template: str, variables: Mapping[str, str]) -> str:
    """
    Replace every occurrence of {name} for each supplied variable.

    Substitution is a single pass over the template, so braces inside a
    supplied value are never expanded. Placeholders without a supplied value
    and any other braces are left as they are.
    """
    if not variables:
        return template
    pattern = re.compile(r"\{(" + "|".join(map(re.escape, variables)) + r")\}")
    return pattern.sub(lambda match: variables[match.group(1)], template)
