"""
Prompts Package

Prompt construction for content generation.

Contents:
=========
- templates: per-platform system prompts and user templates, format_prompt()
- series: series roles and the previous-posts summary
- voice: brand voice and tone blocks

User Message Assembly:
======================
    [PREVIOUS POSTS IN THIS SERIES]   ← series_index > 1 only
    [series role instructions]        ← series_total > 1 only
    [tone instruction]                ← project tone set
    user/pack template with {brand_voice} and {source_content}/{content_pack}
"""

from src.shared.prompts.templates import (
    get_platform_prompt_template,
    get_platform_pack_template,
    get_platform_system_prompt,
    format_prompt,
)
from src.shared.prompts.series import (
    get_series_role,
    get_series_context,
    build_previous_posts_summary,
)
from src.shared.prompts.voice import serialize_brand_voice, get_tone_instruction

__all__ = [
    "get_platform_prompt_template",
    "get_platform_pack_template",
    "get_platform_system_prompt",
    "format_prompt",
    "get_series_role",
    "get_series_context",
    "build_previous_posts_summary",
    "serialize_brand_voice",
    "get_tone_instruction",
]
