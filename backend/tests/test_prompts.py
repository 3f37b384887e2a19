"""
Tests for prompt templates, series framing and content checks.
"""

from types import SimpleNamespace

import pytest

from src.config.platforms import SUPPORTED_PLATFORMS
from src.shared.core.exceptions import UnsupportedPlatformError
from src.shared.prompts import (
    build_previous_posts_summary,
    format_prompt,
    get_platform_pack_template,
    get_platform_prompt_template,
    get_platform_system_prompt,
    get_series_context,
    get_series_role,
    get_tone_instruction,
    serialize_brand_voice,
)
from src.shared.utils.content import sanitize_content, validate_platform_content


class TestTemplates:
    @pytest.mark.parametrize("platform", SUPPORTED_PLATFORMS)
    def test_every_platform_has_both_templates(self, platform):
        user = get_platform_prompt_template(platform)
        pack = get_platform_pack_template(platform)

        assert "{source_content}" in user
        assert "{brand_voice}" in user
        assert "{content_pack}" in pack
        assert "{source_content}" not in pack
        assert get_platform_system_prompt(platform).startswith("You are ")

    def test_platform_lookup_is_case_insensitive(self):
        assert get_platform_prompt_template("LinkedIn") == get_platform_prompt_template("linkedin")

    def test_unknown_platform(self):
        with pytest.raises(UnsupportedPlatformError):
            get_platform_prompt_template("myspace")

    def test_format_prompt_replaces_every_occurrence(self):
        result = format_prompt("{a} and {a} but {b}", {"a": "x"})

        assert result == "x and x but {b}"

    def test_format_prompt_leaves_other_braces(self):
        result = format_prompt('{"json": true} {source_content}', {"source_content": "text"})

        assert result == '{"json": true} text'

    def test_format_prompt_keeps_placeholders_inside_values(self):
        source = "Our template syntax uses {brand_voice} markers"
        template = get_platform_prompt_template("linkedin") + "\n{brand_voice}"

        result = format_prompt(template, {"source_content": source, "brand_voice": "VOICE BLOCK"})

        assert source in result
        assert result.endswith("VOICE BLOCK")


class TestSeries:
    def test_roles(self):
        assert get_series_role(1, 1) == ""
        assert get_series_role(1, 2) == "teaser"
        assert get_series_role(2, 2) == "conclusion"
        assert get_series_role(2, 3) == "context"
        assert get_series_role(3, 3) == "conclusion"

    def test_single_post_has_no_context(self):
        assert get_series_context(1, 1) == ""

    def test_final_post_context(self):
        context = get_series_context(3, 3)

        assert "FINAL post" in context
        assert "call to action" in context

    def test_previous_posts_summary_is_ordered_and_truncated(self):
        outputs = [
            SimpleNamespace(series_index=2, content="second"),
            SimpleNamespace(series_index=1, content="a" * 300),
        ]

        summary = build_previous_posts_summary(outputs)

        assert summary.startswith("PREVIOUS POSTS IN THIS SERIES:")
        assert summary.index("Post 1:") < summary.index("Post 2:")
        assert "a" * 220 + "..." in summary
        assert "a" * 221 not in summary

    def test_previous_posts_summary_empty(self):
        assert build_previous_posts_summary([]) == ""


class TestVoiceAndTone:
    def test_no_brand_voice(self):
        assert serialize_brand_voice(None) == ""

    def test_brand_voice_block(self):
        voice = SimpleNamespace(
            tone="Warm",
            style="Plain",
            personality="Curious",
            sentence_structure="Short",
            vocabulary=["ship"],
            avoid_vocabulary=["synergy"],
            examples=["one", "two", "three"],
        )

        block = serialize_brand_voice(voice)

        assert "- Tone: Warm" in block
        assert "- Vocabulary to Avoid: synergy" in block
        assert "one | two" in block
        assert "three" not in block

    def test_tone_instruction(self):
        assert get_tone_instruction("witty").startswith("TONE: Witty")
        assert get_tone_instruction(None) == ""
        assert get_tone_instruction("neutral") == ""


class TestContentChecks:
    def test_sanitize_strips_scripts_and_handlers(self):
        dirty = '<p onclick="steal()">Hi</p><script>alert(1)</script><a href="javascript:x()">l</a>'

        clean = sanitize_content(dirty)

        assert "<script" not in clean
        assert "onclick" not in clean
        assert 'href="#"' in clean
        assert "Hi" in clean

    def test_sanitize_keeps_plain_text(self):
        assert sanitize_content("Plain text post!") == "Plain text post!"

    def test_twitter_length_window(self):
        assert validate_platform_content("x" * 100, "twitter").is_valid
        too_long = validate_platform_content("x" * 281, "twitter")
        assert not too_long.is_valid
        assert "too long" in too_long.messages[0]

    def test_spam_and_exclamations(self):
        result = validate_platform_content("Free money!!! " + "word " * 20, "twitter")

        assert any("spam" in m for m in result.messages)
        assert any("exclamation" in m for m in result.messages)

    def test_unknown_platform_only_gets_safety_check(self):
        assert validate_platform_content("short", "myspace").is_valid
        assert not validate_platform_content("<iframe src=x>", "myspace").is_valid
