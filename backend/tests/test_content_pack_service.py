"""
Tests for Content Pack parsing, building and reuse.
"""

import json

import pytest

from src.config.plans import Plan
from src.shared.core.exceptions import InvalidContentPackError
from src.shared.services.content_pack_service import (
    ContentPackService,
    format_content_pack_for_prompt,
    parse_content_pack,
    strip_code_fence,
)

PACK = {
    "summary_short": "A course on habits.",
    "summary_long": "Ten modules on goals, systems and review.",
    "key_points": ["Systems beat goals", "Review weekly"],
    "audience": "Busy professionals",
    "tone_suggestions": "Practical",
    "quotes": ["Motivation fades, systems stay"],
    "cta_options": ["Enroll today"],
}


class TestParsing:
    def test_strips_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fence('{"a": 1}') == '{"a": 1}'

    def test_parses_fenced_pack(self):
        pack = parse_content_pack("```json\n" + json.dumps(PACK) + "\n```")

        assert pack.audience == "Busy professionals"
        assert pack.hashtags is None

    def test_not_json(self):
        with pytest.raises(InvalidContentPackError) as exc:
            parse_content_pack("Sure! Here is your pack:")

        assert exc.value.error_code == "INVALID_CONTENT_PACK"

    def test_not_an_object(self):
        with pytest.raises(InvalidContentPackError):
            parse_content_pack("[1, 2, 3]")

    def test_missing_and_empty_fields_are_reported(self):
        data = dict(PACK, quotes=[])
        del data["audience"]

        with pytest.raises(InvalidContentPackError) as exc:
            parse_content_pack(json.dumps(data))

        assert exc.value.details["fields"] == ["audience", "quotes"]

    async def test_build_rejects_response_without_key_points(self, db, mock_openai):
        data = dict(PACK)
        del data["key_points"]
        mock_openai.generate_content.return_value = json.dumps(data)

        with pytest.raises(InvalidContentPackError) as exc:
            await ContentPackService(db, openai=mock_openai).build_content_pack_from_text("source")

        assert exc.value.details["fields"] == ["key_points"]

    async def test_build_parses_fenced_and_plain_responses_alike(self, db, mock_openai):
        service = ContentPackService(db, openai=mock_openai)

        mock_openai.generate_content.return_value = json.dumps(PACK)
        plain = await service.build_content_pack_from_text("source")
        mock_openai.generate_content.return_value = "```json\n" + json.dumps(PACK) + "\n```"
        fenced = await service.build_content_pack_from_text("source")

        assert fenced == plain
        assert fenced.key_points == PACK["key_points"]

    def test_prompt_rendering(self):
        text = format_content_pack_for_prompt(parse_content_pack(json.dumps(dict(PACK, hashtags=["habits"]))))

        assert "Key points: Systems beat goals; Review weekly" in text
        assert "Hashtags: habits" in text
        assert "Compliance" not in text


class TestGetOrCreate:
    async def test_builds_once_then_reuses(self, db, project, trial_user, mock_openai):
        mock_openai.generate_content.return_value = json.dumps(PACK)
        service = ContentPackService(db, openai=mock_openai)

        first = await service.get_or_create_content_pack(project.id, trial_user.id, "long text", plan=Plan.TRIAL)
        second = await service.get_or_create_content_pack(project.id, trial_user.id, "long text", plan=Plan.TRIAL)

        assert first == second
        assert mock_openai.generate_content.await_count == 1

    async def test_stored_pack_is_used_when_cache_is_empty(self, db, project, trial_user, mock_openai):
        mock_openai.generate_content.return_value = json.dumps(PACK)
        service = ContentPackService(db, openai=mock_openai)
        await service.get_or_create_content_pack(project.id, trial_user.id, "long text", plan=Plan.TRIAL)
        await service.cache.clean_all_cache()

        pack = await service.get_or_create_content_pack(project.id, trial_user.id, "long text", plan=Plan.TRIAL)

        assert pack.summary_short == PACK["summary_short"]
        assert mock_openai.generate_content.await_count == 1

    async def test_different_source_builds_again(self, db, project, trial_user, mock_openai):
        mock_openai.generate_content.return_value = json.dumps(PACK)
        service = ContentPackService(db, openai=mock_openai)

        await service.get_or_create_content_pack(project.id, trial_user.id, "text one", plan=Plan.TRIAL)
        await service.get_or_create_content_pack(project.id, trial_user.id, "text two", plan=Plan.TRIAL)

        assert mock_openai.generate_content.await_count == 2

    async def test_invalid_pack_is_not_stored(self, db, project, trial_user, mock_openai):
        mock_openai.generate_content.return_value = "not json"
        service = ContentPackService(db, openai=mock_openai)

        with pytest.raises(InvalidContentPackError):
            await service.get_or_create_content_pack(project.id, trial_user.id, "long text", plan=Plan.TRIAL)

        assert (await service.cache.get_cache_stats()).total == 0
        assert await service.pack_repo.count() == 0

    async def test_single_call_uses_pack_parameters(self, db, project, trial_user, mock_openai):
        mock_openai.generate_content.return_value = json.dumps(PACK)
        service = ContentPackService(db, openai=mock_openai)

        await service.build_content_pack_from_text("x" * 40000)

        kwargs = mock_openai.generate_content.await_args.kwargs
        assert kwargs["options"].temperature == 0.2
        assert len(kwargs["user_prompt"]) < 31000
