"""
Tests for the generation orchestrator.

The OpenAI adapter is mocked; everything else (quota, cache, outputs,
versions, history) runs against the SQLite test database.
"""

import asyncio
import json
import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from src.config.settings import settings
from src.shared.adapters.openai_adapter import CompletionResult
from src.shared.core.exceptions import (
    BrandVoiceNotFoundError,
    GenerationFailedError,
    ProjectNotFoundError,
    QuotaExceededError,
    UnsupportedPlatformError,
    ValidationError,
)
from src.shared.models import BrandVoice
from src.shared.models.enums import ProjectAction
from src.shared.services.generation_service import GenerationOverrides, GenerationService

from tests.conftest import make_project
from tests.test_content_pack_service import PACK


@pytest.fixture
def service(db, mock_openai) -> GenerationService:
    return GenerationService(db, openai=mock_openai)


def _user_messages(mock_openai) -> list[str]:
    return [call.args[0] for call in mock_openai.complete_with_fallback.await_args_list]


class TestPreconditions:
    async def test_quota_is_checked_before_anything_else(self, db, free_user, mock_openai, service):
        for i in range(3):
            await make_project(db, free_user, title=f"P{i}")

        with pytest.raises(QuotaExceededError) as exc:
            await service.generate_for_platforms(uuid.uuid4(), free_user.id, "text", ["linkedin"])

        assert exc.value.details == {"current": 3, "limit": 3, "plan": "free"}
        mock_openai.complete_with_fallback.assert_not_awaited()

    async def test_unknown_project(self, trial_user, mock_openai, service):
        with pytest.raises(ProjectNotFoundError):
            await service.generate_for_platforms(uuid.uuid4(), trial_user.id, "text", ["linkedin"])

        mock_openai.complete_with_fallback.assert_not_awaited()

    async def test_other_users_project(self, db, other_user, trial_user, mock_openai, service):
        theirs = await make_project(db, other_user)

        with pytest.raises(ProjectNotFoundError):
            await service.generate_for_platforms(theirs.id, trial_user.id, "text", ["linkedin"])

    async def test_empty_source(self, db, trial_user, service):
        project = await make_project(db, trial_user, source_content="")

        with pytest.raises(ValidationError):
            await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

    async def test_no_platforms(self, db, trial_user, service):
        project = await make_project(db, trial_user, platforms=[])

        with pytest.raises(ValidationError):
            await service.generate_for_platforms(project.id, trial_user.id, None, None)

    async def test_foreign_brand_voice(self, db, project, trial_user, other_user, service):
        voice = BrandVoice(user_id=other_user.id, name="Theirs")
        db.add(voice)
        await db.flush()

        with pytest.raises(BrandVoiceNotFoundError):
            await service.generate_for_platforms(
                project.id, trial_user.id, None, None, brand_voice_id=voice.id
            )


class TestGenerateForPlatforms:
    async def test_generates_and_stores_every_platform(self, project, trial_user, mock_openai, service):
        result = await service.generate_for_platforms(project.id, trial_user.id, None, None)

        assert result.total_requested == 2
        assert {r.platform for r in result.successful} == {"linkedin", "twitter"}
        assert result.failed == []
        outputs = await service.output_repo.list_for_project(project.id)
        assert [(o.platform, o.series_index) for o in outputs] == [("linkedin", 1), ("twitter", 1)]
        linkedin = outputs[0]
        assert linkedin.original_content == linkedin.content
        assert linkedin.is_edited is False
        assert linkedin.generation_metadata["model"] == "gpt-4o-mini"
        assert linkedin.generation_metadata["source"] == "api"

    async def test_platform_case_and_duplicates(self, project, trial_user, mock_openai, service):
        result = await service.generate_for_platforms(
            project.id, trial_user.id, None, ["LinkedIn", "linkedin "]
        )

        assert result.total_requested == 1
        assert result.successful[0].platform == "linkedin"

    async def test_one_failing_platform_does_not_stop_the_rest(self, project, trial_user, mock_openai, service):
        async def complete(user_prompt, system_prompt, options=None, max_retries=None):
            if "Twitter" in system_prompt:
                raise RuntimeError("provider down")
            return CompletionResult(content="A post", model=options.model)

        mock_openai.complete_with_fallback.side_effect = complete

        result = await service.generate_for_platforms(
            project.id, trial_user.id, None, ["linkedin", "twitter", "email"]
        )

        assert {r.platform for r in result.successful} == {"linkedin", "email"}
        assert len(result.failed) == 1
        failure = result.failed[0]
        assert failure.platform == "twitter"
        assert failure.error == "provider down"
        assert failure.metadata["success"] is False
        assert await service.output_repo.get_slot(project.id, "twitter") is None

    async def test_storage_error_is_reported_without_internals(self, project, trial_user, service):
        service.output_repo.insert_slot = AsyncMock(
            side_effect=OperationalError(
                "INSERT INTO outputs (secret_column) VALUES (?)", {}, Exception("disk I/O error at /var/lib/pg")
            )
        )

        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        failure = result.failed[0]
        assert failure.error == "Content generation failed"
        assert failure.error_code == "INTERNAL_ERROR"
        assert failure.metadata["error_message"] == "Content generation failed"
        assert "secret_column" not in json.dumps(failure.metadata)

    async def test_unsupported_platform_becomes_a_failure(self, project, trial_user, mock_openai, service):
        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin", "myspace"])

        assert [r.platform for r in result.successful] == ["linkedin"]
        assert result.failed[0].error_code == "UNSUPPORTED_PLATFORM"
        assert mock_openai.complete_with_fallback.await_count == 1

    async def test_failed_slot_keeps_previous_content(self, project, trial_user, mock_openai, service):
        await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])
        before = (await service.output_repo.get_slot(project.id, "linkedin")).content
        mock_openai.complete_with_fallback.side_effect = RuntimeError("down")

        result = await service.generate_for_platforms(project.id, trial_user.id, "different source", ["linkedin"])

        assert len(result.failed) == 1
        assert (await service.output_repo.get_slot(project.id, "linkedin")).content == before

    async def test_second_run_is_served_from_cache_and_snapshots(self, project, trial_user, mock_openai, service):
        await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        assert mock_openai.complete_with_fallback.await_count == 1
        assert result.successful[0].metadata["source"] == "cache"
        outputs = await service.output_repo.list_for_project(project.id)
        assert len(outputs) == 1
        assert await service.version_repo.count_for_output(outputs[0].id) == 1

    async def test_changed_options_miss_the_cache(self, project, trial_user, mock_openai, service):
        await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        await service.generate_for_platforms(
            project.id, trial_user.id, None, ["linkedin"], options=GenerationOverrides(temperature=0.2)
        )

        assert mock_openai.complete_with_fallback.await_count == 2
        options = mock_openai.complete_with_fallback.await_args.args[2]
        assert options.temperature == 0.2

    async def test_plan_parameters(self, db, enterprise_user, mock_openai, service):
        project = await make_project(db, enterprise_user)

        await service.generate_for_platforms(project.id, enterprise_user.id, None, ["twitter"])

        options = mock_openai.complete_with_fallback.await_args.args[2]
        assert options.model == "gpt-4o"
        assert options.max_tokens == 500
        assert options.fallback_model == "gpt-3.5-turbo"
        assert mock_openai.complete_with_fallback.await_args.kwargs["max_retries"] == settings.GENERATION_MAX_RETRIES

    async def test_concurrency_is_bounded(self, monkeypatch, project, trial_user, mock_openai, service):
        monkeypatch.setattr(settings, "GENERATION_CONCURRENCY", 2)
        in_flight = 0
        peak = 0

        async def complete(user_prompt, system_prompt, options=None, max_retries=None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.05)
            in_flight -= 1
            return CompletionResult(content="A post", model=options.model)

        mock_openai.complete_with_fallback.side_effect = complete

        result = await service.generate_for_platforms(
            project.id, trial_user.id, None, ["linkedin", "twitter", "email", "facebook", "youtube"]
        )

        assert len(result.successful) == 5
        assert peak == 2

    async def test_tone_and_brand_voice_reach_the_prompt(self, db, trial_user, brand_voice, mock_openai, service):
        project = await make_project(db, trial_user, tone="witty")

        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        message = _user_messages(mock_openai)[0]
        assert message.startswith("TONE: Witty")
        assert "BRAND VOICE:" in message
        assert "Activation went from 31% to 44%" in message
        assert result.successful[0].metadata["brand_voice_id"] == str(brand_voice.id)

    async def test_series_posts_see_earlier_posts(self, db, enterprise_user, mock_openai, service):
        project = await make_project(db, enterprise_user, platforms=["linkedin"], posts_per_platform=3)

        result = await service.generate_for_platforms(project.id, enterprise_user.id, None, None)

        assert result.total_requested == 3
        messages = _user_messages(mock_openai)
        assert "POST 1 of 3" in messages[0]
        assert "PREVIOUS POSTS" not in messages[0]
        assert "PREVIOUS POSTS IN THIS SERIES" in messages[1]
        assert "FINAL post" in messages[2]
        assert "Post 2:" in messages[2]

    async def test_series_length_is_capped_by_plan(self, project, trial_user, mock_openai, service):
        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"], posts_per_platform=3)

        assert result.total_requested == 1
        assert "POST 1 of" not in _user_messages(mock_openai)[0]

    async def test_history_entry(self, project, trial_user, service):
        await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin", "myspace"])

        entry = (await service.history.list_project_history(project.id))[0]
        assert entry.action == ProjectAction.GENERATE.value
        assert entry.changes["successful"] == 1
        assert entry.changes["failed"] == 1

    async def test_history_failure_does_not_fail_generation(self, project, trial_user, service):
        service.history.repo.create = AsyncMock(side_effect=SQLAlchemyError("history table gone"))

        result = await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        assert len(result.successful) == 1
        assert await service.output_repo.get_slot(project.id, "linkedin") is not None


class TestLongSources:
    async def test_long_source_uses_content_pack(self, monkeypatch, project, trial_user, mock_openai, service):
        monkeypatch.setattr(settings, "LONG_TEXT_THRESHOLD_CHARS", 50)
        mock_openai.generate_content.return_value = json.dumps(PACK)

        await service.generate_for_platforms(project.id, trial_user.id, "word " * 40, ["linkedin", "twitter"])

        assert mock_openai.generate_content.await_count == 1
        messages = _user_messages(mock_openai)
        assert all("Content Pack" in m for m in messages)
        assert all("Systems beat goals" in m for m in messages)

    async def test_pack_failure_aborts_before_platform_calls(self, monkeypatch, project, trial_user, mock_openai, service):
        monkeypatch.setattr(settings, "LONG_TEXT_THRESHOLD_CHARS", 50)
        mock_openai.generate_content.return_value = "not json at all"

        with pytest.raises(GenerationFailedError):
            await service.generate_for_platforms(project.id, trial_user.id, "word " * 40, ["linkedin"])

        mock_openai.complete_with_fallback.assert_not_awaited()
        assert await service.output_repo.list_for_project(project.id) == []


class TestRegenerate:
    async def test_regenerate_skips_cache(self, project, trial_user, mock_openai, service):
        await service.generate_for_platforms(project.id, trial_user.id, None, ["linkedin"])

        result = await service.regenerate_for_platform(project.id, trial_user.id, "linkedin")

        assert result.success is True
        assert result.metadata["source"] == "api"
        assert mock_openai.complete_with_fallback.await_count == 2
        output = await service.output_repo.get_slot(project.id, "linkedin")
        assert await service.version_repo.count_for_output(output.id) == 1

    async def test_regenerate_failure_raises(self, project, trial_user, mock_openai, service):
        mock_openai.complete_with_fallback.side_effect = RuntimeError("down")

        with pytest.raises(GenerationFailedError):
            await service.regenerate_for_platform(project.id, trial_user.id, "linkedin")

    async def test_regenerate_unknown_platform(self, project, trial_user, mock_openai, service):
        with pytest.raises(UnsupportedPlatformError):
            await service.regenerate_for_platform(project.id, trial_user.id, "myspace")

        mock_openai.complete_with_fallback.assert_not_awaited()


class TestVariations:
    async def test_variations_are_not_stored(self, project, trial_user, mock_openai, service):
        results = await service.generate_content_variations(project.id, trial_user.id, "linkedin", count=3)

        assert [r.metadata["variation_style"] for r in results] == ["Professional", "Casual", "Creative"]
        temperatures = [r.metadata["temperature"] for r in results]
        assert temperatures == [0.7, 0.8, 0.9]
        assert await service.output_repo.list_for_project(project.id) == []

    async def test_variation_count_is_capped(self, project, trial_user, service):
        results = await service.generate_content_variations(project.id, trial_user.id, "twitter", count=9)

        assert len(results) == 5
        assert results[-1].metadata["variation_style"] == "Storytelling"

    async def test_failed_variation_is_reported(self, project, trial_user, mock_openai, service):
        mock_openai.complete_with_fallback.side_effect = RuntimeError("down")

        results = await service.generate_content_variations(project.id, trial_user.id, "linkedin", count=2)

        assert all(not r.success for r in results)
        assert results[0].error == "down"
