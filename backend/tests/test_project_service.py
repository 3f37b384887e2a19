"""
Tests for project CRUD, quota gating and history.
"""

import uuid

import pytest
from sqlalchemy import select

from src.config.settings import settings
from src.shared.core.exceptions import (
    ProjectNotFoundError,
    QuotaExceededError,
    UnsupportedPlatformError,
    ValidationError,
)
from src.shared.models import Output, OutputVersion
from src.shared.models.enums import ProjectAction
from src.shared.services.project_service import ProjectService, normalize_platforms

from tests.conftest import make_project


@pytest.fixture
def service(db) -> ProjectService:
    return ProjectService(db)


def test_normalize_platforms():
    assert normalize_platforms([" LinkedIn", "twitter", "linkedin"]) == ["linkedin", "twitter"]
    assert normalize_platforms([]) == []
    with pytest.raises(UnsupportedPlatformError) as exc:
        normalize_platforms(["linkedin", "myspace"])
    assert exc.value.details == {"platform": "myspace"}


class TestCreate:
    async def test_create_project(self, service, trial_user):
        project = await service.create_project(
            trial_user.id, title="Launch", source_content="text", platforms=["Twitter"], tone="witty"
        )

        assert project.platforms == ["twitter"]
        assert project.posts_per_platform == 1
        history = await service.get_project_history(project.id, trial_user.id)
        assert history[0].action == ProjectAction.CREATE.value

    async def test_create_at_quota(self, db, service, free_user):
        for i in range(3):
            await make_project(db, free_user, title=f"P{i}")

        with pytest.raises(QuotaExceededError):
            await service.create_project(free_user.id, title="One too many")

        assert await service.project_repo.count_for_user(free_user.id) == 3

    async def test_source_too_long(self, monkeypatch, service, trial_user):
        monkeypatch.setattr(settings, "SOURCE_CONTENT_MAX_LENGTH", 10)

        with pytest.raises(ValidationError):
            await service.create_project(trial_user.id, title="Long", source_content="x" * 11)


class TestRead:
    async def test_get_own_project(self, service, project, trial_user):
        assert (await service.get_project(project.id, trial_user.id)).id == project.id

    async def test_get_other_users_project(self, service, project, other_user):
        with pytest.raises(ProjectNotFoundError):
            await service.get_project(project.id, other_user.id)

    async def test_list_pagination(self, db, service, trial_user, other_user):
        for i in range(5):
            await make_project(db, trial_user, title=f"Mine {i}")
        await make_project(db, other_user, title="Theirs")

        first = await service.list_projects(trial_user.id, page=1, page_size=2)
        last = await service.list_projects(trial_user.id, page=3, page_size=2)

        assert first.total == 5
        assert len(first.items) == 2
        assert first.has_next is True
        assert first.has_prev is False
        assert len(last.items) == 1
        assert last.has_next is False
        assert all(p.user_id == trial_user.id for p in first.items + last.items)


class TestUpdate:
    async def test_update_fields(self, service, project, trial_user):
        updated = await service.update_project(
            project.id, trial_user.id, title="New title", platforms=["Email"], posts_per_platform=0
        )

        assert updated.title == "New title"
        assert updated.platforms == ["email"]
        assert updated.posts_per_platform == 1
        entry = (await service.get_project_history(project.id, trial_user.id))[0]
        assert entry.action == ProjectAction.UPDATE.value
        assert entry.changes["title"] == "New title"

    async def test_source_change_invalidates_cache(self, service, project, trial_user):
        await service.cache.set("generated", "post", ttl_seconds=60, project_id=project.id)

        await service.update_project(project.id, trial_user.id, source_content="Completely new source")

        assert await service.cache.get("generated") is None
        entry = (await service.get_project_history(project.id, trial_user.id))[0]
        assert entry.changes["source_content"] == {"length": len("Completely new source")}

    async def test_title_change_keeps_cache(self, service, project, trial_user):
        await service.cache.set("generated", "post", ttl_seconds=60, project_id=project.id)

        await service.update_project(project.id, trial_user.id, title="Renamed")

        assert await service.cache.get("generated") == "post"

    async def test_noop_update_writes_no_history(self, service, project, trial_user):
        await service.update_project(project.id, trial_user.id, title=project.title)

        assert await service.get_project_history(project.id, trial_user.id) == []

    async def test_update_unknown_platform(self, service, project, trial_user):
        with pytest.raises(UnsupportedPlatformError):
            await service.update_project(project.id, trial_user.id, platforms=["myspace"])

        assert project.platforms == ["linkedin", "twitter"]


class TestDelete:
    async def test_delete_cascades_to_outputs_and_versions(self, db, service, project, trial_user):
        output = Output(project_id=project.id, platform="linkedin", series_index=1, content="post")
        db.add(output)
        await db.flush()
        db.add(OutputVersion(output_id=output.id, version_number=1, content="older post"))
        await db.flush()
        output_id = output.id
        db.expunge(output)

        await service.delete_project(project.id, trial_user.id)

        assert (await db.execute(select(Output.id).where(Output.id == output_id))).first() is None
        assert (await db.execute(select(OutputVersion.id).where(OutputVersion.output_id == output_id))).first() is None
        with pytest.raises(ProjectNotFoundError):
            await service.get_project(project.id, trial_user.id)

    async def test_delete_keeps_history(self, service, project, trial_user):
        project_id = project.id

        await service.delete_project(project_id, trial_user.id)

        entries = await service.history.list_project_history(project_id)
        assert entries[0].action == ProjectAction.DELETE.value

    async def test_delete_other_users_project(self, service, project, other_user):
        with pytest.raises(ProjectNotFoundError):
            await service.delete_project(project.id, other_user.id)

    async def test_delete_missing(self, service, trial_user):
        with pytest.raises(ProjectNotFoundError):
            await service.delete_project(uuid.uuid4(), trial_user.id)
