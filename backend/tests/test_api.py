"""
HTTP tests: routing, authentication, error envelope and admin guards.

The app runs in-process through httpx's ASGI transport with the test
session, the mocked OpenAI adapter and a fake Redis injected via
dependency overrides. The lifespan (database/Redis startup) is not run.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.dependencies.database import get_db
from src.api.dependencies.rate_limit import get_redis
from src.api.dependencies.services import get_openai
from src.api.main import create_application
from src.config.settings import settings
from src.shared.adapters.redis_adapter import RedisAdapter
from src.shared.models import Output
from src.shared.services.cache_service import CacheService
from src.shared.utils.security import SecurityUtils

from tests.conftest import make_project


def _auth(user_id, role: str = "user") -> dict:
    token = SecurityUtils.create_access_token(
        {"user_id": str(user_id), "role": role},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_redis() -> MagicMock:
    redis = MagicMock(spec=RedisAdapter)
    redis.check_rate_limit = AsyncMock(return_value=(True, 1))
    redis.ping = AsyncMock(return_value=True)
    return redis


@pytest_asyncio.fixture
async def client(db, mock_openai, fake_redis):
    app = create_application()

    async def override_db():
        yield db

    async def override_openai():
        return mock_openai

    async def override_redis():
        return fake_redis

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_openai] = override_openai
    app.dependency_overrides[get_redis] = override_redis

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestInfrastructure:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.headers["X-Request-ID"]

    async def test_request_id_is_echoed(self, client):
        response = await client.get("/live", headers={"X-Request-ID": "req_abc123"})

        assert response.headers["X-Request-ID"] == "req_abc123"

    async def test_missing_token(self, client):
        response = await client.get("/quota")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    async def test_invalid_token(self, client):
        response = await client.get("/quota", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_request_validation_envelope(self, client, trial_user):
        response = await client.post("/projects", json={"title": ""}, headers=_auth(trial_user.id))

        assert response.status_code == 400
        body = response.json()["error"]
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"]


class TestProjects:
    async def test_create_get_and_list(self, client, trial_user):
        headers = _auth(trial_user.id)

        created = await client.post(
            "/projects",
            json={"title": "Launch", "source_content": "Some text", "platforms": ["LinkedIn"], "tone": "witty"},
            headers=headers,
        )
        assert created.status_code == 201
        project = created.json()
        assert project["platforms"] == ["linkedin"]
        assert project["tone"] == "witty"

        fetched = await client.get(f"/projects/{project['id']}", headers=headers)
        assert fetched.json()["title"] == "Launch"

        listed = await client.get("/projects", headers=headers)
        assert listed.json()["total"] == 1

    async def test_unknown_platform_is_rejected(self, client, trial_user):
        response = await client.post(
            "/projects", json={"title": "Launch", "platforms": ["myspace"]}, headers=_auth(trial_user.id)
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_PLATFORM"

    async def test_quota_exceeded(self, db, client, free_user):
        for i in range(3):
            await make_project(db, free_user, title=f"P{i}")

        response = await client.post("/projects", json={"title": "Fourth"}, headers=_auth(free_user.id))

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["code"] == "QUOTA_EXCEEDED"
        assert error["details"] == {"current": 3, "limit": 3, "plan": "free"}

    async def test_other_users_project_is_not_found(self, client, project, other_user):
        response = await client.get(f"/projects/{project.id}", headers=_auth(other_user.id))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_delete(self, client, project, trial_user):
        headers = _auth(trial_user.id)

        assert (await client.delete(f"/projects/{project.id}", headers=headers)).status_code == 204
        assert (await client.get(f"/projects/{project.id}", headers=headers)).status_code == 404

    async def test_ingest_document(self, client, project, trial_user):
        response = await client.post(
            f"/projects/{project.id}/ingest-document",
            files={"file": ("notes.md", b"# Notes\n\nWhat we learned this quarter.", "text/markdown")},
            headers=_auth(trial_user.id),
        )

        assert response.status_code == 200
        assert response.json()["source_content"].startswith("# Notes")

    async def test_ingest_audio(self, client, project, trial_user, mock_openai):
        response = await client.post(
            f"/projects/{project.id}/ingest-audio",
            files={"file": ("talk.mp3", b"ID3 fake audio", "audio/mpeg")},
            headers=_auth(trial_user.id),
        )

        assert response.status_code == 200
        assert response.json()["text"] == "hello world again"
        mock_openai.transcribe_audio.assert_awaited_once()

    async def test_rate_limited_content_pack(self, monkeypatch, client, project, trial_user, fake_redis, mock_openai):
        monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
        fake_redis.check_rate_limit.return_value = (False, 51)

        response = await client.post(f"/projects/{project.id}/content-pack", headers=_auth(trial_user.id))

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert response.headers["Retry-After"] == "60"
        mock_openai.generate_content.assert_not_awaited()


class TestGenerationAndOutputs:
    async def test_generate_then_edit_and_restore(self, client, project, trial_user):
        headers = _auth(trial_user.id)

        generated = await client.post(f"/projects/{project.id}/generate", json={}, headers=headers)
        assert generated.status_code == 200
        body = generated.json()
        assert body["total_requested"] == 2
        assert body["failed"] == []
        output_id = body["successful"][0]["output_id"]

        edited = await client.patch(f"/outputs/{output_id}", json={"content": "My words"}, headers=headers)
        assert edited.status_code == 200
        assert edited.json()["is_edited"] is True

        versions = (await client.get(f"/outputs/{output_id}/versions", headers=headers)).json()["versions"]
        assert len(versions) == 1

        restored = await client.post(
            f"/outputs/{output_id}/versions/{versions[0]['id']}/restore", headers=headers
        )
        assert restored.status_code == 200
        assert restored.json()["is_edited"] is False

        reverted = await client.post(f"/outputs/{output_id}/revert", headers=headers)
        assert reverted.status_code == 200

    async def test_generate_rejects_unknown_platform_up_front(self, client, project, trial_user, mock_openai):
        response = await client.post(
            f"/projects/{project.id}/generate", json={"platforms": ["linkedin", "myspace"]}, headers=_auth(trial_user.id)
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_PLATFORM"
        mock_openai.complete_with_fallback.assert_not_awaited()

    async def test_partial_failure_is_200(self, client, project, trial_user, mock_openai):
        mock_openai.complete_with_fallback.side_effect = RuntimeError("provider down")

        response = await client.post(
            f"/projects/{project.id}/generate", json={"platforms": ["twitter"]}, headers=_auth(trial_user.id)
        )

        assert response.status_code == 200
        assert response.json()["failed"][0]["error"] == "provider down"

    async def test_regenerate_failure_is_502(self, client, project, trial_user, mock_openai):
        mock_openai.complete_with_fallback.side_effect = RuntimeError("provider down")

        response = await client.post(
            f"/projects/{project.id}/regenerate", json={"platform": "linkedin"}, headers=_auth(trial_user.id)
        )

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "GENERATION_FAILED"

    async def test_variations(self, client, project, trial_user):
        response = await client.post(
            f"/projects/{project.id}/variations", json={"platform": "LinkedIn", "count": 2}, headers=_auth(trial_user.id)
        )

        assert response.status_code == 200
        assert response.json()["platform"] == "linkedin"
        assert len(response.json()["variations"]) == 2

    async def test_revert_without_original_is_409(self, db, client, project, trial_user):
        output = Output(project_id=project.id, platform="email", series_index=1, content="draft")
        db.add(output)
        await db.flush()

        response = await client.post(f"/outputs/{output.id}/revert", headers=_auth(trial_user.id))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "NO_ORIGINAL_CONTENT"


class TestQuotaAndAdmin:
    async def test_quota(self, client, trial_user):
        response = await client.get("/quota", headers=_auth(trial_user.id))

        assert response.status_code == 200
        body = response.json()
        assert body["plan"] == "trial"
        assert body["can_use_audio"] is True
        assert body["projects_limit"] == 10

    async def test_admin_only(self, client, trial_user):
        response = await client.get("/admin/cache/stats", headers=_auth(trial_user.id))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"

    async def test_clean_all_requires_confirmation(self, db, client, trial_user):
        await CacheService(db).set("k", "v", ttl_seconds=60)
        headers = _auth(trial_user.id, role="admin")

        rejected = await client.post("/admin/cache/clean-all", json={"confirm": "yes"}, headers=headers)
        assert rejected.status_code == 400
        assert (await client.get("/admin/cache/stats", headers=headers)).json()["total"] == 1

        accepted = await client.post(
            "/admin/cache/clean-all", json={"confirm": settings.CACHE_CLEAR_CONFIRMATION}, headers=headers
        )
        assert accepted.json() == {"removed": 1}
