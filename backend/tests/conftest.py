"""
Pytest Configuration and Fixtures

- In-memory SQLite (aiosqlite) with the real models and SAVEPOINT support
- Users on each plan, projects, brand voices
- A mocked OpenAI adapter that never touches the network
"""

from datetime import timedelta
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.config.settings import settings
from src.shared.adapters.openai_adapter import CompletionResult, OpenAIAdapter, TranscriptionResult
from src.shared.models import Base, BrandVoice, Project, Subscription, User
from src.shared.models.enums import SubscriptionStatus
from src.shared.utils.time import utcnow


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def engine():
    """
    Fresh in-memory database per test.

    pysqlite's own transaction handling breaks SAVEPOINTs; it is switched
    off and BEGIN is emitted explicitly.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


# ═══════════════════════════════════════════════════════════════════════════════
# SETTINGS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """No backoff sleeps, no Redis."""
    monkeypatch.setattr(settings, "GENERATION_RETRY_BASE_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "GENERATION_MAX_RETRIES", 2)
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", False)


# ═══════════════════════════════════════════════════════════════════════════════
# DATA
# ═══════════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def trial_user(db) -> User:
    """Account created just now: trial plan, no subscription row."""
    user = User(email="trial@example.com", created_at=utcnow())
    db.add(user)
    await db.flush()
    return user


@pytest_asyncio.fixture
async def free_user(db) -> User:
    """Account past the trial window without a subscription."""
    user = User(email="free@example.com", created_at=utcnow() - timedelta(days=30))
    db.add(user)
    await db.flush()
    return user


@pytest_asyncio.fixture
async def enterprise_user(db) -> User:
    """Account with an active enterprise subscription."""
    user = User(email="enterprise@example.com", created_at=utcnow() - timedelta(days=90))
    db.add(user)
    await db.flush()
    db.add(
        Subscription(
            user_id=user.id,
            plan="enterprise",
            status=SubscriptionStatus.ACTIVE.value,
            current_period_end=utcnow() + timedelta(days=20),
            audio_minutes_limit=300,
            audio_minutes_used=0.0,
        )
    )
    await db.flush()
    return user


@pytest_asyncio.fixture
async def other_user(db) -> User:
    user = User(email="other@example.com", created_at=utcnow())
    db.add(user)
    await db.flush()
    return user


async def make_project(db, user: User, **overrides) -> Project:
    values = {
        "title": "Launch recap",
        "source_content": "We shipped the new onboarding flow. Activation went from 31% to 44% in two weeks.",
        "platforms": ["linkedin", "twitter"],
        "posts_per_platform": 1,
    }
    values.update(overrides)
    project = Project(user_id=user.id, **values)
    db.add(project)
    await db.flush()
    return project


@pytest_asyncio.fixture
async def project(db, trial_user) -> Project:
    return await make_project(db, trial_user)


@pytest_asyncio.fixture
async def brand_voice(db, trial_user) -> BrandVoice:
    voice = BrandVoice(
        user_id=trial_user.id,
        name="House style",
        tone="Warm",
        style="Short sentences",
        personality="Curious",
        sentence_structure="Varied",
        vocabulary=["ship", "learn"],
        avoid_vocabulary=["synergy"],
        examples=["We ship small and learn fast."],
        is_active=True,
    )
    db.add(voice)
    await db.flush()
    return voice


# ═══════════════════════════════════════════════════════════════════════════════
# OPENAI
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def mock_openai() -> MagicMock:
    """
    OpenAI adapter double.

    complete_with_fallback echoes the model and a marker of the platform's
    system prompt, so tests can tell slots apart.
    """
    adapter = MagicMock(spec=OpenAIAdapter)

    async def complete(user_prompt, system_prompt, options=None, max_retries=None):
        return CompletionResult(content=f"Generated post ({system_prompt[:40]})", model=options.model)

    adapter.complete_with_fallback = AsyncMock(side_effect=complete)
    adapter.generate_content = AsyncMock(return_value="")
    adapter.transcribe_audio = AsyncMock(
        return_value=TranscriptionResult(text="  hello   world \n\n again  ", language="en", duration_seconds=90.0)
    )
    return adapter
