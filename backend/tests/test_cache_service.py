"""
Tests for the database-backed result cache.
"""

import uuid
from datetime import timedelta

from sqlalchemy import update

from src.shared.models import CacheEntry
from src.shared.services.cache_service import (
    CacheService,
    build_generation_cache_key,
    generate_cache_key,
    hash_options,
)
from src.shared.utils.time import utcnow


def _key_args(**overrides):
    args = {
        "user_id": uuid.UUID(int=1),
        "project_id": uuid.UUID(int=2),
        "step": "generate",
        "model": "gpt-4o-mini",
        "platform": "linkedin",
        "input_hash": generate_cache_key("source"),
        "options_hash": hash_options({"tone": "witty"}),
    }
    args.update(overrides)
    return args


class TestKeys:
    def test_key_is_deterministic(self):
        assert build_generation_cache_key(**_key_args()) == build_generation_cache_key(**_key_args())
        assert len(build_generation_cache_key(**_key_args())) == 64

    def test_every_input_changes_the_key(self):
        base = build_generation_cache_key(**_key_args())

        assert build_generation_cache_key(**_key_args(platform="twitter")) != base
        assert build_generation_cache_key(**_key_args(model="gpt-4o")) != base
        assert build_generation_cache_key(**_key_args(series_index=2, series_total=3)) != base
        assert build_generation_cache_key(**_key_args(brand_voice_id=uuid.UUID(int=3))) != base

    def test_brand_voice_edit_changes_the_key(self):
        voice_id = uuid.UUID(int=3)
        edited_at = utcnow()

        before = build_generation_cache_key(**_key_args(brand_voice_id=voice_id, brand_voice_updated_at=edited_at))
        after = build_generation_cache_key(
            **_key_args(brand_voice_id=voice_id, brand_voice_updated_at=edited_at + timedelta(seconds=1))
        )

        assert before != after

    def test_options_hash_ignores_key_order(self):
        assert hash_options({"a": 1, "b": 2}) == hash_options({"b": 2, "a": 1})
        assert hash_options(None) == hash_options({})


class TestReadWrite:
    async def test_set_then_get(self, db):
        cache = CacheService(db)

        assert await cache.set("k", "value", ttl_seconds=60) is True
        assert await cache.get("k") == "value"

    async def test_missing_key(self, db):
        assert await CacheService(db).get("nope") is None

    async def test_set_overwrites(self, db):
        cache = CacheService(db)
        await cache.set("k", "first", ttl_seconds=60)
        assert await cache.get("k") == "first"

        await cache.set("k", "second", ttl_seconds=60)

        assert await cache.get("k") == "second"

    async def test_expired_entry_is_a_miss(self, db):
        cache = CacheService(db)
        await cache.set("k", "value", ttl_seconds=60)
        await db.execute(
            update(CacheEntry).where(CacheEntry.key == "k").values(expires_at=utcnow() - timedelta(seconds=1))
        )

        assert await cache.get("k") is None

    async def test_delete(self, db):
        cache = CacheService(db)
        await cache.set("k", "value", ttl_seconds=60)

        assert await cache.delete("k") is True
        assert await cache.delete("k") is False


class TestMaintenance:
    async def test_stats_and_clean_expired(self, db):
        cache = CacheService(db)
        await cache.set("fresh", "abc", ttl_seconds=60)
        await cache.set("stale", "defgh", ttl_seconds=60)
        await db.execute(
            update(CacheEntry).where(CacheEntry.key == "stale").values(expires_at=utcnow() - timedelta(minutes=5))
        )

        stats = await cache.get_cache_stats()
        assert stats.total == 2
        assert stats.expired == 1
        assert stats.size_estimate == 8

        assert await cache.clean_expired_cache() == 1
        assert await cache.get("fresh") == "abc"
        assert (await cache.get_cache_stats()).total == 1

    async def test_entry_at_its_expiry_instant_counts_as_expired(self, db):
        cache = CacheService(db)
        boundary = utcnow().replace(microsecond=0)
        await cache.repo.upsert("k", "value", expires_at=boundary)

        assert await cache.repo.get_valid("k", boundary) is None
        assert await cache.repo.count_expired(boundary) == 1
        assert await cache.repo.delete_expired(boundary) == 1

    async def test_clean_all(self, db):
        cache = CacheService(db)
        for i in range(3):
            await cache.set(f"k{i}", "v", ttl_seconds=60)

        assert await cache.clean_all_cache() == 3
        assert (await cache.get_cache_stats()).total == 0

    async def test_invalidate_project_only_touches_that_project(self, db):
        cache = CacheService(db)
        mine, theirs = uuid.uuid4(), uuid.uuid4()
        await cache.set("a", "1", ttl_seconds=60, project_id=mine)
        await cache.set("b", "2", ttl_seconds=60, project_id=mine)
        await cache.set("c", "3", ttl_seconds=60, project_id=theirs)
        await cache.set("d", "4", ttl_seconds=60)

        assert await cache.invalidate_project_generation_cache(mine) == 2
        assert await cache.get("c") == "3"
        assert await cache.get("d") == "4"
