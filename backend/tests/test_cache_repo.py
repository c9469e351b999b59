"""Tests for the cache store backends."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from emoji_map import main as main_module
from emoji_map.core.db_connection import AsyncDBConnection
from emoji_map.core.redis_connection import AsyncRedisConnection
from emoji_map.repos import cache_repo as cache_repo_module
from emoji_map.repos.local_repo import LocalCacheRepository
from emoji_map.repos.places_repo import MongoCacheRepository
from emoji_map.repos.redis_repo import RedisCacheRepository


class TestLocalCacheRepository:
    """JSON files with an expiry stamp."""

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache_repo) -> None:
        assert await cache_repo.set("places-v2:1.0000,2.0000:4", [{"id": "a"}], 60) is True
        assert await cache_repo.get("places-v2:1.0000,2.0000:4") == [{"id": "a"}]

    @pytest.mark.asyncio
    async def test_missing_key(self, cache_repo) -> None:
        assert await cache_repo.get("nope") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_removed(self, cache_repo) -> None:
        await cache_repo.set("details:v1:abc", {"name": "x"}, 0)

        assert await cache_repo.get("details:v1:abc") is None
        assert not cache_repo._get_cache_file("details:v1:abc").exists()

    @pytest.mark.asyncio
    async def test_delete(self, cache_repo) -> None:
        await cache_repo.set("filters:s1", {"version": 1}, 60)
        assert await cache_repo.delete("filters:s1") is True
        assert await cache_repo.get("filters:s1") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_is_a_miss(self, cache_repo) -> None:
        cache_repo._get_cache_file("photos:v1:abc").write_text("{not json", encoding="utf-8")
        assert await cache_repo.get("photos:v1:abc") is None

    def test_key_is_sanitized_for_filenames(self, tmp_path) -> None:
        repo = LocalCacheRepository(tmp_path)
        assert repo._get_cache_file("places-v2:1,2:q=a|b").name == "places-v2_1,2_q=a_b.json"


class TestRedisCacheRepository:
    """JSON over SETEX."""

    @pytest.mark.asyncio
    async def test_set_uses_ttl(self) -> None:
        client = AsyncMock()
        repo = RedisCacheRepository(client)

        assert await repo.set("details:v1:abc", {"name": "Café"}, 30) is True

        client.setex.assert_awaited_once_with("details:v1:abc", 30, json.dumps({"name": "Café"}, ensure_ascii=False))

    @pytest.mark.asyncio
    async def test_get_decodes_json(self) -> None:
        client = AsyncMock()
        client.get.return_value = '["https://img.test/p0.jpg"]'
        assert await RedisCacheRepository(client).get("photos:v1:abc") == ["https://img.test/p0.jpg"]

    @pytest.mark.asyncio
    async def test_redis_errors_are_contained(self) -> None:
        client = AsyncMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        repo = RedisCacheRepository(client)

        assert await repo.get("k") is None
        assert await repo.set("k", 1, 10) is False


class TestMongoCacheRepository:
    """Upserted documents filtered on expires_at."""

    @staticmethod
    def make_repo():
        collection = MagicMock()
        collection.find_one = AsyncMock()
        collection.update_one = AsyncMock()
        collection.delete_one = AsyncMock()
        return MongoCacheRepository({"places_cache": collection}), collection

    @pytest.mark.asyncio
    async def test_get_filters_on_expiry(self) -> None:
        repo, collection = self.make_repo()
        collection.find_one.return_value = {"key": "k", "data": {"a": 1}}

        assert await repo.get("k") == {"a": 1}
        query = collection.find_one.await_args.args[0]
        assert query["key"] == "k"
        assert "$gt" in query["expires_at"]

    @pytest.mark.asyncio
    async def test_set_upserts(self) -> None:
        repo, collection = self.make_repo()

        assert await repo.set("k", [1, 2], 60) is True

        args, kwargs = collection.update_one.await_args
        assert args[0] == {"key": "k"}
        assert args[1]["$set"]["data"] == [1, 2]
        assert kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_missing_document(self) -> None:
        repo, collection = self.make_repo()
        collection.find_one.return_value = None
        assert await repo.get("k") is None


class TestCacheRepoFactory:
    """Backend selection from settings."""

    @pytest.mark.asyncio
    async def test_local_backend(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(cache_repo_module.settings, "CACHE_BACKEND", "local")
        monkeypatch.setattr(cache_repo_module.settings, "LOCAL_CACHE_DIR", str(tmp_path))
        assert isinstance(await cache_repo_module.get_cache_repo(), LocalCacheRepository)

    @pytest.mark.asyncio
    async def test_redis_backend(self, monkeypatch) -> None:
        monkeypatch.setattr(cache_repo_module.settings, "CACHE_BACKEND", "redis")
        monkeypatch.setattr(cache_repo_module, "get_redis", AsyncMock(return_value=AsyncMock()))
        assert isinstance(await cache_repo_module.get_cache_repo(), RedisCacheRepository)

    @pytest.mark.asyncio
    async def test_mongodb_backend(self, monkeypatch) -> None:
        monkeypatch.setattr(cache_repo_module.settings, "CACHE_BACKEND", "mongodb")
        monkeypatch.setattr(cache_repo_module, "get_db", AsyncMock(return_value={"places_cache": MagicMock()}))
        assert isinstance(await cache_repo_module.get_cache_repo(), MongoCacheRepository)


class TestAppLifespan:
    """Index creation on startup, client shutdown on exit."""

    @pytest.mark.asyncio
    async def test_mongodb_indexes_are_created(self, monkeypatch) -> None:
        collection = MagicMock()
        collection.create_index = AsyncMock()
        monkeypatch.setattr(main_module.settings, "CACHE_BACKEND", "mongodb")
        monkeypatch.setattr(main_module, "get_db", AsyncMock(return_value={"places_cache": collection}))

        async with main_module.lifespan(main_module.app):
            pass

        indexed = [call.args[0] for call in collection.create_index.await_args_list]
        assert indexed == ["key", "expires_at"]
        assert collection.create_index.await_args_list[1].kwargs == {"expireAfterSeconds": 0}

    @pytest.mark.asyncio
    async def test_other_backends_skip_indexes(self, monkeypatch) -> None:
        get_db = AsyncMock()
        monkeypatch.setattr(main_module.settings, "CACHE_BACKEND", "local")
        monkeypatch.setattr(main_module, "get_db", get_db)

        async with main_module.lifespan(main_module.app):
            pass

        get_db.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_clients_are_closed_on_shutdown(self, monkeypatch) -> None:
        mongo_client, redis_client = MagicMock(), AsyncMock()
        monkeypatch.setattr(main_module.settings, "CACHE_BACKEND", "local")
        monkeypatch.setattr(AsyncDBConnection, "_client", mongo_client)
        monkeypatch.setattr(AsyncRedisConnection, "_client", redis_client)

        async with main_module.lifespan(main_module.app):
            pass

        mongo_client.close.assert_called_once()
        redis_client.aclose.assert_awaited_once()
        assert AsyncDBConnection._client is None
        assert AsyncRedisConnection._client is None
