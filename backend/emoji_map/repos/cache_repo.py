from typing import Any, Protocol

from emoji_map.core.config import settings
from emoji_map.core.db_connection import get_db
from emoji_map.core.redis_connection import get_redis
from emoji_map.repos.local_repo import LocalCacheRepository
from emoji_map.repos.places_repo import MongoCacheRepository
from emoji_map.repos.redis_repo import RedisCacheRepository


class CacheRepository(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool: ...

    async def delete(self, key: str) -> bool: ...


async def get_cache_repo() -> CacheRepository:
    """Get the cache store for the configured backend."""
    if settings.CACHE_BACKEND == "redis":
        return RedisCacheRepository(await get_redis())
    if settings.CACHE_BACKEND == "mongodb":
        return MongoCacheRepository(await get_db())
    return LocalCacheRepository()
