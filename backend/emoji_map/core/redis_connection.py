import logging

import redis.asyncio as redis

from emoji_map.core.config import settings
from emoji_map.core.logger import logs

class AsyncRedisConnection:
    """
    Shared redis.asyncio client, opened on first use.
    Only used when CACHE_BACKEND=redis
    """
    _client: redis.Redis | None = None

    def get_client(self) -> redis.Redis:
        if AsyncRedisConnection._client is None:
            AsyncRedisConnection._client = redis.from_url(settings.REDIS_URL, decode_responses=True)
            logs.log(logging.INFO, "Redis connection initialized", {"url": settings.REDIS_URL})
        return AsyncRedisConnection._client

    async def close(self):
        if AsyncRedisConnection._client is not None:
            await AsyncRedisConnection._client.aclose()
            AsyncRedisConnection._client = None

redis_connection = AsyncRedisConnection()

async def get_redis() -> redis.Redis:
    return redis_connection.get_client()
