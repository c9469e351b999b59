import json
import logging
from typing import Any

import redis.asyncio as redis

from emoji_map.core.logger import logs

class RedisCacheRepository:
    """JSON values under plain string keys, expiry handled by Redis."""

    def __init__(self, client: redis.Redis):
        self.client = client

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self.client.get(key)
        except redis.RedisError as e:
            logs.log(logging.ERROR, f"Failed to read cache entry: {str(e)}", {"key": key})
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logs.log(logging.WARNING, "Discarding undecodable cache entry", {"key": key})
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        try:
            await self.client.setex(key, ttl_seconds, json.dumps(value, ensure_ascii=False))
        except redis.RedisError as e:
            logs.log(logging.ERROR, f"Failed to write cache entry: {str(e)}", {"key": key})
            return False
        return True

    async def delete(self, key: str) -> bool:
        try:
            await self.client.delete(key)
        except redis.RedisError as e:
            logs.log(logging.ERROR, f"Failed to delete cache entry: {str(e)}", {"key": key})
            return False
        return True
