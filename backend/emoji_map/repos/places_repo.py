from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime, timedelta, timezone
from typing import Any
import logging

from emoji_map.core.logger import logs

class MongoCacheRepository:
    """Cache entries as ``{key, data, expires_at}`` documents in ``places_cache``."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["places_cache"]

    async def get(self, key: str) -> Any | None:
        """
        Returns the cached value if the entry has not expired yet.
        Expired documents are skipped here and left for the TTL index.
        """
        try:
            doc = await self.collection.find_one({
                "key": key,
                "expires_at": {"$gt": datetime.now(timezone.utc)}
            })
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to read cache entry: {str(e)}", {"key": key})
            return None
        return doc["data"] if doc else None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        now = datetime.now(timezone.utc)
        try:
            await self.collection.update_one(
                {"key": key},
                {"$set": {
                    "data": value,
                    "cached_at": now,
                    "expires_at": now + timedelta(seconds=ttl_seconds)
                }},
                upsert=True
            )
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to write cache entry: {str(e)}", {"key": key})
            return False
        return True

    async def delete(self, key: str) -> bool:
        try:
            await self.collection.delete_one({"key": key})
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to delete cache entry: {str(e)}", {"key": key})
            return False
        return True

    async def ensure_indexes(self):
        await self.collection.create_index("key", unique=True)
        await self.collection.create_index("expires_at", expireAfterSeconds=0)
