from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from emoji_map.core.config import settings
from emoji_map.core.logger import logs
import logging

class AsyncDBConnection:
    """
    Lazily opened MongoDB client shared by every request.
    Only used when CACHE_BACKEND=mongodb
    """
    _client: AsyncIOMotorClient | None = None

    def get_database(self) -> AsyncIOMotorDatabase:
        if settings.CACHE_BACKEND != "mongodb":
            raise RuntimeError(f"MongoDB not available - CACHE_BACKEND is set to '{settings.CACHE_BACKEND}'")

        if AsyncDBConnection._client is None:
            # Motor client is non-blocking
            AsyncDBConnection._client = AsyncIOMotorClient(settings.MONGO_URI)
            logs.log(logging.INFO, "MongoDB connection initialized")

        return AsyncDBConnection._client[settings.MONGO_DB_NAME]

    def close(self):
        if AsyncDBConnection._client is not None:
            AsyncDBConnection._client.close()
            AsyncDBConnection._client = None

db_connection = AsyncDBConnection()

# Dependency for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return db_connection.get_database()
