import logging
from typing import Any

from emoji_map.core.logger import logs


async def read_cache(repo, key: str) -> Any | None:
    """Cache lookup where any store failure counts as a miss."""
    try:
        return await repo.get(key)
    except Exception as e:
        logs.log(logging.ERROR, f"Cache read failed, treating as miss: {str(e)}", {"key": key})
        return None


async def write_cache(repo, key: str, value: Any, ttl_seconds: int) -> bool:
    """Best-effort cache write. Failures are logged and reported as False."""
    try:
        written = await repo.set(key, value, ttl_seconds)
    except Exception as e:
        logs.log(logging.ERROR, f"Cache write failed: {str(e)}", {"key": key})
        return False

    if written is False:
        logs.log(logging.WARNING, "Cache store refused write", {"key": key})
        return False
    return True
