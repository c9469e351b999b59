"""
Local file-based cache store.
Keeps each entry as a JSON file instead of talking to Redis or MongoDB.
"""
import json
from datetime import datetime, timedelta
from typing import Any, Optional
from pathlib import Path

from emoji_map.core.config import settings
from emoji_map.core.logger import logs
import logging


class LocalCacheRepository:
    """Cache entries stored as ``{"data", "cached_at", "expires_at"}`` JSON files."""

    def __init__(self, cache_dir: str | Path | None = None):
        self.cache_dir = Path(cache_dir or settings.LOCAL_CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        logs.log(logging.DEBUG, "Local cache repository initialized", {"dir": str(self.cache_dir)})

    def _get_cache_file(self, cache_key: str) -> Path:
        """Get the file path for cached data."""
        # Sanitize cache key for filename
        safe_key = cache_key.replace(":", "_").replace("/", "_").replace("|", "_")
        return self.cache_dir / f"{safe_key}.json"

    async def get(self, key: str) -> Optional[Any]:
        try:
            cache_file = self._get_cache_file(key)

            if not cache_file.exists():
                return None

            with open(cache_file, "r", encoding="utf-8") as f:
                cached = json.load(f)

            expires_at = datetime.fromisoformat(cached["expires_at"])
            if datetime.now() >= expires_at:
                cache_file.unlink(missing_ok=True)  # Delete expired cache
                return None

            return cached["data"]
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to read cache entry: {str(e)}", {"key": key})
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        try:
            now = datetime.now()
            cached = {
                "data": value,
                "cached_at": now.isoformat(),
                "expires_at": (now + timedelta(seconds=ttl_seconds)).isoformat(),
            }

            with open(self._get_cache_file(key), "w", encoding="utf-8") as f:
                json.dump(cached, f, indent=2, ensure_ascii=False)

            return True
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to write cache entry: {str(e)}", {"key": key})
            return False

    async def delete(self, key: str) -> bool:
        try:
            self._get_cache_file(key).unlink(missing_ok=True)
            return True
        except Exception as e:
            logs.log(logging.ERROR, f"Failed to delete cache entry: {str(e)}", {"key": key})
            return False
