from emoji_map.core.config import settings
from emoji_map.utils.geo import is_valid_location, normalize_location

NEARBY_CACHE_PREFIX = "places"
DETAILS_CACHE_PREFIX = "details"
PHOTOS_CACHE_PREFIX = "photos"
FILTERS_CACHE_PREFIX = "filters"

# ~11 m, enough to absorb GPS jitter
LOCATION_PRECISION = 4


def nearby_prefix(version: str | None = None) -> str:
    return f"{NEARBY_CACHE_PREFIX}-{version or settings.NEARBY_CACHE_KEY_VERSION}:"


def generate_cache_key(
    location: str | None, keys=None, text_query: str | None = None, version: str | None = None
) -> str | None:
    """
    ``places-v2:40.7128,-74.0060:1,4`` style key. The same location and key
    set always give the same string whatever order the keys came in, and an
    explicit text query becomes part of the key. Invalid locations give None,
    meaning "do not cache".
    """
    normalized = normalize_location(location, LOCATION_PRECISION) if location else None
    if normalized is None:
        return None

    key = f"{nearby_prefix(version)}{normalized}"
    if keys:
        key += ":" + ",".join(str(k) for k in sorted(set(keys)))
    if text_query:
        key += ":q=" + text_query.strip().lower()
    return key


def is_valid_cache_key(key: str | None, version: str | None = None) -> bool:
    prefix = nearby_prefix(version)
    if not key or not key.startswith(prefix):
        return False

    location = key[len(prefix):].split(":", 1)[0]
    return is_valid_location(location)


def generate_details_cache_key(place_id: str) -> str:
    return f"{DETAILS_CACHE_PREFIX}:{settings.DETAILS_CACHE_KEY_VERSION}:{place_id}"


def generate_photos_cache_key(place_id: str, max_height: int) -> str:
    """Photo URLs depend on the requested height, so it is part of the key."""
    return f"{PHOTOS_CACHE_PREFIX}:{settings.PHOTOS_CACHE_KEY_VERSION}:{place_id}:h{max_height}"


def generate_filters_cache_key(session_id: str) -> str:
    return f"{FILTERS_CACHE_PREFIX}:{session_id}"
