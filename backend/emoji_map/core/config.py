from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Google Places API
    GOOGLE_PLACES_API_KEY: str = "your-key-here"
    GOOGLE_PLACES_URL: str = "https://places.googleapis.com/v1"
    GOOGLE_PLACES_LEGACY_URL: str = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

    # Upstream search strategy: "text_search" or "legacy_nearby"
    PLACES_SEARCH_MODE: str = "text_search"

    # Upstream HTTP behaviour
    GOOGLE_TIMEOUT_SECONDS: float = 10.0
    GOOGLE_RETRIES: int = 2
    GOOGLE_BACKOFF_SECONDS: float = 1.0
    GOOGLE_BACKOFF_CAP_SECONDS: float = 5.0

    # Cache backend: "redis", "mongodb" or "local"
    CACHE_BACKEND: str = "local"

    REDIS_URL: str = "redis://localhost:6379/0"

    # MongoDB Configuration (only needed if CACHE_BACKEND=mongodb)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "emoji_map_db"

    LOCAL_CACHE_DIR: str = "data/cache"

    # Cache versions, bump to invalidate every entry of a kind
    NEARBY_CACHE_KEY_VERSION: str = "v2"
    DETAILS_CACHE_KEY_VERSION: str = "v1"
    PHOTOS_CACHE_KEY_VERSION: str = "v1"

    # TTLs in seconds
    NEARBY_CACHE_TTL_SECONDS: int = 60 * 60 * 24 * 7
    DETAILS_CACHE_TTL_SECONDS: int = 60 * 60 * 24
    PHOTOS_CACHE_TTL_SECONDS: int = 60 * 60 * 24 * 30
    FILTERS_STATE_TTL_SECONDS: int = 60 * 60 * 24 * 365

    # Nearby search
    NEARBY_DEFAULT_LIMIT: int = 20
    NEARBY_PAGE_SIZE: int = 20
    NEARBY_DEFAULT_RADIUS_METERS: int = 5000
    NEARBY_MAX_KEYWORDS_PER_REQUEST: int = 25
    NEARBY_MAX_CONCURRENCY: int = 3
    NEARBY_MAX_PAGES: int = 3

    # Photos
    PHOTOS_DEFAULT_LIMIT: int = 5
    PHOTOS_DEFAULT_MAX_HEIGHT: int = 1600
    PHOTOS_MAX_HEIGHT_LIMIT: int = 4000

    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"
    LOG_FILE: str = "emoji_map.log"
    LOG_TO_FILE: bool = True

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
