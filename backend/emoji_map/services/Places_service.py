import logging

from pydantic import ValidationError

from emoji_map.core.config import settings
from emoji_map.core.logger import logs
from emoji_map.models.places_model import NearbyResponse, NearbySearchParams, NormalizedPlace
from emoji_map.services.cache_helpers import read_cache, write_cache
from emoji_map.services.cache_keys import generate_cache_key
from emoji_map.services.nearby_fetcher import NearbyFetcher
from emoji_map.services.normalizer import normalize_places
from emoji_map.services.text_query import build_text_query_from_keys, split_text_query

class PlacesService:
    """
    Nearby search: cache check, upstream fetch on miss, normalize, cache write.
    """
    def __init__(self, repo, fetcher: NearbyFetcher):
        self.repo = repo
        self.fetcher = fetcher

    def _load_cached(self, cached, cache_key: str) -> list[NormalizedPlace] | None:
        if not isinstance(cached, list):
            return None
        try:
            return [NormalizedPlace.model_validate(p) for p in cached]
        except ValidationError as e:
            logs.log(logging.WARNING, f"Ignoring stale cache entry: {e.error_count()} invalid field(s)", {"key": cache_key})
            return None

    async def get_nearby_places(self, params: NearbySearchParams) -> NearbyResponse:
        text_query = params.textQuery or build_text_query_from_keys(params.keys)
        keywords = split_text_query(text_query)
        cache_key = generate_cache_key(
            params.location,
            None if params.textQuery else params.keys,
            text_query=params.textQuery,
        )

        # 1. Check Cache
        if params.bypassCache:
            logs.log(logging.INFO, "Bypassing cache for nearby search", {"key": cache_key})
        elif cache_key:
            cached = self._load_cached(await read_cache(self.repo, cache_key), cache_key)
            if cached is not None and (params.limit is None or len(cached) >= params.limit):
                logs.log(logging.INFO, f"✓ Places cache HIT for {cache_key} ({len(cached)} places)")
                places = cached if params.limit is None else cached[:params.limit]
                return NearbyResponse(data=places, count=len(places), cacheHit=True)
            if cached is not None:
                logs.log(logging.INFO, f"Cached entry for {cache_key} has {len(cached)} places, {params.limit} requested")

        # 2. Fetch from Google Places
        logs.log(logging.INFO, f"✗ Places cache MISS for {cache_key}. Fetching from Google Places...")
        raw_places = await self.fetcher.fetch(
            keywords,
            params.location,
            limit=params.limit,
            open_now=params.openNow,
            radius_meters=params.radiusMeters,
        )

        # 3. Normalize
        places, _ = normalize_places(raw_places, keywords, params.keys)

        # 4. Cache results, empty results are never written
        if cache_key and places:
            await write_cache(
                self.repo,
                cache_key,
                [p.model_dump(mode="json") for p in places],
                settings.NEARBY_CACHE_TTL_SECONDS,
            )

        logs.log(logging.INFO, f"Returning {len(places)} places", {"upstream": len(raw_places)})
        return NearbyResponse(data=places, count=len(places), cacheHit=False)
