import asyncio
import logging

from pydantic import ValidationError

from emoji_map.core.config import settings
from emoji_map.core.errors import NotFoundError, UpstreamError
from emoji_map.core.logger import logs
from emoji_map.models.details_model import PhotosResponse
from emoji_map.models.google_model import PhotoMetadata
from emoji_map.models.places_model import PhotosSearchParams
from emoji_map.services.cache_helpers import read_cache, write_cache
from emoji_map.services.cache_keys import generate_photos_cache_key
from emoji_map.services.google_client import GooglePlacesClient

PHOTOS_FETCH_FAILED = "Failed to fetch place photos"


class PhotosService:
    def __init__(self, repo, client: GooglePlacesClient):
        self.repo = repo
        self.client = client

    async def _fetch_metadata(self, place_id: str) -> PhotoMetadata:
        try:
            raw = await self.client.get_photo_metadata(place_id)
        except UpstreamError as e:
            if e.status == 404:
                raise NotFoundError("Place not found") from e
            raise UpstreamError(PHOTOS_FETCH_FAILED, detail=e.detail, status=e.status) from e

        try:
            return PhotoMetadata.model_validate(raw)
        except ValidationError as e:
            raise UpstreamError(PHOTOS_FETCH_FAILED, detail=f"Invalid photo metadata: {e.error_count()} error(s)") from e

    async def get_place_photos(self, params: PhotosSearchParams) -> PhotosResponse:
        cache_key = generate_photos_cache_key(params.id, params.maxHeight)

        if not params.bypassCache:
            cached = await read_cache(self.repo, cache_key)
            if isinstance(cached, list) and cached:
                photos = cached[:params.limit]
                logs.log(logging.INFO, f"✓ Photos cache HIT for {params.id}")
                return PhotosResponse(data=photos, count=len(photos), cacheHit=True)

        logs.log(logging.INFO, f"✗ Photos cache MISS for {params.id}. Fetching from Google Places...")
        metadata = await self._fetch_metadata(params.id)
        if not metadata.photos:
            raise NotFoundError("No photos found")

        references = metadata.photos[:params.limit]
        results = await asyncio.gather(
            *(self.client.resolve_photo_url(ref.name, params.maxHeight) for ref in references),
            return_exceptions=True,
        )

        urls = []
        for ref, result in zip(references, results):
            if isinstance(result, Exception):
                logs.log(logging.WARNING, "Failed to resolve photo", {"photo": ref.name, "error": str(result)})
                continue
            if isinstance(result, BaseException):
                raise result
            urls.append(result)

        if not urls:
            raise UpstreamError(PHOTOS_FETCH_FAILED, detail=f"None of {len(references)} photo(s) resolved")

        await write_cache(self.repo, cache_key, urls, settings.PHOTOS_CACHE_TTL_SECONDS)
        return PhotosResponse(data=urls, count=len(urls), cacheHit=False)
