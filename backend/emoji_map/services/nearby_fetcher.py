"""
Upstream fetch with keyword batching.

Keywords are split into batches no larger than what one upstream request
may carry, the batches run concurrently, and their results are merged in
the order the batches were issued. Duplicate places across batches keep
their first occurrence.
"""
import asyncio
import logging

from emoji_map.core.config import settings
from emoji_map.core.errors import UpstreamError
from emoji_map.core.logger import logs
from emoji_map.services.google_client import GooglePlacesClient
from emoji_map.utils.geo import clamp_radius, create_location_bias

TEXT_SEARCH = "text_search"
LEGACY_NEARBY = "legacy_nearby"

NEARBY_FETCH_FAILED = "Failed to fetch nearby places"


def raw_place_id(raw) -> str | None:
    if not isinstance(raw, dict):
        return None
    return raw.get("id") or raw.get("place_id")


def partition_keywords(keywords: list[str], batch_size: int) -> list[list[str]]:
    size = max(batch_size, 1)
    return [keywords[i:i + size] for i in range(0, len(keywords), size)]


def prepare_text_search_body(
    text_query: str,
    location: str,
    limit: int | None = None,
    open_now: bool | None = None,
    radius_meters: int | None = None,
    page_size: int | None = None,
) -> dict:
    page_size = page_size or settings.NEARBY_PAGE_SIZE
    body = {
        "textQuery": text_query,
        "pageSize": min(limit or page_size, page_size),
        "rankPreference": "DISTANCE",
    }
    if open_now:
        body["openNow"] = True

    if radius_meters is None:
        radius_meters = settings.NEARBY_DEFAULT_RADIUS_METERS
    bias = create_location_bias(location, radius_meters)
    if bias:
        body["locationBias"] = bias
    else:
        logs.log(logging.WARNING, "Location is not numeric, searching without a location bias", {"location": location})
    return body


class NearbyFetcher:
    def __init__(
        self,
        client: GooglePlacesClient,
        mode: str | None = None,
        max_keywords_per_request: int | None = None,
        max_concurrency: int | None = None,
        max_pages: int | None = None,
    ):
        self.client = client
        self.mode = mode or settings.PLACES_SEARCH_MODE
        self.max_keywords_per_request = max_keywords_per_request or settings.NEARBY_MAX_KEYWORDS_PER_REQUEST
        self.max_concurrency = max_concurrency or settings.NEARBY_MAX_CONCURRENCY
        self.max_pages = max_pages or settings.NEARBY_MAX_PAGES

    @property
    def batch_size(self) -> int:
        # Legacy nearby search takes a single keyword per request
        if self.mode == LEGACY_NEARBY:
            return 1
        return self.max_keywords_per_request

    async def _fetch_text_search_batch(self, keywords, location, limit, open_now, radius_meters) -> list:
        body = prepare_text_search_body("|".join(keywords), location, limit, open_now, radius_meters)

        places = []
        page_token = None
        for _ in range(self.max_pages):
            data = await self.client.search_text(body, page_token)
            places.extend(data.get("places", []))

            page_token = data.get("nextPageToken")
            if not page_token or limit is None or len(places) >= limit:
                break
        return places

    async def _fetch_legacy_batch(self, keywords, location, limit, open_now, radius_meters) -> list:
        params = {
            "location": location,
            "radius": clamp_radius(
                settings.NEARBY_DEFAULT_RADIUS_METERS if radius_meters is None else radius_meters
            ),
            "keyword": " ".join(keywords),
        }
        if open_now:
            params["opennow"] = "true"

        data = await self.client.nearby_search_legacy(params)
        return data.get("results", [])

    async def fetch(
        self,
        keywords: list[str],
        location: str,
        limit: int | None = None,
        open_now: bool | None = None,
        radius_meters: int | None = None,
    ) -> list[dict]:
        """
        Raw upstream places for ``keywords`` around ``location``, merged,
        deduplicated by place id and truncated to ``limit``.

        Failing batches are logged and skipped. ``UpstreamError`` is raised
        only when no batch succeeds.
        """
        batches = partition_keywords(keywords, self.batch_size)
        if not batches or limit == 0:
            return []

        fetch_batch = self._fetch_legacy_batch if self.mode == LEGACY_NEARBY else self._fetch_text_search_batch
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(batch):
            async with semaphore:
                return await fetch_batch(batch, location, limit, open_now, radius_meters)

        logs.log(logging.INFO, f"Fetching {len(batches)} upstream batch(es)", {"mode": self.mode, "keywords": len(keywords)})
        results = await asyncio.gather(*(run(batch) for batch in batches), return_exceptions=True)

        merged = []
        seen = set()
        failures = []
        for batch, result in zip(batches, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failures.append(result)
                detail = result.detail if isinstance(result, UpstreamError) else str(result)
                logs.log(logging.WARNING, "Upstream batch failed", {"keywords": batch, "detail": detail})
                continue

            for raw in result:
                place_id = raw_place_id(raw)
                if place_id is not None:
                    if place_id in seen:
                        continue
                    seen.add(place_id)
                merged.append(raw)

        if len(failures) == len(batches):
            last = failures[-1]
            raise UpstreamError(
                NEARBY_FETCH_FAILED,
                detail=f"All {len(batches)} batch(es) failed, last: {getattr(last, 'detail', None) or last}",
                status=getattr(last, "status", None),
            )

        if limit is not None:
            merged = merged[:limit]
        return merged
