"""
Thin async client for the Google Places API (v1 and legacy Nearby Search).

All calls go through ``_request``, which retries transport errors, 429 and
5xx answers with capped exponential backoff. Anything that still fails is
raised as ``UpstreamError``; the public message is left to the caller.
"""
import logging
from contextlib import asynccontextmanager
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from emoji_map.core.config import settings
from emoji_map.core.errors import UpstreamError
from emoji_map.core.logger import logs

UPSTREAM_FAILURE = "Google Places request failed"

SEARCH_FIELDS = [
    "id", "name", "displayName", "location", "types", "primaryType",
    "primaryTypeDisplayName", "formattedAddress", "rating", "userRatingCount",
    "priceLevel", "currentOpeningHours.openNow", "businessStatus",
    "googleMapsUri", "websiteUri", "takeout", "delivery", "dineIn",
    "servesBeer", "servesWine", "servesCocktails", "servesDessert",
    "servesCoffee", "outdoorSeating", "liveMusic", "menuForChildren",
    "allowsDogs", "restroom", "goodForWatchingSports", "paymentOptions",
    "parkingOptions", "accessibilityOptions",
]
SEARCH_FIELD_MASK = ",".join([f"places.{f}" for f in SEARCH_FIELDS] + ["nextPageToken"])

DETAILS_FIELDS = [
    "name", "rating", "priceLevel", "userRatingCount", "currentOpeningHours.openNow",
    "displayName", "primaryTypeDisplayName", "takeout", "delivery", "dineIn",
    "editorialSummary", "outdoorSeating", "liveMusic", "menuForChildren",
    "servesDessert", "servesCoffee", "goodForChildren", "goodForGroups",
    "allowsDogs", "restroom", "paymentOptions", "generativeSummary.overview",
    "reviews", "location", "formattedAddress",
]

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class RetryableStatus(Exception):
    """An answer worth retrying. Carries the response for the final attempt."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"Places API answered {response.status_code}")
        self.response = response


class GooglePlacesClient:
    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        legacy_url: str | None = None,
        retries: int | None = None,
        backoff_seconds: float | None = None,
        backoff_cap_seconds: float | None = None,
        timeout: float | None = None,
    ):
        self.transport = transport
        self.api_key = api_key or settings.GOOGLE_PLACES_API_KEY
        self.base_url = (base_url or settings.GOOGLE_PLACES_URL).rstrip("/")
        self.legacy_url = legacy_url or settings.GOOGLE_PLACES_LEGACY_URL
        self.retries = settings.GOOGLE_RETRIES if retries is None else retries
        self.backoff_seconds = settings.GOOGLE_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        self.backoff_cap_seconds = (
            settings.GOOGLE_BACKOFF_CAP_SECONDS if backoff_cap_seconds is None else backoff_cap_seconds
        )
        self.timeout = timeout or settings.GOOGLE_TIMEOUT_SECONDS

    @asynccontextmanager
    async def _session(self):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            yield client

    def _wait(self) -> wait_exponential:
        return wait_exponential(multiplier=self.backoff_seconds, max=self.backoff_cap_seconds)

    def _headers(self, field_mask: str) -> dict:
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": field_mask,
        }

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        async with self._session() as client:
            response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS:
            raise RetryableStatus(response)
        return response

    @staticmethod
    def _log_retry(retry_state):
        error = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logs.log(logging.WARNING, f"Places API call failed, retrying in {delay}s: {str(error)}",
                 {"attempt": retry_state.attempt_number})

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=self._wait(),
            retry=retry_if_exception_type((httpx.TransportError, RetryableStatus)),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._send(method, url, **kwargs)
        except httpx.TransportError as e:
            raise UpstreamError(UPSTREAM_FAILURE, detail=str(e)) from e
        except RetryableStatus as e:
            response = e.response

        if response.is_error:
            raise UpstreamError(
                UPSTREAM_FAILURE,
                detail=f"{method} {url} -> {response.status_code}: {response.text[:200]}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(UPSTREAM_FAILURE, detail="Response body is not JSON") from e

        if not isinstance(data, dict):
            raise UpstreamError(UPSTREAM_FAILURE, detail="Response body is not an object")
        return data

    async def search_text(self, body: dict, page_token: str | None = None) -> dict:
        """POST places:searchText. Returns ``{"places": [...], "nextPageToken"?}``."""
        if page_token:
            body = {**body, "pageToken": page_token}

        data = await self._request(
            "POST",
            f"{self.base_url}/places:searchText",
            json=body,
            headers=self._headers(SEARCH_FIELD_MASK),
        )
        places = data.get("places", [])
        if not isinstance(places, list):
            raise UpstreamError(UPSTREAM_FAILURE, detail="'places' is not a list")
        return data

    async def nearby_search_legacy(self, params: dict) -> dict:
        """GET the legacy nearbysearch endpoint. Returns ``{"results": [...], ...}``."""
        data = await self._request("GET", self.legacy_url, params={**params, "key": self.api_key})

        status = data.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise UpstreamError(
                UPSTREAM_FAILURE,
                detail=f"Legacy nearby search status {status}: {data.get('error_message', '')}",
            )
        if not isinstance(data.get("results", []), list):
            raise UpstreamError(UPSTREAM_FAILURE, detail="'results' is not a list")
        return data

    async def get_place_details(self, place_id: str) -> dict:
        return await self._request(
            "GET",
            f"{self.base_url}/places/{quote(place_id, safe='')}",
            headers=self._headers(",".join(DETAILS_FIELDS)),
        )

    async def get_photo_metadata(self, place_id: str) -> dict:
        return await self._request(
            "GET",
            f"{self.base_url}/places/{quote(place_id, safe='')}",
            headers=self._headers("photos"),
        )

    async def resolve_photo_url(self, photo_name: str, max_height: int) -> str:
        """Final image URL for a ``places/{id}/photos/{ref}`` resource name."""
        data = await self._request(
            "GET",
            f"{self.base_url}/{photo_name}/media",
            params={"maxHeightPx": max_height, "skipHttpRedirect": "true", "key": self.api_key},
        )
        photo_uri = data.get("photoUri")
        if not photo_uri:
            raise UpstreamError(UPSTREAM_FAILURE, detail=f"No photoUri for {photo_name}")
        return photo_uri


def get_google_client() -> GooglePlacesClient:
    return GooglePlacesClient()
