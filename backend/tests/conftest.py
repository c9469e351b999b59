"""Shared fixtures: a file cache in tmp_path and a Places client on a mock transport."""

import json

import httpx
import pytest

from emoji_map.repos.local_repo import LocalCacheRepository
from emoji_map.services.google_client import GooglePlacesClient

BASE_URL = "https://places.test/v1"
LEGACY_URL = "https://legacy.test/maps/api/place/nearbysearch/json"


class RecordingTransport:
    """httpx.MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture
def cache_repo(tmp_path) -> LocalCacheRepository:
    """File cache isolated per test."""
    return LocalCacheRepository(tmp_path / "cache")


@pytest.fixture
def make_google_client():
    """Build a (client, recorder) pair around a request handler."""

    def _make(handler, retries: int = 0) -> tuple[GooglePlacesClient, RecordingTransport]:
        recorder = RecordingTransport(handler)
        client = GooglePlacesClient(
            transport=recorder.transport,
            api_key="test-key",
            base_url=BASE_URL,
            legacy_url=LEGACY_URL,
            retries=retries,
            backoff_seconds=0,
            backoff_cap_seconds=0,
        )
        return client, recorder

    return _make


@pytest.fixture
def new_place():
    """Places API v1 shaped place."""

    def _make(place_id: str, name: str, primary_type: str | None = None, **extra) -> dict:
        place = {
            "id": place_id,
            "name": f"places/{place_id}",
            "displayName": {"text": name, "languageCode": "en"},
            "location": {"latitude": 40.7128, "longitude": -74.006},
            "types": [primary_type] if primary_type else [],
        }
        if primary_type:
            place["primaryType"] = primary_type
        place.update(extra)
        return place

    return _make


@pytest.fixture
def legacy_place():
    """Legacy Nearby Search shaped place."""

    def _make(place_id: str, name: str, types: list[str] | None = None, **extra) -> dict:
        place = {
            "place_id": place_id,
            "name": name,
            "geometry": {"location": {"lat": 40.7128, "lng": -74.006}},
            "types": types or [],
        }
        place.update(extra)
        return place

    return _make
