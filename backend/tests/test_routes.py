"""HTTP surface tests with the cache and Places client swapped out."""

import httpx
import pytest
from fastapi.testclient import TestClient

from emoji_map.main import app
from emoji_map.repos.cache_repo import get_cache_repo
from emoji_map.repos.local_repo import LocalCacheRepository
from emoji_map.services.cache_keys import generate_cache_key
from emoji_map.services.google_client import get_google_client

LOCATION = "40.7128,-74.0060"


@pytest.fixture
def upstream():
    """Mutable handler so each test decides what the Places API answers."""
    state = {"handler": lambda request: httpx.Response(200, json={"places": []})}
    return state


@pytest.fixture
def client(tmp_path, make_google_client, upstream):
    repo = LocalCacheRepository(tmp_path / "cache")
    google, recorder = make_google_client(lambda request: upstream["handler"](request))

    app.dependency_overrides[get_cache_repo] = lambda: repo
    app.dependency_overrides[get_google_client] = lambda: google
    with TestClient(app) as test_client:
        test_client.repo = repo
        test_client.recorder = recorder
        yield test_client
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestNearbyRoute:
    """GET /api/places/nearby"""

    def test_missing_location(self, client) -> None:
        response = client.get("/api/places/nearby", params={"key": "4"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameter: location"}

    def test_invalid_location(self, client) -> None:
        response = client.get("/api/places/nearby", params={"location": "downtown"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid parameter: location"}

    def test_negative_limit(self, client) -> None:
        response = client.get("/api/places/nearby", params={"location": LOCATION, "limit": "-1"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid parameter: limit"}

    def test_zero_limit_returns_no_places(self, client) -> None:
        response = client.get("/api/places/nearby", params={"key": "4", "location": LOCATION, "limit": "0"})
        assert response.status_code == 200
        assert response.json() == {"data": [], "count": 0, "cacheHit": False}
        assert client.recorder.requests == []

    def test_second_identical_request_is_a_cache_hit(self, client, upstream, new_place) -> None:
        upstream["handler"] = lambda request: httpx.Response(
            200, json={"places": [new_place("c1", "Blue Bottle", "coffee_shop")]}
        )

        first = client.get("/api/places/nearby", params={"key": "4", "location": LOCATION})
        second = client.get("/api/places/nearby", params={"key": "4", "location": LOCATION})

        assert first.status_code == second.status_code == 200
        assert first.json()["cacheHit"] is False
        assert second.json()["cacheHit"] is True
        assert second.json()["data"] == first.json()["data"]
        assert first.json()["data"][0]["emoji"] == "☕"
        assert len(client.recorder.requests) == 1

    def test_upstream_failure(self, client, upstream) -> None:
        upstream["handler"] = lambda request: httpx.Response(500)

        response = client.get("/api/places/nearby", params={"key": "4", "location": LOCATION})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch nearby places"}
        assert not client.repo._get_cache_file(generate_cache_key(LOCATION, [4])).exists()


class TestDetailsAndPhotosRoutes:
    """GET /api/places/details and /api/places/photos"""

    def test_details_requires_id(self, client) -> None:
        response = client.get("/api/places/details")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameter: id"}

    def test_photos_requires_id(self, client) -> None:
        response = client.get("/api/places/photos")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameter: id"}

    def test_details_not_found(self, client, upstream) -> None:
        upstream["handler"] = lambda request: httpx.Response(404, json={"error": {"code": 404}})
        response = client.get("/api/places/details", params={"id": "missing"})
        assert response.status_code == 404
        assert response.json() == {"error": "Place not found"}

    def test_details(self, client, upstream) -> None:
        upstream["handler"] = lambda request: httpx.Response(
            200, json={"name": "places/abc", "rating": 4.2, "userRatingCount": 12}
        )
        response = client.get("/api/places/details", params={"id": "abc"})
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["cacheHit"] is False
        assert body["data"]["rating"] == 4.2

    def test_photos(self, client, upstream) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/media"):
                return httpx.Response(200, json={"photoUri": "https://img.test/p0.jpg"})
            return httpx.Response(200, json={"photos": [{"name": "places/abc/photos/p0"}]})

        upstream["handler"] = handler
        response = client.get("/api/places/photos", params={"id": "abc", "limit": "-3"})

        assert response.status_code == 200
        assert response.json() == {"data": ["https://img.test/p0.jpg"], "count": 1, "cacheHit": False}


class TestFiltersRoutes:
    """/api/filters/{session_id}"""

    def test_defaults_for_a_new_session(self, client) -> None:
        body = client.get("/api/filters/s1").json()
        assert body["session_id"] == "s1"
        assert body["state"]["isAllCategoriesMode"] is True

    def test_update_toggle_and_reset(self, client) -> None:
        updated = client.put("/api/filters/s1", json={"minimumRating": 4.0, "viewport": {"zoom": 12}}).json()
        assert updated["state"]["minimumRating"] == 4.0

        toggled = client.post("/api/filters/s1/toggle/pizza").json()
        assert toggled["state"]["selectedCategories"] == ["pizza"]
        assert toggled["state"]["isAllCategoriesMode"] is False

        reset = client.delete("/api/filters/s1").json()
        assert reset["state"]["selectedCategories"] == []
        assert reset["state"]["minimumRating"] is None
        assert reset["state"]["viewport"]["zoom"] == 12

    def test_null_fields_are_accepted(self, client) -> None:
        response = client.put("/api/filters/s1", json={
            "selectedCategories": None, "viewport": None, "showFavoritesOnly": None, "priceLevel": None,
        })
        assert response.status_code == 200
        assert response.json()["state"]["selectedCategories"] == []
        assert response.json()["state"]["isAllCategoriesMode"] is True

    def test_apply(self, client) -> None:
        client.put("/api/filters/s1", json={"selectedCategories": ["pizza"]})
        places = [
            {"id": "a", "name": "A", "location": {"latitude": 1, "longitude": 2}, "category": "pizza", "emoji": "🍕"},
            {"id": "b", "name": "B", "location": {"latitude": 1, "longitude": 2}, "category": "coffee", "emoji": "☕"},
        ]

        response = client.post("/api/filters/s1/apply", json={"places": places})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]] == ["a"]
