"""Tests for the nearby search orchestration (cache hit/miss flow)."""

from unittest.mock import AsyncMock

import httpx
import pytest

from emoji_map.core.errors import UpstreamError
from emoji_map.models.places_model import NearbySearchParams
from emoji_map.services.cache_keys import generate_cache_key
from emoji_map.services.nearby_fetcher import NearbyFetcher
from emoji_map.services.Places_service import PlacesService

LOCATION = "40.7128,-74.0060"


@pytest.fixture
def coffee_places(new_place) -> list[dict]:
    return [
        new_place("c1", "Blue Bottle", "coffee_shop"),
        new_place("c2", "Joe Coffee", "coffee_shop"),
        new_place("h1", "Hardware Store", "hardware_store"),
    ]


def make_service(repo, client) -> PlacesService:
    return PlacesService(repo, NearbyFetcher(client))


class TestPlacesService:
    """Cache check, fetch, normalize, cache write."""

    @pytest.mark.asyncio
    async def test_miss_then_hit(self, cache_repo, make_google_client, coffee_places) -> None:
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))
        service = make_service(cache_repo, client)
        params = NearbySearchParams(keys=[4], location=LOCATION)

        first = await service.get_nearby_places(params)
        second = await service.get_nearby_places(params)

        assert first.cacheHit is False
        assert second.cacheHit is True
        assert second.data == first.data
        assert [p.id for p in first.data] == ["c1", "c2"]
        assert first.count == 2
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_cache_hit_is_sliced_to_limit(self, cache_repo, make_google_client, coffee_places) -> None:
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))
        service = make_service(cache_repo, client)

        await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))
        limited = await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION, limit=1))

        assert limited.cacheHit is True
        assert [p.id for p in limited.data] == ["c1"]
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_too_few_cached_places_refetches(self, cache_repo, make_google_client, coffee_places) -> None:
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))
        service = make_service(cache_repo, client)

        await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))
        response = await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION, limit=5))

        assert response.cacheHit is False
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_bypass_skips_read_but_refreshes(self, cache_repo, make_google_client, coffee_places) -> None:
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))
        service = make_service(cache_repo, client)
        params = NearbySearchParams(keys=[4], location=LOCATION)

        await service.get_nearby_places(params)
        bypassed = await service.get_nearby_places(params.model_copy(update={"bypassCache": True}))

        assert bypassed.cacheHit is False
        assert len(recorder.requests) == 2
        assert await cache_repo.get(generate_cache_key(LOCATION, [4])) is not None

    @pytest.mark.asyncio
    async def test_empty_results_are_not_cached(self, cache_repo, make_google_client) -> None:
        client, _ = make_google_client(lambda request: httpx.Response(200, json={"places": []}))
        service = make_service(cache_repo, client)

        response = await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))

        assert response.count == 0
        assert await cache_repo.get(generate_cache_key(LOCATION, [4])) is None

    @pytest.mark.asyncio
    async def test_total_upstream_failure_leaves_cache_unwritten(self, cache_repo, make_google_client) -> None:
        client, _ = make_google_client(lambda request: httpx.Response(500))
        service = make_service(cache_repo, client)

        with pytest.raises(UpstreamError) as exc:
            await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))

        assert exc.value.message == "Failed to fetch nearby places"
        assert await cache_repo.get(generate_cache_key(LOCATION, [4])) is None

    @pytest.mark.asyncio
    async def test_cache_read_error_is_a_miss(self, make_google_client, coffee_places) -> None:
        repo = AsyncMock()
        repo.get.side_effect = ConnectionError("cache down")
        repo.set.return_value = True
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))

        response = await make_service(repo, client).get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))

        assert response.cacheHit is False
        assert response.count == 2
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_cache_write_error_does_not_fail_the_request(self, make_google_client, coffee_places) -> None:
        repo = AsyncMock()
        repo.get.return_value = None
        repo.set.side_effect = ConnectionError("cache down")
        client, _ = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))

        response = await make_service(repo, client).get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))

        assert response.count == 2
        repo.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_text_query_scenario(self, cache_repo, make_google_client, new_place) -> None:
        """coffee|restaurant|bar is one upstream call and three distinct categories."""
        places = [
            new_place("c1", "Blue Bottle", "coffee_shop"),
            new_place("r1", "Katz's Delicatessen", "restaurant"),
            new_place("b1", "The Dead Rabbit", "bar"),
        ]
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": places}))
        service = make_service(cache_repo, client)

        response = await service.get_nearby_places(
            NearbySearchParams(keys=[1], location=LOCATION, textQuery="coffee|restaurant|bar")
        )

        assert len(recorder.requests) == 1
        assert [p.category for p in response.data] == ["coffee", "restaurant", "bar"]
        assert [p.emoji for p in response.data] == ["☕", "🍽️", "🍺"]

    @pytest.mark.asyncio
    async def test_zero_limit_is_an_empty_cache_hit(self, cache_repo, make_google_client, coffee_places) -> None:
        client, recorder = make_google_client(lambda request: httpx.Response(200, json={"places": coffee_places}))
        service = make_service(cache_repo, client)

        await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION))
        response = await service.get_nearby_places(NearbySearchParams(keys=[4], location=LOCATION, limit=0))

        assert response.cacheHit is True
        assert response.data == []
        assert len(recorder.requests) == 1
