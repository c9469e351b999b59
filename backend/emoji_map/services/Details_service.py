import logging

from pydantic import ValidationError

from emoji_map.core.config import settings
from emoji_map.core.errors import NotFoundError, UpstreamError
from emoji_map.core.logger import logs
from emoji_map.models.details_model import Detail, DetailsResponse
from emoji_map.models.google_model import DetailsDocument, PaymentOptions
from emoji_map.models.places_model import DetailsSearchParams
from emoji_map.services.cache_helpers import read_cache, write_cache
from emoji_map.services.cache_keys import generate_details_cache_key
from emoji_map.services.google_client import GooglePlacesClient
from emoji_map.services.normalizer import is_free_price, map_price_level

DETAILS_FETCH_FAILED = "Failed to fetch place details"


def transform_details(document: DetailsDocument) -> Detail:
    """Flatten a validated details document, filling in defaults."""
    return Detail(
        name=document.name or "",
        reviews=document.reviews,
        rating=document.rating or 0,
        priceLevel=map_price_level(document.priceLevel),
        isFree=is_free_price(document.priceLevel),
        userRatingCount=document.userRatingCount or 0,
        openNow=document.currentOpeningHours.openNow if document.currentOpeningHours else None,
        displayName=(document.displayName.text if document.displayName else None) or "",
        primaryTypeDisplayName=(
            document.primaryTypeDisplayName.text if document.primaryTypeDisplayName else None
        ) or "",
        takeout=bool(document.takeout),
        delivery=bool(document.delivery),
        dineIn=bool(document.dineIn),
        editorialSummary=(document.editorialSummary.text if document.editorialSummary else None) or "",
        outdoorSeating=bool(document.outdoorSeating),
        liveMusic=bool(document.liveMusic),
        menuForChildren=bool(document.menuForChildren),
        servesDessert=bool(document.servesDessert),
        servesCoffee=bool(document.servesCoffee),
        goodForChildren=bool(document.goodForChildren),
        goodForGroups=bool(document.goodForGroups),
        allowsDogs=bool(document.allowsDogs),
        restroom=bool(document.restroom),
        paymentOptions=document.paymentOptions or PaymentOptions(),
        generativeSummary=(
            document.generativeSummary.overview.text
            if document.generativeSummary and document.generativeSummary.overview
            else None
        ) or "",
        location=document.location,
        formattedAddress=document.formattedAddress or "",
    )


class DetailsService:
    def __init__(self, repo, client: GooglePlacesClient):
        self.repo = repo
        self.client = client

    async def get_place_details(self, params: DetailsSearchParams) -> DetailsResponse:
        cache_key = generate_details_cache_key(params.id)

        if not params.bypassCache:
            cached = await read_cache(self.repo, cache_key)
            if cached:
                try:
                    detail = Detail.model_validate(cached)
                except ValidationError:
                    logs.log(logging.WARNING, "Ignoring stale details cache entry", {"key": cache_key})
                else:
                    logs.log(logging.INFO, f"✓ Details cache HIT for {params.id}")
                    return DetailsResponse(data=detail, count=1, cacheHit=True)

        logs.log(logging.INFO, f"✗ Details cache MISS for {params.id}. Fetching from Google Places...")
        try:
            raw = await self.client.get_place_details(params.id)
        except UpstreamError as e:
            if e.status == 404:
                raise NotFoundError("Place not found") from e
            raise UpstreamError(DETAILS_FETCH_FAILED, detail=e.detail, status=e.status) from e

        try:
            document = DetailsDocument.model_validate(raw)
        except ValidationError as e:
            raise UpstreamError(
                DETAILS_FETCH_FAILED,
                detail=f"Details document for {params.id} failed validation: {e.error_count()} error(s)",
            ) from e

        detail = transform_details(document)
        await write_cache(
            self.repo, cache_key, detail.model_dump(mode="json"), settings.DETAILS_CACHE_TTL_SECONDS
        )
        return DetailsResponse(data=detail, count=1, cacheHit=False)
