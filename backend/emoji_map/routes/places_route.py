import logging

from fastapi import APIRouter, Depends, Request

from emoji_map.core.errors import PlacesError
from emoji_map.core.logger import logs
from emoji_map.models.details_model import DetailsResponse, PhotosResponse
from emoji_map.models.places_model import NearbyResponse
from emoji_map.repos.cache_repo import get_cache_repo
from emoji_map.services.Details_service import DetailsService
from emoji_map.services.google_client import GooglePlacesClient, get_google_client
from emoji_map.services.nearby_fetcher import NearbyFetcher
from emoji_map.services.Photos_service import PhotosService
from emoji_map.services.Places_service import PlacesService
from emoji_map.services.search_params import (
    get_details_search_params,
    get_nearby_search_params,
    get_photos_search_params,
)

GENERIC_ERROR = "An error occurred while processing your request"

router = APIRouter(prefix="/api/places", tags=["places"])

# --- Dependency Injection Helpers ---
def get_nearby_fetcher(client: GooglePlacesClient = Depends(get_google_client)) -> NearbyFetcher:
    return NearbyFetcher(client)

def get_places_service(repo=Depends(get_cache_repo), fetcher: NearbyFetcher = Depends(get_nearby_fetcher)) -> PlacesService:
    return PlacesService(repo, fetcher)

def get_details_service(repo=Depends(get_cache_repo), client: GooglePlacesClient = Depends(get_google_client)) -> DetailsService:
    return DetailsService(repo, client)

def get_photos_service(repo=Depends(get_cache_repo), client: GooglePlacesClient = Depends(get_google_client)) -> PhotosService:
    return PhotosService(repo, client)

def _unexpected(endpoint: str, e: Exception) -> PlacesError:
    logs.log(logging.ERROR, f"Error in {endpoint}: {str(e)}")
    return PlacesError(GENERIC_ERROR)

# --- Endpoints ---
@router.get("/nearby", response_model=NearbyResponse)
async def nearby_places_endpoint(request: Request, service: PlacesService = Depends(get_places_service)):
    """
    Places around ``location`` for the requested category ``key``s (repeatable).
    Optional: bypassCache, limit, openNow, radiusMeters, textQuery.
    """
    params = get_nearby_search_params(request.query_params)
    try:
        return await service.get_nearby_places(params)
    except PlacesError:
        raise
    except Exception as e:
        raise _unexpected("nearby_places_endpoint", e) from e

@router.get("/details", response_model=DetailsResponse)
async def place_details_endpoint(request: Request, service: DetailsService = Depends(get_details_service)):
    params = get_details_search_params(request.query_params)
    try:
        return await service.get_place_details(params)
    except PlacesError:
        raise
    except Exception as e:
        raise _unexpected("place_details_endpoint", e) from e

@router.get("/photos", response_model=PhotosResponse)
async def place_photos_endpoint(request: Request, service: PhotosService = Depends(get_photos_service)):
    params = get_photos_search_params(request.query_params)
    try:
        return await service.get_place_photos(params)
    except PlacesError:
        raise
    except Exception as e:
        raise _unexpected("place_photos_endpoint", e) from e
