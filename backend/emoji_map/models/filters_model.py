from pydantic import BaseModel
from typing import List, Optional

from emoji_map.models.places_model import NormalizedPlace

FILTERS_STATE_VERSION = 1

DEFAULT_PRICE_LEVELS = [1, 2, 3, 4]

class MapPoint(BaseModel):
    lat: float
    lng: float

class Viewport(BaseModel):
    center: Optional[MapPoint] = None
    bounds: Optional[dict] = None
    zoom: int = 14

class FiltersState(BaseModel):
    selectedCategories: List[str] = []
    showFavoritesOnly: bool = False
    openNow: bool = False
    priceLevel: List[int] = DEFAULT_PRICE_LEVELS
    minimumRating: Optional[float] = None
    isAllCategoriesMode: bool = True
    userLocation: Optional[MapPoint] = None
    viewport: Viewport = Viewport()

class FiltersUpdate(BaseModel):
    """Partial update, unset fields are left alone."""
    selectedCategories: Optional[List[str]] = None
    showFavoritesOnly: Optional[bool] = None
    openNow: Optional[bool] = None
    priceLevel: Optional[List[int]] = None
    minimumRating: Optional[float] = None
    userLocation: Optional[MapPoint] = None
    viewport: Optional[Viewport] = None

class FiltersResponse(BaseModel):
    session_id: str
    version: int = FILTERS_STATE_VERSION
    state: FiltersState

class ApplyFiltersRequest(BaseModel):
    places: List[NormalizedPlace]
    favoriteIds: List[str] = []

class FilteredPlacesResponse(BaseModel):
    data: List[NormalizedPlace]
    count: int
