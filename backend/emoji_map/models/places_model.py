from pydantic import BaseModel, ConfigDict
from typing import List, Optional

class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: int
    emoji: str
    name: str
    keywords: List[str]
    primaryTypes: List[str] = []

class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

class NormalizedPlace(BaseModel):
    """A place from either upstream shape, categorized and ready to serve."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: Location
    category: str
    categoryKey: Optional[int] = None
    emoji: str
    priceLevel: Optional[int] = None
    isFree: bool = False
    openNow: Optional[bool] = None
    rating: Optional[float] = None
    userRatingCount: Optional[int] = None
    formattedAddress: Optional[str] = None
    displayName: Optional[str] = None
    primaryType: Optional[str] = None
    primaryTypeDisplayName: Optional[str] = None
    businessStatus: Optional[str] = None
    googleMapsUri: Optional[str] = None
    websiteUri: Optional[str] = None

    # Amenities, None when upstream did not say
    takeout: Optional[bool] = None
    delivery: Optional[bool] = None
    dineIn: Optional[bool] = None
    servesBeer: Optional[bool] = None
    servesWine: Optional[bool] = None
    servesCocktails: Optional[bool] = None
    servesDessert: Optional[bool] = None
    servesCoffee: Optional[bool] = None
    outdoorSeating: Optional[bool] = None
    liveMusic: Optional[bool] = None
    menuForChildren: Optional[bool] = None
    allowsDogs: Optional[bool] = None
    restroom: Optional[bool] = None
    goodForWatchingSports: Optional[bool] = None
    acceptsCreditCards: Optional[bool] = None
    acceptsCashOnly: Optional[bool] = None
    valetParking: Optional[bool] = None
    wheelchairAccessibleEntrance: Optional[bool] = None
    wheelchairAccessibleSeating: Optional[bool] = None

class NearbyResponse(BaseModel):
    data: List[NormalizedPlace]
    count: int
    cacheHit: bool

class NearbySearchParams(BaseModel):
    keys: List[int]
    location: str
    bypassCache: bool = False
    openNow: Optional[bool] = None
    limit: Optional[int] = None
    radiusMeters: Optional[int] = None
    textQuery: Optional[str] = None

class DetailsSearchParams(BaseModel):
    id: str
    bypassCache: bool = False

class PhotosSearchParams(BaseModel):
    id: str
    bypassCache: bool = False
    limit: int
    maxHeight: int
