"""
Upstream Google Places documents.

A search result comes in one of two shapes: the legacy Nearby Search shape
(``place_id`` / ``geometry.location``) or the Places API v1 shape
(``id`` / ``location``). ``RawPlace`` is a tagged union over both, so each
shape is validated on its own terms and unknown shapes are rejected.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter


class TextValue(BaseModel):
    text: Optional[str] = None
    languageCode: Optional[str] = None


class LatLng(BaseModel):
    latitude: float
    longitude: float


class OpeningHours(BaseModel):
    openNow: Optional[bool] = None


class PaymentOptions(BaseModel):
    acceptsCreditCards: bool = False
    acceptsDebitCards: bool = False
    acceptsCashOnly: bool = False


class ParkingOptions(BaseModel):
    valetParking: Optional[bool] = None


class AccessibilityOptions(BaseModel):
    wheelchairAccessibleEntrance: Optional[bool] = None
    wheelchairAccessibleSeating: Optional[bool] = None


class NewPlace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    location: LatLng
    name: Optional[str] = None
    displayName: Optional[TextValue] = None
    primaryType: Optional[str] = None
    primaryTypeDisplayName: Optional[TextValue] = None
    types: List[str] = []
    formattedAddress: Optional[str] = None
    currentOpeningHours: Optional[OpeningHours] = None
    priceLevel: Optional[str] = None
    rating: Optional[float] = None
    userRatingCount: Optional[int] = None
    businessStatus: Optional[str] = None
    googleMapsUri: Optional[str] = None
    websiteUri: Optional[str] = None
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
    paymentOptions: Optional[PaymentOptions] = None
    parkingOptions: Optional[ParkingOptions] = None
    accessibilityOptions: Optional[AccessibilityOptions] = None


class LegacyLatLng(BaseModel):
    lat: float
    lng: float


class LegacyGeometry(BaseModel):
    location: LegacyLatLng


class LegacyOpeningHours(BaseModel):
    open_now: Optional[bool] = None


class LegacyPlace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    place_id: str
    geometry: LegacyGeometry
    name: Optional[str] = None
    vicinity: Optional[str] = None
    types: List[str] = []
    opening_hours: Optional[LegacyOpeningHours] = None
    price_level: Optional[int] = Field(default=None, ge=0, le=4)
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    business_status: Optional[str] = None


def _place_shape(value) -> str | None:
    if isinstance(value, dict):
        if "place_id" in value or "geometry" in value:
            return "legacy"
        if "id" in value or "location" in value:
            return "new"
        return None
    if isinstance(value, LegacyPlace):
        return "legacy"
    if isinstance(value, NewPlace):
        return "new"
    return None


RawPlace = Annotated[
    Union[
        Annotated[NewPlace, Tag("new")],
        Annotated[LegacyPlace, Tag("legacy")],
    ],
    Discriminator(_place_shape),
]

raw_place_adapter = TypeAdapter(RawPlace)


# --- Place details ---

PriceLevel = Literal[
    "PRICE_LEVEL_UNSPECIFIED",
    "PRICE_LEVEL_FREE",
    "PRICE_LEVEL_INEXPENSIVE",
    "PRICE_LEVEL_MODERATE",
    "PRICE_LEVEL_EXPENSIVE",
    "PRICE_LEVEL_VERY_EXPENSIVE",
]


class AuthorAttribution(BaseModel):
    displayName: Optional[str] = None
    uri: Optional[str] = None
    photoUri: Optional[str] = None


class Review(BaseModel):
    name: str
    rating: float
    relativePublishTimeDescription: Optional[str] = None
    text: Optional[TextValue] = None
    originalText: Optional[TextValue] = None
    authorAttribution: Optional[AuthorAttribution] = None
    publishTime: Optional[str] = None
    flagContentUri: Optional[str] = None
    googleMapsUri: Optional[str] = None


class GenerativeSummary(BaseModel):
    overview: Optional[TextValue] = None


class DetailsDocument(BaseModel):
    """Validated body of ``GET /places/{id}``."""
    model_config = ConfigDict(extra="ignore")

    name: str
    rating: float
    userRatingCount: int
    reviews: List[Review] = []
    priceLevel: PriceLevel = "PRICE_LEVEL_UNSPECIFIED"
    currentOpeningHours: Optional[OpeningHours] = None
    displayName: Optional[TextValue] = None
    primaryTypeDisplayName: Optional[TextValue] = None
    takeout: Optional[bool] = None
    delivery: Optional[bool] = None
    dineIn: Optional[bool] = None
    editorialSummary: Optional[TextValue] = None
    outdoorSeating: Optional[bool] = None
    liveMusic: Optional[bool] = None
    menuForChildren: Optional[bool] = None
    servesDessert: Optional[bool] = None
    servesCoffee: Optional[bool] = None
    goodForChildren: Optional[bool] = None
    goodForGroups: Optional[bool] = None
    allowsDogs: Optional[bool] = None
    restroom: Optional[bool] = None
    paymentOptions: Optional[PaymentOptions] = None
    generativeSummary: Optional[GenerativeSummary] = None
    location: Optional[LatLng] = None
    formattedAddress: Optional[str] = None


# --- Photos ---

class PhotoReference(BaseModel):
    name: str
    widthPx: Optional[int] = None
    heightPx: Optional[int] = None


class PhotoMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    photos: List[PhotoReference] = []
