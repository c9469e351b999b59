from pydantic import BaseModel
from typing import List, Optional

from emoji_map.models.google_model import LatLng, PaymentOptions, Review

class Detail(BaseModel):
    name: str = ""
    reviews: List[Review] = []
    rating: float = 0
    priceLevel: Optional[int] = None
    isFree: bool = False
    userRatingCount: int = 0
    openNow: Optional[bool] = None
    displayName: str = ""
    primaryTypeDisplayName: str = ""
    takeout: bool = False
    delivery: bool = False
    dineIn: bool = False
    editorialSummary: str = ""
    outdoorSeating: bool = False
    liveMusic: bool = False
    menuForChildren: bool = False
    servesDessert: bool = False
    servesCoffee: bool = False
    goodForChildren: bool = False
    goodForGroups: bool = False
    allowsDogs: bool = False
    restroom: bool = False
    paymentOptions: PaymentOptions = PaymentOptions()
    generativeSummary: str = ""
    location: Optional[LatLng] = None
    formattedAddress: str = ""

class DetailsResponse(BaseModel):
    data: Detail
    count: int = 1
    cacheHit: bool

class PhotosResponse(BaseModel):
    data: List[str]
    count: int
    cacheHit: bool
