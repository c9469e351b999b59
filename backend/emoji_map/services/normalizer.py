"""
Maps upstream places of either shape onto ``NormalizedPlace``.

A place is kept only when one of the requested keywords appears in its
searchable fields and that keyword resolves to a category with an emoji.
"""
import logging

from pydantic import ValidationError

from emoji_map.core.categories import CATEGORY_BY_NAME, get_category
from emoji_map.core.logger import logs
from emoji_map.models.google_model import LegacyPlace, NewPlace, raw_place_adapter
from emoji_map.models.places_model import Category, Location, NormalizedPlace
from emoji_map.services.text_query import get_primary_category_for_related_word

PRICE_LEVELS = {
    "PRICE_LEVEL_FREE": 1,
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}

LEGACY_PRICE_LEVELS = {0: 1, 1: 1, 2: 2, 3: 3, 4: 4}


def map_price_level(price_level) -> int | None:
    """Ordinal 1-4. Free counts as 1; unspecified or unknown is None."""
    if isinstance(price_level, str):
        return PRICE_LEVELS.get(price_level)
    if isinstance(price_level, int):
        return LEGACY_PRICE_LEVELS.get(price_level)
    return None


def is_free_price(price_level) -> bool:
    return price_level == "PRICE_LEVEL_FREE" or price_level == 0


def decode_place(raw) -> NewPlace | LegacyPlace:
    """Raises ``pydantic.ValidationError`` for unknown or incomplete shapes."""
    return raw_place_adapter.validate_python(raw)


def searchable_fields(place: NewPlace | LegacyPlace) -> list[str]:
    """Lower-cased field values in match priority order."""
    if isinstance(place, LegacyPlace):
        fields = [*place.types, place.name, place.vicinity]
    else:
        # v1 "name" is the resource path, not something a keyword should hit
        resource_name = place.name if place.name and not place.name.startswith("places/") else None
        fields = [
            place.primaryType,
            *place.types,
            place.primaryTypeDisplayName.text if place.primaryTypeDisplayName else None,
            place.displayName.text if place.displayName else None,
            resource_name,
            place.formattedAddress,
        ]
    return [f.lower() for f in fields if f]


def find_matching_keyword(place: NewPlace | LegacyPlace, keywords: list[str]) -> str | None:
    """First keyword, in request order, found in any searchable field."""
    fields = searchable_fields(place)
    for keyword in keywords:
        needle = keyword.lower()
        if any(needle in field for field in fields):
            return keyword
    return None


def resolve_category(keyword: str, keys: list[int] | None = None) -> Category | None:
    """
    Category for a matched keyword: an exact category name wins, then a
    requested category listing the keyword, then the first one in the map.
    """
    keyword = keyword.lower().strip()
    if keyword in CATEGORY_BY_NAME:
        return CATEGORY_BY_NAME[keyword]

    for key in keys or []:
        category = get_category(key)
        if category and keyword in category.keywords:
            return category

    name = get_primary_category_for_related_word(keyword)
    return CATEGORY_BY_NAME.get(name) if name else None


def _new_place_fields(place: NewPlace) -> dict:
    payment = place.paymentOptions
    parking = place.parkingOptions
    access = place.accessibilityOptions
    display_name = place.displayName.text if place.displayName else None

    return {
        "id": place.id,
        "name": display_name or place.name or "",
        "location": Location(latitude=place.location.latitude, longitude=place.location.longitude),
        "priceLevel": map_price_level(place.priceLevel),
        "isFree": is_free_price(place.priceLevel),
        "openNow": place.currentOpeningHours.openNow if place.currentOpeningHours else None,
        "rating": place.rating,
        "userRatingCount": place.userRatingCount,
        "formattedAddress": place.formattedAddress,
        "displayName": display_name,
        "primaryType": place.primaryType,
        "primaryTypeDisplayName": place.primaryTypeDisplayName.text if place.primaryTypeDisplayName else None,
        "businessStatus": place.businessStatus,
        "googleMapsUri": place.googleMapsUri,
        "websiteUri": place.websiteUri,
        "takeout": place.takeout,
        "delivery": place.delivery,
        "dineIn": place.dineIn,
        "servesBeer": place.servesBeer,
        "servesWine": place.servesWine,
        "servesCocktails": place.servesCocktails,
        "servesDessert": place.servesDessert,
        "servesCoffee": place.servesCoffee,
        "outdoorSeating": place.outdoorSeating,
        "liveMusic": place.liveMusic,
        "menuForChildren": place.menuForChildren,
        "allowsDogs": place.allowsDogs,
        "restroom": place.restroom,
        "goodForWatchingSports": place.goodForWatchingSports,
        "acceptsCreditCards": payment.acceptsCreditCards if payment else None,
        "acceptsCashOnly": payment.acceptsCashOnly if payment else None,
        "valetParking": parking.valetParking if parking else None,
        "wheelchairAccessibleEntrance": access.wheelchairAccessibleEntrance if access else None,
        "wheelchairAccessibleSeating": access.wheelchairAccessibleSeating if access else None,
    }


def _legacy_place_fields(place: LegacyPlace) -> dict:
    return {
        "id": place.place_id,
        "name": place.name or "",
        "location": Location(latitude=place.geometry.location.lat, longitude=place.geometry.location.lng),
        "priceLevel": map_price_level(place.price_level),
        "isFree": is_free_price(place.price_level),
        "openNow": place.opening_hours.open_now if place.opening_hours else None,
        "rating": place.rating,
        "userRatingCount": place.user_ratings_total,
        "formattedAddress": place.vicinity,
        "displayName": place.name,
        "primaryType": place.types[0] if place.types else None,
        "businessStatus": place.business_status,
    }


def place_id(place: NewPlace | LegacyPlace) -> str:
    return place.place_id if isinstance(place, LegacyPlace) else place.id


def normalize_place(
    place: NewPlace | LegacyPlace,
    keywords: list[str],
    keys: list[int] | None = None,
    stats: dict | None = None,
) -> NormalizedPlace | None:
    """The normalized place, or None when it is filtered out."""
    stats = stats if stats is not None else {}

    keyword = find_matching_keyword(place, keywords)
    if keyword is None:
        stats["noKeywordMatch"] = stats.get("noKeywordMatch", 0) + 1
        return None

    category = resolve_category(keyword, keys)
    if category is None or not category.emoji:
        stats["noEmoji"] = stats.get("noEmoji", 0) + 1
        logs.log(
            logging.ERROR,
            "No emoji configured for matched keyword, dropping place",
            {"keyword": keyword, "place_id": place_id(place)},
        )
        return None

    fields = _legacy_place_fields(place) if isinstance(place, LegacyPlace) else _new_place_fields(place)
    return NormalizedPlace(
        **fields,
        category=keyword,
        categoryKey=category.key,
        emoji=category.emoji,
    )


def normalize_places(raw_places, keywords: list[str], keys: list[int] | None = None) -> tuple[list[NormalizedPlace], dict]:
    """
    Decode and normalize a batch of raw places, preserving order.
    Returns the kept places and a count of why the others were dropped.
    """
    stats = {"invalidShape": 0, "noKeywordMatch": 0, "noEmoji": 0}
    results = []

    for raw in raw_places:
        try:
            place = decode_place(raw)
        except ValidationError as e:
            stats["invalidShape"] += 1
            logs.log(logging.WARNING, "Skipping upstream place with unknown shape", {"errors": e.error_count()})
            continue

        normalized = normalize_place(place, keywords, keys, stats)
        if normalized is not None:
            results.append(normalized)

    logs.log(logging.INFO, f"Normalized {len(results)} of {len(raw_places)} places", stats)
    return results, stats
