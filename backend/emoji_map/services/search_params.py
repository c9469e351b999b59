"""
Turns raw query strings into typed search parameters.

Every extractor accepts a multi-valued mapping (Starlette ``QueryParams`` in
the routes) and raises ``MissingParameterError`` / ``InvalidParameterError``
on bad input.
"""
import logging
import math

from emoji_map.core.categories import VALID_KEYS, get_valid_keys
from emoji_map.core.config import settings
from emoji_map.core.errors import InvalidParameterError, MissingParameterError
from emoji_map.core.logger import logs
from emoji_map.models.places_model import (
    DetailsSearchParams,
    NearbySearchParams,
    PhotosSearchParams,
)
from emoji_map.utils.geo import is_valid_location


def parse_bypass_cache(params) -> bool:
    """True for a bare flag, an empty value, or any casing of "true"."""
    if "bypassCache" not in params:
        return False
    value = params.get("bypassCache") or ""
    return value == "" or value.strip().lower() == "true"


def parse_open_now(params) -> bool | None:
    value = params.get("openNow")
    if value is None:
        return None
    return value.strip().lower() == "true"


def parse_optional_int(params, field: str) -> int | None:
    """
    Coerce ``field`` to an int. Absent or non-numeric values give None so
    callers can tell "not specified" apart from an explicit zero. Negative
    values are rejected.
    """
    raw = params.get(field)
    if raw is None or not raw.strip():
        return None

    try:
        number = float(raw)
    except ValueError:
        logs.log(logging.DEBUG, f"Ignoring non-numeric {field}", {"value": raw})
        return None
    if not math.isfinite(number):
        return None

    value = int(number)
    if value < 0:
        raise InvalidParameterError(field)
    return value


def parse_keys(params) -> list[int]:
    """Known category keys, deduplicated. No usable key means every key."""
    keys = []
    for raw in params.getlist("key"):
        try:
            keys.append(int(raw))
        except ValueError:
            continue

    valid = get_valid_keys(keys)
    return valid or list(VALID_KEYS)


def _required(params, field: str) -> str:
    value = params.get(field)
    if value is None or not value.strip():
        raise MissingParameterError(field)
    return value.strip()


def get_nearby_search_params(params) -> NearbySearchParams:
    location = _required(params, "location")
    if not is_valid_location(location):
        raise InvalidParameterError("location")

    text_query = (params.get("textQuery") or "").strip() or None

    return NearbySearchParams(
        keys=parse_keys(params),
        location=location,
        bypassCache=parse_bypass_cache(params),
        openNow=parse_open_now(params),
        limit=parse_optional_int(params, "limit"),
        radiusMeters=parse_optional_int(params, "radiusMeters"),
        textQuery=text_query,
    )


def get_details_search_params(params) -> DetailsSearchParams:
    return DetailsSearchParams(
        id=_required(params, "id"),
        bypassCache=parse_bypass_cache(params),
    )


def get_photos_search_params(params) -> PhotosSearchParams:
    place_id = _required(params, "id")

    # Photos are forgiving: anything but a positive integer means the default
    try:
        limit = parse_optional_int(params, "limit")
    except InvalidParameterError:
        limit = None

    try:
        max_height = parse_optional_int(params, "maxHeight")
    except InvalidParameterError:
        max_height = None

    return PhotosSearchParams(
        id=place_id,
        bypassCache=parse_bypass_cache(params),
        limit=limit or settings.PHOTOS_DEFAULT_LIMIT,
        maxHeight=min(max_height or settings.PHOTOS_DEFAULT_MAX_HEIGHT, settings.PHOTOS_MAX_HEIGHT_LIMIT),
    )
