"""Helpers for "lat,lng" location strings."""

MAX_RADIUS_METERS = 50000


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def is_valid_location(location: str | None) -> bool:
    """
    A location is a comma separated pair with both sides present and at
    least one side numeric. ``"custom,-74.0060"`` is accepted.
    """
    if not location or "," not in location:
        return False

    lat, lng = location.split(",", 1)
    lat, lng = lat.strip(), lng.strip()
    if not lat or not lng:
        return False

    return _is_number(lat) or _is_number(lng)


def parse_location(location: str) -> tuple[float, float] | None:
    """Both coordinates as floats, or None when either side is not numeric."""
    if not is_valid_location(location):
        return None
    lat, lng = location.split(",", 1)
    try:
        return float(lat), float(lng)
    except ValueError:
        return None


def round_coordinate(value: float, decimals: int = 4) -> float:
    return round(value, decimals)


def normalize_location(location: str, decimals: int = 4) -> str | None:
    """
    Rounds both coordinates so GPS jitter collapses onto one string.
    Non-numeric sides are kept as given.
    """
    if not is_valid_location(location):
        return None

    parts = []
    for part in location.split(",", 1):
        part = part.strip()
        if _is_number(part):
            parts.append(f"{round_coordinate(float(part), decimals):.{decimals}f}")
        else:
            parts.append(part)
    return ",".join(parts)


def clamp_radius(radius_meters: int) -> int:
    return min(max(radius_meters, 1), MAX_RADIUS_METERS)


def create_location_bias(location: str, radius_meters: int) -> dict | None:
    coords = parse_location(location)
    if coords is None:
        return None

    radius = clamp_radius(radius_meters)
    return {
        "circle": {
            "center": {"latitude": coords[0], "longitude": coords[1]},
            "radius": float(radius),
        }
    }
