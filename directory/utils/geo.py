"""Geographic helpers."""
from math import atan2, cos, radians, sin, sqrt

EARTH_RADIUS_METERS = 6_371_000.0
METERS_PER_MILE = 1609


def has_location(lat: float, lon: float) -> bool:
    """(0, 0) stands for "no location bias", not a real coordinate."""
    return lat != 0.0 or lon != 0.0


def miles_to_meters(miles: float, cap: int) -> int:
    """Convert a radius in miles to whole meters, capped at a provider limit."""
    return min(int(miles * METERS_PER_MILE), cap)


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters using the Haversine formula."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_METERS * c
