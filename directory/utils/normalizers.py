"""
Display normalizers for places.

Providers hand us raw strings: streets with the house number last, phone
numbers with a "tel:" prefix, 24-hour ranges. These helpers turn a Poi into
the strings the client shows on the place detail view, regardless of which
provider the Poi came from.
"""

from typing import List

from directory.models.places import Poi, PoiDetails
from directory.utils.address import format_address, normalize_street_in_address
from directory.utils.hours import format_hours
from directory.utils.phone import (
    dial_uri,
    format_phone_number_for_dial,
    format_phone_number_for_display,
)


def normalize_poi_details(poi: Poi) -> PoiDetails:
    """
    Build the display projection of a place.

    - address_text: house number first, reflowed onto multiple lines
    - display_phone / dial_phone: national and E.164 forms for the place's country
    - hours: each line converted to 12-hour times
    - map_query: "lat,lng" when the provider gave coordinates
    """
    address_line = poi.address.one_line()
    address_text = format_address(normalize_street_in_address(address_line)) if address_line else ""

    country = poi.address.country or None

    map_query = None
    if poi.lat is not None and poi.lng is not None:
        map_query = f"{poi.lat},{poi.lng}"

    return PoiDetails(
        poi=poi,
        address_text=address_text,
        display_phone=format_phone_number_for_display(poi.phone, country),
        dial_phone=format_phone_number_for_dial(poi.phone, country),
        dial_uri=dial_uri(poi.phone, country),
        hours=[format_hours(line) for line in poi.hours],
        map_query=map_query,
    )


def normalize_pois(pois: List[Poi]) -> List[PoiDetails]:
    """Normalize a list of places."""
    if not pois:
        return []
    return [normalize_poi_details(poi) for poi in pois]
