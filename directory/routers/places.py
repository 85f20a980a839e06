"""Places API router: search, autocomplete and display formatting."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from directory.dependencies import get_geocoder, get_places_backend, get_preferences
from directory.models.places import (
    AutocompleteResponse,
    Origin,
    PhoneFormatResponse,
    Poi,
    PoiDetails,
    SearchResponse,
)
from directory.models.preferences import Preferences
from directory.services.backends import PlacesBackend
from directory.services.location import NullLocationProvider
from directory.services.nominatim_geocoding import NominatimGeocodingService
from directory.services.search_session import resolve_origin
from directory.utils.normalizers import normalize_poi_details
from directory.utils.phone import (
    dial_uri,
    format_phone_number_for_dial,
    format_phone_number_for_display,
)
from directory.utils.regions import infer_region_code

router = APIRouter(prefix="/places", tags=["places"])
logger = logging.getLogger(__name__)


@router.get("/search", response_model=SearchResponse)
async def search_places(
    q: str = Query("", description="Search text or category label"),
    lat: Optional[float] = Query(None, description="Origin latitude"),
    lon: Optional[float] = Query(None, description="Origin longitude"),
    backend: PlacesBackend = Depends(get_places_backend),
    preferences: Preferences = Depends(get_preferences),
    geocoder: NominatimGeocodingService = Depends(get_geocoder),
):
    """
    Search places with the active provider.

    When lat/lon are omitted the origin comes from the user's preferences:
    the default location is geocoded, and a device location cannot be known
    over plain HTTP so it yields no bias. A blank query returns no places
    without calling the provider.
    """
    if not q.strip():
        return SearchResponse(query=q, provider=backend.name)

    if lat is not None and lon is not None:
        origin = (lat, lon)
    else:
        origin = await resolve_origin(preferences, NullLocationProvider(), geocoder)

    places = await backend.search(q, origin[0], origin[1])
    logger.info(f"search provider={backend.name} query='{q}' results={len(places)}")

    return SearchResponse(
        query=q,
        provider=backend.name,
        origin=Origin(lat=origin[0], lon=origin[1]),
        places=places,
        total=len(places),
    )


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete_places(
    q: str = Query(..., description="Partially typed text"),
    backend: PlacesBackend = Depends(get_places_backend),
):
    """Autocomplete suggestions from the active provider."""
    suggestions = await backend.autocomplete(q)
    return AutocompleteResponse(query=q, suggestions=suggestions)


@router.post("/details", response_model=PoiDetails)
async def place_details(poi: Poi):
    """Format a place for the detail view (address lines, phone, 12-hour hours)."""
    return normalize_poi_details(poi)


@router.get("/format/phone", response_model=PhoneFormatResponse)
async def format_phone(
    phone: str = Query(..., description="Raw phone number, tel: prefix allowed"),
    country: Optional[str] = Query(None, description="Country code or name of the place"),
):
    """Format a phone number for display and dialing."""
    return PhoneFormatResponse(
        phone=phone,
        region=infer_region_code(country),
        display=format_phone_number_for_display(phone, country),
        dial=format_phone_number_for_dial(phone, country),
        dial_uri=dial_uri(phone, country),
    )
