"""
Geocoding Router
Forward and reverse geocoding through Nominatim.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from directory.dependencies import get_geocoder
from directory.models.places import Origin
from directory.services.nominatim_geocoding import NominatimGeocodingService

router = APIRouter(prefix="/geocoding", tags=["geocoding"])
logger = logging.getLogger(__name__)


@router.get("/reverse")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
    geocoder: NominatimGeocodingService = Depends(get_geocoder),
):
    """
    Convert coordinates to a display address.

    Returns ``{"address": null}`` when Nominatim has no answer.
    """
    address = await geocoder.reverse_geocode(lat, lon)
    return {"address": address}


@router.get("/search", response_model=Origin)
async def geocode(
    q: str = Query(..., min_length=1, description="Place name, e.g. 'Springfield, IL'"),
    geocoder: NominatimGeocodingService = Depends(get_geocoder),
):
    """
    Resolve a place name to coordinates (first match only).

    Raises:
        HTTPException: 404 if nothing matched
    """
    coordinates = await geocoder.geocode(q)
    if coordinates is None:
        logger.info(f"No geocoding match for '{q}'")
        raise HTTPException(status_code=404, detail="Location not found")
    return Origin(lat=coordinates[0], lon=coordinates[1])
