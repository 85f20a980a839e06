"""Dependencies for FastAPI routes."""
from fastapi import Depends, Header, HTTPException, Query, status
from typing import Optional
import logging

from directory.models.preferences import Preferences
from directory.services.backends import PlacesBackend, build_places_backend
from directory.services.nominatim_geocoding import NominatimGeocodingService, geocoding_service
from directory.services.preferences_store import PreferencesStore, preferences_store

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "default"


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Identify whose preferences apply to a request.

    Clients send an opaque ``X-User-Id`` header; requests without one share
    the "default" preferences.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return DEFAULT_USER_ID


def get_preferences_store() -> PreferencesStore:
    return preferences_store


def get_geocoder() -> NominatimGeocodingService:
    return geocoding_service


async def get_preferences(
    user_id: str = Depends(get_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
) -> Preferences:
    """Latest preferences of the requesting user."""
    return await store.get_preferences(user_id)


def get_places_backend(
    provider: Optional[str] = Query(None, description="geoapify, here or google"),
    preferences: Preferences = Depends(get_preferences),
) -> PlacesBackend:
    """
    Build the places adapter for this request.

    Raises:
        HTTPException: 400 for an unknown requested provider, 500 when the
            configured one is unknown
    """
    try:
        return build_places_backend(provider, preferences)
    except ValueError as exc:
        if provider:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
        logger.error(f"Places provider misconfigured: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        )
