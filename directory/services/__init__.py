"""
Places providers, geocoding, preferences and search sessions.

Each provider adapter implements the ``PlacesBackend`` protocol; use
``build_places_backend`` to get the one configured for a user.
"""

from .backends import PlacesBackend, build_places_backend
from .geoapify_places import GeoapifyPlacesBackend
from .google_places import GooglePlacesBackend
from .here_places import HerePlacesBackend
from .nominatim_geocoding import NominatimGeocodingService, geocoding_service
from .search_session import SearchPhase, SearchSession, resolve_origin

__all__ = [
    "PlacesBackend",
    "build_places_backend",
    "GeoapifyPlacesBackend",
    "GooglePlacesBackend",
    "HerePlacesBackend",
    "NominatimGeocodingService",
    "geocoding_service",
    "SearchPhase",
    "SearchSession",
    "resolve_origin",
]
