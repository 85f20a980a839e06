"""Pydantic models shared by routers and services."""

from directory.models.places import (
    Address,
    AutocompleteResponse,
    CategoryMapping,
    Origin,
    PhoneFormatResponse,
    Poi,
    PoiDetails,
    SearchResponse,
)
from directory.models.preferences import Preferences

__all__ = [
    "Address",
    "AutocompleteResponse",
    "CategoryMapping",
    "Origin",
    "PhoneFormatResponse",
    "Poi",
    "PoiDetails",
    "Preferences",
    "SearchResponse",
]
