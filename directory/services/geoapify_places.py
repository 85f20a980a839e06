"""Geoapify Places adapter."""
import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from directory.config import settings
from directory.errors import MissingCredentialError, ProviderRequestError
from directory.models.places import Address, CategoryMapping, Poi
from directory.services.backends import fetch_json, filter_by_query, open_client, require_api_key
from directory.utils.geo import has_location, miles_to_meters

logger = logging.getLogger(__name__)

PLACES_URL = "https://api.geoapify.com/v2/places"
AUTOCOMPLETE_URL = "https://api.geoapify.com/v1/geocode/autocomplete"

DEFAULT_CATEGORIES = "catering,commercial,service,entertainment,leisure,accommodation,amenity"
MAX_RADIUS_METERS = 10_000


def default_category_mappings() -> List[CategoryMapping]:
    """Search labels that translate directly into Geoapify categories."""
    return [
        CategoryMapping(
            labels=frozenset({"gas stations", "gas station", "fuel"}),
            provider_categories="commercial.gas,service.vehicle.fuel",
        ),
        CategoryMapping(
            labels=frozenset({"restaurants", "restaurant", "food"}),
            provider_categories="catering.restaurant",
        ),
        CategoryMapping(
            labels=frozenset({"entertainment"}),
            provider_categories="entertainment",
        ),
        CategoryMapping(
            labels=frozenset({"coffee", "coffee shops", "coffee shop", "cafe", "cafes"}),
            provider_categories="catering.cafe",
        ),
        CategoryMapping(
            labels=frozenset({"shopping", "shops", "store", "stores"}),
            provider_categories="commercial",
        ),
        CategoryMapping(
            labels=frozenset({"hotels", "hotel", "lodging"}),
            provider_categories="accommodation.hotel",
        ),
    ]


class GeoapifyPlacesBackend:
    """Searches places with the Geoapify Places API."""

    name = "geoapify"

    def __init__(
        self,
        api_key: Optional[str] = None,
        search_radius_miles: float = settings.default_search_radius_miles,
        top_level_category: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.geoapify_api_key
        self.search_radius_miles = search_radius_miles
        # Top-level Geoapify category chosen by the user, e.g. "catering"
        self.top_level_category = top_level_category if top_level_category and top_level_category.strip() else None
        self.category_mappings = default_category_mappings()
        self.client = client

    def map_query_to_categories(self, query: str) -> Optional[str]:
        """Return the categories of the first mapping whose label equals the query."""
        normalized = query.strip().lower()
        if not normalized:
            return None
        for mapping in self.category_mappings:
            if mapping.matches(normalized):
                return mapping.provider_categories
        return None

    def effective_categories(self, query: str) -> str:
        """Exact label mapping, then the user's top-level category, then the default set."""
        return (
            self.map_query_to_categories(query)
            or self.top_level_category
            or DEFAULT_CATEGORIES
        )

    def build_search_params(self, query: str, lat: float, lon: float, api_key: str) -> Dict[str, Any]:
        trimmed_query = query.strip()
        mapped_categories = self.map_query_to_categories(trimmed_query)
        params: Dict[str, Any] = {
            "apiKey": api_key,
            "categories": self.effective_categories(trimmed_query),
            "limit": settings.places_result_limit,
        }
        if trimmed_query and mapped_categories is None:
            params["name"] = trimmed_query
        if has_location(lat, lon):
            radius_meters = miles_to_meters(self.search_radius_miles, MAX_RADIUS_METERS)
            params["filter"] = f"circle:{lon},{lat},{radius_meters}"
            params["bias"] = f"proximity:{lon},{lat}"
        return params

    async def search(self, query: str, lat: float, lon: float) -> List[Poi]:
        """
        Search Geoapify for places near (lat, lon).

        Results of free-text searches are narrowed locally to places whose
        name or description contains the query; label-mapped and empty
        queries are returned as the provider sent them.
        """
        try:
            api_key = require_api_key("Geoapify", self.api_key)
            trimmed_query = query.strip()
            params = self.build_search_params(trimmed_query, lat, lon, api_key)

            http_start = time.monotonic()
            async with open_client(self.client) as client:
                data = await fetch_json(client, "GET", PLACES_URL, params=params)
            http_ms = int((time.monotonic() - http_start) * 1000)

            features = data.get("features") or []
            logger.debug(
                f"search query='{trimmed_query}' lat={lat} lon={lon} "
                f"categories='{params['categories']}' top_level='{self.top_level_category}' "
                f"features={len(features)} httpMs={http_ms}"
            )

            pois = [poi for poi in (self._map_feature(feature) for feature in features) if poi]
            if self.map_query_to_categories(trimmed_query) is not None or not trimmed_query:
                return pois
            return filter_by_query(pois, trimmed_query)
        except asyncio.CancelledError:
            logger.debug("Geoapify search cancelled")
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except ProviderRequestError as exc:
            logger.error(f"Error searching Geoapify places: {exc}")
            return []
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error(f"Unexpected Geoapify places payload: {exc!r}")
            return []

    async def autocomplete(self, query: str) -> List[str]:
        """Return formatted address suggestions for partially typed text."""
        try:
            api_key = require_api_key("Geoapify", self.api_key)
            async with open_client(self.client) as client:
                data = await fetch_json(
                    client,
                    "GET",
                    AUTOCOMPLETE_URL,
                    params={"apiKey": api_key, "text": query},
                )
            return [
                feature["properties"]["formatted"]
                for feature in data.get("features") or []
                if (feature.get("properties") or {}).get("formatted")
            ]
        except asyncio.CancelledError:
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except (ProviderRequestError, AttributeError, KeyError, TypeError) as exc:
            logger.error(f"Error getting Geoapify autocomplete: {exc}")
            return []

    def _map_feature(self, feature: Dict[str, Any]) -> Optional[Poi]:
        props = feature.get("properties") or {}
        name = props.get("name") or props.get("street")
        if not name:
            return None

        street = " ".join(part for part in (props.get("street"), props.get("housenumber")) if part)
        contact = props.get("contact") or {}

        coordinates = (feature.get("geometry") or {}).get("coordinates") or []
        lng = coordinates[0] if len(coordinates) > 0 else None
        lat = coordinates[1] if len(coordinates) > 1 else None

        # OSM opening_hours, e.g. "Mo-Fr 09:00-17:00; Sa 10:00-14:00"
        opening_hours = props.get("opening_hours") or ""
        hours = [part.strip() for part in opening_hours.split(";") if part.strip()]

        return Poi(
            name=name,
            address=Address(
                street=street,
                city=props.get("city") or "",
                state=props.get("state") or "",
                zip=props.get("postcode") or "",
                country=props.get("country") or "",
            ),
            hours=hours,
            phone=props.get("phone") or contact.get("phone"),
            description=", ".join(props.get("categories") or []),
            website=props.get("website") or contact.get("website"),
            lat=lat,
            lng=lng,
        )
