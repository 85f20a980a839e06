"""HERE Discover adapter."""
import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from directory.config import settings
from directory.errors import MissingCredentialError, ProviderRequestError
from directory.models.places import Address, Poi
from directory.services.backends import fetch_json, open_client, require_api_key
from directory.utils.geo import distance_meters, has_location, miles_to_meters

logger = logging.getLogger(__name__)

DISCOVER_URL = "https://discover.search.hereapi.com/v1/discover"
GEOCODE_URL = "https://geocode.search.hereapi.com/v1/geocode"

MAX_RADIUS_METERS = 50_000
AUTOCOMPLETE_LIMIT = 5


def resolve_country(address: Dict[str, Any]) -> str:
    """
    Pick the country value for a HERE address.

    Two-letter codes are kept; for three-letter codes ("DEU") the readable
    country name is preferred so region inference can resolve it.
    """
    code = address.get("countryCode")
    name = address.get("countryName")
    if not code:
        return name or ""
    if len(code) == 2:
        return code
    return name or code


def compose_street(address: Dict[str, Any]) -> str:
    house_number = (address.get("houseNumber") or "").strip()
    street = (address.get("street") or "").strip()
    if house_number and street:
        return f"{house_number} {street}"
    return " ".join(part for part in (street, house_number) if part)


class HerePlacesBackend:
    """Searches places with the HERE Discover API."""

    name = "here"

    def __init__(
        self,
        api_key: Optional[str] = None,
        search_radius_miles: float = settings.default_search_radius_miles,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.here_api_key
        self.search_radius_miles = search_radius_miles
        self.client = client

    @property
    def radius_meters(self) -> int:
        return miles_to_meters(self.search_radius_miles, MAX_RADIUS_METERS)

    async def search(self, query: str, lat: float, lon: float) -> List[Poi]:
        """
        Search HERE for places near (lat, lon).

        HERE treats the radius as a hint, so every result is checked against
        it afterwards and flagged with ``is_outside_search_radius`` instead of
        being dropped.
        """
        try:
            api_key = require_api_key("HERE", self.api_key)
            trimmed_query = query.strip() or "*"
            radius_meters = self.radius_meters

            params: Dict[str, Any] = {"apiKey": api_key, "q": trimmed_query}
            if has_location(lat, lon):
                params["at"] = f"{lat},{lon}"
                params["radius"] = radius_meters
            params["limit"] = settings.places_result_limit

            http_start = time.monotonic()
            async with open_client(self.client) as client:
                data = await fetch_json(client, "GET", DISCOVER_URL, params=params)
            http_ms = int((time.monotonic() - http_start) * 1000)

            items = data.get("items") or []
            logger.debug(
                f"search query='{trimmed_query}' lat={lat} lon={lon} "
                f"radiusMeters={radius_meters} items={len(items)} httpMs={http_ms}"
            )

            pois = []
            for item in items:
                poi = self._map_item(item, lat, lon, radius_meters)
                if poi:
                    pois.append(poi)
            return pois
        except asyncio.CancelledError:
            logger.debug("HERE search cancelled")
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except ProviderRequestError as exc:
            logger.error(f"Error searching HERE places: {exc}")
            return []
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error(f"Unexpected HERE discover payload: {exc!r}")
            return []

    async def autocomplete(self, query: str) -> List[str]:
        """Return geocoded labels for partially typed text."""
        trimmed_query = query.strip()
        try:
            api_key = require_api_key("HERE", self.api_key)
            if not trimmed_query:
                return []
            async with open_client(self.client) as client:
                data = await fetch_json(
                    client,
                    "GET",
                    GEOCODE_URL,
                    params={"apiKey": api_key, "q": trimmed_query, "limit": AUTOCOMPLETE_LIMIT},
                )
            suggestions = []
            for item in data.get("items") or []:
                label = item.get("title") or (item.get("address") or {}).get("label")
                if label:
                    suggestions.append(label)
            return suggestions
        except asyncio.CancelledError:
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except (ProviderRequestError, AttributeError, KeyError, TypeError) as exc:
            logger.error(f"Error getting HERE autocomplete: {exc}")
            return []

    def _map_item(
        self,
        item: Dict[str, Any],
        origin_lat: float,
        origin_lon: float,
        radius_meters: int,
    ) -> Optional[Poi]:
        title = item.get("title")
        if not title:
            return None

        addr = item.get("address") or {}

        hours: List[str] = []
        for opening_hours in item.get("openingHours") or []:
            for line in opening_hours.get("text") or []:
                line = line.strip()
                if line and line not in hours:
                    hours.append(line)

        position = item.get("position") or {}
        item_lat = position.get("lat")
        item_lng = position.get("lng")

        is_outside_radius = False
        if has_location(origin_lat, origin_lon) and item_lat is not None and item_lng is not None:
            distance = distance_meters(origin_lat, origin_lon, item_lat, item_lng)
            is_outside_radius = distance > radius_meters

        contacts = item.get("contacts") or []
        first_contact = contacts[0] if contacts else {}

        return Poi(
            name=title,
            address=Address(
                street=compose_street(addr),
                city=addr.get("city") or "",
                state=addr.get("state") or "",
                zip=addr.get("postalCode") or "",
                country=resolve_country(addr),
            ),
            hours=hours,
            phone=_first_value(first_contact.get("phone")),
            description=", ".join(
                category.get("name") or "" for category in item.get("categories") or []
            ),
            website=_first_value(first_contact.get("www")),
            lat=item_lat,
            lng=item_lng,
            is_outside_search_radius=is_outside_radius,
        )


def _first_value(entries: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    if not entries:
        return None
    return entries[0].get("value")
