"""Google Places (Text Search) adapter."""
import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from directory.config import settings
from directory.errors import MissingCredentialError, ProviderRequestError
from directory.models.places import Address, Poi
from directory.services.backends import fetch_json, open_client, require_api_key
from directory.utils.geo import has_location, miles_to_meters

logger = logging.getLogger(__name__)

BASE_URL = "https://places.googleapis.com/v1"

SEARCH_FIELD_MASK = ",".join([
    "places.displayName",
    "places.addressComponents",
    "places.nationalPhoneNumber",
    "places.internationalPhoneNumber",
    "places.websiteUri",
    "places.regularOpeningHours.weekdayDescriptions",
    "places.types",
    "places.location",
])

MAX_RESULTS = 20
MAX_RADIUS_METERS = 50_000


def _component(components: List[Dict[str, Any]], kind: str, short: bool = False) -> str:
    for component in components:
        if kind in (component.get("types") or []):
            value = component.get("shortText" if short else "longText")
            return value or ""
    return ""


class GooglePlacesBackend:
    """Searches places with the Google Places API Text Search."""

    name = "google"

    def __init__(
        self,
        api_key: Optional[str] = None,
        search_radius_miles: float = settings.default_search_radius_miles,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_places_api_key
        self.base_url = BASE_URL
        self.search_radius_miles = search_radius_miles
        self.client = client

    def _headers(self, api_key: str, field_mask: Optional[str] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json", "X-Goog-Api-Key": api_key}
        if field_mask:
            headers["X-Goog-FieldMask"] = field_mask
        return headers

    async def search(self, query: str, lat: float, lon: float) -> List[Poi]:
        """Text search biased towards (lat, lon) when a location is given."""
        try:
            api_key = require_api_key("Google Places", self.api_key)
            trimmed_query = query.strip()
            if not trimmed_query:
                return []

            body: Dict[str, Any] = {"textQuery": trimmed_query, "maxResultCount": MAX_RESULTS}
            if has_location(lat, lon):
                body["locationBias"] = {
                    "circle": {
                        "center": {"latitude": lat, "longitude": lon},
                        "radius": float(miles_to_meters(self.search_radius_miles, MAX_RADIUS_METERS)),
                    }
                }

            http_start = time.monotonic()
            async with open_client(self.client) as client:
                data = await fetch_json(
                    client,
                    "POST",
                    f"{self.base_url}/places:searchText",
                    json=body,
                    headers=self._headers(api_key, SEARCH_FIELD_MASK),
                )
            http_ms = int((time.monotonic() - http_start) * 1000)

            places = data.get("places") or []
            logger.debug(
                f"search query='{trimmed_query}' lat={lat} lon={lon} "
                f"places={len(places)} httpMs={http_ms}"
            )
            return [poi for poi in (self._map_place(place) for place in places) if poi]
        except asyncio.CancelledError:
            logger.debug("Google Places search cancelled")
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except ProviderRequestError as exc:
            logger.error(f"Error searching Google places: {exc}")
            return []
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error(f"Unexpected Google Places payload: {exc!r}")
            return []

    async def autocomplete(self, query: str) -> List[str]:
        """Return prediction texts for partially typed input."""
        try:
            api_key = require_api_key("Google Places", self.api_key)
            if not query.strip():
                return []
            async with open_client(self.client) as client:
                data = await fetch_json(
                    client,
                    "POST",
                    f"{self.base_url}/places:autocomplete",
                    json={"input": query.strip()},
                    headers=self._headers(api_key),
                )
            suggestions = []
            for suggestion in data.get("suggestions") or []:
                prediction = suggestion.get("placePrediction") or suggestion.get("queryPrediction") or {}
                text = (prediction.get("text") or {}).get("text")
                if text:
                    suggestions.append(text)
            return suggestions
        except asyncio.CancelledError:
            raise
        except MissingCredentialError as exc:
            logger.error(str(exc))
            return []
        except (ProviderRequestError, AttributeError, KeyError, TypeError) as exc:
            logger.error(f"Error getting Google autocomplete: {exc}")
            return []

    def _map_place(self, place: Dict[str, Any]) -> Optional[Poi]:
        components = place.get("addressComponents") or []
        street = " ".join(
            part for part in (
                _component(components, "street_number"),
                _component(components, "route"),
            ) if part
        )
        name = (place.get("displayName") or {}).get("text") or street
        if not name:
            return None

        location = place.get("location") or {}
        hours = (place.get("regularOpeningHours") or {}).get("weekdayDescriptions") or []

        return Poi(
            name=name,
            address=Address(
                street=street,
                city=_component(components, "locality") or _component(components, "postal_town"),
                state=_component(components, "administrative_area_level_1", short=True),
                zip=_component(components, "postal_code"),
                country=_component(components, "country", short=True),
            ),
            hours=[line.strip() for line in hours if line and line.strip()],
            phone=place.get("nationalPhoneNumber") or place.get("internationalPhoneNumber"),
            description=", ".join(place.get("types") or []),
            website=place.get("websiteUri"),
            lat=location.get("latitude"),
            lng=location.get("longitude"),
        )
