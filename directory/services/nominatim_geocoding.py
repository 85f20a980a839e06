"""
Geocoding helpers using OpenStreetMap Nominatim.

Used to turn the user's configured default location into search
coordinates, and coordinates back into a readable address.
"""
import asyncio
import logging
from typing import Optional, Tuple

import httpx

from directory.config import settings
from directory.errors import ProviderRequestError
from directory.services.backends import fetch_json, open_client

logger = logging.getLogger(__name__)


class NominatimGeocodingService:
    """Forward and reverse geocoding against a Nominatim instance."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.client = client

    def _headers(self):
        # Nominatim's usage policy requires an identifying User-Agent
        return {"Accept": "application/json", "User-Agent": self.user_agent}

    async def reverse_geocode(self, lat: float, lon: float) -> Optional[str]:
        """
        Reverse geocode a coordinate into Nominatim's display address.

        Returns None on network or parsing errors.
        """
        try:
            async with open_client(self.client) as client:
                data = await fetch_json(
                    client,
                    "GET",
                    f"{self.base_url}/reverse",
                    params={"format": "json", "lat": lat, "lon": lon},
                    headers=self._headers(),
                )
            return data.get("display_name")
        except asyncio.CancelledError:
            raise
        except (ProviderRequestError, AttributeError) as exc:
            logger.error(f"Reverse geocoding failed for {lat},{lon}: {exc}")
            return None

    async def geocode(self, location_name: str) -> Optional[Tuple[float, float]]:
        """
        Resolve a free-text place name to (lat, lon) using the first match.

        Returns None when nothing matched or the request failed.
        """
        if not location_name or not location_name.strip():
            return None
        try:
            async with open_client(self.client) as client:
                results = await fetch_json(
                    client,
                    "GET",
                    f"{self.base_url}/search",
                    params={"q": location_name.strip(), "format": "json", "limit": 1},
                    headers=self._headers(),
                )
            if not results:
                return None
            first = results[0]
            return float(first["lat"]), float(first["lon"])
        except asyncio.CancelledError:
            raise
        except (ProviderRequestError, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.error(f"Geocoding failed for '{location_name}': {exc}")
            return None


# Global instance
geocoding_service = NominatimGeocodingService()
