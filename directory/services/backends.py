"""
Shared pieces of the places provider adapters.

Every provider is reached through the ``PlacesBackend`` protocol. Adapters
never raise to their callers: a missing API key or a failed request degrades
to an empty list. ``asyncio.CancelledError`` is the one exception that always
propagates, so a superseded search is not mistaken for an empty one.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Protocol, runtime_checkable

import httpx

from directory.config import settings
from directory.errors import MissingCredentialError, ProviderRequestError
from directory.models.places import Poi
from directory.models.preferences import Preferences

logger = logging.getLogger(__name__)

PROVIDERS = ("geoapify", "here", "google")

HTTP_TIMEOUT = httpx.Timeout(settings.http_timeout, connect=settings.http_connect_timeout)


@runtime_checkable
class PlacesBackend(Protocol):
    """Search capability implemented once per places provider."""

    name: str

    async def search(self, query: str, lat: float, lon: float) -> List[Poi]:
        ...

    async def autocomplete(self, query: str) -> List[str]:
        ...


def require_api_key(provider: str, api_key: Optional[str]) -> str:
    """Return the key, or raise MissingCredentialError when it is blank."""
    if not api_key or not api_key.strip():
        raise MissingCredentialError(provider)
    return api_key


@asynccontextmanager
async def open_client(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected client, or a fresh one closed after the call."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as fresh_client:
        yield fresh_client


async def fetch_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> Any:
    """Send one request and decode its JSON body.

    Raises:
        ProviderRequestError: On timeouts, HTTP errors and unreadable bodies
    """
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        raise ProviderRequestError(
            f"{url} returned {exc.response.status_code}: {exc.response.text[:200]}"
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderRequestError(f"{url} request failed: {exc!r}") from exc
    except ValueError as exc:
        raise ProviderRequestError(f"{url} returned malformed JSON: {exc}") from exc


def filter_by_query(pois: List[Poi], query: str) -> List[Poi]:
    """Keep places whose name or description contains the query text."""
    needle = query.strip().lower()
    if not needle:
        return pois
    return [
        poi for poi in pois
        if needle in poi.name.lower() or needle in poi.description.lower()
    ]


def build_places_backend(
    provider: Optional[str] = None,
    preferences: Optional[Preferences] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> PlacesBackend:
    """
    Create the adapter for a provider, configured for one user's preferences.

    Args:
        provider: geoapify, here or google; defaults to the user's choice,
            then to ``settings.places_provider``
        preferences: Supplies the search radius and top-level category
        client: Optional shared HTTP client

    Raises:
        ValueError: If the provider name is unknown
    """
    # Imported here so adapters can import this module's helpers
    from directory.services.geoapify_places import GeoapifyPlacesBackend
    from directory.services.google_places import GooglePlacesBackend
    from directory.services.here_places import HerePlacesBackend

    preferences = preferences or Preferences(search_radius=settings.default_search_radius_miles)
    name = (provider or preferences.places_provider or settings.places_provider).strip().lower()

    if name == "geoapify":
        return GeoapifyPlacesBackend(
            search_radius_miles=preferences.search_radius,
            top_level_category=preferences.top_level_category,
            client=client,
        )
    if name == "here":
        return HerePlacesBackend(search_radius_miles=preferences.search_radius, client=client)
    if name == "google":
        return GooglePlacesBackend(search_radius_miles=preferences.search_radius, client=client)
    raise ValueError(f"Unknown places provider {name!r}; expected one of {', '.join(PROVIDERS)}")
