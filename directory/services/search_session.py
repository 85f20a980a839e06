"""
Search session: turns query text changes into provider searches.

One session serves one client. Every query change supersedes the previous
one: the in-flight search is cancelled and a version counter keeps a late
result from overwriting a newer one (last query wins).
"""
import asyncio
import inspect
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple

from directory.errors import LocationPermissionDenied
from directory.models.places import Poi
from directory.models.preferences import Preferences
from directory.services.backends import PlacesBackend, build_places_backend
from directory.services.location import LocationProvider, NullLocationProvider
from directory.services.nominatim_geocoding import NominatimGeocodingService, geocoding_service

logger = logging.getLogger(__name__)

NO_LOCATION: Tuple[float, float] = (0.0, 0.0)


def default_backend_factory(preferences: Preferences) -> PlacesBackend:
    """Adapter for the provider the user picked, or the server default."""
    return build_places_backend(preferences=preferences)


class SearchPhase(str, Enum):
    """Where a session is in its search cycle."""
    IDLE = "idle"
    LOADING = "loading"
    HAS_RESULTS = "has_results"


async def resolve_origin(
    preferences: Preferences,
    location_provider: LocationProvider,
    geocoder: NominatimGeocodingService,
) -> Tuple[float, float]:
    """
    Pick the coordinates a search is biased towards.

    Uses the device location, or the geocoded default location, depending
    on the user's preference. Anything unavailable yields (0, 0), which the
    adapters read as "no location bias".

    Raises:
        LocationPermissionDenied: If the client refused location access
    """
    if preferences.use_device_location:
        location = await location_provider.get_current_location()
        return location or NO_LOCATION

    default_location = (preferences.default_location or "").strip()
    if not default_location:
        return NO_LOCATION
    coordinates = await geocoder.geocode(default_location)
    return coordinates or NO_LOCATION


class SearchSession:
    """Search state for one client: query, results and loading flag."""

    def __init__(
        self,
        preferences_loader: Callable[[], Awaitable[Preferences]],
        backend_factory: Callable[[Preferences], PlacesBackend] = default_backend_factory,
        geocoder: Optional[NominatimGeocodingService] = None,
        location_provider: Optional[LocationProvider] = None,
        on_change: Optional[Callable[["SearchSession"], object]] = None,
    ) -> None:
        self.preferences_loader = preferences_loader
        self.backend_factory = backend_factory
        self.geocoder = geocoder or geocoding_service
        self.location_provider = location_provider or NullLocationProvider()
        self.on_change = on_change

        self.query = ""
        self.results: List[Poi] = []
        self.loading = False

        self._version = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def phase(self) -> SearchPhase:
        if self.loading:
            return SearchPhase.LOADING
        if self.results:
            return SearchPhase.HAS_RESULTS
        return SearchPhase.IDLE

    async def on_query_change(self, query: str) -> Optional[asyncio.Task]:
        """
        Start a search for new query text.

        A blank query clears the results at once without any network call.
        Returns the task running the search, if one was started.
        """
        self.query = query
        self._version += 1
        self._cancel_in_flight()

        if not query.strip():
            self.results = []
            self.loading = False
            await self._notify()
            return None

        self.loading = True
        await self._notify()

        self._task = asyncio.create_task(self._run(query, self._version))
        return self._task

    async def run_search(self, query: str) -> List[Poi]:
        """Resolve the origin for the latest preferences and search the active provider."""
        preferences = await self.preferences_loader()
        lat, lon = await resolve_origin(preferences, self.location_provider, self.geocoder)
        backend = self.backend_factory(preferences)
        return await backend.search(query, lat, lon)

    async def wait(self) -> None:
        """Wait for the current search, if any, to finish or be cancelled."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def close(self) -> None:
        """Cancel any in-flight search; its results will never be published."""
        self._version += 1
        task = self._cancel_in_flight()
        if task is not None:
            await asyncio.wait({task})

    def _is_current(self, version: int) -> bool:
        return version == self._version

    def _cancel_in_flight(self) -> Optional[asyncio.Task]:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def _run(self, query: str, version: int) -> None:
        try:
            results = await self.run_search(query)
            if self._is_current(version):
                self.results = results
        except LocationPermissionDenied as exc:
            logger.error(f"Location permission not granted: {exc}")
            if self._is_current(version):
                self.results = []
        except asyncio.CancelledError:
            logger.debug(f"Search for '{query}' superseded")
            raise
        except Exception:
            logger.exception(f"Search for '{query}' failed")
            if self._is_current(version):
                self.results = []
        finally:
            if self._is_current(version):
                self.loading = False
                await self._notify()

    async def _notify(self) -> None:
        if self.on_change is None:
            return
        result = self.on_change(self)
        if inspect.isawaitable(result):
            await result
