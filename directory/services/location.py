"""Device location sources for search origins."""
from typing import Optional, Protocol, Tuple

from directory.errors import LocationPermissionDenied

Coordinates = Tuple[float, float]


class LocationProvider(Protocol):
    """Something that can tell where the searching device is."""

    async def get_current_location(self) -> Optional[Coordinates]:
        ...


class NullLocationProvider:
    """Used when the client never shares a location (plain HTTP requests)."""

    async def get_current_location(self) -> Optional[Coordinates]:
        return None


class ClientLocationProvider:
    """Holds the last location a connected client reported."""

    def __init__(self) -> None:
        self.location: Optional[Coordinates] = None
        self.permission_denied = False

    def update(self, lat: float, lon: float) -> None:
        self.location = (lat, lon)
        self.permission_denied = False

    def deny(self) -> None:
        self.location = None
        self.permission_denied = True

    async def get_current_location(self) -> Optional[Coordinates]:
        if self.permission_denied:
            raise LocationPermissionDenied("Location permission not granted")
        return self.location
