"""
Live search over a websocket.

The client sends every change of its search box; the server answers with the
search state after each change. Messages from the client:

    {"query": "coffee", "location": {"lat": 52.52, "lon": 13.40}}
    {"query": "coffee", "location_denied": true}

Messages to the client:

    {"query": "coffee", "loading": false, "phase": "has_results", "places": [...]}
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Query, WebSocket, WebSocketDisconnect

from directory.dependencies import get_geocoder, get_preferences_store, get_user_id
from directory.services.location import ClientLocationProvider
from directory.services.nominatim_geocoding import NominatimGeocodingService
from directory.services.preferences_store import PreferencesStore
from directory.services.search_session import SearchSession
from directory.utils.normalizers import normalize_pois

router = APIRouter(prefix="/search", tags=["search"])
logger = logging.getLogger(__name__)


def session_state(session: SearchSession) -> Dict[str, Any]:
    """Serialize what the client renders: query, loading flag and places."""
    return {
        "query": session.query,
        "loading": session.loading,
        "phase": session.phase.value,
        "places": [details.model_dump() for details in normalize_pois(session.results)],
    }


def apply_location(location_provider: ClientLocationProvider, message: Dict[str, Any]) -> None:
    """Record the device location (or its refusal) reported with a message."""
    if message.get("location_denied"):
        location_provider.deny()
        return
    location = message.get("location")
    if isinstance(location, dict) and "lat" in location and "lon" in location:
        location_provider.update(float(location["lat"]), float(location["lon"]))


@router.websocket("/ws")
async def search_websocket(
    websocket: WebSocket,
    user_id: Optional[str] = Query(None, description="Used when the client cannot set headers"),
    x_user_id: Optional[str] = Header(None),
    store: PreferencesStore = Depends(get_preferences_store),
    geocoder: NominatimGeocodingService = Depends(get_geocoder),
):
    """
    Run a search session for one client.

    The user is identified like the HTTP routes do, by the ``X-User-Id``
    header. Browser websocket APIs cannot set headers, so a ``user_id``
    query parameter is accepted as well and wins when both are sent.
    """
    user_id = get_user_id(user_id or x_user_id)
    await websocket.accept()

    location_provider = ClientLocationProvider()

    async def load_preferences():
        return await store.get_preferences(user_id)

    async def push_state(session: SearchSession) -> None:
        try:
            await websocket.send_json(session_state(session))
        except (WebSocketDisconnect, RuntimeError) as exc:
            # Client left while a search was finishing
            logger.debug(f"Dropped search state for user {user_id}: {exc!r}")

    session = SearchSession(
        preferences_loader=load_preferences,
        geocoder=geocoder,
        location_provider=location_provider,
        on_change=push_state,
    )

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"error": "Messages must be JSON objects"})
                continue
            if not isinstance(message, dict):
                await websocket.send_json({"error": "Messages must be JSON objects"})
                continue

            try:
                apply_location(location_provider, message)
            except (TypeError, ValueError):
                await websocket.send_json({"error": "location must have numeric lat and lon"})
                continue

            await session.on_query_change(str(message.get("query") or ""))
    except WebSocketDisconnect:
        logger.debug(f"Search websocket closed for user {user_id}")
    finally:
        await session.close()
