import asyncio

import httpx
import pytest

from directory.services.geoapify_places import DEFAULT_CATEGORIES, GeoapifyPlacesBackend

FEATURES = {
    "features": [
        {
            "properties": {
                "name": "Blue Bottle Coffee",
                "street": "Main St",
                "housenumber": "123",
                "city": "Springfield",
                "state": "IL",
                "postcode": "62704",
                "country": "United States",
                "categories": ["catering", "catering.cafe"],
                "contact": {"phone": "+1 650-253-0000"},
                "website": "https://bluebottle.example",
                "opening_hours": "Mo-Fr 07:00-18:00; Sa 08:00-14:00",
            },
            "geometry": {"type": "Point", "coordinates": [-89.65, 39.78]},
        },
        {
            "properties": {"street": "Elm St", "categories": ["commercial"]},
            "geometry": {"type": "Point", "coordinates": [-89.6, 39.7]},
        },
        {
            "properties": {"city": "Nowhere"},
            "geometry": {"type": "Point", "coordinates": []},
        },
    ]
}


def _backend(client, **kwargs):
    return GeoapifyPlacesBackend(api_key="test-key", client=client, **kwargs)


async def test_search_maps_features(json_client):
    client, transport = json_client(FEATURES)
    pois = await _backend(client).search("", 39.78, -89.65)

    assert [poi.name for poi in pois] == ["Blue Bottle Coffee", "Elm St"]
    first = pois[0]
    assert first.address.street == "Main St 123"
    assert first.address.city == "Springfield"
    assert first.address.zip == "62704"
    assert first.phone == "+1 650-253-0000"
    assert first.website == "https://bluebottle.example"
    assert first.description == "catering, catering.cafe"
    assert first.hours == ["Mo-Fr 07:00-18:00", "Sa 08:00-14:00"]
    assert (first.lat, first.lng) == (39.78, -89.65)
    assert pois[1].address.street == "Elm St"


async def test_mapped_category_used_without_name_or_text_filter(json_client):
    client, transport = json_client(FEATURES)
    backend = _backend(client, top_level_category="leisure")

    pois = await backend.search("  Coffee Shops ", 39.78, -89.65)

    params = transport.requests[0].url.params
    assert params["categories"] == "catering.cafe"
    assert "name" not in params
    assert params["limit"] == "30"
    # No local filtering for label searches
    assert len(pois) == 2


async def test_top_level_category_then_default(json_client):
    client, transport = json_client({"features": []})

    await _backend(client, top_level_category="catering").search("pizza", 0.0, 0.0)
    await _backend(client).search("pizza", 0.0, 0.0)

    first, second = transport.requests
    assert first.url.params["categories"] == "catering"
    assert first.url.params["name"] == "pizza"
    assert second.url.params["categories"] == DEFAULT_CATEGORIES


async def test_free_text_results_filtered_locally(json_client):
    client, _ = json_client(FEATURES)
    pois = await _backend(client).search("bottle", 39.78, -89.65)
    assert [poi.name for poi in pois] == ["Blue Bottle Coffee"]


async def test_free_text_filter_matches_description(json_client):
    client, _ = json_client(FEATURES)
    pois = await _backend(client).search("commercial", 39.78, -89.65)
    assert [poi.name for poi in pois] == ["Elm St"]


async def test_location_filter_and_radius_cap(json_client):
    client, transport = json_client({"features": []})

    await _backend(client, search_radius_miles=2).search("", 39.78, -89.65)
    await _backend(client, search_radius_miles=25).search("", 39.78, -89.65)

    small, capped = (request.url.params for request in transport.requests)
    assert small["filter"] == "circle:-89.65,39.78,3218"
    assert small["bias"] == "proximity:-89.65,39.78"
    assert capped["filter"] == "circle:-89.65,39.78,10000"


async def test_origin_means_no_location_bias(json_client):
    client, transport = json_client({"features": []})
    await _backend(client).search("", 0.0, 0.0)
    params = transport.requests[0].url.params
    assert "filter" not in params
    assert "bias" not in params


async def test_missing_api_key_makes_no_request(json_client):
    client, transport = json_client(FEATURES)
    backend = GeoapifyPlacesBackend(api_key="", client=client)

    assert await backend.search("coffee", 1.0, 2.0) == []
    assert await backend.autocomplete("spring") == []
    assert transport.requests == []


async def test_http_error_returns_empty(json_client):
    client, _ = json_client({"message": "Invalid apiKey"}, status_code=401)
    assert await _backend(client).search("coffee", 1.0, 2.0) == []


async def test_malformed_body_returns_empty(make_client):
    client, _ = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    assert await _backend(client).search("coffee", 1.0, 2.0) == []


async def test_timeout_returns_empty(make_client):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client, _ = make_client(handler)
    assert await _backend(client).search("coffee", 1.0, 2.0) == []


async def test_cancellation_propagates():
    started = asyncio.Event()

    async def slow_handler(request):
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json=FEATURES)

    client = httpx.AsyncClient(transport=httpx.MockTransport(slow_handler))
    task = asyncio.create_task(_backend(client).search("coffee", 1.0, 2.0))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


async def test_autocomplete(json_client):
    client, transport = json_client({
        "features": [
            {"properties": {"formatted": "Springfield, IL, United States of America"}},
            {"properties": {"city": "Springfield"}},
        ]
    })
    suggestions = await _backend(client).autocomplete("Springf")

    assert suggestions == ["Springfield, IL, United States of America"]
    assert transport.requests[0].url.params["text"] == "Springf"


def test_category_precedence_ignores_top_level_category_for_labels():
    backend = GeoapifyPlacesBackend(api_key="k", top_level_category="catering")
    assert backend.effective_categories("Gas Station") == "commercial.gas,service.vehicle.fuel"
    assert backend.effective_categories("hotel") == "accommodation.hotel"
    assert backend.effective_categories("bakery") == "catering"
