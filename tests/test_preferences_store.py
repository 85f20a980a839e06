import json
from unittest.mock import AsyncMock, MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from directory.models.preferences import Preferences
from directory.services.preferences_store import PreferencesStore, default_preferences


def _store(**client_methods):
    return PreferencesStore(client=MagicMock(**client_methods))


async def test_get_saved_preferences():
    saved = {"search_radius": 2.5, "use_device_location": False, "default_location": "Berlin"}
    store = _store(get=AsyncMock(return_value=json.dumps(saved)))

    preferences = await store.get_preferences("alice")

    assert preferences.search_radius == 2.5
    assert preferences.use_device_location is False
    assert preferences.default_location == "Berlin"
    store.client.get.assert_awaited_once_with("preferences:alice")


async def test_missing_preferences_use_defaults():
    store = _store(get=AsyncMock(return_value=None))
    assert await store.get_preferences("bob") == default_preferences()


async def test_corrupt_preferences_use_defaults():
    store = _store(get=AsyncMock(return_value="{not json"))
    assert await store.get_preferences("bob") == default_preferences()

    store = _store(get=AsyncMock(return_value=json.dumps({"search_radius": -1})))
    assert await store.get_preferences("bob") == default_preferences()


async def test_redis_down_uses_defaults():
    store = _store(get=AsyncMock(side_effect=RedisConnectionError("refused")))
    assert await store.get_preferences("bob") == default_preferences()


async def test_save_preferences():
    store = _store(set=AsyncMock(return_value=True))
    preferences = Preferences(search_radius=1, top_level_category="catering")

    assert await store.save_preferences("alice", preferences) is True

    key, value = store.client.set.await_args.args
    assert key == "preferences:alice"
    assert json.loads(value)["top_level_category"] == "catering"


async def test_save_preferences_redis_down():
    store = _store(set=AsyncMock(side_effect=RedisConnectionError("refused")))
    assert await store.save_preferences("alice", Preferences()) is False


async def test_ping():
    assert await _store(ping=AsyncMock(return_value=True)).ping() is True
    assert await _store(ping=AsyncMock(side_effect=RedisConnectionError("refused"))).ping() is False


async def test_saved_unknown_provider_uses_defaults():
    store = _store(get=AsyncMock(return_value=json.dumps({"places_provider": "bing"})))
    assert await store.get_preferences("carol") == default_preferences()
