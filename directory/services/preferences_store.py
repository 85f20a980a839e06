"""Redis-backed storage for user search preferences."""
import json
import logging
from typing import Optional

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from directory.config import settings
from directory.models.preferences import Preferences

logger = logging.getLogger(__name__)

KEY_PREFIX = "preferences:"


def default_preferences() -> Preferences:
    """Preferences for a user who never saved any."""
    return Preferences(
        search_radius=settings.default_search_radius_miles,
        use_device_location=settings.default_use_device_location,
        default_location=settings.default_location,
    )


class PreferencesStore:
    """Redis client wrapper storing one JSON preferences document per user."""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client or redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: str) -> str:
        return f"{KEY_PREFIX}{user_id}"

    async def get_preferences(self, user_id: str) -> Preferences:
        """Latest saved preferences, or the defaults when none can be read."""
        try:
            value = await self.client.get(self._key(user_id))
        except RedisError as e:
            logger.error(f"Redis GET error for {user_id}: {e}")
            return default_preferences()

        if not value:
            return default_preferences()
        try:
            return Preferences(**json.loads(value))
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable preferences for {user_id}: {e}")
            return default_preferences()

    async def save_preferences(self, user_id: str, preferences: Preferences) -> bool:
        """Store preferences; returns False when Redis is unavailable."""
        try:
            await self.client.set(self._key(user_id), preferences.model_dump_json())
            return True
        except RedisError as e:
            logger.error(f"Redis SET error for {user_id}: {e}")
            return False

    async def ping(self) -> bool:
        """Check if Redis is connected."""
        try:
            return await self.client.ping()
        except RedisError:
            return False


# Global preferences store instance
preferences_store = PreferencesStore()
