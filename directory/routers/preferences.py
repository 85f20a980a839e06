"""User search preferences router."""
from fastapi import APIRouter, Depends, HTTPException

from directory.dependencies import get_preferences_store, get_user_id
from directory.models.preferences import Preferences
from directory.services.preferences_store import PreferencesStore

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=Preferences)
async def read_preferences(
    user_id: str = Depends(get_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
):
    """Current preferences, or the server defaults if none were saved."""
    return await store.get_preferences(user_id)


@router.put("", response_model=Preferences)
async def update_preferences(
    preferences: Preferences,
    user_id: str = Depends(get_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
):
    """Replace the user's preferences."""
    if not await store.save_preferences(user_id, preferences):
        raise HTTPException(status_code=503, detail="Preferences storage unavailable")
    return preferences
