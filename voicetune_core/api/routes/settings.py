"""
Settings API Routes

Read access to a user's saved agent settings.
"""

import logging

from fastapi import APIRouter, Depends

from ...settings import default_settings
from ...sync import SettingsStore
from ..auth import AuthContext
from ..base import success_response
from ..dependencies import get_current_user, get_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("")
async def get_saved_settings(
    auth: AuthContext = Depends(get_current_user),
    store: SettingsStore = Depends(get_store),
):
    """Get the user's saved settings, or the defaults for a new user."""
    saved = await store.load_settings(auth.user_id)

    if saved is None:
        logger.debug("No saved settings, using defaults", extra={"user_id": auth.user_id})
        return success_response({"settings": default_settings().to_dict(), "is_default": True})

    return success_response({"settings": saved.to_dict(), "is_default": False})


@router.get("/exists")
async def saved_settings_exist(
    auth: AuthContext = Depends(get_current_user),
    store: SettingsStore = Depends(get_store),
):
    """Check whether the user has saved settings."""
    exists = await store.has_settings(auth.user_id)
    return success_response({"exists": exists})


__all__ = ["router"]
