"""User preferences: display unit, default rest period, E1RM formula."""

from fastapi import APIRouter, Depends

from gym_tracker.api.v1.deps import get_repository
from gym_tracker.schemas.settings import UserSettingsRead, UserSettingsUpdate
from gym_tracker.services.repository import GymRepository

router = APIRouter()


@router.get("", response_model=UserSettingsRead)
async def get_user_settings(repo: GymRepository = Depends(get_repository)):
    return await repo.get_user_settings()


@router.patch("", response_model=UserSettingsRead)
async def update_user_settings(payload: UserSettingsUpdate, repo: GymRepository = Depends(get_repository)):
    """Partial update. The unit is a display tag only; stored weights are never converted."""
    return await repo.update_user_settings(payload)
