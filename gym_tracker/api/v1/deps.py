"""Shared endpoint dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.db.session import get_db
from gym_tracker.services.repository import GymRepository


async def get_repository(db: AsyncSession = Depends(get_db)) -> GymRepository:
    return GymRepository(db)
