"""API v1 router aggregation."""

from fastapi import APIRouter

from gym_tracker.api.v1.endpoints import (
    health,
    machines,
    plans,
    progress,
    settings,
    tools,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(machines.router, prefix="/machines", tags=["machines"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
