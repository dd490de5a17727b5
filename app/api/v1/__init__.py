"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    exercises,
    health,
    progress,
    rest_timer,
    templates,
    workout_logs,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workout_logs.router, prefix="/workout-logs", tags=["workout-logs"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
api_router.include_router(rest_timer.router, prefix="/rest-timer", tags=["rest-timer"])
