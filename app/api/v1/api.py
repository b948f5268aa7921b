"""API router for version 1."""
from fastapi import APIRouter

from app.api.v1.endpoints import achievements, leaderboard, practice_sessions, progress


api_router = APIRouter()
api_router.include_router(progress.router)
api_router.include_router(practice_sessions.router)
api_router.include_router(achievements.router)
api_router.include_router(leaderboard.router)
