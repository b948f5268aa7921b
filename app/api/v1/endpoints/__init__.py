"""API endpoint modules for v1."""

from app.api.v1.endpoints import achievements, leaderboard, practice_sessions, progress

__all__ = [
    "achievements",
    "leaderboard",
    "practice_sessions",
    "progress",
]
