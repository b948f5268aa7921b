"""Service layer package."""

from app.services.achievement import AchievementService
from app.services.leaderboard import LeaderboardService
from app.services.practice_session import PracticeSessionService, PracticeTally
from app.services.progress import ProgressService

__all__ = [
    "AchievementService",
    "LeaderboardService",
    "PracticeSessionService",
    "PracticeTally",
    "ProgressService",
]
